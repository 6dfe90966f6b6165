from .finance_data import (
    COMPANIES,
    METRIC_KEYS,
    FEATURE_NAMES,
    METRIC_LABELS,
    generate_finance_data,
    extract_features,
    build_matrix,
)

__all__ = [
    "COMPANIES",
    "METRIC_KEYS",
    "FEATURE_NAMES",
    "METRIC_LABELS",
    "generate_finance_data",
    "extract_features",
    "build_matrix",
]
