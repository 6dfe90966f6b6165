import numpy as np
import pandas as pd
from src.pca_core.decomposition import check_random_state

COMPANIES = [
    "TechCorp", "FinanceBank", "RetailCo", "EnergyPlus", "HealthCare Inc",
    "AutoMotors", "FoodChain", "MediaGroup", "RealEstate Co", "Telecom Ltd",
    "Mining Corp", "Airlines Co", "Shipping Ltd", "Pharma Inc", "Software Co",
    "Banking Corp", "Insurance Ltd", "Investment Co", "Trading Corp", "Consulting Inc",
    "Manufacturing Co", "Logistics Ltd", "Construction Co", "Hospitality Inc", "Education Corp",
]

# canonical column order for every matrix built from the dataset
METRIC_KEYS = ["pe", "pb", "eps", "volatility", "debt_ratio", "roe", "roa", "one_year_return"]

FEATURE_NAMES = [
    "PE Ratio",
    "PB Ratio",
    "EPS",
    "Volatility",
    "Debt Ratio",
    "ROE",
    "ROA",
    "1 Year Return",
]

METRIC_LABELS = {
    "pe": "PE",
    "pb": "PB",
    "eps": "EPS",
    "volatility": "Vol",
    "debt_ratio": "Debt",
    "roe": "ROE",
    "roa": "ROA",
    "one_year_return": "Return",
}

# metric = base * factor + U(-noise, +noise), rounded to `decimals`
_METRIC_RECIPE = {
    "pe": (1.0, 5.0, 1),
    "pb": (0.3, 1.5, 1),
    "eps": (0.5, 1.0, 2),
    "volatility": (0.15, 2.5, 1),
    "debt_ratio": (0.4, 10.0, 1),
    "roe": (0.8, 5.0, 1),
    "roa": (0.4, 2.5, 1),
    "one_year_return": (0.6, 7.5, 1),
}


def generate_finance_data(n_companies: int = 25, rng=None) -> pd.DataFrame:
    """
    Synthetic, correlated finance metrics, one row per company.

    Every metric is driven by the same per-company base value, so the
    columns are strongly correlated and PC1 explains most of the variance.
    """
    n_companies = int(n_companies)
    if n_companies < 1:
        raise ValueError(f"n_companies must be >= 1, got {n_companies}")
    rng = check_random_state(rng)

    names = COMPANIES[:n_companies] + [
        f"Company {i + 1}" for i in range(len(COMPANIES), n_companies)
    ]

    rows = []
    for name in names:
        base = rng.uniform(0, 1) * 50 + 10
        row = {"company": name}
        for key in METRIC_KEYS:
            factor, noise, decimals = _METRIC_RECIPE[key]
            value = base * factor + rng.uniform(-noise, noise)
            row[key] = round(float(value), decimals)
        rows.append(row)

    return pd.DataFrame(rows, columns=["company"] + METRIC_KEYS)


def build_matrix(df: pd.DataFrame, selected=None) -> np.ndarray:
    """
    Numeric matrix for the selected metrics, always in canonical order.
    An empty selection means every metric.
    """
    selected = list(selected or [])
    unknown = [k for k in selected if k not in METRIC_KEYS]
    if unknown:
        raise KeyError(f"Unknown metric(s): {unknown}")

    cols = [k for k in METRIC_KEYS if k in selected] if selected else list(METRIC_KEYS)
    return df[cols].to_numpy(dtype=np.float64)


def extract_features(df: pd.DataFrame) -> np.ndarray:
    """All eight metrics, canonical order."""
    return build_matrix(df, METRIC_KEYS)
