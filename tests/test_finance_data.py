import numpy as np
import pandas as pd
import pytest

from src.finance.finance_data import (
    COMPANIES,
    METRIC_KEYS,
    FEATURE_NAMES,
    METRIC_LABELS,
    generate_finance_data,
    extract_features,
    build_matrix,
)
from src.pca_core.pca import reduce


def test_default_dataset_shape(finance_df):
    assert len(finance_df) == 25
    assert list(finance_df.columns) == ["company"] + METRIC_KEYS
    assert finance_df["company"].tolist() == COMPANIES
    assert len(FEATURE_NAMES) == len(METRIC_KEYS) == len(METRIC_LABELS)


def test_seeded_generation_is_reproducible():
    pd.testing.assert_frame_equal(generate_finance_data(rng=5), generate_finance_data(rng=5))
    assert not generate_finance_data(rng=5).equals(generate_finance_data(rng=6))


def test_values_are_rounded(finance_df):
    np.testing.assert_allclose(finance_df["eps"], finance_df["eps"].round(2))
    np.testing.assert_allclose(finance_df["pe"], finance_df["pe"].round(1))


def test_extra_companies_get_generated_names():
    df = generate_finance_data(n_companies=27, rng=0)
    assert df["company"].tolist()[-2:] == ["Company 26", "Company 27"]


def test_rejects_empty_dataset():
    with pytest.raises(ValueError):
        generate_finance_data(n_companies=0)


def test_build_matrix_keeps_canonical_order(finance_df):
    X = build_matrix(finance_df, ["roe", "pe"])
    np.testing.assert_array_equal(X, finance_df[["pe", "roe"]].to_numpy())
    assert build_matrix(finance_df, []).shape == (25, 8)


def test_build_matrix_rejects_unknown_metric(finance_df):
    with pytest.raises(KeyError):
        build_matrix(finance_df, ["pe", "ebitda"])


def test_metrics_are_strongly_correlated(finance_df):
    X = extract_features(finance_df)
    assert X.shape == (25, 8)
    result = reduce(X, 2)
    assert result.explained_variance[0] > 0.5
