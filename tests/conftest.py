import numpy as np
import pytest

from src.finance.finance_data import generate_finance_data, extract_features


@pytest.fixture
def square_data():
    # symmetric about its mean with equal spread on both axes
    return [[1, 1], [1, 3], [3, 1], [3, 3]]


@pytest.fixture
def finance_df():
    return generate_finance_data(rng=7)


@pytest.fixture
def finance_matrix(finance_df):
    return extract_features(finance_df)


@pytest.fixture
def correlated_matrix():
    """40 x 5 matrix driven by two latent factors plus noise."""
    rng = np.random.RandomState(0)
    latent = rng.normal(size=(40, 2))
    loadings = np.array([
        [3.0, 2.0, 1.0, 0.5, 0.0],
        [0.0, 0.5, -1.0, 2.0, 1.5],
    ])
    return latent @ loadings + 0.1 * rng.normal(size=(40, 5))


def _align_signs(reference, other):
    """Flip rows of `other` so each has a non-negative dot product with `reference`."""
    signs = np.sign(np.sum(reference * other, axis=1))
    signs[signs == 0] = 1.0
    return other * signs[:, None], signs


@pytest.fixture
def align_signs():
    return _align_signs
