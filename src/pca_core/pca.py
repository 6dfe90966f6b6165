"""
PCA Engine — From Scratch (NumPy only)

reduce(observations, k):
    1. standardize the raw observations (column z-scores, ddof=1)
    2. decompose: exact SVD first, power iteration on failure
    3. project the standardized rows onto the k components
    4. explained variance ratio = eigenvalue / total variance

Every call is a pure function of its inputs; nothing is cached.
"""

import numbers
import numpy as np
from src.pca_core.base import PCAResult, InvalidInputError, DecompositionError
from src.pca_core.standardizer import standardize
from src.pca_core.decomposition import (
    SVD,
    POWER,
    DEFAULT_ITERATIONS,
    svd_decompose,
    power_iteration_decompose,
)

METHODS = ("auto", SVD, POWER)


def _check_rank(target_rank, m: int) -> int:
    if isinstance(target_rank, bool) or not isinstance(target_rank, numbers.Integral):
        raise InvalidInputError(f"target_rank must be an integer, got {target_rank!r}")
    k = int(target_rank)
    if k < 1 or k > m:
        raise InvalidInputError(f"target_rank must be in [1, {m}], got {k}")
    return k


def _pad_ratios(ratios: np.ndarray, k: int) -> np.ndarray:
    """Always hand back exactly k ratios: zeros for missing ones, 1/k if none."""
    ratios = np.clip(np.asarray(ratios, dtype=np.float64)[:k], 0.0, 1.0)
    if ratios.size == k:
        return ratios
    fill = 0.0 if ratios.size > 0 else 1.0 / k
    return np.concatenate([ratios, np.full(k - ratios.size, fill)])


def reduce(observations, target_rank: int = 2, rng=None, method: str = "auto",
           n_iter: int = DEFAULT_ITERATIONS, svd=None) -> PCAResult:
    """
    Reduce raw observations (n x m, n >= 2) to target_rank principal components.

    Parameters
    ----------
    observations : (n_samples, n_features) raw numbers, rectangular and finite
    target_rank  : number of components k, 1 <= k <= n_features
    rng          : random source for the power-iteration fallback
                   (None, int seed or np.random.RandomState)
    method       : "auto" / "svd" -> exact SVD, falling back on failure
                   "power"        -> power iteration only
    n_iter       : power-iteration steps per component (default 50). Fewer
                   steps run faster but the fallback components and ratios
                   may not have converged; the result is still orthonormal
                   and well-shaped
    svd          : dense SVD routine, numpy.linalg.svd when None

    Component signs are arbitrary: v and -v are both valid answers.
    """
    if method not in METHODS:
        raise InvalidInputError(f"method must be one of {METHODS}, got {method!r}")
    if isinstance(n_iter, bool) or not isinstance(n_iter, numbers.Integral) or n_iter < 1:
        raise InvalidInputError(f"n_iter must be a positive integer, got {n_iter!r}")

    Z = standardize(observations)
    n, m = Z.shape
    k = _check_rank(target_rank, m)

    decomp = None
    if method != POWER:
        try:
            decomp = svd_decompose(Z, k, svd=svd or np.linalg.svd)
        except DecompositionError as e:
            print(f"⚠️  SVD failed, using covariance matrix approach: {e}")
    if decomp is None:
        decomp = power_iteration_decompose(Z, k, rng=rng, n_iter=n_iter)

    components = decomp.components
    transformed = Z @ components.T
    explained = _pad_ratios(np.abs(decomp.eigenvalues) / decomp.total_variance, k)

    if components.shape != (k, m) or transformed.shape != (n, k):
        raise DecompositionError(
            f"{decomp.method} produced components {components.shape} and "
            f"transformed {transformed.shape}, expected ({k}, {m}) and ({n}, {k})"
        )

    return PCAResult(
        transformed=transformed,
        components=components,
        explained_variance=explained,
        method=decomp.method,
        standardized=Z,
    )
