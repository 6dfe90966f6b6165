"""
Standardizer — From Scratch (NumPy only)

Column-wise z-score: (x - mean) / std, where std uses Bessel's correction
(divisor n-1). A constant column gets std = 1 so it standardizes to zeros.

Statistics are taken on each column divided by its max |x|: z-scores do not
change under that scaling, and it keeps squares of values near 1e308 finite.
"""

import numpy as np
from src.pca_core.base import check_matrix


def _scaled(X):
    """Return (Xs, scale, means_s, stds_s, constant) for X = Xs * scale."""
    scale = np.max(np.abs(X), axis=0)
    scale[~(scale > 0)] = 1.0
    Xs = X / scale

    means = Xs.mean(axis=0)
    stds = Xs.std(axis=0, ddof=1)

    # mean() of identical floats can be off by one ulp, use the value itself
    constant = np.ptp(Xs, axis=0) == 0
    means[constant] = Xs[0, constant]
    stds[constant | ~(stds > 0)] = 1.0
    return Xs, scale, means, stds, constant


def standardize_with_stats(X):
    """Standardize X and also return the column means and stds (original units)."""
    X = check_matrix(X)
    Xs, scale, means, stds, constant = _scaled(X)
    Z = (Xs - means) / stds
    return Z, means * scale, np.where(constant, 1.0, stds * scale)


def column_stats(X):
    """Return (means, stds) of every column. Constant columns get std = 1."""
    _, means, stds = standardize_with_stats(X)
    return means, stds


def standardize(X) -> np.ndarray:
    """Zero-mean, unit-variance copy of X (n >= 2, rectangular, finite)."""
    Z, _, _ = standardize_with_stats(X)
    return Z
