"""
Projection explorer for two metrics.

The first principal component is the axis with the largest projected
variance: any other angle gives a smaller spread.
"""

import numpy as np
from src.pca_core.base import InvalidInputError, check_matrix
from src.pca_core.standardizer import standardize_with_stats
from src.pca_core.pca import reduce


def _check_two_columns(X):
    X = check_matrix(X, min_rows=1)
    if X.shape[1] != 2:
        raise InvalidInputError(f"Projection needs exactly 2 columns, got {X.shape[1]}")
    return X


def project_onto_angle(standardized, angle: float) -> np.ndarray:
    """1-D coordinates of 2-D points on the unit axis (cos a, sin a)."""
    Z = _check_two_columns(standardized)
    axis = np.array([np.cos(angle), np.sin(angle)])
    return Z @ axis


def projected_variance(standardized, angle: float) -> float:
    proj = project_onto_angle(standardized, angle)
    if proj.size < 2:
        return 0.0
    return float(np.var(proj, ddof=1))


def _angle_of(component) -> float:
    c = np.asarray(component, dtype=np.float64)
    # direction sign is arbitrary, fold into [0, pi)
    return float(np.mod(np.arctan2(c[1], c[0]), np.pi))


def optimal_angle(observations, rng=None) -> float:
    """Angle (radians, [0, pi)) of the first principal component."""
    X = _check_two_columns(observations)
    result = reduce(X, 1, rng=rng)
    return _angle_of(result.components[0])


def explore_projection(observations, angle: float, rng=None) -> dict:
    X = _check_two_columns(observations)
    Z, means, stds = standardize_with_stats(X)
    best = optimal_angle(X, rng=rng)
    return {
        "means": means.tolist(),
        "stds": stds.tolist(),
        "standardized": Z.tolist(),
        "angle": float(angle),
        "projected": project_onto_angle(Z, angle).tolist(),
        "variance": projected_variance(Z, angle),
        "optimal_angle": best,
        "optimal_variance": projected_variance(Z, best),
    }
