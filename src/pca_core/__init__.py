# From-scratch PCA (NumPy only)

from .base import PCAResult, InvalidInputError, DecompositionError
from .standardizer import standardize, standardize_with_stats, column_stats
from .decomposition import svd_decompose, power_iteration_decompose, covariance_matrix
from .pca import reduce
from .projection import project_onto_angle, projected_variance, optimal_angle, explore_projection

__all__ = [
    "PCAResult",
    "InvalidInputError",
    "DecompositionError",

    "standardize",
    "standardize_with_stats",
    "column_stats",

    "svd_decompose",
    "power_iteration_decompose",
    "covariance_matrix",
    "reduce",

    "project_onto_angle",
    "projected_variance",
    "optimal_angle",
    "explore_projection",
]
