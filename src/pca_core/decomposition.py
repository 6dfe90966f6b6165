"""
Decomposition strategies for PCA (NumPy only)

Both strategies take a standardized (n, m) matrix Z and a rank k and return a
Decomposition: k orthonormal directions in feature space (rows), the variance
of the data along each of them, and the total variance of Z.

  "svd"   — exact: right singular vectors of Z, lambda_i = s_i^2 / (n-1)
  "power" — fallback: power iteration with deflation on the explicit
            covariance matrix (always succeeds, approximate)
"""

from typing import NamedTuple
import numpy as np
from src.pca_core.base import DecompositionError, InvalidInputError

SVD = "svd"
POWER = "power"

DEFAULT_ITERATIONS = 50
COLLAPSE_TOL = 1e-10
MAX_SEED = 2 ** 32  # RandomState seeds live in [0, 2**32)


class Decomposition(NamedTuple):
    components: np.ndarray   # (k, m)
    eigenvalues: np.ndarray  # (k,)  variance along each component
    total_variance: float
    method: str


def check_random_state(rng):
    """None -> fresh RandomState, int -> seeded RandomState, else used as-is."""
    if rng is None:
        return np.random.RandomState()
    if isinstance(rng, (int, np.integer)):
        if not 0 <= int(rng) < MAX_SEED:
            raise InvalidInputError(f"seed must be in [0, 2**32), got {rng}")
        return np.random.RandomState(int(rng))
    return rng


def _complete_basis(Vt: np.ndarray, k: int) -> np.ndarray:
    """Extend r orthonormal rows to k orthonormal rows (k <= m)."""
    r, m = Vt.shape
    if k <= r:
        return Vt[:k]
    # QR of [V | I] spans R^m, its first r columns reproduce V up to sign
    Q, _ = np.linalg.qr(np.hstack([Vt.T, np.eye(m)]))
    extra = Q[:, r:k].T
    return np.vstack([Vt, extra])


def svd_decompose(Z: np.ndarray, k: int, svd=np.linalg.svd) -> Decomposition:
    """
    Exact strategy. Never forms Z^T Z.

    `svd` is the dense routine doing the work (numpy's by default). Any error
    it raises, an empty result or non-finite values become DecompositionError.
    """
    n, m = Z.shape
    try:
        _, s, Vt = svd(Z, full_matrices=False)
    except Exception as e:
        raise DecompositionError(f"SVD routine failed: {e}") from e

    if Vt is None or s is None:
        raise DecompositionError("SVD returned no singular vectors")
    s = np.asarray(s, dtype=np.float64).ravel()
    Vt = np.asarray(Vt, dtype=np.float64)
    if s.size == 0 or Vt.ndim != 2 or Vt.shape[1] != m or Vt.shape[0] != s.size:
        raise DecompositionError(f"SVD returned degenerate shapes s={s.shape}, Vt={Vt.shape}")
    if not (np.all(np.isfinite(s)) and np.all(np.isfinite(Vt))):
        raise DecompositionError("SVD produced non-finite values")

    # numpy already sorts descending, other routines may not
    order = np.argsort(-s, kind="stable")
    s, Vt = s[order], Vt[order]

    eig_all = (s ** 2) / (n - 1)
    total = float(eig_all.sum())
    if not np.isfinite(total) or total <= 0:
        raise DecompositionError("SVD found no variance to explain")

    components = _complete_basis(Vt, k)
    eigenvalues = np.zeros(k, dtype=np.float64)
    top = min(k, eig_all.size)
    eigenvalues[:top] = eig_all[:top]
    return Decomposition(components, eigenvalues, total, SVD)


def covariance_matrix(Z: np.ndarray) -> np.ndarray:
    """Cov[i, j] = (1/(n-1)) * sum_k Z[k, i] * Z[k, j]  (Z is already centered)."""
    n = Z.shape[0]
    return (Z.T @ Z) / (n - 1)


def _deflate(v: np.ndarray, found) -> np.ndarray:
    """Remove the projection of v onto every component found so far."""
    for u in found:
        v = v - np.dot(v, u) * u
    return v


def _random_unit_vector(m: int, found, rng) -> np.ndarray:
    for _ in range(100):
        v = _deflate(rng.uniform(-0.5, 0.5, size=m), found)
        norm = np.linalg.norm(v)
        if norm > COLLAPSE_TOL:
            return v / norm
    raise DecompositionError("Could not draw a start vector orthogonal to the found components")


def power_iteration_decompose(Z: np.ndarray, k: int, rng=None,
                              n_iter: int = DEFAULT_ITERATIONS) -> Decomposition:
    """
    Fallback strategy: power iteration with deflation.

    For each component: start from a random unit vector (orthogonal to the
    components already found), then n_iter times multiply by Cov, deflate,
    renormalize. A collapsing norm means the remaining subspace carries no
    variance; the current vector is kept. The eigenvalue estimate is the
    Rayleigh quotient v^T Cov v (abs'd against float noise).
    """
    rng = check_random_state(rng)
    m = Z.shape[1]
    cov = covariance_matrix(Z)

    found = []
    eigenvalues = []
    for _ in range(k):
        v = _random_unit_vector(m, found, rng)
        for _it in range(int(n_iter)):
            w = _deflate(cov @ v, found)
            norm = float(np.linalg.norm(w))
            if not np.isfinite(norm) or norm < COLLAPSE_TOL:
                break
            v = w / norm
        found.append(v)
        eigenvalues.append(abs(float(v @ cov @ v)))

    components = np.vstack(found)
    eigenvalues = np.asarray(eigenvalues, dtype=np.float64)

    # extraction order is only approximately descending for close eigenvalues
    order = np.argsort(-eigenvalues, kind="stable")
    components, eigenvalues = components[order], eigenvalues[order]

    total = float(np.trace(cov))
    if not np.isfinite(total) or total <= 0:
        total = float(m)

    if not (np.all(np.isfinite(components)) and np.all(np.isfinite(eigenvalues))):
        raise DecompositionError("Power iteration produced non-finite values")
    return Decomposition(components, eigenvalues, total, POWER)
