from dataclasses import dataclass, field
import numpy as np


class InvalidInputError(ValueError):
    """Raised when the observations or the target rank cannot be used."""


class DecompositionError(RuntimeError):
    """Raised by a decomposition strategy that could not produce a usable result."""


@dataclass(frozen=True, eq=False)
class PCAResult:
    """
    The reduced representation returned by reduce().

    transformed        : (n, k) projected coordinates
    components         : (k, m) unit vectors, descending explained variance
    explained_variance : (k,)   fraction of total variance per component
    method             : "svd" or "power" (strategy that produced the result)

    NOTE: the sign of every component (and of its transformed column) is
    arbitrary. v and -v are equally valid.
    """

    transformed: np.ndarray
    components: np.ndarray
    explained_variance: np.ndarray
    method: str = "svd"
    standardized: np.ndarray = field(default=None, repr=False)

    @property
    def n_components(self) -> int:
        return int(self.components.shape[0])

    def to_dict(self) -> dict:
        return {
            "transformed": self.transformed.tolist(),
            "components": self.components.tolist(),
            "explained_variance": self.explained_variance.tolist(),
            "method": self.method,
        }


def check_matrix(X, min_rows: int = 2) -> np.ndarray:
    """Validate raw observations and return them as a float64 (n, m) array."""
    if X is None:
        raise InvalidInputError("Data cannot be empty")
    if hasattr(X, "to_numpy"):
        X = X.to_numpy()

    if not isinstance(X, np.ndarray):
        rows = list(X)
        if len(rows) == 0:
            raise InvalidInputError("Data cannot be empty")
        lengths = set()
        for row in rows:
            try:
                lengths.add(len(row))
            except TypeError:
                raise InvalidInputError("Each observation must be a sequence of numbers")
        if len(lengths) != 1:
            raise InvalidInputError(f"Ragged rows: found row lengths {sorted(lengths)}")
        X = rows

    try:
        X = np.asarray(X, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"Observations must be numeric: {e}")

    if X.ndim != 2:
        raise InvalidInputError(f"Expected a 2-D matrix, got {X.ndim} dimension(s)")
    n, m = X.shape
    if n == 0 or m == 0:
        raise InvalidInputError("Data cannot be empty")
    if n < min_rows:
        raise InvalidInputError(f"Need at least {min_rows} observations, got {n}")
    if not np.all(np.isfinite(X)):
        raise InvalidInputError("Observations contain NaN or infinite values")
    return X
