import numpy as np

from .exceptions import WindowValidationError


def as_window(y) -> np.ndarray:
    y = np.asarray(y, dtype=np.float64)
    if y.ndim > 1 and max(y.shape) == y.size:
        y = y.reshape(-1)
    if y.ndim != 1:
        raise WindowValidationError(f"window must be one-dimensional, got shape {y.shape}")
    return np.ascontiguousarray(y)


def prefix_sums(y: np.ndarray):
    """Cumulative sums and sums of squares of all elements <= i, one pass each."""
    return np.cumsum(y), np.cumsum(y * y)
