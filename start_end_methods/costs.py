import numpy as np
import pandas as pd

from start_end_methods.errors import InvalidInput

# 도달 불가 표시값: int64 최댓값
INF = int(np.iinfo(np.int64).max)


def saturating_add(a, b):
    """a + b, clamped to INF. Overflow never wraps, it becomes unreachable."""
    if a >= INF or b >= INF or a > INF - b:
        return INF
    return a + b


def path_cost(path, dist):
    total = 0
    for u, v in zip(path, path[1:]):
        total = saturating_add(total, int(dist[u][v]))
    return total


def as_cost_matrix(dist):
    """Normalise a nested list / ndarray / DataFrame into an int64 ndarray."""
    if isinstance(dist, pd.DataFrame):
        dist = dist.to_numpy()

    if isinstance(dist, np.ndarray) and np.issubdtype(dist.dtype, np.integer):
        if dist.size and int(dist.max()) > INF:
            raise InvalidInput(f"cost matrix entries must not exceed {INF}")
        D = dist.astype(np.int64, copy=False)
    else:
        # object arrays keep python ints, so values near INF survive the trip
        raw = np.asarray(dist, dtype=object)
        if raw.size and not all(_is_integral(x) for x in raw.flat):
            raise InvalidInput("cost matrix entries must be integers")
        try:
            D = raw.astype(np.int64)
        except OverflowError:
            raise InvalidInput(f"cost matrix entries must not exceed {INF}")

    if D.ndim != 2 or D.shape[0] != D.shape[1]:
        raise InvalidInput(f"cost matrix must be square, got shape {D.shape}")
    if (D < 0).any():
        raise InvalidInput("cost matrix entries must be non-negative")
    return D


def _is_integral(x):
    if isinstance(x, (bool, np.bool_)):
        return False
    if isinstance(x, (int, np.integer)):
        return True
    return isinstance(x, (float, np.floating)) and float(x).is_integer()


def validate_problem(n, start, end, dist, max_nodes=None):
    """Check the solve() preconditions and return the matrix as int64 ndarray."""
    if n < 1:
        raise InvalidInput(f"need at least one node, got n={n}")
    if max_nodes is not None and n > max_nodes:
        raise InvalidInput(f"n={n} exceeds the supported maximum of {max_nodes} nodes")
    for name, idx in (("start", start), ("end", end)):
        if not 0 <= idx < n:
            raise InvalidInput(f"{name}={idx} out of range for n={n}")

    D = as_cost_matrix(dist)
    if D.shape[0] != n:
        raise InvalidInput(f"cost matrix is {D.shape[0]}x{D.shape[1]}, expected {n}x{n}")
    return D
