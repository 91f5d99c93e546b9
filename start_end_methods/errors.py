class TSPError(Exception):
    """Base class for every failure of a single solve call."""


class InvalidInput(TSPError, ValueError):
    """n, start/end or the cost matrix violate the solver preconditions."""


class NoPathFound(TSPError):
    """Every Hamiltonian path between start and end uses an unreachable edge."""


class PathReconstructionFailed(TSPError):
    """The parent table has a hole on the optimal path (internal invariant)."""
