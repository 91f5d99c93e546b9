from enum import Enum

from start_end_methods.brute_force import brute_force
from start_end_methods.costs import as_cost_matrix, path_cost, validate_problem
from start_end_methods.held_karp import MAX_HELD_KARP_NODES, held_karp


class Algorithm(str, Enum):
    HELD_KARP = "held-karp"
    BRUTE_FORCE = "brute-force"

    @property
    def max_nodes(self):
        if self is Algorithm.HELD_KARP:
            return MAX_HELD_KARP_NODES
        # no ceiling; brute_force warns when the enumeration gets large
        return None


def solve(dist, start, end, algorithm=Algorithm.HELD_KARP, workers=None):
    """
    Cheapest path from start to end through every node exactly once.

    Both algorithms share one contract: the result begins with start, ends
    with end and lists every node once (start repeated at the end when
    start == end and there is more than one node).
    """
    algorithm = Algorithm(algorithm)
    D = validate_problem(len(dist), start, end, dist, max_nodes=algorithm.max_nodes)
    n = D.shape[0]

    if algorithm is Algorithm.BRUTE_FORCE:
        return brute_force(n, start, end, D, workers=workers)
    return held_karp(n, start, end, D)


def solve_with_cost(dist, start, end, algorithm=Algorithm.HELD_KARP, workers=None):
    path = solve(dist, start, end, algorithm=algorithm, workers=workers)
    return path, path_cost(path, as_cost_matrix(dist))
