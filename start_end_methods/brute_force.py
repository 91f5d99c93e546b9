import logging
from concurrent.futures import ProcessPoolExecutor
from itertools import permutations
from math import factorial

from start_end_methods.base import StartEndSolver
from start_end_methods.costs import INF, saturating_add, validate_problem
from start_end_methods.errors import NoPathFound

logger = logging.getLogger(__name__)

# (n-2)! permutations; past 12 nodes a run takes minutes
SLOW_BRUTE_FORCE_NODES = 12
# below this many nodes a process pool costs more than it saves
PARALLEL_MIN_NODES = 9


def _best_in_partition(task):
    """Cheapest start -> first -> perm(rest) -> end candidate. Runs in a worker."""
    start, end, head, rest, dist = task
    best_cost, best_path = INF, None

    for perm in permutations(rest):
        path = [start, *head, *perm, end]
        cost = 0
        for u, v in zip(path, path[1:]):
            cost = saturating_add(cost, dist[u][v])
            if cost >= INF:
                break
        if cost < best_cost:
            best_cost, best_path = cost, path

    return best_cost, best_path


def _partitions(start, end, intermediate, dist):
    if not intermediate:
        return [(start, end, (), (), dist)]
    tasks = []
    for first in intermediate:
        rest = tuple(x for x in intermediate if x != first)
        tasks.append((start, end, (first,), rest, dist))
    return tasks


def brute_force(n, start, end, dist, workers=None):
    """
    Exact fixed-endpoint path by enumerating every order of the intermediate
    nodes. With start == end the candidate is closed back to start.

    The permutation space is split by the first intermediate node. Each
    partition is evaluated independently (in a process pool when workers != 1)
    and the per-partition bests are reduced once all of them are done.
    Among equal-cost optima the winner is unspecified.
    """
    D = validate_problem(n, start, end, dist)
    if n == 1:
        return [start]

    if start == end:
        intermediate = [i for i in range(n) if i != start]
    else:
        intermediate = [i for i in range(n) if i != start and i != end]

    if n > SLOW_BRUTE_FORCE_NODES:
        logger.warning("Brute force over %d nodes enumerates %d orders", n, factorial(len(intermediate)))

    tasks = _partitions(start, end, intermediate, D.tolist())

    if workers is None:
        workers = None if n >= PARALLEL_MIN_NODES else 1
    if workers == 1 or len(tasks) < 2:
        results = [_best_in_partition(t) for t in tasks]
    else:
        with ProcessPoolExecutor(max_workers=workers) as executor:
            results = list(executor.map(_best_in_partition, tasks))

    best_cost, best_path = INF, None
    for cost, path in results:
        if cost < best_cost:
            best_cost, best_path = cost, path

    if best_path is None:
        raise NoPathFound("No valid path found visiting all nodes with finite distance")
    return best_path


class TSPBruteForceStartEnd(StartEndSolver):
    def __init__(self, dist, start, end, workers=None, verbose=False):
        super().__init__(dist, start, end, verbose=verbose)
        self.workers = workers

    def _solve(self):
        return brute_force(self.n, self.start, self.end, self.dist, workers=self.workers)
