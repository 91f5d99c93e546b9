import pandas as pd

from start_end_methods.costs import INF, as_cost_matrix, path_cost
from start_end_methods.errors import InvalidInput


class StartEndSolver:
    """
    Common front for the fixed start/end solvers.

    dist may be a nested list, an ndarray or a DataFrame. With a DataFrame the
    index holds the city names, and start/end may be given as names.
    run() -> (path, cost), path as node indices.
    """
    def __init__(self, dist, start, end, verbose=False):
        if isinstance(dist, pd.DataFrame):
            self.city_names = [str(c) for c in dist.index]
        else:
            self.city_names = None
        self.dist = as_cost_matrix(dist)
        self.n = self.dist.shape[0]
        self.start = self._resolve(start)
        self.end = self._resolve(end)
        self.verbose = verbose

        self.tour = []
        self.min_cost = INF

    def _resolve(self, node):
        if isinstance(node, str):
            if self.city_names is None or node not in self.city_names:
                raise InvalidInput(f"unknown city: {node}")
            return self.city_names.index(node)
        return int(node)

    def _solve(self):
        raise NotImplementedError

    def run(self):
        tour = self._solve()
        self.tour = tour
        self.min_cost = path_cost(tour, self.dist)

        if self.verbose:
            names = self.city_names or [str(i) for i in range(self.n)]
            print(" → ".join(names[i] for i in tour))
            print(f"Total Cost: {self.min_cost}")

        return tour, self.min_cost

    def get_path(self):
        return self.tour

    def get_cost(self):
        return self.min_cost
