import numpy as np

from start_end_methods.base import StartEndSolver
from start_end_methods.costs import INF, saturating_add, validate_problem
from start_end_methods.errors import NoPathFound, PathReconstructionFailed

# dp is (2^n, n) int64; 20 nodes is already ~170 MB per table
MAX_HELD_KARP_NODES = 20
# parent holds node indices < MAX_HELD_KARP_NODES, so int8 is enough
NO_PARENT = -1
PARENT_DTYPE = np.int8


def _fill_tables(n, start, D):
    """
    dp[mask, v] = cheapest path that leaves start, visits exactly the nodes of
    mask and stops at v; parent[mask, v] is the node visited just before v.

    Masks are processed in increasing numeric order: a transition only ever
    adds a bit, so mask | bit(v) > mask and every state is final before it is
    expanded. All (u, v) transitions of one mask are relaxed in a single
    frontier x outside block.
    """
    num_states = 1 << n
    bits = np.left_shift(1, np.arange(n, dtype=np.int64))

    dp = np.full((num_states, n), INF, dtype=np.int64)
    parent = np.full((num_states, n), NO_PARENT, dtype=PARENT_DTYPE)
    dp[1 << start, start] = 0

    for mask in range(num_states):
        row = dp[mask]
        inside = (mask & bits) != 0
        frontier = np.nonzero((row < INF) & inside)[0]
        if frontier.size == 0:
            continue
        outside = np.nonzero(~inside)[0]
        if outside.size == 0:
            continue

        c = row[frontier][:, None]
        w = D[np.ix_(frontier, outside)]
        # edge must exist and c + w must stay below the sentinel
        ok = (w < INF) & (w < INF - c)
        if not ok.any():
            continue
        cand = np.where(ok, c + np.where(ok, w, 0), INF)

        # argmin keeps the first u on ties, same as relaxing u in order
        pick = cand.argmin(axis=0)
        best = cand[pick, np.arange(outside.size)]
        next_masks = mask | bits[outside]
        better = best < dp[next_masks, outside]
        if not better.any():
            continue
        dp[next_masks[better], outside[better]] = best[better]
        parent[next_masks[better], outside[better]] = frontier[pick[better]]

    return dp, parent


def held_karp(n, start, end, dist):
    """
    Exact minimum-cost Hamiltonian path from start to end (Held-Karp).

    With start == end (and n > 1) the tour is closed back to start, giving a
    Hamiltonian cycle of n + 1 entries.

    O(n^2 * 2^n) time, O(n * 2^n) memory.
    """
    D = validate_problem(n, start, end, dist, max_nodes=MAX_HELD_KARP_NODES)
    if n == 1:
        return [start]

    full_mask = (1 << n) - 1
    dp, parent = _fill_tables(n, start, D)

    if start == end:
        # 순환 경로: 마지막 노드에서 start로 돌아오는 비용이 가장 작은 경로 선택
        best_cost, last = INF, NO_PARENT
        for u in range(n):
            if u == start:
                continue
            total = saturating_add(int(dp[full_mask, u]), int(D[u, start]))
            if total < best_cost:
                best_cost, last = total, u
        if best_cost >= INF:
            raise NoPathFound(f"No valid cycle found through all nodes from {start}")
        return _reconstruct(parent, start, last, full_mask) + [start]

    if dp[full_mask, end] >= INF:
        raise NoPathFound(f'No valid path found from "{start}" to "{end}"')
    return _reconstruct(parent, start, end, full_mask)


def _reconstruct(parent, start, last, mask):
    path = [last]
    current = last
    while mask != 1 << start:
        prev = int(parent[mask, current])
        if prev == NO_PARENT:
            raise PathReconstructionFailed(
                f"missing predecessor of node {current} for visited set {mask:#b}"
            )
        mask &= ~(1 << current)
        current = prev
        path.append(current)
    path.reverse()
    return path


class TSPHeldKarpStartEnd(StartEndSolver):
    def _solve(self):
        return held_karp(self.n, self.start, self.end, self.dist)
