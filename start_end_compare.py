import time

import numpy as np

from start_end_methods.brute_force import TSPBruteForceStartEnd
from start_end_methods.held_karp import TSPHeldKarpStartEnd


def random_symmetric_matrix(size, rng, low=1, high=1000):
    upper = rng.integers(low, high, size=(size, size))
    dist = np.triu(upper, 1)
    return dist + dist.T


def compare(size=8, trials=10, seed=0, workers=1, verbose=False):
    """
    Run Held-Karp and brute force on the same random symmetric matrices with
    random endpoints; the optimal costs must agree on every trial.
    """
    rng = np.random.default_rng(seed)
    held_karp_cost = brute_force_cost = 0
    held_karp_time = brute_force_time = 0.0

    for i in range(trials):
        dist = random_symmetric_matrix(size, rng)
        start, end = (int(x) for x in rng.choice(size, size=2, replace=size < 2))

        ts = time.time()
        path1, cost1 = TSPHeldKarpStartEnd(dist, start, end).run()
        held_karp_time += time.time() - ts

        ts = time.time()
        path2, cost2 = TSPBruteForceStartEnd(dist, start, end, workers=workers).run()
        brute_force_time += time.time() - ts

        if cost1 != cost2:
            raise AssertionError(f"trial {i}: held-karp {cost1} != brute-force {cost2} ({start} -> {end})")

        held_karp_cost += cost1
        brute_force_cost += cost2
        if verbose:
            print(f"Iter {i+1} finished")

    return {
        "held_karp_cost": held_karp_cost / trials,
        "held_karp_ms": held_karp_time * 1000 / trials,
        "brute_force_cost": brute_force_cost / trials,
        "brute_force_ms": brute_force_time * 1000 / trials,
    }


if __name__ == "__main__":
    result = compare(size=9, trials=10, workers=None, verbose=True)

    print(f"Held-Karp average cost: {result['held_karp_cost']:.3f}")
    print(f"Average time consumed: {result['held_karp_ms']:.4f} ms\n")

    print(f"Brute force average cost: {result['brute_force_cost']:.3f}")
    print(f"Average time consumed: {result['brute_force_ms']:.4f} ms")
