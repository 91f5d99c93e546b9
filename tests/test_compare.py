import numpy as np

from start_end_compare import compare, random_symmetric_matrix


def test_random_symmetric_matrix():
    dist = random_symmetric_matrix(5, np.random.default_rng(0))
    assert dist.shape == (5, 5)
    assert (dist == dist.T).all()
    assert (np.diag(dist) == 0).all()
    assert (dist[~np.eye(5, dtype=bool)] > 0).all()


def test_compare_solvers_agree():
    result = compare(size=6, trials=4, seed=7)
    assert result["held_karp_cost"] == result["brute_force_cost"]
    assert result["held_karp_ms"] >= 0
    assert result["brute_force_ms"] >= 0
