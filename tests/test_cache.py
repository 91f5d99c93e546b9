import os

import numpy as np
import pytest

from gmaps.cache import cache_key, cache_path, cached_distance_matrix, load_matrix, save_matrix
from gmaps.config import Mode
from start_end_methods.costs import INF

WAYPOINTS = [(37.5665, 126.978), (37.4563, 126.7052), (37.2636, 127.0286)]
TITLES = ["서울", "인천", "수원"]
DIST = np.array([[0, 30, 40], [30, 0, INF], [40, INF, 0]], dtype=np.int64)


class CountingFetch:
    def __init__(self, dist):
        self.dist = dist
        self.calls = 0

    def __call__(self, waypoints, api_key, mode, **kwargs):
        self.calls += 1
        return self.dist


def test_cache_key_depends_on_mode_and_coordinates():
    assert cache_key(WAYPOINTS, Mode.TIME) == cache_key(list(WAYPOINTS), "time")
    assert cache_key(WAYPOINTS, Mode.TIME) != cache_key(WAYPOINTS, Mode.DISTANCE)
    assert cache_key(WAYPOINTS, Mode.TIME) != cache_key(WAYPOINTS[::-1], Mode.TIME)


def test_save_and_load_keep_inf(tmp_path):
    path = str(tmp_path / "sub" / "m.csv")
    save_matrix(path, DIST, TITLES)
    loaded = load_matrix(path)
    assert loaded.dtype == np.int64
    np.testing.assert_array_equal(loaded, DIST)
    assert int(loaded[1, 2]) == INF


def test_fetches_once_then_reads_cache(tmp_path):
    fetch = CountingFetch(DIST)
    first = cached_distance_matrix(WAYPOINTS, TITLES, "KEY", Mode.DISTANCE,
                                   cache_dir=str(tmp_path), fetch=fetch)
    second = cached_distance_matrix(WAYPOINTS, TITLES, "KEY", Mode.DISTANCE,
                                    cache_dir=str(tmp_path), fetch=fetch)
    assert fetch.calls == 1
    np.testing.assert_array_equal(first, second)

    cached_distance_matrix(WAYPOINTS, TITLES, "KEY", Mode.TIME, cache_dir=str(tmp_path), fetch=fetch)
    assert fetch.calls == 2


def test_wrong_shape_is_refetched(tmp_path):
    path = cache_path(str(tmp_path), WAYPOINTS, Mode.TIME)
    save_matrix(path, DIST[:2, :2], TITLES[:2])

    fetch = CountingFetch(DIST)
    dist = cached_distance_matrix(WAYPOINTS, TITLES, "KEY", Mode.TIME, cache_dir=str(tmp_path), fetch=fetch)
    assert fetch.calls == 1
    np.testing.assert_array_equal(dist, DIST)
    np.testing.assert_array_equal(load_matrix(path), DIST)


@pytest.mark.parametrize("content", ["", "garbage,x\na,b\n"])
def test_unreadable_cache_is_refetched(tmp_path, caplog, content):
    path = cache_path(str(tmp_path), WAYPOINTS, Mode.TIME)
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(content)

    fetch = CountingFetch(DIST)
    dist = cached_distance_matrix(WAYPOINTS, TITLES, "KEY", Mode.TIME, cache_dir=str(tmp_path), fetch=fetch)
    assert fetch.calls == 1
    np.testing.assert_array_equal(dist, DIST)
    np.testing.assert_array_equal(load_matrix(path), DIST)
    assert "Ignoring unreadable cached matrix" in caplog.text


def test_fetch_kwargs_are_forwarded(tmp_path):
    seen = {}

    def fetch(waypoints, api_key, mode, **kwargs):
        seen.update(kwargs)
        return DIST

    cached_distance_matrix(WAYPOINTS, TITLES, "KEY", cache_dir=str(tmp_path), fetch=fetch, session="S")
    assert seen == {"session": "S"}
