import logging
from concurrent.futures import ThreadPoolExecutor, as_completed

import numpy as np
import requests
from tqdm import tqdm

from gmaps.config import CHUNK_SIZE, DISTANCE_MATRIX_URL, MAX_WORKERS, REQUEST_TIMEOUT, Mode
from gmaps.errors import DistanceMatrixError
from start_end_methods.costs import INF

logger = logging.getLogger(__name__)


def _format_waypoints(waypoints):
    return "|".join(f"{lat},{lng}" for lat, lng in waypoints)


def request_block(origins, destinations, api_key, session=None):
    """One Distance Matrix call; returns the raw `rows` list."""
    http = session or requests
    logger.debug("Calculating distance matrix: orig: %s, dest: %s", origins, destinations)
    resp = http.get(
        DISTANCE_MATRIX_URL,
        params={
            "origins": _format_waypoints(origins),
            "destinations": _format_waypoints(destinations),
            "key": api_key,
        },
        timeout=REQUEST_TIMEOUT,
    )
    resp.raise_for_status()
    data = resp.json()

    status = data.get("status")
    if status != "OK":
        raise DistanceMatrixError(f"{status}: {data.get('error_message', 'no error message')}")
    return data["rows"]


def element_cost(elem, mode):
    """Meters for Mode.DISTANCE, whole minutes for Mode.TIME, None if missing."""
    if elem.get("status", "OK") != "OK":
        return None
    if mode is Mode.DISTANCE:
        distance = elem.get("distance")
        return int(distance["value"]) if distance else None
    duration = elem.get("duration")
    return int(duration["value"]) // 60 if duration else None


def fill_block(dist, rows, i, j, mode):
    for ci, row in enumerate(rows):
        cur_i = i + ci
        for cj, elem in enumerate(row["elements"]):
            cur_j = j + cj
            cost = element_cost(elem, mode)
            if cost is None:
                logger.warning("No %s available from %d to %d", mode.value, cur_i, cur_j)
                continue
            # reference acquisition is symmetric: one request fills both directions
            dist[cur_i, cur_j] = cost
            dist[cur_j, cur_i] = cost


def get_distance_matrix(waypoints, api_key, mode=Mode.TIME, session=None,
                        chunk_size=CHUNK_SIZE, max_workers=MAX_WORKERS, progress=True):
    """
    n x n int64 cost matrix; INF where the API has no route, 0 on the diagonal.

    Only blocks (i, j >= i) of chunk_size x chunk_size are requested; the
    blocks run concurrently, results are written back by this thread only.
    """
    mode = Mode(mode)
    n = len(waypoints)
    dist = np.full((n, n), INF, dtype=np.int64)
    np.fill_diagonal(dist, 0)

    blocks = [(i, j) for i in range(0, n, chunk_size) for j in range(i, n, chunk_size)]
    if not blocks:
        return dist

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = {
            executor.submit(
                request_block,
                waypoints[i:i + chunk_size],
                waypoints[j:j + chunk_size],
                api_key,
                session,
            ): (i, j)
            for i, j in blocks
        }
        for future in tqdm(as_completed(futures), total=len(futures),
                           desc="Distance matrix", disable=not progress):
            i, j = futures[future]
            fill_block(dist, future.result(), i, j, mode)

    return dist
