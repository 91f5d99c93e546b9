import hashlib
import json
import logging
import os

import numpy as np
import pandas as pd

from gmaps.config import CACHE_DIR, Mode
from gmaps.distance_matrix import get_distance_matrix

logger = logging.getLogger(__name__)


def cache_key(waypoints, mode):
    mode = Mode(mode)
    payload = json.dumps(
        {"mode": mode.value, "waypoints": [[round(lat, 6), round(lng, 6)] for lat, lng in waypoints]}
    )
    return hashlib.sha1(payload.encode("utf-8")).hexdigest()[:16]


def cache_path(cache_dir, waypoints, mode):
    return os.path.join(cache_dir, f"matrix_{Mode(mode).value}_{cache_key(waypoints, mode)}.csv")


def save_matrix(path, dist, titles):
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    df = pd.DataFrame(np.asarray(dist, dtype=np.int64), index=titles, columns=titles)
    df.to_csv(path)


def load_matrix(path):
    df = pd.read_csv(path, index_col=0)
    return df.to_numpy(dtype=np.int64)


def cached_distance_matrix(waypoints, titles, api_key, mode=Mode.TIME, cache_dir=CACHE_DIR,
                           fetch=get_distance_matrix, **fetch_kwargs):
    """
    Distance matrix for the waypoints, read from cache_dir when a matrix for the
    same coordinates and mode was stored before; otherwise fetched and stored.
    """
    n = len(waypoints)
    path = cache_path(cache_dir, waypoints, mode)

    if os.path.exists(path):
        try:
            dist = load_matrix(path)
        except (OSError, ValueError) as e:
            # ParserError and EmptyDataError are ValueErrors too
            logger.warning("Ignoring unreadable cached matrix %s: %s", path, e)
        else:
            if dist.shape == (n, n):
                logger.info("Using cached distance matrix %s", path)
                return dist
            logger.warning("Ignoring cached matrix %s with shape %s, expected %s", path, dist.shape, (n, n))

    dist = fetch(waypoints, api_key, mode, **fetch_kwargs)
    save_matrix(path, dist, titles)
    logger.info("Stored distance matrix in %s", path)
    return dist
