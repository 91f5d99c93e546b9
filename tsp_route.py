"""
Optimal visiting order for a Google Maps saved list.

    tsp-route --csv places.csv --start "Home" --end "Office" --mode time
"""
import logging
import sys
from argparse import ArgumentParser

import requests

from gmaps.cache import cached_distance_matrix
from gmaps.config import CACHE_DIR, Mode, get_api_key
from gmaps.distance_matrix import get_distance_matrix
from gmaps.errors import GMapsError, UnknownPlace
from gmaps.waypoints import get_waypoints, read_places
from start_end_methods.errors import TSPError
from start_end_methods.reachability import check_reachable
from start_end_methods.solver import Algorithm, solve

logger = logging.getLogger("tsp_route")


def argparser():
    parser = ArgumentParser(description="Google Maps TSP Solver")
    parser.add_argument("--csv", required=True, help="CSV export with Title and URL columns")
    parser.add_argument("--api-key", default=None, help="Google Maps API key (default: $GOOGLE_MAPS_API_KEY)")
    parser.add_argument("--start", required=True, help="Title of the first place")
    parser.add_argument("--end", required=True, help="Title of the last place")
    parser.add_argument("--mode", choices=[m.value for m in Mode], default=Mode.TIME.value)
    parser.add_argument("--algorithm", choices=[a.value for a in Algorithm], default=Algorithm.HELD_KARP.value)
    parser.add_argument("--workers", type=int, default=None, help="Processes for brute-force")
    parser.add_argument("--cache-dir", default=CACHE_DIR)
    parser.add_argument("--no-cache", action="store_true", help="Always query the Distance Matrix API")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def format_route(path, dist, titles, mode):
    unit = Mode(mode).unit
    lines = ["Optimal Path:", "-------------"]
    for i, node in enumerate(path):
        lines.append(f"{i + 1}. {titles[node]}")

    lines += ["", "Segment Distances:", "------------------"]
    total = 0
    for u, v in zip(path, path[1:]):
        segment = int(dist[u][v])
        lines.append(f"{titles[u]} -> {titles[v]}: {segment} {unit}")
        total += segment

    lines.append("")
    lines.append(f'Optimal distance from "{titles[path[0]]}" to "{titles[path[-1]]}": {total} {unit}')
    return "\n".join(lines)


def run(args, session=None):
    mode = Mode(args.mode)
    places = read_places(args.csv)
    titles = places["Title"].tolist()

    for name, title in (("start", args.start), ("end", args.end)):
        if title not in titles:
            raise UnknownPlace(f"{name} not found: {title}")
    start, end = titles.index(args.start), titles.index(args.end)

    api_key = get_api_key(args.api_key)
    waypoints = get_waypoints(places, api_key, session=session)

    if args.no_cache:
        dist = get_distance_matrix(waypoints, api_key, mode, session=session)
    else:
        dist = cached_distance_matrix(waypoints, titles, api_key, mode,
                                      cache_dir=args.cache_dir, session=session)

    check_reachable(dist, start, end, names=titles)
    path = solve(dist, start, end, algorithm=args.algorithm, workers=args.workers)
    return format_route(path, dist, titles, mode)


def main(argv=None, session=None):
    args = argparser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not get_api_key(args.api_key):
        logger.error("No API key: pass --api-key or set $GOOGLE_MAPS_API_KEY")
        return 2

    try:
        print(run(args, session=session))
    except UnknownPlace as e:
        logger.error("%s", e)
        return 2
    except (TSPError, GMapsError, requests.RequestException) as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
