import logging
import re

import pandas as pd
import requests

from gmaps.config import PLACE_DETAILS_URL, REQUEST_TIMEOUT
from gmaps.errors import PlaceError

logger = logging.getLogger(__name__)

# .../data=!4m2!3m1!1s0x357ca2:0x1a2b3c...  -> feature id, second half is the place cid
RE_PID = re.compile(r"!1s([^!]+)")
# .../maps/search/37.5665,126.9780
RE_SEARCH = re.compile(r"/search/([-0-9.]+),([-0-9.]+)")
RE_FTID = re.compile(r"^0x[0-9A-Fa-f]+:0x[0-9A-Fa-f]+$")

REQUIRED_COLUMNS = ("Title", "URL")


def read_places(csv_path):
    """
    Load a Google Maps saved-list export. Only the Title and URL columns are
    kept; titles must be unique because they identify start and end.
    """
    try:
        df = pd.read_csv(csv_path, dtype=str)
    except (OSError, UnicodeDecodeError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        raise PlaceError(f"{csv_path}: cannot read places ({e})") from e
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise PlaceError(f"{csv_path}: missing column(s) {', '.join(missing)}")

    df = df[list(REQUIRED_COLUMNS)].dropna(how="all").reset_index(drop=True)
    empty = df[df.isnull().any(axis=1)]
    if not empty.empty:
        raise PlaceError(f"{csv_path}: row {empty.index[0] + 1} has an empty Title or URL")

    df["Title"] = df["Title"].str.strip()
    dup = df.loc[df["Title"].duplicated(), "Title"]
    if not dup.empty:
        raise PlaceError(f"{csv_path}: duplicate title {dup.iloc[0]!r}")

    logger.info("Loaded %d places from %s", len(df), csv_path)
    return df


def parse_place_url(url):
    """
    Returns ("coords", (lat, lng)) for search URLs, ("cid", cid) for place URLs
    that need a Place Details lookup.
    """
    m = RE_PID.search(url)
    if m:
        token = m.group(1)
        if not RE_FTID.match(token):
            raise PlaceError(f"Invalid ftid found: {token}")
        cid_hex = token.split(":")[1]
        return "cid", str(int(cid_hex, 16))

    m = RE_SEARCH.search(url)
    if m:
        try:
            return "coords", (float(m.group(1)), float(m.group(2)))
        except ValueError:
            raise PlaceError(f"Malformed coordinates in URL: {url}")

    raise PlaceError(f"Unrecognized URL: {url}")


def lookup_cid(cid, api_key, session=None):
    http = session or requests
    resp = http.get(
        PLACE_DETAILS_URL,
        params={"cid": cid, "fields": "geometry", "key": api_key},
        timeout=REQUEST_TIMEOUT,
    )
    resp.raise_for_status()
    data = resp.json()

    try:
        location = data["result"]["geometry"]["location"]
        return float(location["lat"]), float(location["lng"])
    except (KeyError, TypeError, ValueError):
        status = data.get("status", "no status") if isinstance(data, dict) else "no status"
        raise PlaceError(f"No location for cid {cid} ({status})")


def get_waypoints(places, api_key, session=None):
    """Resolve every place URL to a (lat, lng) pair, in row order."""
    waypoints = []
    for title, url in zip(places["Title"], places["URL"]):
        kind, value = parse_place_url(url)
        if kind == "cid":
            logger.debug("Looking up %s (cid %s)", title, value)
            value = lookup_cid(value, api_key, session=session)
        waypoints.append(value)
    return waypoints
