import os
from enum import Enum

# =========================================================
# [설정] Google Maps 웹 서비스
# =========================================================
API_KEY_ENV = "GOOGLE_MAPS_API_KEY"

PLACE_DETAILS_URL = "https://maps.googleapis.com/maps/api/place/details/json"
DISTANCE_MATRIX_URL = "https://maps.googleapis.com/maps/api/distancematrix/json"

# Distance Matrix API: at most 10 origins x 10 destinations per request here
CHUNK_SIZE = int(os.environ.get("TSP_ROUTE_CHUNK_SIZE", 10))
# 동시 요청 수 (API 제한 고려하여 4~8 정도)
MAX_WORKERS = int(os.environ.get("TSP_ROUTE_MAX_WORKERS", 8))
REQUEST_TIMEOUT = float(os.environ.get("TSP_ROUTE_REQUEST_TIMEOUT", 30))

CACHE_DIR = os.environ.get(
    "TSP_ROUTE_CACHE_DIR", os.path.join(os.path.expanduser("~"), ".cache", "tsp-route")
)


class Mode(str, Enum):
    DISTANCE = "distance"
    TIME = "time"

    @property
    def unit(self):
        return "meters" if self is Mode.DISTANCE else "minutes"


def get_api_key(api_key=None):
    return api_key or os.environ.get(API_KEY_ENV)
