from gmaps.cache import cached_distance_matrix
from gmaps.config import Mode
from gmaps.distance_matrix import get_distance_matrix
from gmaps.errors import DistanceMatrixError, GMapsError, PlaceError, UnknownPlace
from gmaps.waypoints import get_waypoints, parse_place_url, read_places
