class GMapsError(Exception):
    pass


class PlaceError(GMapsError):
    """A CSV row or place URL could not be turned into coordinates."""


class DistanceMatrixError(GMapsError):
    """The Distance Matrix API refused a request."""


class UnknownPlace(PlaceError):
    """A requested start/end title is not in the CSV."""
