import math

from gpx_mapper.distance import route_distance_km
from gpx_mapper.models import Bounds, ParsedTrack, Route, RouteMetrics, TrackPoint


def round_half_up(value: float, ndigits: int = 0):
    """Round with ties going up (2.5 -> 3), unlike the built-in round.

    Returns an int when ndigits is 0.
    """
    if ndigits == 0:
        return int(math.floor(value + 0.5))
    scale = 10 ** ndigits
    return math.floor(value * scale + 0.5) / scale


def calculate_elevation_gain(points: list[TrackPoint]) -> float | None:
    """Total climb in meters over consecutive point pairs.

    Only pairs where both points carry elevation count, and only positive
    deltas are summed. Returns None when no such pair exists, so a route
    without elevation data can be told apart from a flat one (0.0).
    """
    elevation_gain = 0.0
    has_elevation = False

    for i in range(1, len(points)):
        elev_prev = points[i - 1].elevation
        elev_curr = points[i].elevation
        if elev_prev is not None and elev_curr is not None:
            has_elevation = True
            delta = elev_curr - elev_prev
            if delta > 0:
                elevation_gain += delta

    return elevation_gain if has_elevation else None


def calculate_bounds(points: list[TrackPoint]) -> Bounds | None:
    """Bounding box ((min_lon, min_lat), (max_lon, max_lat)), None if empty."""
    if not points:
        return None

    min_lat = max_lat = points[0].lat
    min_lon = max_lon = points[0].lon
    for pt in points[1:]:
        min_lat = min(min_lat, pt.lat)
        max_lat = max(max_lat, pt.lat)
        min_lon = min(min_lon, pt.lon)
        max_lon = max(max_lon, pt.lon)

    return (min_lon, min_lat), (max_lon, max_lat)


def compute_route_metrics(points: list[TrackPoint]) -> RouteMetrics:
    """Compute unrounded distance, elevation gain and bounds."""
    return RouteMetrics(
        distance_km=route_distance_km(points),
        elevation_gain_m=calculate_elevation_gain(points),
        bounds=calculate_bounds(points),
    )


def build_route(parsed: ParsedTrack) -> Route:
    """Turn an extracted track into a Route without id or color.

    Rounding is applied here and nowhere else: distance to 0.1 km,
    elevation gain to the nearest meter.

    Raises:
        ValueError: If the track has no points.
    """
    if not parsed.points:
        raise ValueError(f"{parsed.filename}: track has no points")

    metrics = compute_route_metrics(parsed.points)
    elevation_gain = None
    if metrics.elevation_gain_m is not None:
        elevation_gain = round_half_up(metrics.elevation_gain_m)

    return Route(
        name=parsed.name,
        filename=parsed.filename,
        distance=round_half_up(metrics.distance_km, 1),
        elevation_gain=elevation_gain,
        bounds=metrics.bounds,
        coordinates=[[pt.lon, pt.lat] for pt in parsed.points],
    )
