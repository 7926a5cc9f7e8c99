from pathlib import Path

from gpx_mapper.identity import ALL_ROUTES_ID
from gpx_mapper.models import Bounds, Route
from gpx_mapper.serializer import load_routes_json


class RouteDocumentError(Exception):
    """Raised when the route document cannot be loaded."""


def union_bounds(routes) -> Bounds | None:
    """Smallest box containing every route's bounds."""
    routes = list(routes)
    if not routes:
        return None
    min_lon = min(r.bounds[0][0] for r in routes)
    min_lat = min(r.bounds[0][1] for r in routes)
    max_lon = max(r.bounds[1][0] for r in routes)
    max_lat = max(r.bounds[1][1] for r in routes)
    return (min_lon, min_lat), (max_lon, max_lat)


class RouteStore:
    """Read-only collection of the routes loaded for a session."""

    def __init__(self, routes: list[Route]):
        self._routes = tuple(routes)
        self._by_id = {route.id: route for route in self._routes}

    @classmethod
    def from_json(cls, text: str) -> "RouteStore":
        try:
            return cls(load_routes_json(text))
        except ValueError as e:
            raise RouteDocumentError(f"Failed to load routes: {e}") from e

    @classmethod
    def load(cls, path: Path) -> "RouteStore":
        try:
            text = Path(path).read_text(encoding="utf-8")
        except OSError as e:
            raise RouteDocumentError(f"Failed to load routes: {e}") from e
        return cls.from_json(text)

    def __len__(self) -> int:
        return len(self._routes)

    def __iter__(self):
        return iter(self._routes)

    @property
    def routes(self) -> tuple[Route, ...]:
        return self._routes

    @property
    def ids(self) -> list[str]:
        return [route.id for route in self._routes]

    def get(self, route_id: str) -> Route | None:
        return self._by_id.get(route_id)

    def is_known_state(self, state: str) -> bool:
        return state == ALL_ROUTES_ID or state in self._by_id

    def bounds_for(self, state: str) -> Bounds | None:
        """Bounds of one route, or of all routes for the "all" state."""
        if state == ALL_ROUTES_ID:
            return union_bounds(self._routes)
        route = self._by_id.get(state)
        return route.bounds if route else None
