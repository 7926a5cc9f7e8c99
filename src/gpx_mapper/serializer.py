"""Reading and writing the routes.json document."""

import json
from pathlib import Path

from gpx_mapper.models import Route

ROUTES_FILENAME = "routes.json"


def routes_to_json(routes: list[Route], indent: int | None = 2) -> str:
    """Serialize routes in their given order.

    elevationGain is null for routes without elevation data.
    """
    return json.dumps([route.to_dict() for route in routes], indent=indent, ensure_ascii=False)


def write_routes_json(routes: list[Route], path: Path) -> Path:
    path.write_text(routes_to_json(routes), encoding="utf-8")
    return path


def load_routes_json(text: str) -> list[Route]:
    """Parse a routes document back into Route objects.

    Raises:
        ValueError: If the text is not JSON or not a list of route entries.
    """
    data = json.loads(text)
    if not isinstance(data, list):
        raise ValueError("Route document must be a JSON array")
    try:
        return [Route.from_dict(entry) for entry in data]
    except (KeyError, TypeError, ValueError) as e:
        raise ValueError(f"Malformed route entry: {e}") from e
