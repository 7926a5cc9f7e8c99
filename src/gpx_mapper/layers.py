"""Map layers for routes and their selection styling.

Each route gets one GeoJSON line source and two layers on it: a wide,
transparent hit layer that catches pointer events, and the visible
colored line. Selection changes only restyle the visible layers.
"""

from dataclasses import asdict, dataclass
from typing import Any, Callable, Protocol

from gpx_mapper.models import Bounds, Route


@dataclass(frozen=True)
class LineStyle:
    opacity: float
    width: float


ALL_STYLE = LineStyle(opacity=0.8, width=4)
SELECTED_STYLE = LineStyle(opacity=1.0, width=5)
DIMMED_STYLE = LineStyle(opacity=0.15, width=3)

HIT_LINE_WIDTH = 20  # px, generous so thin lines are easy to tap
FIT_PADDING = 50  # px
LINE_LAYOUT = {"line-join": "round", "line-cap": "round"}


class MapEngine(Protocol):
    """The subset of the map renderer's API used for route layers."""

    def add_source(self, source_id: str, source: dict) -> None: ...

    def add_layer(self, layer: dict) -> None: ...

    def set_paint_property(self, layer_id: str, name: str, value: Any) -> None: ...

    def set_layout_property(self, layer_id: str, name: str, value: Any) -> None: ...

    def fit_bounds(self, bounds: Bounds, padding: int) -> None: ...

    def on(self, event: str, layer_id: str, handler: Callable[[], None]) -> None: ...

    def set_cursor(self, cursor: str) -> None: ...


def source_id(route_id: str) -> str:
    return f"route-{route_id}"


def hit_layer_id(route_id: str) -> str:
    return f"route-hit-{route_id}"


def line_layer_id(route_id: str) -> str:
    return f"route-layer-{route_id}"


def route_source(route: Route) -> dict:
    """GeoJSON source for one route's line geometry."""
    return {
        "type": "geojson",
        "data": {
            "type": "Feature",
            "properties": {"id": route.id, "name": route.name},
            "geometry": {"type": "LineString", "coordinates": route.coordinates},
        },
    }


def hit_layer(route: Route) -> dict:
    return {
        "id": hit_layer_id(route.id),
        "type": "line",
        "source": source_id(route.id),
        "layout": dict(LINE_LAYOUT),
        "paint": {"line-color": "transparent", "line-width": HIT_LINE_WIDTH},
    }


def line_layer(route: Route) -> dict:
    return {
        "id": line_layer_id(route.id),
        "type": "line",
        "source": source_id(route.id),
        "layout": dict(LINE_LAYOUT),
        "paint": {
            "line-color": route.color,
            "line-width": ALL_STYLE.width,
            "line-opacity": ALL_STYLE.opacity,
        },
    }


def client_style_config() -> dict:
    """Style constants handed to the browser script at build time."""
    return {
        "all": asdict(ALL_STYLE),
        "selected": asdict(SELECTED_STYLE),
        "dimmed": asdict(DIMMED_STYLE),
        "hitLineWidth": HIT_LINE_WIDTH,
        "fitPadding": FIT_PADDING,
        "lineLayout": dict(LINE_LAYOUT),
    }


class MapLayerManager:
    """Creates route layers on a map engine and restyles them in place."""

    def __init__(self, engine: MapEngine, routes):
        self.engine = engine
        self.routes = tuple(routes)

    def add_route_layers(self, on_select: Callable[[str], None]) -> None:
        """Register sources, layers and pointer handlers for every route.

        A click on a route's hit layer calls on_select with its id; this is
        the only way the map surface selects a route.
        """
        for route in self.routes:
            self.engine.add_source(source_id(route.id), route_source(route))
            self.engine.add_layer(hit_layer(route))
            self.engine.add_layer(line_layer(route))

            layer_id = hit_layer_id(route.id)
            self.engine.on("click", layer_id, lambda rid=route.id: on_select(rid))
            self.engine.on("mouseenter", layer_id, lambda: self.engine.set_cursor("pointer"))
            self.engine.on("mouseleave", layer_id, lambda: self.engine.set_cursor(""))

    def render_map_styling(self, styling: dict[str, LineStyle], bounds: Bounds | None) -> None:
        """Apply per-route line styles, then fit the viewport to bounds."""
        for route_id, style in styling.items():
            layer_id = line_layer_id(route_id)
            self.engine.set_layout_property(layer_id, "visibility", "visible")
            self.engine.set_paint_property(layer_id, "line-opacity", style.opacity)
            self.engine.set_paint_property(layer_id, "line-width", style.width)
        if bounds is not None:
            self.engine.fit_bounds(bounds, FIT_PADDING)
