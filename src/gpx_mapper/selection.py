"""Route selection state machine.

The state is either "all" or the id of one route. Every way of changing
it (sidebar, mobile selector, map click, history navigation) ends in
`SelectionController.select`, which pushes the same bundle of side
effects through a renderer. Nothing else holds the current selection.
"""

import logging
from typing import Protocol

from gpx_mapper.identity import ALL_ROUTES_ID
from gpx_mapper.layers import ALL_STYLE, DIMMED_STYLE, SELECTED_STYLE, LineStyle
from gpx_mapper.models import Bounds, Route
from gpx_mapper.store import RouteStore

logger = logging.getLogger(__name__)

ALL = ALL_ROUTES_ID


class UnknownRouteError(ValueError):
    """Raised when selecting a state that names no known route."""


class SelectionRenderer(Protocol):
    def render_list(self, active_id: str) -> None:
        """Mark only the list item for active_id and set the selector value."""

    def render_map_styling(self, styling: dict[str, LineStyle], bounds: Bounds | None) -> None:
        """Restyle route lines and fit the viewport."""

    def render_detail_panel(self, route: Route | None) -> None:
        """Show details for route, or hide the panel when None."""

    def write_location(self, fragment: str) -> None:
        """Write the state into the URL fragment."""


def styling_for(store: RouteStore, state: str) -> dict[str, LineStyle]:
    """Line style per route id for the given selection state."""
    if state == ALL:
        return {route.id: ALL_STYLE for route in store}
    return {
        route.id: SELECTED_STYLE if route.id == state else DIMMED_STYLE
        for route in store
    }


class SelectionController:
    def __init__(self, store: RouteStore, renderer: SelectionRenderer):
        self.store = store
        self.renderer = renderer
        self._current: str | None = None

    @property
    def current(self) -> str | None:
        return self._current

    def start(self, fragment: str = "") -> str:
        """Enter the initial state taken from the URL fragment.

        Falls back to "all" when the fragment is empty or unknown.
        """
        fragment = fragment.lstrip("#")
        state = fragment if fragment and self.store.is_known_state(fragment) else ALL
        self.select(state)
        return state

    def select(self, state: str) -> None:
        """Enter state and apply all of its side effects.

        Re-entering the current state is allowed and re-applies them.

        Raises:
            UnknownRouteError: If state is neither "all" nor a known route id.
        """
        if not self.store.is_known_state(state):
            raise UnknownRouteError(f"Unknown route: {state!r}")

        self._current = state
        self.renderer.write_location(state)
        self.renderer.render_list(state)
        self.renderer.render_detail_panel(None if state == ALL else self.store.get(state))
        self.renderer.render_map_styling(styling_for(self.store, state), self.store.bounds_for(state))

    def on_sidebar_click(self, route_id: str, on_download: bool = False) -> None:
        # Download links inside list items do not change the selection
        if on_download:
            return
        self.select(route_id)

    def on_selector_change(self, value: str) -> None:
        self.select(value)

    def on_map_click(self, route_id: str) -> None:
        self.select(route_id)

    def on_location_change(self, fragment: str) -> None:
        """Follow back/forward navigation.

        Ignores fragments equal to the current state, which is what
        `select` itself just wrote, and fragments naming no known route.
        """
        fragment = fragment.lstrip("#")
        if fragment == self._current:
            return
        if not self.store.is_known_state(fragment):
            logger.debug("Ignoring unknown location fragment %r", fragment)
            return
        self.select(fragment)
