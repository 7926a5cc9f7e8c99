"""Stable ids and palette colors for a set of routes.

Ids and colors depend only on the sorted position of each route, so
regenerating a site from the same GPX files yields the same deep links.
"""

import os
import re
import unicodedata

from gpx_mapper.models import Route

# Distinct, accessible colors; reused cyclically past the last entry
ROUTE_COLORS = [
    "#e6194b",  # red
    "#3cb44b",  # green
    "#4363d8",  # blue
    "#f58231",  # orange
    "#911eb4",  # purple
    "#46f0f0",  # cyan
    "#f032e6",  # magenta
    "#bcf60c",  # lime
    "#fabebe",  # pink
    "#008080",  # teal
    "#e6beff",  # lavender
    "#9a6324",  # brown
    "#fffac8",  # beige
    "#800000",  # maroon
    "#aaffc3",  # mint
    "#808000",  # olive
    "#ffd8b1",  # apricot
    "#000075",  # navy
]

# Selection state meaning "every route"; no route may use it as its id
ALL_ROUTES_ID = "all"
FALLBACK_SLUG = "route"

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def _fold(text: str) -> str:
    """Strip accents, dropping anything with no ASCII equivalent."""
    return unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")


def slugify(text: str) -> str:
    """Lowercase, hyphen-delimited, URL-safe form of text.

    Accented letters are folded to ASCII ("Café" -> "cafe"); every run of
    other characters becomes a single hyphen. Applying it twice gives the
    same result as applying it once.
    """
    return _NON_ALNUM.sub("-", _fold(text).lower()).strip("-")


def color_for_index(index: int) -> str:
    return ROUTE_COLORS[index % len(ROUTE_COLORS)]


def sort_routes(routes: list[Route]) -> list[Route]:
    """Sort by name ignoring accents and case, then exact name and filename.

    "Étang" sorts with "Etang", between "Alpine" and "Zurich".
    """
    return sorted(routes, key=lambda r: (_fold(r.name).casefold(), r.name.casefold(), r.name, r.filename))


def _base_slug(route: Route) -> str:
    slug = slugify(route.name)
    if not slug:
        slug = slugify(os.path.splitext(route.filename)[0])
    return slug or FALLBACK_SLUG


def assign_identity(routes: list[Route]) -> list[Route]:
    """Sort routes and assign each an id and a color.

    Colliding slugs get a numeric suffix in sorted order ("loop", "loop-2",
    ...). The reserved "all" id is never handed out.

    Returns the sorted list; the Route objects are updated in place.
    """
    ordered = sort_routes(routes)
    taken = {ALL_ROUTES_ID}

    for index, route in enumerate(ordered):
        base = _base_slug(route)
        candidate = base
        suffix = 2
        while candidate in taken:
            candidate = f"{base}-{suffix}"
            suffix += 1
        taken.add(candidate)

        route.id = candidate
        route.color = color_for_index(index)

    return ordered
