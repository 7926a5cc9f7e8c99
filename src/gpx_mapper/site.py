"""Build the static route map site from a directory of GPX files."""

import json
import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from jinja2 import Environment, PackageLoader, select_autoescape

from gpx_mapper import __version__
from gpx_mapper.identity import assign_identity
from gpx_mapper.layers import client_style_config
from gpx_mapper.metrics import build_route
from gpx_mapper.models import Route
from gpx_mapper.parser import ParseError, parse_gpx
from gpx_mapper.serializer import ROUTES_FILENAME, write_routes_json

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Route Map"
DEFAULT_MAP_STYLE = "https://tiles.openfreemap.org/styles/positron"
GPX_SUBDIR = "gpx"

_env = Environment(
    loader=PackageLoader("gpx_mapper", "templates"),
    autoescape=select_autoescape(["html"]),
    keep_trailing_newline=True,
)


class SiteBuildError(Exception):
    """Raised when no site can be built; nothing has been written."""


@dataclass
class BuildResult:
    output_dir: Path
    gpx_files: list[Path]
    routes: list[Route]
    failures: list[tuple[str, str]] = field(default_factory=list)  # (filename, reason)


def find_gpx_files(input_dir: Path) -> list[Path]:
    """GPX files directly inside input_dir, matched case-insensitively."""
    return sorted(
        p for p in input_dir.iterdir()
        if p.is_file() and p.suffix.lower() == ".gpx"
    )


def collect_routes(
    files: list[Path], progress: Callable[[str], None] = logger.info
) -> tuple[list[Route], list[tuple[str, str]]]:
    """Parse files one at a time into routes without id or color.

    progress receives one line per file as it is parsed and one per route
    built. A file that fails to parse, or has no track points, is logged and
    recorded in the failures list; the remaining files are still processed.
    """
    routes: list[Route] = []
    failures: list[tuple[str, str]] = []

    for path in files:
        progress(f"  Parsing: {path.name}")
        try:
            parsed = parse_gpx(str(path))
        except (ParseError, OSError) as e:
            logger.warning("Error parsing %s: %s", path.name, e)
            failures.append((path.name, str(e)))
            continue

        if not parsed.points:
            logger.warning("Skipping %s: no track points", path.name)
            failures.append((path.name, "no track points"))
            continue

        route = build_route(parsed)
        progress(f"    -> {route.name} ({route.distance} km)")
        routes.append(route)

    return routes, failures


def render_index_html(title: str, map_style: str = DEFAULT_MAP_STYLE) -> str:
    template = _env.get_template("index.html")
    return template.render(title=title, map_style=map_style, version=__version__)


def render_app_js(map_style: str = DEFAULT_MAP_STYLE) -> str:
    template = _env.get_template("app.js")
    return template.render(
        style_config=json.dumps(client_style_config()),
        map_style=json.dumps(map_style),
        routes_url=json.dumps(ROUTES_FILENAME),
        gpx_dir=json.dumps(GPX_SUBDIR),
    )


def write_site(
    output_dir: Path,
    routes: list[Route],
    gpx_files: list[Path],
    title: str = DEFAULT_TITLE,
    map_style: str = DEFAULT_MAP_STYLE,
) -> None:
    """Write page, script, route document and GPX copies to output_dir."""
    gpx_dir = output_dir / GPX_SUBDIR
    gpx_dir.mkdir(parents=True, exist_ok=True)

    for path in gpx_files:
        shutil.copy2(path, gpx_dir / path.name)

    (output_dir / "index.html").write_text(render_index_html(title, map_style), encoding="utf-8")
    (output_dir / "app.js").write_text(render_app_js(map_style), encoding="utf-8")
    write_routes_json(routes, output_dir / ROUTES_FILENAME)


def build_site(
    input_dir: str | Path,
    output_dir: str | Path,
    title: str = DEFAULT_TITLE,
    map_style: str = DEFAULT_MAP_STYLE,
    progress: Callable[[str], None] = logger.info,
) -> BuildResult:
    """Parse every GPX file in input_dir and write the site to output_dir.

    All parsing finishes before anything is written. Progress lines go to
    progress, which defaults to the module logger.

    Raises:
        SiteBuildError: If input_dir is missing, holds no GPX files, or
            none of them yields a route.
    """
    input_dir = Path(input_dir).resolve()
    output_dir = Path(output_dir).resolve()

    if not input_dir.is_dir():
        raise SiteBuildError(f'Input directory "{input_dir}" does not exist')

    gpx_files = find_gpx_files(input_dir)
    if not gpx_files:
        raise SiteBuildError(f'No GPX files found in "{input_dir}"')

    progress(f"Found {len(gpx_files)} GPX file(s)")
    routes, failures = collect_routes(gpx_files, progress)
    if not routes:
        raise SiteBuildError("No valid routes were parsed")

    routes = assign_identity(routes)
    write_site(output_dir, routes, gpx_files, title, map_style)

    return BuildResult(
        output_dir=output_dir,
        gpx_files=gpx_files,
        routes=routes,
        failures=failures,
    )
