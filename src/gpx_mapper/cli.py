import argparse
import logging
import sys

from gpx_mapper import __version__
from gpx_mapper.config import load_config
from gpx_mapper.site import DEFAULT_MAP_STYLE, DEFAULT_TITLE, SiteBuildError, build_site
from gpx_mapper.web import DEFAULT_PORT, serve

# Default values for CLI options
DEFAULTS = {
    "title": DEFAULT_TITLE,
    "map_style": DEFAULT_MAP_STYLE,
    "port": DEFAULT_PORT,
}


def build_parser(config: dict | None = None) -> argparse.ArgumentParser:
    """Build argument parser with defaults from config file."""
    if config is None:
        config = {}

    def get_default(key: str):
        return config.get(key, DEFAULTS[key])

    parser = argparse.ArgumentParser(
        prog="gpx-mapper",
        description="Convert a directory of GPX files into a static website with an interactive map.",
    )
    parser.add_argument("input_dir", help="Directory containing GPX files")
    parser.add_argument("output_dir", help="Output directory for the generated website")
    parser.add_argument(
        "-t", "--title",
        default=get_default("title"),
        help=f"Site title (default: {DEFAULTS['title']})",
    )
    parser.add_argument(
        "--map-style",
        default=get_default("map_style"),
        help="URL of the MapLibre style used for the base map",
    )
    parser.add_argument(
        "--serve",
        action="store_true",
        help="Serve the generated site locally after building it",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=get_default("port"),
        help=f"Port for --serve (default: {DEFAULTS['port']})",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: list[str] | None = None) -> None:
    config = load_config()
    parser = build_parser(config)
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    try:
        result = build_site(args.input_dir, args.output_dir, args.title, args.map_style, progress=print)
    except SiteBuildError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    for filename, reason in result.failures:
        print(f"  Skipped {filename}: {reason}")

    print(f'\nSite generated successfully in "{result.output_dir}"')
    print(f"  {len(result.routes)} route(s) included")

    if args.serve:
        serve(result.output_dir, args.port)
    else:
        print("\nTo view the site, serve the output directory with a web server:")
        print(f"  python -m http.server --directory \"{result.output_dir}\"")
