import html
import os

import gpxpy
import gpxpy.gpx

from gpx_mapper.models import ParsedTrack, TrackPoint


class ParseError(Exception):
    """Raised when file content cannot be read as GPX."""


def resolve_route_name(
    document_name: str | None, track_names: list[str | None], filename: str
) -> str:
    """Pick the display name for a route.

    Resolution order:
    1. Document-level name (GPX 1.1 <metadata><name>, GPX 1.0 <name>)
    2. Name of the first track
    3. Filename with its extension stripped

    Blank names count as missing. Entity sequences left in the result
    (e.g. "&amp;" from double-escaped exports) are decoded.
    """
    candidates = [document_name, track_names[0] if track_names else None]
    for candidate in candidates:
        if candidate and candidate.strip():
            return html.unescape(candidate.strip())
    stem, _ = os.path.splitext(os.path.basename(filename))
    return html.unescape(stem)


def parse_gpx_content(content: str, filename: str) -> ParsedTrack:
    """Parse GPX text and return its name and track points.

    Points from every track and segment are returned in document order.

    Raises:
        ParseError: If the content is not valid GPX.
    """
    try:
        gpx = gpxpy.parse(content)
    except gpxpy.gpx.GPXException as e:
        raise ParseError(f"{filename}: {e}") from e

    points: list[TrackPoint] = []
    for track in gpx.tracks:
        for segment in track.segments:
            for pt in segment.points:
                points.append(
                    TrackPoint(
                        lat=pt.latitude,
                        lon=pt.longitude,
                        elevation=pt.elevation,
                    )
                )

    name = resolve_route_name(gpx.name, [track.name for track in gpx.tracks], filename)
    return ParsedTrack(name=name, filename=os.path.basename(filename), points=points)


def parse_gpx(filepath: str) -> ParsedTrack:
    """Parse a GPX file from disk.

    Raises:
        FileNotFoundError: If the file does not exist.
        ParseError: If the file is not UTF-8 text or not valid GPX.
    """
    with open(filepath, "r", encoding="utf-8") as f:
        try:
            content = f.read()
        except UnicodeDecodeError as e:
            raise ParseError(f"{os.path.basename(filepath)}: {e}") from e
    return parse_gpx_content(content, os.path.basename(filepath))
