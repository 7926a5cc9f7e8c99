import os

import pytest

from gpx_mapper.models import Route, TrackPoint

DATA_DIR = os.path.join(os.path.dirname(__file__), "functional", "data")
LOOP_A_PATH = os.path.join(DATA_DIR, "loop_a.gpx")
LOOP_B_PATH = os.path.join(DATA_DIR, "loop_b.gpx")
BROKEN_PATH = os.path.join(DATA_DIR, "broken.gpx")


def make_route(name, bounds=((0.0, 0.0), (1.0, 1.0)), filename=None, **kwargs):
    """Build a Route with just enough data for identity and selection tests."""
    (min_lon, min_lat), (max_lon, max_lat) = bounds
    defaults = dict(
        filename=filename or f"{name}.gpx",
        distance=1.0,
        elevation_gain=None,
        bounds=bounds,
        coordinates=[[min_lon, min_lat], [max_lon, max_lat]],
    )
    defaults.update(kwargs)
    return Route(name=name, **defaults)


@pytest.fixture
def simple_track_points():
    """A short list of track points for unit testing: flat, ~100m apart."""
    return [
        TrackPoint(lat=37.7749, lon=-122.4194, elevation=10.0),
        TrackPoint(lat=37.7758, lon=-122.4183, elevation=10.0),
        TrackPoint(lat=37.7767, lon=-122.4172, elevation=10.0),
    ]


@pytest.fixture
def uphill_track_points():
    """Track points going uphill."""
    return [
        TrackPoint(lat=37.7749, lon=-122.4194, elevation=10.0),
        TrackPoint(lat=37.7758, lon=-122.4183, elevation=20.0),
        TrackPoint(lat=37.7767, lon=-122.4172, elevation=35.0),
    ]


@pytest.fixture
def no_elevation_track_points():
    return [
        TrackPoint(lat=37.7749, lon=-122.4194),
        TrackPoint(lat=37.7758, lon=-122.4183),
        TrackPoint(lat=37.7767, lon=-122.4172),
    ]


@pytest.fixture
def gpx_dir(tmp_path):
    """Input directory with the two sample loops."""
    input_dir = tmp_path / "tracks"
    input_dir.mkdir()
    for path in (LOOP_A_PATH, LOOP_B_PATH):
        with open(path, "rb") as src:
            (input_dir / os.path.basename(path)).write_bytes(src.read())
    return input_dir


class FakeMapEngine:
    """Records calls the way the browser map would receive them."""

    def __init__(self):
        self.sources = {}
        self.layers = []
        self.paint = {}
        self.layout = {}
        self.handlers = {}
        self.fitted = []
        self.cursor = ""

    def add_source(self, source_id, source):
        assert source_id not in self.sources
        self.sources[source_id] = source

    def add_layer(self, layer):
        self.layers.append(layer)
        self.paint[layer["id"]] = dict(layer["paint"])

    def set_paint_property(self, layer_id, name, value):
        self.paint[layer_id][name] = value

    def set_layout_property(self, layer_id, name, value):
        self.layout.setdefault(layer_id, {})[name] = value

    def fit_bounds(self, bounds, padding):
        self.fitted.append((bounds, padding))

    def on(self, event, layer_id, handler):
        self.handlers[(event, layer_id)] = handler

    def set_cursor(self, cursor):
        self.cursor = cursor

    def fire(self, event, layer_id):
        self.handlers[(event, layer_id)]()
