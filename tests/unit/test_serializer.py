import json

import pytest

from conftest import make_route
from gpx_mapper.identity import assign_identity
from gpx_mapper.serializer import load_routes_json, routes_to_json, write_routes_json


def _routes():
    return assign_identity([
        make_route("Loop B", elevation_gain=None),
        make_route("Loop A", elevation_gain=0),
    ])


class TestRoutesToJson:
    def test_document_shape(self):
        data = json.loads(routes_to_json(_routes()))
        assert [entry["name"] for entry in data] == ["Loop A", "Loop B"]
        assert set(data[0]) == {
            "id", "name", "filename", "distance", "elevationGain", "bounds", "coordinates", "color",
        }

    def test_null_vs_zero_elevation(self):
        data = json.loads(routes_to_json(_routes()))
        assert data[0]["elevationGain"] == 0
        assert data[1]["elevationGain"] is None

    def test_non_ascii_names_kept(self):
        routes = assign_identity([make_route("Café du Nord")])
        assert "Café du Nord" in routes_to_json(routes)

    def test_write_and_load(self, tmp_path):
        path = write_routes_json(_routes(), tmp_path / "routes.json")
        loaded = load_routes_json(path.read_text(encoding="utf-8"))
        assert loaded == _routes()


class TestLoadRoutesJson:
    def test_not_a_list(self):
        with pytest.raises(ValueError):
            load_routes_json('{"id": "x"}')

    def test_missing_field(self):
        with pytest.raises(ValueError):
            load_routes_json('[{"id": "x"}]')

    def test_invalid_json(self):
        with pytest.raises(ValueError):
            load_routes_json("not json")
