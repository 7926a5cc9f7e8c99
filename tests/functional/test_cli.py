import json
import subprocess
import sys
from pathlib import Path

import pytest

from conftest import BROKEN_PATH


def run_cli(*args, cwd=None):
    return subprocess.run(
        [sys.executable, "-m", "gpx_mapper", *map(str, args)],
        capture_output=True,
        text=True,
        cwd=cwd,
    )


class TestCli:
    def test_build_site(self, gpx_dir, tmp_path):
        out = tmp_path / "site"
        result = run_cli(gpx_dir, out, "--title", "Weekend Loops", cwd=tmp_path)
        assert result.returncode == 0
        assert "Found 2 GPX file(s)" in result.stdout
        assert "Loop A (" in result.stdout
        assert "2 route(s) included" in result.stdout

        data = json.loads((out / "routes.json").read_text(encoding="utf-8"))
        assert [r["name"] for r in data] == ["Loop A", "Loop B"]
        assert data[0]["elevationGain"] == 10
        assert data[1]["elevationGain"] is None
        assert "<title>Weekend Loops</title>" in (out / "index.html").read_text(encoding="utf-8")

    def test_default_title(self, gpx_dir, tmp_path):
        out = tmp_path / "site"
        result = run_cli(gpx_dir, out, cwd=tmp_path)
        assert result.returncode == 0
        assert "<title>Route Map</title>" in (out / "index.html").read_text(encoding="utf-8")

    def test_broken_file_reported_but_not_fatal(self, gpx_dir, tmp_path):
        (gpx_dir / "broken.gpx").write_text(Path(BROKEN_PATH).read_text())
        result = run_cli(gpx_dir, tmp_path / "site", cwd=tmp_path)
        assert result.returncode == 0
        assert "Skipped broken.gpx" in result.stdout
        assert "2 route(s) included" in result.stdout

    def test_nonexistent_input_dir(self, tmp_path):
        out = tmp_path / "site"
        result = run_cli(tmp_path / "missing", out, cwd=tmp_path)
        assert result.returncode != 0
        assert "Error" in result.stderr
        assert "does not exist" in result.stderr
        assert not out.exists()

    def test_no_gpx_files(self, tmp_path):
        (tmp_path / "empty").mkdir()
        result = run_cli(tmp_path / "empty", tmp_path / "site", cwd=tmp_path)
        assert result.returncode != 0
        assert "No GPX files" in result.stderr

    def test_no_valid_routes(self, tmp_path):
        (tmp_path / "in").mkdir()
        (tmp_path / "in" / "bad.gpx").write_text("<gpx")
        result = run_cli(tmp_path / "in", tmp_path / "site", cwd=tmp_path)
        assert result.returncode != 0
        assert "No valid routes" in result.stderr
        assert "Found 1 GPX file(s)" in result.stdout
        assert "Parsing: bad.gpx" in result.stdout
        assert not (tmp_path / "site").exists()

    def test_missing_arguments(self):
        result = run_cli()
        assert result.returncode != 0
        assert "usage" in result.stderr.lower()

    def test_progress_printed_while_parsing(self, gpx_dir, tmp_path):
        result = run_cli(gpx_dir, tmp_path / "site", cwd=tmp_path)
        assert result.returncode == 0
        lines = [line.strip() for line in result.stdout.splitlines()]
        assert lines[0] == "Found 2 GPX file(s)"
        assert lines[1] == "Parsing: loop_a.gpx"
        assert lines[2].startswith("-> Loop A (") and lines[2].endswith(" km)")
        assert lines[3] == "Parsing: loop_b.gpx"
        assert lines[4].startswith("-> Loop B (")

    def test_view_hint_points_at_output_dir(self, gpx_dir, tmp_path):
        out = tmp_path / "site"
        result = run_cli(gpx_dir, out, cwd=tmp_path)
        assert result.returncode == 0
        assert f"http.server --directory \"{out.resolve()}\"" in result.stdout
        assert "--serve" not in result.stdout

    @pytest.mark.parametrize("flag", ["-v", "--verbose"])
    def test_verbose_flag_accepted(self, gpx_dir, tmp_path, flag):
        result = run_cli(gpx_dir, tmp_path / "site", flag, cwd=tmp_path)
        assert result.returncode == 0
        assert "2 route(s) included" in result.stdout
