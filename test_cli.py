#!/usr/bin/env python3

import pytest

from conftest import FakeMetadata, RecordingTools
from trackstamp import cli, core, photo
from trackstamp.exceptions import ExternalToolError


@pytest.fixture
def photos(tmp_path, monkeypatch):
    data = {
        "a.jpg": {"DateTimeOriginal": "2023:01:10 08:30:00+01:00"},
        "b.jpg": {"DateTimeOriginal": "2023:01:10 09:30:00+01:00"},
        "c.jpg": {"DateTimeOriginal": "2023:01:10 10:30:00"},
    }
    for name in data:
        (tmp_path / name).write_bytes(b"")
    (tmp_path / "2023-01-10_walk.gpx").write_text("")
    monkeypatch.setattr(photo, "ExifReadMetadata", lambda: FakeMetadata(data))
    monkeypatch.chdir(tmp_path)
    return [str(tmp_path / name) for name in data]


def test_missing_timezone_exits_nonzero(photos, caplog):
    assert cli.main(["--find-gpx", "--no-rotate", "--no-strip-gps"] + photos) == 1
    assert "1 of 3 photos have no timezone" in caplog.text


def test_malformed_offset_exits_nonzero(photos):
    assert cli.main(["--time-add", "2h"] + photos) == 1


def test_dry_run(photos, tmp_path):
    args = ["--dry-run", "--find-gpx", "--time-add", "+01:00", "-v"] + photos
    assert cli.main(args) == 0
    assert (tmp_path / "a.jpg").exists()


def test_options_from_args():
    args = cli.build_parser().parse_args(
        ["-g", "x.gpx", "-g", "y.gpx", "-p", "/t", "-m", "2", "-Z", "+03:00", "p.jpg"])
    options = cli.options_from_args(args)
    assert options.gpx_files == ["x.gpx", "y.gpx"]
    assert options.gpx_search_paths == ["/t"]
    assert options.months_back == 2
    assert options.time_add_force == "+03:00"
    assert options.rotate and options.strip_gps


class FailingCorrelation(RecordingTools):
    def __init__(self, **kwargs):
        super().__init__()

    def run(self, command):
        super().run(command)
        if command[0] == "gpscorrelate":
            raise ExternalToolError(command, 1, "no track points")
        return ""


def test_tool_failure_exits_nonzero(photos, tmp_path, monkeypatch, caplog):
    monkeypatch.setattr(core, "ToolRunner", FailingCorrelation)

    assert cli.main(["--find-gpx", "--time-add", "+01:00"] + photos) == 1

    assert "gpscorrelate exited with status 1" in caplog.text
    assert sorted(p.name for p in tmp_path.iterdir() if p.suffix == ".jpg") == [
        "a.jpg", "b.jpg", "c.jpg",
    ]
