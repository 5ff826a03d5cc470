#!/usr/bin/env python3

import pytest

from trackstamp import metadata as metadata_module
from trackstamp.metadata import ExifReadMetadata


class Tag:
    def __init__(self, value):
        self.value = value

    def __str__(self):
        return self.value


def fake_tags(monkeypatch, tags):
    monkeypatch.setattr(metadata_module.exifread, "process_file",
                        lambda f, details=False: {k: Tag(v) for k, v in tags.items()})


def test_lookup_maps_exif_names(tmp_path, monkeypatch):
    path = tmp_path / "a.jpg"
    path.write_bytes(b"\xff\xd8")
    fake_tags(monkeypatch, {
        "EXIF DateTimeOriginal": "2023:01:10 08:30:00",
        "EXIF DateTimeDigitized": "2023:01:10 08:30:01",
        "EXIF SubSecTimeOriginal": "42",
        "EXIF OffsetTimeOriginal": "+01:00",
        "Image Model": "DSC-HX90V ",
        "EXIF ExposureTime": "1/200",
    })

    result = ExifReadMetadata().lookup(path)

    assert result == {
        "DateTimeOriginal": "2023:01:10 08:30:00",
        "CreateDate": "2023:01:10 08:30:01",
        "SubSecTimeOriginal": "42",
        "OffsetTimeOriginal": "+01:00",
        "SubSecDateTimeOriginal": "2023:01:10 08:30:00.42+01:00",
        "Model": "DSC-HX90V",
    }


def test_lookup_without_exif(tmp_path, monkeypatch):
    path = tmp_path / "clip.mp4"
    path.write_bytes(b"")
    fake_tags(monkeypatch, {})
    assert ExifReadMetadata().lookup(path) == {}


def test_lookup_unreadable_file(tmp_path):
    with pytest.raises(OSError):
        ExifReadMetadata().lookup(tmp_path / "missing.jpg")
