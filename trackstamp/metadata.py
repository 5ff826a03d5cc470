"""
EXIF metadata lookup keyed by file path.
"""

from pathlib import Path
from typing import Dict, Union

import exifread

# exifread tag name -> key used by the timestamp resolver
EXIFREAD_KEYS = {
    "EXIF DateTimeOriginal": "DateTimeOriginal",
    "EXIF DateTimeDigitized": "CreateDate",
    "EXIF SubSecTimeOriginal": "SubSecTimeOriginal",
    "EXIF OffsetTimeOriginal": "OffsetTimeOriginal",
    "Image Make": "Make",
    "Image Model": "Model",
}


class ExifReadMetadata:
    """
    Metadata service backed by exifread.

    Values are exposed under exiftool-style names so that the resolver does
    not depend on the reader in use. Files without EXIF (videos, PNGs from
    screenshots) yield an empty mapping; unreadable files raise OSError.
    """

    def lookup(self, path: Union[str, Path]) -> Dict[str, str]:
        with open(path, 'rb') as f:
            tags = exifread.process_file(f, details=False)

        metadata = {}
        for tag, key in EXIFREAD_KEYS.items():
            if tag in tags:
                value = str(tags[tag]).strip()
                if value:
                    metadata[key] = value

        # exiftool's composite tag: date, sub-seconds and offset in one value
        original = metadata.get("DateTimeOriginal")
        subsec = metadata.get("SubSecTimeOriginal")
        if original and subsec:
            metadata["SubSecDateTimeOriginal"] = (
                f"{original}.{subsec}{metadata.get('OffsetTimeOriginal', '')}"
            )
        return metadata
