"""
Configuration constants and run options for trackstamp.
"""

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .exceptions import ConfigurationError

# Metadata keys probed for the capture time, highest priority first
TIMESTAMP_KEYS = ("SubSecDateTimeOriginal", "DateTimeOriginal", "CreateDate")
TIMEZONE_KEYS = ("OffsetTimeOriginal",)
MODEL_KEY = "Model"

# Shortest raw value that can still hold a date
MIN_TIMESTAMP_LENGTH = 8
UNSET_DATE_PREFIX = "0000:00:00"
METADATA_TIME_FORMAT = "%Y:%m:%d %H:%M:%S"

OFFSET_PATTERN = re.compile(r"^[+-]\d{2}(:\d{2})?$")

# GPS tracks
GPX_EXTENSION = ".gpx"
DEFAULT_GPX_SEARCH_PATH = Path(
    os.environ.get("TRACKSTAMP_GPX_DIR", str(Path.home() / "gpx"))
)
# Un-dated tracker files; also selects the tracks for the coarse pass
COARSE_TRACK_PREFIX = "tracker"
COARSE_MAX_DISTANCE_SECONDS = 3600

# External tools
ROTATE_COMMAND = ["exiftran", "-ai"]
GPS_STRIP_COMMAND = ["exiftool", "-overwrite_original", "-gps:all="]
CORRELATE_COMMAND = ["gpscorrelate"]

# Cameras whose built-in GPS tags are stripped before correlation
GPS_STRIP_MODELS = ("DSC-HX90V",)


@dataclass
class ProcessingOptions:
    """Options for one processing run."""
    time_add: Optional[str] = None
    time_add_force: Optional[str] = None
    gpx_files: List[str] = field(default_factory=list)
    find_gpx: bool = False
    gpx_search_paths: Optional[List[str]] = None
    months_back: Optional[int] = None
    verbose: bool = False
    dry_run: bool = False
    rotate: bool = True
    strip_gps: bool = True

    @property
    def discover_tracks(self) -> bool:
        """Whether tracks are searched for instead of taken from gpx_files."""
        return self.find_gpx or bool(self.gpx_search_paths)

    @property
    def search_paths(self) -> List[str]:
        if self.gpx_search_paths:
            return list(self.gpx_search_paths)
        return [str(DEFAULT_GPX_SEARCH_PATH)]

    def validate(self) -> None:
        """Reject malformed options before any file is touched."""
        for name in ("time_add", "time_add_force"):
            value = getattr(self, name)
            if value is not None and not OFFSET_PATTERN.match(value):
                raise ConfigurationError(
                    f"Invalid {name} value {value!r}: expected [+-]HH[:MM]"
                )
        if self.months_back is not None and self.months_back < 0:
            raise ConfigurationError(
                f"months_back must not be negative, got {self.months_back}"
            )
