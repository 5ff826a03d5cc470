"""
Wrappers around the external programs that modify photos in place.
"""

import logging
import subprocess
from typing import Iterable, List, Optional

from .config import (
    COARSE_MAX_DISTANCE_SECONDS,
    CORRELATE_COMMAND,
    GPS_STRIP_COMMAND,
    ROTATE_COMMAND,
)
from .exceptions import ExternalToolError

logger = logging.getLogger(__name__)


class ToolRunner:
    """
    Runs external commands synchronously.

    Any failure raises ExternalToolError: the tools rewrite files in place,
    so a partially applied batch is never retried.
    """

    def __init__(self, dry_run: bool = False, log: Optional[logging.Logger] = None):
        self.dry_run = dry_run
        self.log = log or logger

    def run(self, command: List[str]) -> str:
        self.log.debug("Running: %s", " ".join(command))
        if self.dry_run:
            self.log.info("DRY RUN: would run %s on %d arguments", command[0], len(command) - 1)
            return ""

        try:
            result = subprocess.run(command, capture_output=True, text=True)
        except OSError as e:
            raise ExternalToolError(command, None, str(e))

        if result.stdout:
            self.log.debug(result.stdout.rstrip())
        if result.returncode != 0:
            raise ExternalToolError(command, result.returncode, result.stderr)
        return result.stdout

    def rotate(self, filenames: List[str]) -> None:
        """Rotate images losslessly according to their EXIF orientation."""
        if filenames:
            self.run(ROTATE_COMMAND + filenames)

    def strip_gps(self, filenames: List[str]) -> None:
        """Remove existing GPS tags."""
        if filenames:
            self.run(GPS_STRIP_COMMAND + filenames)

    def correlate(self, filenames: List[str], tracks: Iterable[str], offset: str,
                  coarse: bool = False) -> None:
        """
        Geotag photos from GPX tracks.

        The coarse variant ignores track segments and accepts points up to
        COARSE_MAX_DISTANCE_SECONDS away, for low-precision trackers.
        """
        command = CORRELATE_COMMAND + ["--timeadd", offset, "--no-mtime"]
        for track in tracks:
            command += ["--gps", track]
        if coarse:
            command += ["--ignore-tracksegs", "--max-dist", str(COARSE_MAX_DISTANCE_SECONDS)]
        self.run(command + filenames)
