"""
Core processing pipeline: normalizes, geotags and renames a batch of photos.
"""

import logging
import os
import re
from datetime import date
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

from .config import GPS_STRIP_MODELS, ProcessingOptions
from .correlate import Correlator
from .exceptions import ConfigurationError, RenameCollisionError
from .photo import Photo
from .tools import ToolRunner
from .tracks import TrackCatalog, select_tracks
from .window import calculate_window

logger = logging.getLogger(__name__)

DATED_NAME = re.compile(r"^\d{8}_\d{6}-")


def dated_filename(photo: Photo) -> str:
    """Lowercased file name, prefixed with the capture time unless already dated."""
    name = photo.path.name.lower()
    if DATED_NAME.match(name):
        return name
    return f"{photo.timestamp:%Y%m%d_%H%M%S}-{name}"


def rename_with_date(photo: Photo, dry_run: bool = False,
                     log: Optional[logging.Logger] = None) -> Photo:
    """
    Rename a photo to its dated name. Already dated photos are left alone.

    Args:
        photo: Photo to rename; its path is updated in place
        dry_run: If True, only log the rename
        log: Logger for progress messages

    Returns:
        The same photo, for chaining
    """
    log = log or logger
    new_name = dated_filename(photo)
    if new_name == photo.path.name:
        log.debug("Skipping %s (no change needed)", photo.path.name)
        return photo

    log.info("%s: %s -> %s", "WOULD RENAME" if dry_run else "RENAMING",
             photo.path.name, new_name)
    if not dry_run:
        photo.rename(new_name)
    return photo


def _same_file(a: Path, b: Path) -> bool:
    try:
        return os.path.samefile(a, b)
    except OSError:
        return False


def plan_renames(photos: Iterable[Photo]) -> List[Tuple[Photo, str]]:
    """
    Compute the target name of every photo and check them for collisions.

    Raises RenameCollisionError when two photos share a target, or when a
    target already exists as a different file. Nothing is renamed here.
    """
    plan = []
    claimed = {}
    for photo in photos:
        new_name = dated_filename(photo)
        target = photo.path.parent.resolve() / new_name

        if target in claimed:
            raise RenameCollisionError(
                f"{photo.path} and {claimed[target].path} would both be renamed to {target}"
            )
        claimed[target] = photo

        if new_name != photo.path.name and target.exists() and not _same_file(target, photo.path):
            raise RenameCollisionError(f"Cannot rename {photo.path}: {target} already exists")
        plan.append((photo, new_name))
    return plan


class PhotoProcessor:
    """
    Runs the whole pipeline over a batch of photos.

    Timestamps, tracks, timezones and rename targets are checked first;
    only then are photos rotated, stripped of unreliable GPS tags,
    correlated and renamed. Any TrackstampError aborts the run.
    """

    def __init__(self, options: Optional[ProcessingOptions] = None,
                 metadata_service=None,
                 tools: Optional[ToolRunner] = None,
                 catalog: Optional[TrackCatalog] = None,
                 log: Optional[logging.Logger] = None,
                 today: Optional[date] = None):
        self.options = options or ProcessingOptions()
        self.log = log or logger
        self.metadata_service = metadata_service
        self.tools = tools or ToolRunner(dry_run=self.options.dry_run, log=self.log)
        self.catalog = catalog or TrackCatalog(log=self.log)
        self.correlator = Correlator(self.tools, log=self.log)
        self.today = today

    def load_photos(self, paths: Iterable[Union[str, Path]]) -> List[Photo]:
        photos = []
        missing = []
        for path in paths:
            if not Path(path).is_file():
                missing.append(str(path))
                continue
            photos.append(Photo(path, self.metadata_service, log=self.log))
        if missing:
            raise ConfigurationError(f"File not found: {', '.join(missing)}")
        return photos

    def strip_gps(self, photos: List[Photo]) -> None:
        """Remove GPS tags written by cameras whose own GPS is unreliable."""
        selected = [photo.filename() for photo in photos if photo.model in GPS_STRIP_MODELS]
        if not selected:
            return
        self.log.info("Removing camera GPS tags from %d photos", len(selected))
        self.tools.strip_gps(selected)

    def find_tracks(self, photos: List[Photo]) -> List[str]:
        window = calculate_window(self.options, photos, self.today)
        if window is not None:
            self.log.debug("Track window %s .. %s", window.oldest, window.newest)
        return select_tracks(self.options, window, self.catalog)

    def rename(self, photos: List[Photo]) -> None:
        for photo, _ in plan_renames(photos):
            rename_with_date(photo, dry_run=self.options.dry_run, log=self.log)

    def run(self, paths: Iterable[Union[str, Path]]) -> List[Photo]:
        """
        Process a batch of files.

        Args:
            paths: Photo and video files to process

        Returns:
            The processed photos, with their paths after renaming

        Raises:
            TrackstampError: On invalid options, missing timezones, rename
                collisions or a failing external tool
        """
        self.options.validate()
        photos = self.load_photos(paths)
        if not photos:
            self.log.info("No files to process.")
            return photos

        self.log.info("Processing %d files...", len(photos))
        for photo in photos:
            self.log.debug("%s: %s (UTC%s)", photo.path.name, photo.timestamp,
                           photo.offset or "?")

        # All checks happen before the first tool rewrites a file
        tracks = self.find_tracks(photos)
        self.correlator.check_timezones(photos, tracks, self.options)
        plan_renames(photos)

        if self.options.rotate:
            self.tools.rotate([photo.filename() for photo in photos])
        if self.options.strip_gps:
            self.strip_gps(photos)
        self.correlator.correlate(photos, tracks, self.options, check=False)
        self.rename(photos)

        self.log.info("%s completed!", "Dry run" if self.options.dry_run else "Processing")
        return photos
