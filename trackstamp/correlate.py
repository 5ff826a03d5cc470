"""
Geotagging of photos against GPS tracks, batched by UTC offset.
"""

import logging
from collections import OrderedDict
from pathlib import Path
from typing import List, Optional, Tuple

from .config import COARSE_TRACK_PREFIX
from .exceptions import ConfigurationError
from .tools import ToolRunner
from .tracks import is_tracker

logger = logging.getLogger(__name__)


def effective_offset(photo, options) -> Optional[str]:
    """Offset used to correlate a photo: forced, resolved, or the default."""
    if options.time_add_force:
        return options.time_add_force
    return photo.offset or options.time_add


def coarse_tracks(tracks: List[str]) -> List[str]:
    return [t for t in tracks if is_tracker(Path(t).name)]


class Correlator:
    """Runs the fine and coarse correlation passes for each offset group."""

    def __init__(self, tools: Optional[ToolRunner] = None, log: Optional[logging.Logger] = None):
        self.tools = tools or ToolRunner()
        self.log = log or logger

    def check_timezones(self, photos, tracks: List[str], options) -> None:
        """
        Make sure every photo can be given a UTC offset.

        Photos without one fall back to options.time_add with a warning; when
        that is unset too the run is aborted.
        """
        if not tracks or options.time_add_force:
            return

        missing = [photo for photo in photos if photo.offset is None]
        if not missing:
            return
        if options.time_add:
            self.log.warning("%d of %d photos have no timezone, assuming %s",
                             len(missing), len(photos), options.time_add)
            return
        for photo in missing:
            self.log.debug("No timezone: %s", photo.filename())
        raise ConfigurationError(
            f"{len(missing)} of {len(photos)} photos have no timezone information; "
            f"set --time-add or --time-add-force"
        )

    def offset_groups(self, photos, options) -> List[Tuple[str, list]]:
        """Photos grouped by effective offset, in order of first appearance."""
        groups = OrderedDict()
        for photo in photos:
            groups.setdefault(effective_offset(photo, options), []).append(photo)
        return list(groups.items())

    def correlate(self, photos, tracks: List[str], options, check: bool = True) -> None:
        if not tracks:
            self.log.info("No GPS tracks, skipping correlation")
            return

        if check:
            self.check_timezones(photos, tracks, options)
        fallback_tracks = coarse_tracks(tracks)

        for offset, group in self.offset_groups(photos, options):
            filenames = [photo.filename() for photo in group]
            self.log.info("Correlating %d photos at UTC%s against %d tracks",
                          len(group), offset, len(tracks))
            self.tools.correlate(filenames, tracks, offset)

            # Without tracker files no later group gets a coarse pass either,
            # so the remaining groups are not correlated at all.
            # TODO: confirm whether remaining groups should still get their fine pass
            if not fallback_tracks:
                self.log.info("No %s tracks for coarse correlation, stopping", COARSE_TRACK_PREFIX)
                return

            self.log.info("Coarse correlation of %d photos against %d %s tracks",
                          len(group), len(fallback_tracks), COARSE_TRACK_PREFIX)
            self.tools.correlate(filenames, fallback_tracks, offset, coarse=True)
