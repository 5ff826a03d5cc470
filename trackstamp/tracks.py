"""
GPS track discovery.

Track files are found under a set of search roots and kept when their
start date falls inside the photo window. The date comes from the file
name when a device naming rule knows how to read it, otherwise from the
first timestamp inside the GPX document.
"""

import logging
import os
import re
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Callable, Iterable, List, NamedTuple, Optional, Union

from .config import COARSE_TRACK_PREFIX, GPX_EXTENSION

logger = logging.getLogger(__name__)

GPX_TIME = re.compile(r"^(\d{4})-(\d{2})-(\d{2})T\d{2}:\d{2}:\d{2}(?:\.\d+)?Z$")
# <gpx><time> is the GPX 1.0 form of <metadata><time>
TIME_PARENTS = ("gpx", "metadata", "trkpt")


class DeviceRule(NamedTuple):
    """File name convention of one tracking device or app."""
    name: str
    pattern: re.Pattern
    extract: Optional[Callable[..., str]]


def _ymd(match) -> str:
    return "".join(match.groups()[:3])


# ID-only tracker names; also selects the tracks for the coarse pass
TRACKER_RULE = DeviceRule(
    "tracker", re.compile(rf"^{re.escape(COARSE_TRACK_PREFIX)}[_-]?\d+", re.IGNORECASE), None
)

# Evaluated in order, first match wins. A rule without an extractor marks
# devices whose file names carry only an ID.
DEVICE_RULES = [
    TRACKER_RULE,
    DeviceRule("osmand", re.compile(r"^Track_(\d{4})-(\d{2})-(\d{2})"), _ymd),
    DeviceRule("gpslogger", re.compile(r"^(\d{4})-(\d{2})-(\d{2})"), _ymd),
]


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def filename_date(name: str, rules: Iterable[DeviceRule] = DEVICE_RULES) -> Optional[str]:
    """YYYYMMDD from the first matching naming rule, or None."""
    for rule in rules:
        match = rule.pattern.match(name)
        if match:
            if rule.extract is None:
                return None
            return rule.extract(match)
    return None


def content_date(path: Union[str, Path], log: Optional[logging.Logger] = None) -> Optional[str]:
    """
    YYYYMMDD of the first document-level or track point <time>.

    The document is streamed and parsing stops at the first candidate, so
    large tracks are not read to the end. Only UTC times ending in 'Z' are
    accepted; anything else means the track has no usable date.
    """
    stack: List[str] = []
    try:
        with open(path, 'rb') as f:
            for event, element in ET.iterparse(f, events=("start", "end")):
                name = _local_name(element.tag)
                if event == "start":
                    stack.append(name)
                    continue

                stack.pop()
                if name == "time" and stack and stack[-1] in TIME_PARENTS:
                    match = GPX_TIME.match((element.text or "").strip())
                    if match:
                        return _ymd(match)
                    (log or logger).debug("%s: ignoring time %r", path, element.text)
                    return None
                element.clear()
    except ET.ParseError as e:
        (log or logger).warning("Could not parse track %s: %s", path, e)
    return None


def is_tracker(name: str) -> bool:
    """Whether a file name follows the un-dated tracker convention."""
    return TRACKER_RULE.pattern.match(name) is not None


def is_track(name: str) -> bool:
    return name.lower().endswith(GPX_EXTENSION)


class TrackCatalog:
    """Finds GPX tracks relevant to a time window."""

    def __init__(self, rules: Optional[List[DeviceRule]] = None,
                 log: Optional[logging.Logger] = None):
        self.rules = list(rules) if rules is not None else list(DEVICE_RULES)
        self.log = log or logger

    def search_roots(self, search_paths: Iterable[Union[str, Path]]) -> List[Path]:
        """Current directory plus the given roots, without duplicates."""
        roots: List[Path] = []
        seen = set()
        for candidate in [Path.cwd(), *map(Path, search_paths)]:
            resolved = candidate.expanduser().resolve()
            if resolved not in seen:
                seen.add(resolved)
                roots.append(resolved)
        return roots

    def track_date(self, path: Union[str, Path]) -> Optional[str]:
        """Start date of a track as YYYYMMDD, or None when unknown."""
        path = Path(path)
        day = filename_date(path.name, self.rules)
        if day is None:
            day = content_date(path, self.log)
        return day

    def iter_tracks(self, roots: Iterable[Path]):
        seen = set()
        for root in roots:
            if not root.is_dir():
                self.log.debug("Skipping missing track directory %s", root)
                continue
            for dirpath, dirnames, filenames in os.walk(root):
                dirnames.sort()
                for filename in sorted(filenames):
                    if not is_track(filename):
                        continue
                    path = Path(dirpath, filename).resolve()
                    if path not in seen:
                        seen.add(path)
                        yield path

    def discover(self, search_paths: Iterable[Union[str, Path]], window) -> List[str]:
        """
        Find the tracks dated inside a window.

        Args:
            search_paths: Directories searched recursively, besides the
                current directory
            window: TimeWindow the track start date must fall into

        Returns:
            Resolved paths of the matching tracks, as strings
        """
        found = []
        for path in self.iter_tracks(self.search_roots(search_paths)):
            day = self.track_date(path)
            if day is None:
                self.log.debug("No date for track %s", path)
                continue
            if window.contains(day):
                self.log.debug("Using track %s (%s)", path, day)
                found.append(str(path))

        if not found:
            self.log.info("No GPS tracks found between %s and %s", window.oldest, window.newest)
        else:
            self.log.info("Found %d GPS tracks between %s and %s",
                          len(found), window.oldest, window.newest)
        return found


def select_tracks(options, window, catalog: Optional[TrackCatalog] = None) -> List[str]:
    """Explicit track list from options, or discovered tracks when requested."""
    if not options.discover_tracks:
        return list(options.gpx_files)
    if window is None:
        return []
    catalog = catalog or TrackCatalog()
    return catalog.discover(options.search_paths, window)
