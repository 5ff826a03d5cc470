"""
Capture timestamp resolution: picks the most trustworthy raw timestamp from
a photo's metadata, parses it and determines its UTC offset.
"""

import logging
import os
import re
from datetime import datetime
from pathlib import Path
from typing import Any, Mapping, Optional, Tuple, Union

from .config import (
    METADATA_TIME_FORMAT,
    MIN_TIMESTAMP_LENGTH,
    TIMESTAMP_KEYS,
    TIMEZONE_KEYS,
    UNSET_DATE_PREFIX,
)
from .exceptions import TimestampError

logger = logging.getLogger(__name__)

OFFSET_SUFFIX = re.compile(r"[+-]\d{2}:\d{2}$")
FRACTION_SUFFIX = re.compile(r"\.\d+Z?$")
RAW_TIMESTAMP = re.compile(
    r"^(\d{4}):(\d{2}):(\d{2}) (\d{2}):(\d{2}):(\d{2})\.(\d+)Z?$"
)


def _usable(value: Any) -> bool:
    if value is None:
        return False
    text = str(value).strip()
    return len(text) >= MIN_TIMESTAMP_LENGTH and not text.startswith(UNSET_DATE_PREFIX)


def format_mtime(path: Union[str, Path]) -> str:
    """Format a file's modification time the way EXIF dates are written."""
    return datetime.fromtimestamp(os.stat(path).st_mtime).strftime(METADATA_TIME_FORMAT)


def select_raw_timestamp(metadata: Mapping[str, Any], path: Union[str, Path],
                         log: Optional[logging.Logger] = None) -> str:
    """
    Return the first usable timestamp from metadata, or the file mtime.

    Keys are probed in TIMESTAMP_KEYS order. Empty values, values shorter
    than a date and all-zero "unset" dates are skipped.
    """
    for key in TIMESTAMP_KEYS:
        value = metadata.get(key)
        if _usable(value):
            return str(value).strip()

    (log or logger).warning(
        "%s: none of %s set, using file modification time",
        path, ", ".join(TIMESTAMP_KEYS),
    )
    return format_mtime(path)


def parse_timestamp(raw: str, path: Optional[Union[str, Path]] = None) -> datetime:
    """
    Parse 'YYYY:MM:DD HH:MM:SS[.fraction][Z][+HH:MM]' into a naive datetime.

    The UTC offset suffix is dropped here; see resolve_offset. Missing
    sub-seconds default to .00.
    """
    text = OFFSET_SUFFIX.sub("", raw.strip())
    if not FRACTION_SUFFIX.search(text):
        if text.endswith("Z"):
            text = text[:-1] + ".00Z"
        else:
            text += ".00"

    match = RAW_TIMESTAMP.match(text)
    if not match:
        raise TimestampError(raw, str(path) if path else None)

    year, month, day, hour, minute, second, fraction = match.groups()
    # Decimal fraction of a second, not the raw value times 1000 ns
    microsecond = int((fraction + "000000")[:6])
    try:
        return datetime(int(year), int(month), int(day),
                        int(hour), int(minute), int(second), microsecond)
    except ValueError:
        raise TimestampError(raw, str(path) if path else None)


def resolve_offset(metadata: Mapping[str, Any], raw: str) -> Optional[str]:
    """Offset from an explicit timezone field, else from the raw suffix."""
    for key in TIMEZONE_KEYS:
        value = metadata.get(key)
        if value is not None and str(value).strip():
            return str(value).strip()

    match = OFFSET_SUFFIX.search(raw.strip())
    if match:
        return match.group(0)
    return None


def resolve(photo) -> Tuple[datetime, Optional[str]]:
    """Return (capture time, UTC offset or None) for a photo."""
    return photo.timestamp, photo.offset
