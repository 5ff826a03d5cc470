"""
Photo model: a file path plus metadata-derived values computed once.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .config import MODEL_KEY
from .metadata import ExifReadMetadata
from .timestamps import parse_timestamp, resolve_offset, select_raw_timestamp

logger = logging.getLogger(__name__)


class Photo:
    """
    A photo or video file taking part in one run.

    Metadata, timestamp and offset are computed on first use and cached for
    the lifetime of the object. Renaming only changes the path; the cached
    values stay valid because the file content is unchanged.
    """

    def __init__(self, path: Union[str, Path], metadata_service=None,
                 log: Optional[logging.Logger] = None):
        self._path = Path(path)
        self._metadata_service = metadata_service or ExifReadMetadata()
        self._log = log or logger

        self._metadata: Dict[str, Any] = {}
        self._metadata_loaded = False
        self._raw_timestamp = ""
        self._raw_timestamp_resolved = False
        self._timestamp: Optional[datetime] = None
        self._offset: Optional[str] = None
        self._offset_resolved = False

    def __repr__(self):
        return f"Photo({str(self._path)!r})"

    @property
    def path(self) -> Path:
        return self._path

    def filename(self) -> str:
        """Full path as a string, as passed to external tools."""
        return str(self._path)

    @property
    def metadata(self) -> Dict[str, Any]:
        if not self._metadata_loaded:
            self._metadata = dict(self._metadata_service.lookup(self._path))
            self._metadata_loaded = True
        return self._metadata

    @property
    def model(self) -> Optional[str]:
        return self.metadata.get(MODEL_KEY)

    @property
    def raw_timestamp(self) -> str:
        if not self._raw_timestamp_resolved:
            self._raw_timestamp = select_raw_timestamp(self.metadata, self._path, self._log)
            self._raw_timestamp_resolved = True
        return self._raw_timestamp

    @property
    def timestamp(self) -> datetime:
        if self._timestamp is None:
            self._timestamp = parse_timestamp(self.raw_timestamp, self._path)
        return self._timestamp

    @property
    def offset(self) -> Optional[str]:
        if not self._offset_resolved:
            self._offset = resolve_offset(self.metadata, self.raw_timestamp)
            self._offset_resolved = True
        return self._offset

    def rename(self, new_name: str) -> None:
        """Move the file to new_name in the same directory."""
        target = self._path.with_name(new_name)
        self._path.rename(target)
        self._path = target
