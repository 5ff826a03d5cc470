"""
Trackstamp - geotag photos from GPS tracks and rename them chronologically.

This package provides functionality to:
- Derive a timezone-aware capture time for every photo
- Find the GPS tracks recorded around the photo dates
- Correlate photos with tracks in batches sharing a UTC offset
- Rename files with a sortable date prefix
"""

__version__ = "1.0.0"
__author__ = "Trackstamp Developers"

from .config import ProcessingOptions
from .core import PhotoProcessor, rename_with_date
from .photo import Photo

__all__ = ["PhotoProcessor", "Photo", "ProcessingOptions", "rename_with_date"]
