"""
Exceptions raised by trackstamp. Every fatal condition of a run derives
from TrackstampError so the command line can exit with status 1.
"""

from typing import List, Optional


class TrackstampError(Exception):
    """Base class for fatal run errors."""


class ConfigurationError(TrackstampError):
    """Invalid options or missing timezone information."""


class TimestampError(TrackstampError):
    """A raw timestamp does not match the accepted grammar."""

    def __init__(self, raw: str, path: Optional[str] = None):
        self.raw = raw
        self.path = path
        where = f" in {path}" if path else ""
        super().__init__(f"Cannot parse timestamp {raw!r}{where}")


class ExternalToolError(TrackstampError):
    """An external tool exited non-zero or could not be started."""

    def __init__(self, command: List[str], returncode: Optional[int], stderr: str = ""):
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        if returncode is None:
            message = f"Could not run {command[0]}"
        else:
            message = f"{command[0]} exited with status {returncode}"
        if stderr:
            message = f"{message}: {stderr.strip()}"
        super().__init__(message)


class RenameCollisionError(TrackstampError):
    """Two photos would be renamed to the same target."""
