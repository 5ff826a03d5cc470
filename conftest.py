"""
Shared pytest fixtures: an in-memory metadata service and a tool runner
that records commands instead of running them.
"""

from pathlib import Path

import pytest

from trackstamp.tools import ToolRunner


class FakeMetadata:
    """Metadata keyed by file name."""

    def __init__(self, data=None):
        self.data = data or {}
        self.calls = []

    def lookup(self, path):
        self.calls.append(str(path))
        return dict(self.data.get(Path(path).name, {}))


class RecordingTools(ToolRunner):
    def __init__(self):
        super().__init__()
        self.commands = []

    def run(self, command):
        self.commands.append(list(command))
        return ""


@pytest.fixture
def tools():
    return RecordingTools()


@pytest.fixture
def make_metadata():
    return FakeMetadata
