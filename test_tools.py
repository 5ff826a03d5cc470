#!/usr/bin/env python3

import pytest

from trackstamp.exceptions import ExternalToolError
from trackstamp.tools import ToolRunner


def test_nonzero_exit_is_fatal():
    with pytest.raises(ExternalToolError) as excinfo:
        ToolRunner().run(["false"])
    assert excinfo.value.returncode == 1
    assert "false exited with status 1" in str(excinfo.value)


def test_missing_binary_is_fatal():
    with pytest.raises(ExternalToolError) as excinfo:
        ToolRunner().run(["trackstamp-no-such-tool"])
    assert excinfo.value.returncode is None
    assert "Could not run trackstamp-no-such-tool" in str(excinfo.value)


def test_dry_run_skips_command():
    assert ToolRunner(dry_run=True).run(["false"]) == ""
