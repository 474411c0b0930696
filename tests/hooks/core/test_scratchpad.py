"""Tests for scratchpad completion markers."""

import sys
from pathlib import Path

import pytest

# Add hooks to path for import
sys.path.insert(0, str(Path(__file__).parent.parent.parent.parent / "hooks"))

from core.scratchpad import ScratchpadState, inspect_scratchpad  # noqa: E402


@pytest.fixture
def scratchpad(tmp_path):
    return tmp_path / ".cursor" / "scratchpad.md"


def write(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path


class TestInspectScratchpad:
    def test_missing_file_is_all_false(self, scratchpad):
        assert inspect_scratchpad(scratchpad) == ScratchpadState(exists=False, done=False, tests_passing=False)
        assert inspect_scratchpad(scratchpad, ignore_case=True) == ScratchpadState()

    def test_existing_without_markers(self, scratchpad):
        write(scratchpad, "# Notes\n- still fixing the parser\n")
        assert inspect_scratchpad(scratchpad) == ScratchpadState(exists=True)

    @pytest.mark.parametrize("content", ["Status: DONE", "Task COMPLETE", "INCOMPLETE"])
    def test_done_markers(self, scratchpad, content):
        write(scratchpad, content)
        assert inspect_scratchpad(scratchpad).done is True

    def test_case_sensitive_by_default(self, scratchpad):
        write(scratchpad, "done, complete")
        assert inspect_scratchpad(scratchpad).done is False

    def test_ignore_case(self, scratchpad):
        write(scratchpad, "we are done here")
        assert inspect_scratchpad(scratchpad, ignore_case=True).done is True

    @pytest.mark.parametrize("content", ["tests passing", "All tests pass now"])
    def test_tests_passing_markers(self, scratchpad, content):
        write(scratchpad, content)
        state = inspect_scratchpad(scratchpad, ignore_case=True)
        assert state.tests_passing is True
        assert state.done is False

    def test_undecodable_bytes_keep_markers(self, scratchpad):
        scratchpad.parent.mkdir(parents=True)
        scratchpad.write_bytes(b"\xff\xfe DONE \x80")
        assert inspect_scratchpad(scratchpad) == ScratchpadState(exists=True, done=True)

    def test_latin1_tests_passing(self, scratchpad):
        scratchpad.parent.mkdir(parents=True)
        scratchpad.write_bytes("caf\u00e9 notes\nTESTS PASSING\n".encode("latin-1"))
        assert inspect_scratchpad(scratchpad, ignore_case=True).tests_passing is True

    def test_unreadable_path_raises(self, scratchpad):
        scratchpad.mkdir(parents=True)
        with pytest.raises(OSError):
            inspect_scratchpad(scratchpad)
