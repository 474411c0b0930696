#!/usr/bin/env python3
"""
Scratchpad inspection.

The agent keeps free-form notes in a markdown scratchpad; the loop hooks only
look for completion markers in it. The file is never written here.
"""

from dataclasses import dataclass
from pathlib import Path

DONE_MARKERS = ("DONE", "COMPLETE")
TESTS_PASSING_MARKERS = ("TESTS PASSING", "ALL TESTS PASS")


@dataclass(frozen=True)
class ScratchpadState:
    exists: bool = False
    done: bool = False
    tests_passing: bool = False


def inspect_scratchpad(path: Path, ignore_case: bool = False) -> ScratchpadState:
    """Report which completion markers the scratchpad at `path` contains.

    A missing file is reported as absent. Undecodable bytes are replaced, so
    markers elsewhere in the file still count. Read errors (a directory, no
    permission) propagate to the hook's fallback.
    """
    if not path.exists():
        return ScratchpadState()

    content = path.read_text(encoding="utf-8", errors="replace")

    if ignore_case:
        content = content.upper()

    return ScratchpadState(
        exists=True,
        done=any(marker in content for marker in DONE_MARKERS),
        tests_passing=any(marker in content for marker in TESTS_PASSING_MARKERS),
    )
