#!/usr/bin/env python3
"""
Safe Hook Wrapper - Loop hooks never crash and never print anything but a decision.

Usage in hook:
    sys.path.insert(0, str(Path(__file__).parent.parent))
    from core.safe_hook_wrapper import emit_decision, resolve_decision, safe_main

    def main():
        emit_decision(resolve_decision(sys.stdin.read(), decide, "my-hook"))

    if __name__ == "__main__":
        safe_main(main, "my-hook")

Any failure, whether bad stdin or a bug in the decision logic, becomes the stop
decision `{}`. The agent runtime cannot tell it apart from a normal stop, so the
cause is written to ~/.claude/metrics/hook_errors.log.
"""

import json
import logging
import sys
import traceback
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from .loop_io import LoopInput, parse_loop_input

logger = logging.getLogger(__name__)

LOG_FILE = Path.home() / ".claude" / "metrics" / "hook_errors.log"

FALLBACK_DECISION: dict = {}


def log_hook_error(hook_name: str, error: BaseException) -> None:
    """Append error and traceback to the shared hook error log."""
    logger.error(f"{hook_name} failed: {error!r}")
    try:
        LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
        with open(LOG_FILE, "a") as f:
            f.write(f"\n[{datetime.now().isoformat()}] {hook_name}\n")
            f.write(f"Error: {error}\n")
            f.write("".join(traceback.format_exception(type(error), error, error.__traceback__)))
            f.write("-" * 50 + "\n")
    except OSError:
        pass  # Even logging failed, the decision still goes out


def resolve_decision(raw: str, decide: Callable[[LoopInput], dict], hook_name: str = "unknown") -> dict:
    """Parse the payload and run `decide`; FALLBACK_DECISION if either raises."""
    try:
        return decide(parse_loop_input(raw))
    except Exception as e:
        log_hook_error(hook_name, e)
        return dict(FALLBACK_DECISION)


def emit_decision(decision: dict, stream=None) -> None:
    """Write the decision as a single JSON line."""
    stream = stream or sys.stdout
    stream.write(json.dumps(decision, ensure_ascii=False) + "\n")
    stream.flush()


def safe_main(hook_func: Callable[[], None], hook_name: str = "unknown") -> None:
    """
    Run a hook's main function, exiting 0 no matter what.

    If main raises before emitting its decision, the fallback `{}` is printed
    in its place.
    """
    try:
        hook_func()
    except Exception as e:
        log_hook_error(hook_name, e)
        emit_decision(FALLBACK_DECISION)
    sys.exit(0)
