#!/usr/bin/env python3
"""
Stop Hook: CI Loop

Keeps the agent iterating until the CI pipeline of its pull request passes.
When the agent reports a completed turn, this hook:
1. Stops if the turn was not completed or the iteration ceiling is reached
2. Stops if the scratchpad says DONE / COMPLETE
3. Asks `gh` for the PR's checks
4. Sends the agent back to fix failures, or to wait for pending checks

Output: {} to stop, {"followup_message": "..."} to continue.

Hook Type: stop
"""

import sys
from collections.abc import Callable
from functools import partial
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from core.hook_logging import configure_logging  # noqa: E402
from core.loop_config import LoopConfig, load_loop_config  # noqa: E402
from core.loop_io import (  # noqa: E402
    LoopInput,
    followup_decision,
    iteration_label,
    may_continue,
    stop_decision,
)
from core.pr_checks import PRStatus, check_pr_status  # noqa: E402
from core.safe_hook_wrapper import emit_decision, resolve_decision, safe_main  # noqa: E402
from core.scratchpad import inspect_scratchpad  # noqa: E402

HOOK_NAME = "ci-loop"
LOOP_NAME = "CI Loop"

logger = configure_logging(HOOK_NAME)


def failed_message(label: str, pr: PRStatus) -> str:
    return (
        f"{label} Pipeline FAILED. {pr.failed} check(s) failed: {', '.join(pr.failed_checks)}. "
        f"Run `gh run view <id> --log-failed` to see errors, fix them, commit, and push. "
        f"Continue until all checks pass."
    )


def pending_message(label: str, pr: PRStatus) -> str:
    return (
        f"{label} Pipeline still running ({pr.passed}/{pr.total} passed, {pr.pending} pending). "
        f"Run `gh pr checks --watch` to wait for completion."
    )


def decide(
    loop_input: LoopInput,
    config: LoopConfig,
    pr_status: Callable[[], PRStatus] = check_pr_status,
) -> dict:
    """Pick the single decision for this stop event, first match wins."""
    if not may_continue(loop_input, config.max_iterations):
        logger.info(f"Stop: status={loop_input.status} loop_count={loop_input.loop_count}")
        return stop_decision()

    if inspect_scratchpad(config.scratchpad_path).done:
        logger.info(f"Stop: {config.scratchpad_path} marked done")
        return stop_decision()

    pr = pr_status()
    if not pr.has_pr:
        return stop_decision()

    if pr.all_passed:
        logger.info(f"Stop: all {pr.total} checks passed on PR #{pr.pr_number}")
        return stop_decision()

    label = iteration_label(LOOP_NAME, loop_input, config.max_iterations)
    if pr.failed > 0:
        logger.info(f"Continue: failed checks {pr.failed_checks}")
        return followup_decision(failed_message(label, pr))

    if pr.pending > 0:
        logger.info(f"Continue: {pr.pending} checks pending")
        return followup_decision(pending_message(label, pr))

    # No checks reported yet
    return stop_decision()


def main():
    config = load_loop_config()
    decision = resolve_decision(sys.stdin.read(), partial(decide, config=config), HOOK_NAME)
    emit_decision(decision)


if __name__ == "__main__":
    safe_main(main, HOOK_NAME)
