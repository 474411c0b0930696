#!/usr/bin/env python3
"""
Stop Hook: Test Loop

Keeps the agent iterating until its tests pass. Works with any test runner:
the agent itself runs the suite and records the result in the scratchpad.

Stops when the turn was not completed, the iteration ceiling is reached, or
the scratchpad (case-insensitive) contains DONE, COMPLETE, TESTS PASSING or
ALL TESTS PASS. Otherwise sends the agent back to fix the next failure.

Hook Type: stop
"""

import sys
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
from core.safe_hook_wrapper import emit_decision, resolve_decision, safe_main  # noqa: E402
from core.scratchpad import inspect_scratchpad  # noqa: E402

HOOK_NAME = "test-loop"
LOOP_NAME = "Test Loop"

# Planning rule describing how test scenarios are attached to a task
TEST_SCENARIO_RULES = "rules/97-plan-test-scenarios.mdc"

logger = configure_logging(HOOK_NAME)


def continue_message(label: str, scratchpad_path: Path) -> str:
    return (
        f"{label} Continue fixing tests. Run the test command, analyze failures, fix one issue at a time. "
        f"When the task was planned with test scenarios (see {TEST_SCENARIO_RULES}), "
        f"ensure those scenarios are covered and passing. "
        f'Update {scratchpad_path.as_posix()} with "TESTS PASSING" when done.'
    )


def decide(loop_input: LoopInput, config: LoopConfig) -> dict:
    if not may_continue(loop_input, config.max_iterations):
        logger.info(f"Stop: status={loop_input.status} loop_count={loop_input.loop_count}")
        return stop_decision()

    scratchpad = inspect_scratchpad(config.scratchpad_path, ignore_case=True)
    if scratchpad.done or scratchpad.tests_passing:
        logger.info(f"Stop: {config.scratchpad_path} marked done={scratchpad.done} tests_passing={scratchpad.tests_passing}")
        return stop_decision()

    label = iteration_label(LOOP_NAME, loop_input, config.max_iterations)
    return followup_decision(continue_message(label, config.scratchpad_path))


def main():
    config = load_loop_config()
    decision = resolve_decision(sys.stdin.read(), partial(decide, config=config), HOOK_NAME)
    emit_decision(decision)


if __name__ == "__main__":
    safe_main(main, HOOK_NAME)
