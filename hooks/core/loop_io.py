#!/usr/bin/env python3
"""
Stop hook payload parsing and decision helpers.

Payload (stdin):  {"status": "completed" | "aborted" | "error", "loop_count": 0, ...}
Decision (stdout): {} to stop, {"followup_message": "..."} to keep the agent going.
"""

import json

from pydantic import BaseModel, ConfigDict, field_validator

COMPLETED_STATUS = "completed"


class LoopInput(BaseModel):
    """The fields of the stop payload the loop hooks care about."""

    model_config = ConfigDict(extra="ignore")

    status: str
    loop_count: int = 0

    @field_validator("loop_count", mode="before")
    @classmethod
    def _null_loop_count(cls, value):
        return 0 if value is None else value


def parse_loop_input(raw: str) -> LoopInput:
    """Parse the full stdin text.

    Raises ValueError (json.JSONDecodeError) or pydantic.ValidationError on
    empty, non-JSON or non-object input.
    """
    return LoopInput.model_validate(json.loads(raw))


def may_continue(loop_input: LoopInput, max_iterations: int) -> bool:
    """Loop guard: only a normally completed turn under the ceiling may continue."""
    return loop_input.status == COMPLETED_STATUS and loop_input.loop_count < max_iterations


def stop_decision() -> dict:
    return {}


def followup_decision(message: str) -> dict:
    return {"followup_message": message}


def iteration_label(name: str, loop_input: LoopInput, max_iterations: int) -> str:
    """e.g. "[CI Loop 3/10]" for the iteration about to start."""
    return f"[{name} {loop_input.loop_count + 1}/{max_iterations}]"
