#!/usr/bin/env python3
"""
Pull request CI status via the GitHub CLI.

Runs two read-only queries against the PR of the current branch:

    gh pr view --json number -q .number
    gh pr checks --json name,state,conclusion

and folds the check list into passed / failed / pending counts. Every failure
mode (not a repo, no PR, gh missing, non-zero exit, timeout, garbage output)
is reported as "no pull request"; the cause only goes to the log.
"""

import json
import logging
import subprocess
from collections.abc import Callable
from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError, field_validator

logger = logging.getLogger(__name__)

GH_BIN = "gh"
GH_TIMEOUT_SECS = 30

FAILED_CONCLUSIONS = frozenset({"FAILURE", "CANCELLED"})
PENDING_STATES = frozenset({"PENDING", "QUEUED", "IN_PROGRESS"})
PASSED_CONCLUSION = "SUCCESS"


class GhCommandError(Exception):
    """A gh invocation did not produce usable output."""


class CheckRun(BaseModel):
    """One CI check as reported by `gh pr checks --json`."""

    model_config = ConfigDict(extra="ignore")

    name: str = ""
    state: str = ""
    conclusion: str = ""

    @field_validator("name", "state", "conclusion", mode="before")
    @classmethod
    def _null_to_empty(cls, value):
        return "" if value is None else value


_CHECK_LIST = TypeAdapter(list[CheckRun])


@dataclass(frozen=True)
class PRStatus:
    has_pr: bool = False
    pr_number: str = ""
    total: int = 0
    passed: int = 0
    failed: int = 0
    pending: int = 0
    failed_checks: list[str] = field(default_factory=list)

    @property
    def all_passed(self) -> bool:
        return self.failed == 0 and self.pending == 0 and self.total > 0


def run_gh(args: list[str], timeout: float = GH_TIMEOUT_SECS) -> str:
    """Run `gh <args>` and return its stdout, raising GhCommandError on any failure."""
    cmd = [GH_BIN, *args]
    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired as e:
        raise GhCommandError(f"{' '.join(cmd)} timed out after {timeout}s") from e
    except OSError as e:
        raise GhCommandError(f"{' '.join(cmd)} could not be started: {e}") from e

    if result.returncode != 0:
        raise GhCommandError(f"{' '.join(cmd)} exited {result.returncode}: {result.stderr.strip()[:200]}")
    return result.stdout


def fetch_pr_number(runner: Callable[[list[str]], str] = run_gh) -> str:
    """PR number for the current branch, or "" when gh reports none."""
    return runner(["pr", "view", "--json", "number", "-q", ".number"]).strip()


def fetch_checks(runner: Callable[[list[str]], str] = run_gh) -> list[CheckRun]:
    output = runner(["pr", "checks", "--json", "name,state,conclusion"])
    try:
        return _CHECK_LIST.validate_python(json.loads(output))
    except (ValueError, ValidationError) as e:
        raise GhCommandError(f"Unexpected gh pr checks output: {e}") from e


def aggregate_checks(checks: list[CheckRun], pr_number: str = "") -> PRStatus:
    """Count failed / pending / passed checks.

    The three buckets are matched independently, so a check can land in more
    than one of them or in none.
    """
    failed = [c for c in checks if c.conclusion in FAILED_CONCLUSIONS]
    pending = [c for c in checks if c.state in PENDING_STATES]
    passed = [c for c in checks if c.conclusion == PASSED_CONCLUSION]

    return PRStatus(
        has_pr=True,
        pr_number=pr_number,
        total=len(checks),
        passed=len(passed),
        failed=len(failed),
        pending=len(pending),
        failed_checks=[c.name for c in failed],
    )


def check_pr_status(runner: Callable[[list[str]], str] = run_gh) -> PRStatus:
    """Current PR's CI status; PRStatus(has_pr=False) on any gh failure."""
    try:
        pr_number = fetch_pr_number(runner)
        if not pr_number:
            logger.info("No pull request for current branch")
            return PRStatus()

        status = aggregate_checks(fetch_checks(runner), pr_number)
    except GhCommandError as e:
        logger.info(f"Treating as no pull request: {e}")
        return PRStatus()

    logger.info(
        f"PR #{status.pr_number}: {status.passed}/{status.total} passed, "
        f"{status.failed} failed, {status.pending} pending"
    )
    return status
