#!/usr/bin/env python3
"""
Logging setup shared by the loop hooks.

Hooks talk to the agent runtime over stdout, so log records must never end up
there. Each hook script calls configure_logging() once at import time; shared
modules just use logging.getLogger(__name__).
"""

import logging
import os
from pathlib import Path

LOG_DIR = Path(os.environ.get("CLAUDE_HOOKS_LOG_DIR", Path.home() / ".claude" / "logs"))

LOG_FORMAT = '{"timestamp": "%(asctime)s", "level": "%(levelname)s", "module": "%(hook)s", "message": "%(message)s"}'


class _HookNameFilter(logging.Filter):
    def __init__(self, hook_name: str):
        super().__init__()
        self.hook_name = hook_name

    def filter(self, record: logging.LogRecord) -> bool:
        record.hook = self.hook_name
        return True


def configure_logging(hook_name: str, log_dir: Path | None = None) -> logging.Logger:
    """Route log records to <log_dir>/<hook_name>.log and return the hook logger."""
    log_dir = log_dir or LOG_DIR
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(log_dir / f"{hook_name}.log")
    except OSError:
        # Read-only home: keep stdout clean and drop the records
        handler = logging.NullHandler()

    handler.addFilter(_HookNameFilter(hook_name))
    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT, handlers=[handler])
    return logging.getLogger(hook_name)
