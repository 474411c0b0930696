#!/usr/bin/env python3
"""
Loop hook configuration (SSOT).

The two knobs the loop hooks have - the iteration ceiling and the scratchpad
location - default to the values below and can be overridden from the shared
config/canonical.yaml under a `loop:` section:

    loop:
      max_iterations: 10
      scratchpad_path: .cursor/scratchpad.md
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

MAX_ITERATIONS = 10
SCRATCHPAD_PATH = ".cursor/scratchpad.md"

DEFAULT_CONFIG = {
    "max_iterations": MAX_ITERATIONS,
    "scratchpad_path": SCRATCHPAD_PATH,
}


@dataclass(frozen=True)
class LoopConfig:
    """Constants handed to the decision functions."""

    max_iterations: int = MAX_ITERATIONS
    scratchpad_path: Path = Path(SCRATCHPAD_PATH)


def candidate_config_paths() -> list[Path]:
    return [
        Path(os.environ.get("CLAUDE_PROJECT_DIR", ".")) / "config" / "canonical.yaml",
        Path.cwd() / "config" / "canonical.yaml",
    ]


def load_ssot_config(paths: list[Path] | None = None) -> dict:
    """Load the `loop` section from canonical.yaml merged over DEFAULT_CONFIG."""
    for config_path in paths if paths is not None else candidate_config_paths():
        if not config_path.exists():
            continue
        try:
            with open(config_path) as f:
                data = yaml.safe_load(f) or {}
            loop_config = data.get("loop") if isinstance(data, dict) else None
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Failed to load SSOT config {config_path}: {e}")
            continue

        if isinstance(loop_config, dict) and loop_config:
            known = {k: v for k, v in loop_config.items() if k in DEFAULT_CONFIG}
            logger.info(f"Loaded loop config from SSOT: {config_path}")
            return {**DEFAULT_CONFIG, **known}

    return dict(DEFAULT_CONFIG)


def load_loop_config(paths: list[Path] | None = None) -> LoopConfig:
    config = load_ssot_config(paths)
    try:
        max_iterations = int(config["max_iterations"])
    except (TypeError, ValueError):
        logger.warning(f"Invalid max_iterations {config['max_iterations']!r}, using {MAX_ITERATIONS}")
        max_iterations = MAX_ITERATIONS

    return LoopConfig(
        max_iterations=max_iterations,
        scratchpad_path=Path(str(config["scratchpad_path"])),
    )
