"""Centralized path management for standup.

All state (config, triggers, logs) is stored under a single base directory.
The base directory can be overridden with the STANDUP_HOME environment
variable.

Default location: ~/.standup
"""

import os
from functools import lru_cache
from pathlib import Path

ENV_VAR = "STANDUP_HOME"


@lru_cache(maxsize=1)
def get_standup_home() -> Path:
    """Get the base directory for all standup data.

    Resolution order:
    1. STANDUP_HOME environment variable (if set)
    2. Platform default (~/.standup)
    """
    if env_home := os.environ.get(ENV_VAR):
        return Path(env_home).expanduser().resolve()
    return Path.home() / ".standup"


def get_config_path() -> Path:
    """Get the default config file path."""
    return get_standup_home() / "config.toml"


def get_triggers_path() -> Path:
    """Get the triggers file path (JSONL)."""
    return get_standup_home() / "triggers.jsonl"


def get_logs_path() -> Path:
    """Get the default logs directory path."""
    return get_standup_home() / "logs"
