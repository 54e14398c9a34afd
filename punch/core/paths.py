#!/usr/bin/env python3
"""
paths.py
-------------------
Default locations for punch data, logs and configuration.

Follows the XDG base directory layout:
    $XDG_DATA_HOME/punch/
    ├── punch.sqlite   # the ledger database
    └── logs/          # rotating log files
    $XDG_CONFIG_HOME/punch/
    └── config.yaml    # optional user configuration

Every location can be overridden from the command line or the config file.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import os
from pathlib import Path

APP_NAME = "punch"


def data_home() -> Path:
    """Base directory for punch data."""
    base = os.environ.get("XDG_DATA_HOME") or (Path.home() / ".local" / "share")
    return Path(base) / APP_NAME


def config_home() -> Path:
    """Base directory for punch configuration."""
    base = os.environ.get("XDG_CONFIG_HOME") or (Path.home() / ".config")
    return Path(base) / APP_NAME


# ----- Defaults -----
DATA_DIR: Path = data_home()
DB_PATH: Path = DATA_DIR / "punch.sqlite"
LOG_DIR: Path = DATA_DIR / "logs"
CONFIG_PATH: Path = config_home() / "config.yaml"
