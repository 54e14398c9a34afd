#!/usr/bin/env python3
"""
config.py
---------
User configuration loaded from an optional YAML file.

Example ``~/.config/punch/config.yaml``::

    db_path: ~/Dropbox/punch.sqlite
    log_dir: ~/.cache/punch/logs
    log_days: 14

Values given on the command line win over the file; anything missing
falls back to the defaults in ``punch.core.paths``.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

# --- Third party imports ---
import yaml

# --- Local imports ---
from punch.core.exceptions import ConfigError
from punch.core.paths import DB_PATH, LOG_DIR

DEFAULT_LOG_DAYS = 7

_KNOWN_KEYS = {"db_path", "log_dir", "log_days"}


@dataclass
class PunchConfig:
    """
    Resolved configuration.

    Attributes:
        db_path: Ledger database file
        log_dir: Directory for rotating logs
        log_days: How many days back ``punch log`` looks without ``--all``
    """

    db_path: Path = field(default_factory=lambda: DB_PATH)
    log_dir: Path = field(default_factory=lambda: LOG_DIR)
    log_days: int = DEFAULT_LOG_DAYS

    def merged(
        self,
        db_path: Optional[str] = None,
        log_dir: Optional[str] = None,
    ) -> "PunchConfig":
        """Return a copy with command-line overrides applied."""
        return PunchConfig(
            db_path=Path(db_path).expanduser() if db_path else self.db_path,
            log_dir=Path(log_dir).expanduser() if log_dir else self.log_dir,
            log_days=self.log_days,
        )


def _parse(data: Dict[str, Any], source: Path) -> PunchConfig:
    unknown = set(data) - _KNOWN_KEYS
    if unknown:
        raise ConfigError(
            f"{source}: unknown setting(s): {', '.join(sorted(unknown))}"
        )

    config = PunchConfig()
    for key in ("db_path", "log_dir"):
        if key in data:
            value = data[key]
            if not isinstance(value, str) or not value.strip():
                raise ConfigError(f"{source}: '{key}' must be a non-empty path")
            setattr(config, key, Path(value).expanduser())

    if "log_days" in data:
        days = data["log_days"]
        # bool is an int subclass
        if isinstance(days, bool) or not isinstance(days, int) or days < 1:
            raise ConfigError(f"{source}: 'log_days' must be a positive integer")
        config.log_days = days

    return config


def load_config(path: Optional[Path]) -> PunchConfig:
    """
    Load configuration from ``path``.

    A missing file yields the defaults. An empty file is treated the same.

    Raises:
        ConfigError: If the file is unreadable, not a mapping, or holds
            unknown keys or badly typed values
    """
    if path is None or not Path(path).exists():
        return PunchConfig()

    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e

    if data is None:
        return PunchConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a mapping at top level")

    return _parse(data, path)
