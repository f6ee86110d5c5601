"""
agentstats - Configuration Management

Handles the optional config.json file and environment variables.
Config is stored in $XDG_CONFIG_HOME/agentstats/config.json
(~/.config/agentstats/config.json when XDG_CONFIG_HOME is unset).
"""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from agentstats.exceptions import ConfigError


DEFAULT_AGENT = "claude-code"


def config_dir() -> Path:
    """Directory holding config.json."""
    config_home = os.environ.get("XDG_CONFIG_HOME")
    base = Path(config_home) if config_home else Path.home() / ".config"
    return base / "agentstats"


def default_db_path() -> Path:
    """XDG-aware default location of the SQLite database."""
    data_home = os.environ.get("XDG_DATA_HOME")
    base = Path(data_home) if data_home else Path.home() / ".local" / "share"
    return base / "agentstats" / "agentstats.db"


@dataclass
class AgentStatsConfig:
    """Main configuration container for agentstats."""

    db_path: Path = field(default_factory=default_db_path)
    busy_timeout_ms: int = 5000
    git_timeout_seconds: float = 5.0
    default_agent: str = DEFAULT_AGENT
    history_limit: int = 50

    @property
    def busy_timeout_seconds(self) -> float:
        """Lock wait for sqlite3.connect, in seconds."""
        return self.busy_timeout_ms / 1000

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "db_path": str(self.db_path),
            "busy_timeout_ms": self.busy_timeout_ms,
            "git_timeout_seconds": self.git_timeout_seconds,
            "default_agent": self.default_agent,
            "history_limit": self.history_limit,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AgentStatsConfig":
        """Create config from a dictionary, keeping defaults for absent keys."""
        config = cls()
        try:
            if data.get("db_path"):
                config.db_path = Path(data["db_path"]).expanduser()
            if "busy_timeout_ms" in data:
                config.busy_timeout_ms = int(data["busy_timeout_ms"])
            if "git_timeout_seconds" in data:
                config.git_timeout_seconds = float(data["git_timeout_seconds"])
            if data.get("default_agent"):
                config.default_agent = str(data["default_agent"])
            if "history_limit" in data:
                config.history_limit = int(data["history_limit"])
        except (TypeError, ValueError) as e:
            raise ConfigError("Invalid value in config", {"error": str(e)})
        return config


def _env_number(name: str, cast: type) -> Any:
    value = os.environ.get(name)
    if value is None or value == "":
        return None
    try:
        return cast(value)
    except ValueError:
        raise ConfigError(
            f"{name} must be a number",
            {"value": value},
        )


def load_config(config_file: Path | None = None) -> AgentStatsConfig:
    """
    Load configuration from file and environment.

    Args:
        config_file: Explicit config.json path (defaults to config_dir()/config.json)

    Returns:
        AgentStatsConfig with all settings loaded

    Raises:
        ConfigError: If the file or an environment override is invalid
    """
    path = config_file or config_dir() / "config.json"
    data: dict[str, Any] = {}

    if path.exists():
        try:
            with open(path) as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(
                f"Invalid JSON in {path}",
                {"error": str(e)},
            )
        if not isinstance(data, dict):
            raise ConfigError(f"Expected a JSON object in {path}")

    config = AgentStatsConfig.from_dict(data)

    # Environment wins over the file
    if db_path := os.environ.get("AGENTSTATS_DB"):
        config.db_path = Path(db_path).expanduser()
    if (busy := _env_number("AGENTSTATS_BUSY_TIMEOUT_MS", int)) is not None:
        config.busy_timeout_ms = busy
    if (git_timeout := _env_number("AGENTSTATS_GIT_TIMEOUT", float)) is not None:
        config.git_timeout_seconds = git_timeout

    return config
