"""
Hook log settings.

Environment overrides:
    AGENTSTATS_LOG_DIR          directory holding hook.jsonl
    AGENTSTATS_LOG_LEVEL        DEBUG, INFO, WARNING or ERROR
    AGENTSTATS_LOG_MAX_SIZE_MB  rotate hook.jsonl past this size
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

HOOK_LOG_NAME = "hook.jsonl"


def _default_log_dir() -> Path:
    return Path.home() / ".agentstats" / "logs"


@dataclass
class LogConfig:
    """Where the hook log lives and when it rotates."""

    log_dir: Path = field(default_factory=_default_log_dir)
    max_file_size_bytes: int = 5 * 1024 * 1024
    backup_count: int = 3
    hook_level: str = "INFO"

    @property
    def hook_log_path(self) -> Path:
        return self.log_dir / HOOK_LOG_NAME

    @classmethod
    def from_env(cls) -> "LogConfig":
        """Defaults with AGENTSTATS_LOG_* overrides. An unparsable size is ignored."""
        config = cls()
        env = os.environ

        if env.get("AGENTSTATS_LOG_DIR"):
            config.log_dir = Path(env["AGENTSTATS_LOG_DIR"]).expanduser()
        if env.get("AGENTSTATS_LOG_LEVEL"):
            config.hook_level = env["AGENTSTATS_LOG_LEVEL"].upper()

        size_mb = env.get("AGENTSTATS_LOG_MAX_SIZE_MB")
        if size_mb:
            try:
                config.max_file_size_bytes = int(float(size_mb) * 1024 * 1024)
            except ValueError:
                pass

        return config


_active: LogConfig | None = None


def get_config() -> LogConfig:
    """The active log settings, read from the environment on first use."""
    global _active
    if _active is None:
        _active = LogConfig.from_env()
    return _active


def set_config(config: LogConfig | None) -> None:
    """Replace the active settings. None goes back to the environment."""
    global _active
    _active = config
