"""
agentstats Logging System.

Provides structured JSONL logging of hook invocations (event, session,
project, outcome, latency) so failures stay visible even though hooks
always exit 0.

Usage:
    from agentstats.logging import HookLogEntry, hook_logger, now_iso

    hook_logger.info(
        HookLogEntry(timestamp=now_iso(), event_type="prompt-start", ...).to_json()
    )

Logs are written to ~/.agentstats/logs/hook.jsonl (see LogConfig).
"""

import threading
from typing import Any

from .config import LogConfig, get_config, set_config
from .entries import HookLogEntry, now_iso
from .handlers import create_hook_logger

# Lazy-initialized so that importing the package never creates files
_hook_logger: Any = None
_hook_log_path: Any = None
_init_lock = threading.Lock()


def _ensure_logger() -> Any:
    """Initialize the hook logger on first use or after a config change."""
    global _hook_logger, _hook_log_path

    config = get_config()
    if _hook_logger is not None and _hook_log_path == config.hook_log_path:
        return _hook_logger

    with _init_lock:
        if _hook_logger is not None and _hook_log_path == config.hook_log_path:
            return _hook_logger

        _hook_logger = create_hook_logger(
            "agentstats.hook",
            config.hook_log_path,
            level=config.hook_level,
            max_bytes=config.max_file_size_bytes,
            backup_count=config.backup_count,
        )
        _hook_log_path = config.hook_log_path
        return _hook_logger


class _LazyLogger:
    """Lazy wrapper that initializes the actual logger on first use."""

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        _ensure_logger().debug(msg, *args, **kwargs)

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        _ensure_logger().info(msg, *args, **kwargs)

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None:
        _ensure_logger().warning(msg, *args, **kwargs)

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None:
        _ensure_logger().error(msg, *args, **kwargs)


hook_logger = _LazyLogger()


__all__ = [
    "hook_logger",
    "HookLogEntry",
    "now_iso",
    "LogConfig",
    "get_config",
    "set_config",
]
