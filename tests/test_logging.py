"""Tests for the JSONL hook log."""

import json

from agentstats.logging import HookLogEntry, LogConfig, get_config, hook_logger, now_iso, set_config


class TestLogConfig:
    """Tests for LogConfig."""

    def test_from_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv("AGENTSTATS_LOG_DIR", str(tmp_path / "custom"))
        monkeypatch.setenv("AGENTSTATS_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("AGENTSTATS_LOG_MAX_SIZE_MB", "2")

        config = LogConfig.from_env()
        assert config.log_dir == tmp_path / "custom"
        assert config.hook_level == "DEBUG"
        assert config.max_file_size_bytes == 2 * 1024 * 1024
        assert config.hook_log_path == tmp_path / "custom" / "hook.jsonl"

    def test_invalid_max_size_ignored(self, monkeypatch):
        monkeypatch.setenv("AGENTSTATS_LOG_MAX_SIZE_MB", "lots")
        assert LogConfig.from_env().max_file_size_bytes == LogConfig().max_file_size_bytes


class TestHookLogEntry:
    """Tests for HookLogEntry."""

    def test_to_json(self):
        entry = HookLogEntry(timestamp="2026-01-01T00:00:00+00:00", event_type="prompt-start")
        data = json.loads(entry.to_json())
        assert data["event_type"] == "prompt-start"
        assert data["success"] is False

    def test_from_dict_ignores_unknown_keys(self):
        entry = HookLogEntry.from_dict(
            {"timestamp": "t", "event_type": "prompt-end", "success": True, "extra": 1}
        )
        assert entry.success is True
        assert not hasattr(entry, "extra")


class TestHookLogger:
    """Tests for the lazy hook logger."""

    def test_writes_jsonl_line(self, tmp_path):
        set_config(LogConfig(log_dir=tmp_path / "hooklogs"))

        entry = HookLogEntry(timestamp=now_iso(), event_type="prompt-end", session_id="s1", success=True)
        hook_logger.info(entry.to_json())

        lines = (tmp_path / "hooklogs" / "hook.jsonl").read_text().splitlines()
        assert len(lines) == 1
        assert json.loads(lines[-1])["session_id"] == "s1"

    def test_plain_messages_are_wrapped(self, tmp_path):
        set_config(LogConfig(log_dir=tmp_path / "plain"))

        hook_logger.warning("not json")

        data = json.loads((tmp_path / "plain" / "hook.jsonl").read_text().splitlines()[-1])
        assert data["message"] == "not json"
        assert data["level"] == "WARNING"

    def test_rotates_past_max_size(self, tmp_path):
        set_config(LogConfig(log_dir=tmp_path / "rot", max_file_size_bytes=200, backup_count=2))

        for i in range(10):
            hook_logger.info(HookLogEntry(timestamp=now_iso(), event_type="prompt-start", session_id=f"s{i}").to_json())

        assert (tmp_path / "rot" / "hook.jsonl.1").exists()
        assert not (tmp_path / "rot" / "hook.jsonl.3").exists()
        last = (tmp_path / "rot" / "hook.jsonl").read_text().splitlines()[-1]
        assert json.loads(last)["session_id"] == "s9"

    def test_follows_config_changes(self, tmp_path):
        set_config(LogConfig(log_dir=tmp_path / "first"))
        hook_logger.info("one")
        set_config(LogConfig(log_dir=tmp_path / "second"))
        hook_logger.info("two")

        assert get_config().log_dir == tmp_path / "second"
        assert (tmp_path / "first" / "hook.jsonl").exists()
        assert (tmp_path / "second" / "hook.jsonl").exists()
