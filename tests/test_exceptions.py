"""Tests for exception hierarchy."""

import pytest

from agentstats.exceptions import (
    AgentStatsError,
    ConfigError,
    HookInputError,
    RecordError,
    StoreError,
    UnknownAgentError,
)


class TestAgentStatsError:
    """Tests for base AgentStatsError."""

    def test_basic_error(self):
        """Test basic error creation."""
        err = AgentStatsError("Something went wrong")
        assert err.message == "Something went wrong"
        assert err.details == {}
        assert str(err) == "Something went wrong"

    def test_error_with_details(self):
        """Test error with details dict."""
        err = AgentStatsError("Error occurred", {"code": 500, "reason": "internal"})
        assert err.details == {"code": 500, "reason": "internal"}
        assert "code" in str(err)
        assert "500" in str(err)


class TestHierarchy:
    """Every specific error is catchable as AgentStatsError."""

    @pytest.mark.parametrize(
        "err",
        [
            ConfigError("bad config"),
            HookInputError("bad payload"),
            UnknownAgentError("codex", ["claude-code"]),
            StoreError("db down"),
            RecordError("insert failed", step="close_prompt"),
        ],
    )
    def test_inherits_base(self, err):
        assert isinstance(err, AgentStatsError)

    def test_unknown_agent_is_input_error(self):
        """Unknown agents are input errors, not infrastructure errors."""
        err = UnknownAgentError("codex", ["claude-code"])
        assert isinstance(err, HookInputError)
        assert err.agent_type == "codex"
        assert err.details == {"known": ["claude-code"]}
        assert "codex" in str(err)

    def test_record_error_is_store_error(self):
        """RecordError keeps the failing step."""
        err = RecordError("insert failed", step="insert_session_and_prompt", session_id="s1", error="locked")
        assert isinstance(err, StoreError)
        assert err.step == "insert_session_and_prompt"
        assert err.session_id == "s1"
        assert err.details["step"] == "insert_session_and_prompt"
        assert "locked" in str(err)
