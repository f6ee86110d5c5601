"""Tests for the agentstats command line."""

import json
import os

import pytest
from typer.testing import CliRunner

from agentstats.cli import app
from agentstats.logging import get_config
from agentstats.persistence.models import Project
from agentstats.persistence.repository import StatsRepository

runner = CliRunner()


@pytest.fixture
def db(tmp_path):
    return str(tmp_path / "cli" / "agentstats.db")


@pytest.fixture
def workdir(tmp_path):
    path = tmp_path / "work" / "app"
    path.mkdir(parents=True)
    return str(path)


def _hook(event, payload, db, *extra):
    stdin = payload if isinstance(payload, str) else json.dumps(payload)
    return runner.invoke(app, ["hook", event, "--db", db, *extra], input=stdin)


def _log_entries():
    path = get_config().hook_log_path
    if not path.exists():
        return []
    return [json.loads(line) for line in path.read_text().splitlines()]


class TestHookCommands:
    """Hooks record events and always exit 0."""

    def test_start_and_end(self, db, workdir):
        start = _hook(
            "prompt-start",
            {"session_id": "s1", "cwd": workdir, "prompt": "implement X", "hook_event_name": "UserPromptSubmit"},
            db,
        )
        end = _hook("prompt-end", {"session_id": "s1", "cwd": workdir, "hook_event_name": "Stop"}, db)

        assert start.exit_code == 0
        assert end.exit_code == 0

        entries = _log_entries()
        assert [e["event_type"] for e in entries] == ["prompt-start", "prompt-end"]
        assert all(e["success"] for e in entries)
        assert entries[0]["prompt_id"] == entries[1]["prompt_id"]
        assert entries[0]["project_id"]

    def test_end_without_start_succeeds(self, db, workdir):
        result = _hook("prompt-end", {"session_id": "ghost", "cwd": workdir}, db)

        assert result.exit_code == 0
        entry = _log_entries()[-1]
        assert entry["success"] is True
        assert entry["prompt_id"] is None

    def test_invalid_json_still_exits_zero(self, db):
        result = _hook("prompt-start", "{broken", db)

        assert result.exit_code == 0
        entry = _log_entries()[-1]
        assert entry["success"] is False
        assert entry["error_type"] == "HookInputError"

    def test_missing_session_id_logged(self, db, workdir):
        result = _hook("prompt-start", {"cwd": workdir}, db)

        assert result.exit_code == 0
        assert "session_id" in _log_entries()[-1]["error"]

    def test_unknown_agent_logged(self, db, workdir):
        result = _hook("prompt-start", {"session_id": "s1", "cwd": workdir}, db, "--agent", "nope")

        assert result.exit_code == 0
        assert _log_entries()[-1]["error_type"] == "UnknownAgentError"

    def test_unopenable_database_logged(self, tmp_path, workdir):
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        result = _hook("prompt-start", {"session_id": "s1", "cwd": workdir}, str(blocker / "x.db"))

        assert result.exit_code == 0
        assert _log_entries()[-1]["error_type"] == "StoreError"

    def test_database_from_env(self, tmp_path, workdir, monkeypatch):
        env_db = tmp_path / "env" / "stats.db"
        monkeypatch.setenv("AGENTSTATS_DB", str(env_db))

        result = runner.invoke(
            app, ["hook", "prompt-start"], input=json.dumps({"session_id": "s1", "cwd": workdir})
        )

        assert result.exit_code == 0
        assert env_db.exists()


class TestReportCommands:
    """stats and history output."""

    @pytest.fixture
    def recorded(self, db, workdir):
        for text in ("first prompt", "second prompt"):
            _hook("prompt-start", {"session_id": "s1", "cwd": workdir, "prompt": text}, db)
            _hook("prompt-end", {"session_id": "s1", "cwd": workdir}, db)
        _hook("prompt-start", {"session_id": "s1", "cwd": workdir, "prompt": "in flight"}, db)

    def test_stats(self, db, workdir, recorded):
        result = runner.invoke(app, ["stats", "--project", workdir, "--db", db])

        assert result.exit_code == 0
        assert "Total prompts" in result.output
        assert "3" in result.output
        assert "app" in result.output

    def test_history(self, db, workdir, recorded):
        result = runner.invoke(app, ["history", "-p", workdir, "--db", db])

        assert result.exit_code == 0
        assert "in flight" in result.output
        assert "first prompt" in result.output

    def test_history_limit(self, db, workdir, recorded):
        result = runner.invoke(app, ["history", "-p", workdir, "--db", db, "-n", "1"])

        assert result.exit_code == 0
        assert "in flight" in result.output
        assert "first prompt" not in result.output

    def test_unknown_project(self, db, tmp_path):
        other = tmp_path / "untracked"
        other.mkdir()

        for command in ("stats", "history"):
            result = runner.invoke(app, [command, "-p", str(other), "--db", db])
            assert result.exit_code == 0
            assert "No project found" in result.output

    def test_empty_history(self, db, workdir):
        with StatsRepository(db) as repo:
            repo.insert_project(Project(directory=os.path.realpath(workdir)))

        result = runner.invoke(app, ["history", "-p", workdir, "--db", db])

        assert result.exit_code == 0
        assert "No prompts recorded yet" in result.output

    def test_store_error_exits_nonzero(self, tmp_path, workdir):
        blocker = tmp_path / "blocker"
        blocker.write_text("")

        result = runner.invoke(app, ["stats", "-p", workdir, "--db", str(blocker / "x.db")])

        assert result.exit_code == 1
        assert "Error" in result.output


def test_no_args_shows_help():
    result = runner.invoke(app, [])
    assert "hook" in result.output
