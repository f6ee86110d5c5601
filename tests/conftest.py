"""Shared fixtures: isolated config/log/database locations and git helpers."""

import os
import shutil
import subprocess
from pathlib import Path

import pytest

from agentstats.logging import LogConfig, set_config
from agentstats.persistence.repository import StatsRepository

GIT_ENV = {
    "GIT_AUTHOR_NAME": "Test",
    "GIT_AUTHOR_EMAIL": "test@test.com",
    "GIT_COMMITTER_NAME": "Test",
    "GIT_COMMITTER_EMAIL": "test@test.com",
}

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Keep every test away from the real ~/.config, ~/.local/share and log dir."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg-config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "xdg-data"))
    for name in ("AGENTSTATS_DB", "AGENTSTATS_BUSY_TIMEOUT_MS", "AGENTSTATS_GIT_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
    set_config(LogConfig(log_dir=tmp_path / "logs"))
    yield
    set_config(None)


@pytest.fixture
def repo(tmp_path):
    """An initialized repository on a temporary database."""
    with StatsRepository(tmp_path / "db" / "agentstats.db") as repository:
        yield repository


class FakeGit:
    """
    In-memory stand-in for GitOps.

    repos maps a repository root to {"origin": ..., "head": ...}.
    Any path equal to or below a root counts as inside that repository.
    """

    def __init__(self, repos: dict[str, dict[str, str]] | None = None):
        self.repos = repos or {}
        self.head_calls: list[str] = []

    def _root_for(self, path: str) -> str:
        for root in self.repos:
            if path == root or path.startswith(root + os.sep):
                return root
        return ""

    def is_repository(self, path: str) -> bool:
        return bool(self._root_for(path))

    def repository_root(self, path: str) -> str:
        return self._root_for(path)

    def head_commit_hash(self, path: str) -> str:
        self.head_calls.append(path)
        root = self._root_for(os.path.realpath(path))
        return self.repos[root].get("head", "") if root else ""

    def origin_url(self, path: str) -> str:
        root = self._root_for(path)
        return self.repos[root].get("origin", "") if root else ""


@pytest.fixture
def make_git():
    """Factory for FakeGit instances: make_git({root: {"origin": ..., "head": ...}})."""
    return FakeGit


def run_git(cwd: Path, *args: str) -> None:
    """Run a git command in cwd, failing the test on error."""
    subprocess.run(
        ["git", *args],
        cwd=cwd,
        env={**os.environ, **GIT_ENV},
        capture_output=True,
        text=True,
        check=True,
    )


@pytest.fixture
def git_repo(tmp_path):
    """A real git repository without commits."""
    path = tmp_path / "repo"
    path.mkdir()
    run_git(path, "init")
    run_git(path, "config", "user.email", "test@test.com")
    run_git(path, "config", "user.name", "Test")
    return path


@pytest.fixture
def committed_repo(git_repo):
    """A real git repository with one commit."""
    (git_repo / "f.txt").write_text("x")
    run_git(git_repo, "add", ".")
    run_git(git_repo, "commit", "-m", "init")
    return git_repo
