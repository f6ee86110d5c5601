"""Tests for the git metadata integration."""

import os
import subprocess
from unittest.mock import patch

from agentstats.integrations.git_ops import GitOps
from conftest import requires_git, run_git


@requires_git
class TestGitOpsWithRealRepo:
    """Tests against real git repositories."""

    def test_is_repository(self, git_repo, tmp_path):
        git = GitOps()
        assert git.is_repository(str(git_repo))

        plain = tmp_path / "plain"
        plain.mkdir()
        assert not git.is_repository(str(plain))

    def test_repository_root_from_subdir(self, git_repo):
        sub = git_repo / "a" / "b"
        sub.mkdir(parents=True)

        assert GitOps().repository_root(str(sub)) == os.path.realpath(git_repo)

    def test_repository_root_outside_repo(self, tmp_path):
        plain = tmp_path / "plain"
        plain.mkdir()
        assert GitOps().repository_root(str(plain)) == ""

    def test_head_hash_empty_repo(self, git_repo):
        """No commits yet -> empty hash."""
        assert GitOps().head_commit_hash(str(git_repo)) == ""

    def test_head_hash_with_commit(self, committed_repo):
        head = GitOps().head_commit_hash(str(committed_repo))
        assert len(head) == 40

    def test_origin_url_no_remote(self, git_repo):
        assert GitOps().origin_url(str(git_repo)) == ""

    def test_origin_url(self, git_repo):
        run_git(git_repo, "remote", "add", "origin", "git@github.com:user/repo.git")
        assert GitOps().origin_url(str(git_repo)) == "git@github.com:user/repo.git"


class TestGitOpsFailures:
    """Every failure mode degrades to an empty result."""

    def test_vanished_directory(self, tmp_path):
        git = GitOps()
        missing = str(tmp_path / "gone")
        assert not git.is_repository(missing)
        assert git.repository_root(missing) == ""
        assert git.head_commit_hash(missing) == ""
        assert git.origin_url(missing) == ""

    def test_git_not_installed(self, tmp_path):
        with patch("agentstats.integrations.git_ops.subprocess.run", side_effect=FileNotFoundError):
            git = GitOps()
            assert not git.is_repository(str(tmp_path))
            assert git.head_commit_hash(str(tmp_path)) == ""

    def test_timeout(self, tmp_path):
        with patch(
            "agentstats.integrations.git_ops.subprocess.run",
            side_effect=subprocess.TimeoutExpired(cmd="git", timeout=1),
        ):
            assert GitOps(timeout=1).origin_url(str(tmp_path)) == ""

    def test_runs_with_dash_c(self, tmp_path):
        with patch("agentstats.integrations.git_ops.subprocess.run") as run:
            run.return_value = subprocess.CompletedProcess(args=[], returncode=0, stdout="abc\n")
            assert GitOps(timeout=3).head_commit_hash(str(tmp_path)) == "abc"

        args, kwargs = run.call_args
        assert args[0][:3] == ["git", "-C", str(tmp_path)]
        assert kwargs["timeout"] == 3
