"""
Git Metadata Integration

Read-only queries against the git CLI:
- Repository detection and top-level directory
- Current HEAD commit hash
- Remote origin URL

Every query is best-effort. A missing git binary, a vanished directory,
a non-zero exit or a timeout all produce an empty result.
"""

import logging
import os
import subprocess

logger = logging.getLogger(__name__)


class GitOps:
    """
    Git metadata via the git CLI.

    Runs `git -C <path> ...` so the directory does not need to exist
    for the call to fail cleanly.
    """

    def __init__(self, timeout: float = 5.0):
        """
        Initialize git operations.

        Args:
            timeout: Seconds to wait for each git invocation
        """
        self.timeout = timeout

    def _run_git(self, path: str, args: list[str]) -> str | None:
        """Run a git command in path. Returns stripped stdout, or None on any failure."""
        cmd = ["git", "-C", str(path)] + args
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except FileNotFoundError:
            logger.debug("git not found on PATH")
            return None
        except subprocess.TimeoutExpired:
            logger.debug(f"git {' '.join(args)} timed out after {self.timeout}s in {path}")
            return None
        except OSError as e:
            logger.debug(f"git {' '.join(args)} failed to start: {e}")
            return None

        if result.returncode != 0:
            logger.debug(f"git {' '.join(args)} exited {result.returncode} in {path}")
            return None

        return result.stdout.strip()

    def is_repository(self, path: str) -> bool:
        """Check whether path is inside a git repository."""
        return self._run_git(path, ["rev-parse", "--git-dir"]) is not None

    def repository_root(self, path: str) -> str:
        """Top-level directory of the repository containing path, symlinks resolved."""
        root = self._run_git(path, ["rev-parse", "--show-toplevel"])
        if not root:
            return ""
        try:
            return os.path.realpath(root)
        except OSError:
            return root

    def head_commit_hash(self, path: str) -> str:
        """HEAD commit hash, or "" when there are no commits or path is not a repo."""
        return self._run_git(path, ["rev-parse", "--verify", "--quiet", "HEAD"]) or ""

    def origin_url(self, path: str) -> str:
        """URL of the "origin" remote, or "" if none is configured."""
        return self._run_git(path, ["remote", "get-url", "origin"]) or ""
