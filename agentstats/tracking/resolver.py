"""
Project Identity Resolver

Turns a working directory into a durable project identity.

Matching order:
1. git origin URL (survives re-clones into a different path)
2. canonical directory (symlinks resolved, repo top-level)
3. otherwise a new project is created

An origin match whose stored directory differs moves the project to the
new directory. The project id never changes.
"""

import logging
import os
import sqlite3

from agentstats.exceptions import StoreError
from agentstats.integrations.git_ops import GitOps
from agentstats.persistence.models import Project
from agentstats.persistence.repository import StatsRepository

logger = logging.getLogger(__name__)


def resolve_directory(cwd: str, git: GitOps | None = None) -> tuple[str, str]:
    """
    Canonicalize a working directory.

    The path is made absolute and its symlinks resolved. A path that no
    longer exists resolves as far as possible instead of failing. Inside a
    git repository the repo top-level replaces the path and the origin URL
    is captured.

    Returns:
        (directory, origin) where origin is "" when there is none
    """
    git = git or GitOps()

    try:
        absolute = os.path.abspath(cwd)
    except OSError:
        # Relative path and the process cwd itself has vanished
        absolute = cwd
    try:
        directory = os.path.realpath(absolute)
    except (OSError, RuntimeError):
        directory = absolute

    origin = ""
    if git.is_repository(directory):
        root = git.repository_root(directory)
        if root:
            directory = root
        origin = git.origin_url(directory)

    return directory, origin


class ProjectResolver:
    """
    Resolve-or-create and read-only lookup of projects.

    Usage:
        resolver = ProjectResolver(repo)
        project = resolver.resolve("/path/to/checkout/src")
        maybe = resolver.find("/some/other/dir")
    """

    def __init__(self, repo: StatsRepository, git: GitOps | None = None):
        self.repo = repo
        self.git = git or GitOps()

    def resolve(self, cwd: str) -> Project:
        """
        Get the project for cwd, creating it if none matches.

        Raises:
            StoreError: If the database fails
        """
        directory, origin = resolve_directory(cwd, self.git)

        try:
            project = self._match(directory, origin, move=True)
            if project is not None:
                return project

            try:
                return self.repo.insert_project(
                    Project(git_origin=origin or None, directory=directory)
                )
            except sqlite3.IntegrityError:
                # Another invocation created it between our lookup and insert
                logger.debug(f"Project insert for {directory} conflicted, re-reading")
                project = self._match(directory, origin, move=True)
                if project is not None:
                    return project
                raise StoreError(
                    "Project insert conflicted but no matching project was found",
                    {"directory": directory, "origin": origin},
                )
        except sqlite3.Error as e:
            raise StoreError(
                "Failed to resolve project",
                {"directory": directory, "origin": origin, "error": str(e)},
            ) from e

    def find(self, cwd: str) -> Project | None:
        """
        Get the project for cwd without creating or moving anything.

        Returns:
            The matching project, or None

        Raises:
            StoreError: If the database fails
        """
        directory, origin = resolve_directory(cwd, self.git)
        try:
            return self._match(directory, origin, move=False)
        except sqlite3.Error as e:
            raise StoreError(
                "Failed to look up project",
                {"directory": directory, "origin": origin, "error": str(e)},
            ) from e

    def _match(self, directory: str, origin: str, move: bool) -> Project | None:
        if origin:
            project = self.repo.find_project_by_origin(origin)
            if project is not None:
                if move and project.directory != directory:
                    self._move(project, directory)
                return project

        return self.repo.find_project_by_directory(directory)

    def _move(self, project: Project, directory: str) -> None:
        old_directory = project.directory
        try:
            self.repo.update_project_directory(project.id, directory)
        except sqlite3.IntegrityError:
            logger.warning(
                f"Project {project.id[:8]} matched by origin but {directory} "
                f"belongs to another project; keeping {old_directory}"
            )
            return

        project.directory = directory
        logger.info(f"Project {project.id[:8]} moved from {old_directory} to {directory}")
