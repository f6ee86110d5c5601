"""
agentstats Repository - Database access layer

Provides all database operations for agentstats.
Single connection per repository instance, with context manager support.

Concurrency:
- Each hook invocation is its own process with its own connection
- SQLite in WAL mode so report readers never block hook writers
- Uniqueness constraints plus INSERT OR IGNORE absorb races between processes
- Lock waits are bounded by the sqlite busy timeout
"""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Generator
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any

from agentstats.config import default_db_path
from agentstats.exceptions import StoreError
from agentstats.persistence.models import (
    Project,
    Prompt,
    Session,
    none_if_empty,
    to_iso,
)

logger = logging.getLogger(__name__)


class StatsRepository:
    """
    Repository for all agentstats persistence operations.

    Usage:
        with StatsRepository(db_path) as repo:
            project = repo.find_project_by_directory("/path/to/project")
            ...

        # Or manage the connection manually
        repo = StatsRepository()
        repo.initialize()
        repo.close()
    """

    def __init__(self, db_path: Path | str | None = None, busy_timeout: float = 5.0):
        """
        Initialize repository.

        Args:
            db_path: Path to SQLite database file. If None, uses the XDG default.
            busy_timeout: Seconds to wait for a competing writer's lock
        """
        self.db_path = Path(db_path) if db_path else default_db_path()
        self.busy_timeout = busy_timeout
        self._conn: sqlite3.Connection | None = None
        self._initialized = False

    def __enter__(self) -> StatsRepository:
        self.initialize()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    @property
    def conn(self) -> sqlite3.Connection:
        """Get database connection, initializing if needed."""
        if self._conn is None:
            self.initialize()
        return self._conn  # type: ignore

    def initialize(self) -> None:
        """
        Initialize database connection and schema.

        Creates database file and parent directories if they don't exist.
        Applies schema if not already present.

        Raises:
            StoreError: If the database cannot be opened or migrated
        """
        if self._initialized and self._conn:
            return

        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True, mode=0o700)

            self._conn = sqlite3.connect(
                self.db_path,
                timeout=self.busy_timeout,
                isolation_level=None,  # Autocommit mode, we use explicit transactions
            )

            self._conn.execute("PRAGMA journal_mode=WAL")
            self._conn.execute("PRAGMA synchronous=NORMAL")
            self._conn.execute("PRAGMA foreign_keys=ON")
            self._conn.execute(f"PRAGMA busy_timeout={int(self.busy_timeout * 1000)}")

            self._apply_schema()
        except (sqlite3.Error, OSError) as e:
            self.close()
            raise StoreError(
                f"Failed to open database at {self.db_path}",
                {"error": str(e)},
            ) from e

        self._initialized = True
        logger.debug(f"Opened agentstats database at {self.db_path}")

    def _apply_schema(self) -> None:
        """Apply the database schema from schema.sql."""
        schema_path = Path(__file__).parent / "schema.sql"

        if not schema_path.exists():
            logger.error(f"Schema file not found: {schema_path}")
            raise FileNotFoundError(f"Schema file not found: {schema_path}")

        with open(schema_path) as f:
            schema_sql = f.read()

        # CREATE IF NOT EXISTS makes this idempotent
        self._conn.executescript(schema_sql)  # type: ignore
        logger.debug("Database schema applied")

    def close(self) -> None:
        """Close database connection."""
        if self._conn:
            self._conn.close()
            self._conn = None
            self._initialized = False

    @contextmanager
    def transaction(self) -> Generator[sqlite3.Cursor, None, None]:
        """
        Execute operations in a write transaction.

        BEGIN IMMEDIATE takes the write lock up front so a read-then-write
        sequence cannot be interleaved with another process.

        Usage:
            with repo.transaction() as cursor:
                cursor.execute(...)
        """
        cursor = self.conn.cursor()
        try:
            cursor.execute("BEGIN IMMEDIATE")
            yield cursor
            cursor.execute("COMMIT")
        except Exception:
            if self.conn.in_transaction:
                cursor.execute("ROLLBACK")
            raise
        finally:
            cursor.close()

    # =========================================================================
    # PROJECT OPERATIONS
    # =========================================================================

    def _find_project(self, where: str, value: str) -> Project | None:
        cursor = self.conn.cursor()
        cursor.execute(f"SELECT {Project.COLUMNS} FROM projects WHERE {where} = ?", (value,))
        row = cursor.fetchone()
        return Project.from_row(row) if row else None

    def get_project(self, project_id: str) -> Project | None:
        """Get project by ID."""
        return self._find_project("id", project_id)

    def find_project_by_origin(self, origin: str) -> Project | None:
        """Get the project whose git origin matches exactly."""
        if not origin:
            return None
        return self._find_project("git_origin", origin)

    def find_project_by_directory(self, directory: str) -> Project | None:
        """Get the project stored under a canonical directory."""
        return self._find_project("directory", directory)

    def insert_project(self, project: Project) -> Project:
        """
        Insert a new project row.

        Raises:
            sqlite3.IntegrityError: If the directory or origin is already taken
        """
        self.conn.execute(
            f"INSERT INTO projects ({Project.COLUMNS}) VALUES (?, ?, ?, ?)",
            project.to_row(),
        )
        logger.info(f"Created project {project.id[:8]} for {project.directory}")
        return project

    def update_project_directory(self, project_id: str, directory: str) -> bool:
        """
        Move a project to a new directory. The id is left unchanged.

        Raises:
            sqlite3.IntegrityError: If another project already owns the directory
        """
        cursor = self.conn.cursor()
        cursor.execute(
            "UPDATE projects SET directory = ? WHERE id = ? AND directory != ?",
            (directory, project_id, directory),
        )
        return cursor.rowcount > 0

    def list_projects(self) -> list[Project]:
        """List all projects, newest first."""
        cursor = self.conn.cursor()
        cursor.execute(f"SELECT {Project.COLUMNS} FROM projects ORDER BY created_at DESC")
        return [Project.from_row(row) for row in cursor.fetchall()]

    # =========================================================================
    # SESSION OPERATIONS
    # =========================================================================

    def ensure_session(self, session: Session, cursor: sqlite3.Cursor | None = None) -> bool:
        """
        Insert the session unless its id already exists.

        A single INSERT OR IGNORE, so concurrent first prompts of the same
        session neither fail nor duplicate. The first project wins.

        Returns:
            True if a new row was inserted
        """
        cursor = cursor or self.conn.cursor()
        cursor.execute(
            f"INSERT OR IGNORE INTO sessions ({Session.COLUMNS}) VALUES (?, ?, ?, ?)",
            session.to_row(),
        )
        created = cursor.rowcount > 0
        if created:
            logger.debug(f"Created session {session.id[:12]} for project {session.project_id[:8]}")
        return created

    def get_session(self, session_id: str) -> Session | None:
        """Get session by ID."""
        cursor = self.conn.cursor()
        cursor.execute(f"SELECT {Session.COLUMNS} FROM sessions WHERE id = ?", (session_id,))
        row = cursor.fetchone()
        return Session.from_row(row) if row else None

    def count_sessions(self, session_id: str) -> int:
        """Number of rows stored under a session id (0 or 1)."""
        cursor = self.conn.cursor()
        cursor.execute("SELECT COUNT(*) FROM sessions WHERE id = ?", (session_id,))
        return cursor.fetchone()[0]

    # =========================================================================
    # PROMPT OPERATIONS
    # =========================================================================

    def insert_prompt(self, prompt: Prompt, cursor: sqlite3.Cursor | None = None) -> Prompt:
        """Insert a newly submitted prompt."""
        cursor = cursor or self.conn.cursor()
        cursor.execute(
            f"INSERT INTO prompts ({Prompt.COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)",
            prompt.to_row(),
        )
        return prompt

    def close_latest_open_prompt(
        self,
        session_id: str,
        completed_at: datetime,
        git_hash_end: str | None = None,
    ) -> str | None:
        """
        Complete the most recently submitted open prompt of a session.

        Ties on submitted_at fall back to insertion order.

        Returns:
            ID of the completed prompt, or None if the session had no open prompt
        """
        with self.transaction() as cursor:
            cursor.execute(
                """SELECT id FROM prompts
                   WHERE session_id = ? AND completed_at IS NULL
                   ORDER BY submitted_at DESC, rowid DESC
                   LIMIT 1""",
                (session_id,),
            )
            row = cursor.fetchone()
            if row is None:
                return None

            cursor.execute(
                """UPDATE prompts
                   SET completed_at = ?, git_hash_end = ?
                   WHERE id = ? AND completed_at IS NULL""",
                (to_iso(completed_at), none_if_empty(git_hash_end), row[0]),
            )
            return row[0] if cursor.rowcount > 0 else None

    def get_prompt(self, prompt_id: str) -> Prompt | None:
        """Get prompt by ID."""
        cursor = self.conn.cursor()
        cursor.execute(f"SELECT {Prompt.COLUMNS} FROM prompts WHERE id = ?", (prompt_id,))
        row = cursor.fetchone()
        return Prompt.from_row(row) if row else None

    def list_prompts(self, session_id: str) -> list[Prompt]:
        """All prompts of a session in submission order."""
        cursor = self.conn.cursor()
        cursor.execute(
            f"""SELECT {Prompt.COLUMNS} FROM prompts
                WHERE session_id = ?
                ORDER BY submitted_at, rowid""",
            (session_id,),
        )
        return [Prompt.from_row(row) for row in cursor.fetchall()]

    # =========================================================================
    # REPORT QUERIES
    # =========================================================================

    def get_project_stats(self, project_id: str) -> dict[str, Any]:
        """
        Aggregate prompt counts and working time for a project.

        Returns:
            Dict with total_prompts, completed_prompts, total_seconds,
            first_submitted_at, last_submitted_at (ISO strings or None)
        """
        cursor = self.conn.cursor()
        cursor.execute(
            """SELECT
                   COUNT(*),
                   COUNT(completed_at),
                   COALESCE(SUM(
                       CASE WHEN completed_at IS NOT NULL
                       THEN (julianday(completed_at) - julianday(submitted_at)) * 86400.0
                       ELSE 0 END
                   ), 0),
                   MIN(submitted_at),
                   MAX(submitted_at)
               FROM prompts
               WHERE project_id = ?""",
            (project_id,),
        )
        row = cursor.fetchone()
        return {
            "total_prompts": row[0],
            "completed_prompts": row[1],
            "total_seconds": float(row[2] or 0.0),
            "first_submitted_at": row[3],
            "last_submitted_at": row[4],
        }

    def get_prompt_history(self, project_id: str, limit: int = 50) -> list[Prompt]:
        """Most recent prompts of a project, newest first."""
        cursor = self.conn.cursor()
        cursor.execute(
            f"""SELECT {Prompt.COLUMNS} FROM prompts
                WHERE project_id = ?
                ORDER BY submitted_at DESC, rowid DESC
                LIMIT ?""",
            (project_id, limit),
        )
        return [Prompt.from_row(row) for row in cursor.fetchall()]
