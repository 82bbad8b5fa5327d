# src/smart_reminder/tasks/task_db.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
import time
from pathlib import Path

from .errors import PersistenceReadFailure, PersistenceUnavailable, PersistenceWriteFailure
from .task_models import TaskRecord

logger = logging.getLogger(__name__)


class SqliteTaskDB:
    """
    SQLite persistence for reminder tasks.

    The schema is intentionally simple and migration-safe:
    - create table if missing
    - use PRAGMA table_info to detect missing columns
    - add columns with ALTER TABLE only when needed

    Every sqlite3 error is translated into the PersistenceError taxonomy.
    Each method opens its own short-lived connection.
    """

    def __init__(self, db_path: str | Path = "tasks.sqlite3") -> None:
        self._db_path = Path(db_path)
        try:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise PersistenceUnavailable(f"cannot create {self._db_path.parent}") from e
        self._ensure_schema()
        logger.info("SqliteTaskDB ready db=%s", self._db_path)

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        try:
            conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        except sqlite3.Error as e:
            raise PersistenceUnavailable(f"cannot open {self._db_path}") from e
        conn.row_factory = sqlite3.Row
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")
        return conn

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS tasks (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    title TEXT NOT NULL,
                    due_at REAL NOT NULL,
                    is_completed INTEGER NOT NULL DEFAULT 0,
                    created_at REAL NOT NULL DEFAULT 0,
                    updated_at REAL NOT NULL DEFAULT 0
                )
                """
            )

            cur.execute("PRAGMA table_info(tasks)")
            cols = {row["name"] for row in cur.fetchall()}

            def add_col(name: str, decl: str) -> None:
                if name in cols:
                    return
                cur.execute(f"ALTER TABLE tasks ADD COLUMN {name} {decl}")
                logger.info("SqliteTaskDB migration: added column %s", name)

            add_col("is_completed", "INTEGER NOT NULL DEFAULT 0")
            add_col("created_at", "REAL NOT NULL DEFAULT 0")
            add_col("updated_at", "REAL NOT NULL DEFAULT 0")

            conn.commit()
        except sqlite3.Error as e:
            raise PersistenceUnavailable(f"cannot prepare schema in {self._db_path}") from e
        finally:
            conn.close()

    @staticmethod
    def _row_to_record(row: sqlite3.Row) -> TaskRecord:
        return TaskRecord(
            id=int(row["id"]),
            title=str(row["title"] or ""),
            due_at=float(row["due_at"] or 0.0),
            is_completed=bool(row["is_completed"]),
        )

    # ---- TaskPersistence ----

    def fetch_all(self) -> list[TaskRecord]:
        conn = self._get_conn()
        try:
            cur = conn.execute(
                "SELECT id, title, due_at, is_completed FROM tasks ORDER BY id ASC"
            )
            return [self._row_to_record(r) for r in cur.fetchall()]
        except sqlite3.Error as e:
            raise PersistenceReadFailure("fetch_all failed") from e
        finally:
            conn.close()

    def insert(self, title: str, due_at: float, is_completed: bool = False) -> TaskRecord:
        if not title or not title.strip():
            raise PersistenceWriteFailure("title is required")

        now = time.time()
        conn = self._get_conn()
        try:
            cur = conn.execute(
                """
                INSERT INTO tasks(title, due_at, is_completed, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?)
                """,
                (title.strip(), float(due_at), int(bool(is_completed)), now, now),
            )
            conn.commit()
            rowid = cur.lastrowid
            if rowid is None:
                raise PersistenceWriteFailure("SQLite did not return lastrowid for tasks insert")
            record = TaskRecord(
                id=int(rowid),
                title=title.strip(),
                due_at=float(due_at),
                is_completed=bool(is_completed),
            )
            logger.debug("Task inserted id=%s due_at=%s", record.id, record.due_at)
            return record
        except sqlite3.Error as e:
            raise PersistenceWriteFailure("insert failed") from e
        finally:
            conn.close()

    def update_completion(self, task_id: int, is_completed: bool) -> None:
        self._write(
            "UPDATE tasks SET is_completed = ?, updated_at = ? WHERE id = ?",
            (int(bool(is_completed)), time.time(), int(task_id)),
            what="update_completion",
            task_id=task_id,
        )

    def delete(self, task_id: int) -> None:
        self._write(
            "DELETE FROM tasks WHERE id = ?",
            (int(task_id),),
            what="delete",
            task_id=task_id,
        )

    def _write(self, sql: str, params: tuple, *, what: str, task_id: int) -> None:
        conn = self._get_conn()
        try:
            cur = conn.execute(sql, params)
            conn.commit()
        except sqlite3.Error as e:
            raise PersistenceWriteFailure(f"{what} failed id={task_id}") from e
        finally:
            conn.close()
        if cur.rowcount != 1:
            raise PersistenceWriteFailure(f"{what}: no task with id={task_id}")
        logger.debug("Task %s id=%s", what, task_id)
