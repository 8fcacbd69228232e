"""SQLite storage backend for catalog items."""

import logging
import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from ..core.categories import SQLiteCategoryResolver
from ..core.deadline import Deadline, ensure_deadline
from ..core.errors import DeadlineExceeded, NotFoundError, StorageError
from ..core.models import Category, Item
from .base import ItemStore

logger = logging.getLogger(__name__)

SELECT_ITEMS = """
    SELECT items.id, items.name, items.category_id, items.image_filename, category.name
    FROM items
    JOIN category ON items.category_id = category.id
    ORDER BY items.id
"""

# Largest value SQLite can bind as an INTEGER.
SQLITE_MAX_INT = 2**63 - 1

# Statements between deadline checks in the progress handler.
PROGRESS_STEPS = 1000


class SQLiteItemStore(ItemStore):
    """Stores items and categories in two joined SQLite tables.

    One connection is opened at construction and shared by every caller
    until `close()`. Calls are serialized on an internal lock since the
    connection crosses request threads.
    """

    backend = "sqlite"

    def __init__(self, db_path: str | Path = "data/items.sqlite3"):
        self.db_path = Path(db_path) if str(db_path) != ":memory:" else db_path
        if isinstance(self.db_path, Path):
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()
        try:
            self._conn = sqlite3.connect(
                str(self.db_path),
                check_same_thread=False,
                isolation_level=None,
            )
            self._conn.execute("PRAGMA foreign_keys = ON")
            self._init_db()
        except sqlite3.Error as e:
            logger.error("Could not open database %s: %s", self.db_path, e)
            raise StorageError(f"Could not open database {self.db_path}: {e}") from e
        self._closed = False

    def _init_db(self):
        """Create the category and items tables if they don't exist."""
        self._conn.execute("""
            CREATE TABLE IF NOT EXISTS category (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL UNIQUE
            )
        """)
        self._conn.execute("""
            CREATE TABLE IF NOT EXISTS items (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL,
                category_id INTEGER NOT NULL REFERENCES category(id),
                image_filename TEXT NOT NULL
            )
        """)

    @contextmanager
    def _session(self, deadline: Optional[Deadline], write: bool = False) -> Iterator[sqlite3.Connection]:
        """Hold the connection for one unit of work, bounded by `deadline`.

        Writes run inside BEGIN IMMEDIATE and are rolled back on any error.
        """
        deadline = ensure_deadline(deadline)
        if self._closed:
            raise StorageError("Store is closed")
        deadline.check("database lock wait")
        if not self._lock.acquire(timeout=deadline.lock_timeout()):
            raise DeadlineExceeded(f"Timed out waiting for database {self.db_path}")
        try:
            if deadline.remaining() is not None:
                self._conn.set_progress_handler(lambda: 1 if deadline.expired else 0, PROGRESS_STEPS)
            try:
                if write:
                    self._conn.execute("BEGIN IMMEDIATE")
                    try:
                        yield self._conn
                    except BaseException:
                        self._conn.execute("ROLLBACK")
                        raise
                    self._conn.execute("COMMIT")
                else:
                    yield self._conn
            except sqlite3.OperationalError as e:
                if deadline.expired:
                    raise DeadlineExceeded(f"Database call interrupted by deadline: {e}") from e
                logger.error("Database error: %s", e)
                raise StorageError(f"Database error: {e}") from e
            except sqlite3.Error as e:
                logger.error("Database error: %s", e)
                raise StorageError(f"Database error: {e}") from e
            finally:
                self._conn.set_progress_handler(None, PROGRESS_STEPS)
        finally:
            self._lock.release()

    @staticmethod
    def _row_to_item(row) -> Item:
        """Convert a joined database row to an Item."""
        return Item(
            id=row[0],
            name=row[1],
            category_id=row[2],
            image_filename=row[3],
            category=row[4],
        )

    def add_item(
        self,
        name: str,
        category_name: str,
        image_filename: str,
        deadline: Optional[Deadline] = None,
    ) -> Item:
        with self._session(deadline, write=True) as conn:
            category_id = SQLiteCategoryResolver(conn).resolve(category_name)
            cursor = conn.execute(
                "INSERT INTO items (name, category_id, image_filename) VALUES (?, ?, ?)",
                (name, category_id, image_filename),
            )
            item_id = cursor.lastrowid
        return Item(
            id=item_id,
            name=name,
            category=category_name,
            category_id=category_id,
            image_filename=image_filename,
        )

    def list_items(self, deadline: Optional[Deadline] = None) -> list[Item]:
        with self._session(deadline) as conn:
            rows = conn.execute(SELECT_ITEMS).fetchall()
        return [self._row_to_item(row) for row in rows]

    def get_item_at(self, position: int, deadline: Optional[Deadline] = None) -> Item:
        if position < 0 or position > SQLITE_MAX_INT:
            raise NotFoundError(f"No item at position {position}")
        with self._session(deadline) as conn:
            row = conn.execute(SELECT_ITEMS + " LIMIT 1 OFFSET ?", (position,)).fetchone()
        if row is None:
            raise NotFoundError(f"No item at position {position}")
        return self._row_to_item(row)

    def count(self, deadline: Optional[Deadline] = None) -> int:
        with self._session(deadline) as conn:
            return conn.execute("SELECT COUNT(*) FROM items").fetchone()[0]

    def list_categories(self, deadline: Optional[Deadline] = None) -> list[Category]:
        with self._session(deadline) as conn:
            return SQLiteCategoryResolver(conn).list_categories()

    def close(self) -> None:
        with self._lock:
            if not self._closed:
                self._conn.close()
                self._closed = True
