"""Category find-or-create, one resolver per storage backend.

Resolvers are bound to an open unit of work (a SQLite transaction or a
locked in-memory document) by the store that owns them, so resolution and
the item write that follows it commit together.
"""

import logging
import sqlite3
from abc import ABC, abstractmethod
from typing import Optional

from .models import Category

logger = logging.getLogger(__name__)


class CategoryResolver(ABC):
    """Maps a category name to a stable integer id."""

    @abstractmethod
    def find(self, name: str) -> Optional[int]:
        """Return the id of the category named exactly `name`, if any."""
        pass

    @abstractmethod
    def create(self, name: str) -> int:
        """Create the category `name` and return its id."""
        pass

    @abstractmethod
    def list_categories(self) -> list[Category]:
        pass

    def resolve(self, name: str) -> int:
        """Find-or-create the category `name`."""
        category_id = self.find(name)
        if category_id is None:
            category_id = self.create(name)
            logger.info("Created category %r with id %d", name, category_id)
        logger.info("Receive categoryID: %d", category_id)
        return category_id


class SQLiteCategoryResolver(CategoryResolver):
    """Resolver working inside the caller's SQLite transaction.

    `create` is an upsert against the UNIQUE(name) constraint, so two
    writers racing on a new name end up sharing a single row.
    """

    def __init__(self, conn: sqlite3.Connection):
        self._conn = conn

    def find(self, name: str) -> Optional[int]:
        row = self._conn.execute(
            "SELECT id FROM category WHERE name = ?", (name,)
        ).fetchone()
        return row[0] if row else None

    def create(self, name: str) -> int:
        self._conn.execute(
            "INSERT INTO category (name) VALUES (?) ON CONFLICT(name) DO NOTHING",
            (name,),
        )
        return self.find(name)

    def resolve(self, name: str) -> int:
        # Insert first and read back, rather than read-then-insert.
        category_id = self.create(name)
        logger.info("Receive categoryID: %d", category_id)
        return category_id

    def list_categories(self) -> list[Category]:
        rows = self._conn.execute("SELECT id, name FROM category ORDER BY id").fetchall()
        return [Category(id=row[0], name=row[1]) for row in rows]


class DocumentCategoryResolver(CategoryResolver):
    """Resolver over the item list of a JSON document.

    The document stores category names inline. A category's id is the
    1-based rank of its name's first appearance in storage order; items are
    append-only, so ids never change and are never reused.
    """

    def __init__(self, items: list[dict]):
        self._items = items
        self._pending: list[str] = []

    def _names(self) -> list[str]:
        names: list[str] = []
        seen: set[str] = set()
        for record in self._items:
            name = record["category"]
            if name not in seen:
                seen.add(name)
                names.append(name)
        for name in self._pending:
            if name not in seen:
                seen.add(name)
                names.append(name)
        return names

    def find(self, name: str) -> Optional[int]:
        names = self._names()
        if name in names:
            return names.index(name) + 1
        return None

    def create(self, name: str) -> int:
        # Becomes durable once the item referencing it is appended.
        self._pending.append(name)
        return self.find(name)

    def list_categories(self) -> list[Category]:
        return [Category(id=i, name=name) for i, name in enumerate(self._names(), start=1)]
