"""JSON document storage backend.

The whole catalog lives in one file shaped as ``{"items": [...]}``, where each
record is ``{"name", "category", "image"}``. Every write is a read-modify-write
of the full document, so writers are serialized for the entire cycle:

- a ``threading.Lock`` for callers in this process,
- a ``filelock.FileLock`` on ``<document>.lock`` for other processes.

The new document is written to a temporary sibling and moved into place with
``os.replace``, so readers never see a partial file and can skip the lock.
"""

import json
import logging
import os
import tempfile
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from filelock import FileLock, Timeout

from ..core.categories import DocumentCategoryResolver
from ..core.deadline import Deadline, ensure_deadline
from ..core.errors import DeadlineExceeded, StorageError
from ..core.models import Category, Item
from .base import ItemStore

logger = logging.getLogger(__name__)

ITEMS_KEY = "items"
RECORD_FIELDS = ("name", "category", "image")


class JSONItemStore(ItemStore):
    """Stores all items as a single JSON document."""

    backend = "json"

    def __init__(self, document_path: str | Path = "data/items.json"):
        self.document_path = Path(document_path)
        self.document_path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()
        self._file_lock = FileLock(str(self.document_path) + ".lock")

    def _read_document(self) -> dict:
        """Load the document; a missing or empty file is an empty catalog."""
        try:
            with open(self.document_path, "r", encoding="utf-8") as f:
                raw = f.read()
        except FileNotFoundError:
            return {ITEMS_KEY: []}
        except OSError as e:
            logger.error("Could not read %s: %s", self.document_path, e)
            raise StorageError(f"Could not read {self.document_path}: {e}") from e

        if not raw.strip():
            return {ITEMS_KEY: []}

        try:
            document = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error("Malformed document %s: %s", self.document_path, e)
            raise StorageError(f"Malformed document {self.document_path}: {e}") from e

        if not isinstance(document, dict):
            raise StorageError(f"Malformed document {self.document_path}: expected an object")
        items = document.setdefault(ITEMS_KEY, [])
        if not isinstance(items, list):
            raise StorageError(f"Malformed document {self.document_path}: '{ITEMS_KEY}' is not a list")
        for record in items:
            if not isinstance(record, dict) or not all(
                isinstance(record.get(key), str) for key in RECORD_FIELDS
            ):
                raise StorageError(f"Malformed item record in {self.document_path}: {record!r}")
        return document

    def _write_document(self, document: dict) -> None:
        """Atomically replace the document file."""
        fd, tmp = tempfile.mkstemp(
            prefix=self.document_path.name + ".",
            suffix=".tmp",
            dir=self.document_path.parent,
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(document, f, ensure_ascii=False, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp, self.document_path)
        except OSError as e:
            Path(tmp).unlink(missing_ok=True)
            logger.error("Could not write %s: %s", self.document_path, e)
            raise StorageError(f"Could not write {self.document_path}: {e}") from e

    @contextmanager
    def _exclusive(self, deadline: Optional[Deadline]) -> Iterator[dict]:
        """Hold both writer locks and yield the document for mutation.

        The document is written back when the block exits without error.
        """
        deadline = ensure_deadline(deadline)
        deadline.check("document lock wait")
        if not self._lock.acquire(timeout=deadline.lock_timeout()):
            raise DeadlineExceeded(f"Timed out waiting for {self.document_path}")
        try:
            try:
                self._file_lock.acquire(timeout=deadline.lock_timeout())
            except Timeout as e:
                raise DeadlineExceeded(f"Timed out waiting for lock on {self.document_path}") from e
            try:
                document = self._read_document()
                yield document
                deadline.check("document write")
                self._write_document(document)
            finally:
                self._file_lock.release()
        finally:
            self._lock.release()

    @staticmethod
    def _to_items(records: list[dict]) -> list[Item]:
        ids = {c.name: c.id for c in DocumentCategoryResolver(records).list_categories()}
        return [Item.from_dict(record, category_id=ids[record["category"]]) for record in records]

    def add_item(
        self,
        name: str,
        category_name: str,
        image_filename: str,
        deadline: Optional[Deadline] = None,
    ) -> Item:
        with self._exclusive(deadline) as document:
            records = document[ITEMS_KEY]
            category_id = DocumentCategoryResolver(records).resolve(category_name)
            item = Item(
                name=name,
                category=category_name,
                category_id=category_id,
                image_filename=image_filename,
            )
            records.append(item.to_dict())
        return item

    def list_items(self, deadline: Optional[Deadline] = None) -> list[Item]:
        deadline = ensure_deadline(deadline)
        deadline.check("document read")
        return self._to_items(self._read_document()[ITEMS_KEY])

    def list_categories(self, deadline: Optional[Deadline] = None) -> list[Category]:
        deadline = ensure_deadline(deadline)
        deadline.check("document read")
        return DocumentCategoryResolver(self._read_document()[ITEMS_KEY]).list_categories()
