"""Storage layers - SQLite and JSON document item stores, image directory."""

from .base import ItemStore
from .database import SQLiteItemStore
from .document import JSONItemStore
from .images import ImageStore

__all__ = ["ItemStore", "SQLiteItemStore", "JSONItemStore", "ImageStore"]
