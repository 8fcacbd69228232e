"""Item Catalog - Named items with categories and content-addressed images.

Package structure:
    itemdb/
    ├── cli.py              # Command-line interface
    ├── catalog.py          # ItemCatalog: add, list, position lookup, search
    ├── config.py           # Settings (YAML file + environment)
    ├── log.py              # Logging setup
    ├── core/               # Core business logic
    │   ├── models.py       # Data models (Item, Category)
    │   ├── addresser.py    # SHA-256 content addressing
    │   ├── categories.py   # Category find-or-create
    │   ├── deadline.py     # Request-scoped deadlines
    │   └── errors.py       # Error types
    ├── storage/            # Data persistence
    │   ├── database.py     # SQLite item store
    │   ├── document.py     # JSON document item store
    │   └── images.py       # Content-addressed image directory
    └── api/                # External integrations
        └── catalog_api.py  # Catalog server client
"""

from .core.models import Category, Item
from .core.addresser import ContentAddresser
from .core.deadline import Deadline
from .core.errors import (
    CatalogError,
    DeadlineExceeded,
    NotFoundError,
    StorageError,
    ValidationError,
)
from .storage.base import ItemStore
from .storage.database import SQLiteItemStore
from .storage.document import JSONItemStore
from .storage.images import ImageStore
from .catalog import ItemCatalog
from .config import Settings, build_catalog, load_settings, open_store
from .api.catalog_api import CatalogAPI, CatalogAPIError

__all__ = [
    # Core
    "Category",
    "Item",
    "ContentAddresser",
    "Deadline",
    "CatalogError",
    "DeadlineExceeded",
    "NotFoundError",
    "StorageError",
    "ValidationError",
    # Storage
    "ItemStore",
    "SQLiteItemStore",
    "JSONItemStore",
    "ImageStore",
    # Catalog
    "ItemCatalog",
    "Settings",
    "build_catalog",
    "load_settings",
    "open_store",
    # API
    "CatalogAPI",
    "CatalogAPIError",
]
