"""Core business logic - data models, content addressing and categories."""

from .addresser import ContentAddresser
from .categories import CategoryResolver, DocumentCategoryResolver, SQLiteCategoryResolver
from .deadline import Deadline
from .errors import CatalogError, DeadlineExceeded, NotFoundError, StorageError, ValidationError
from .models import Category, Item

__all__ = [
    "ContentAddresser",
    "CategoryResolver",
    "DocumentCategoryResolver",
    "SQLiteCategoryResolver",
    "Deadline",
    "CatalogError",
    "DeadlineExceeded",
    "NotFoundError",
    "StorageError",
    "ValidationError",
    "Category",
    "Item",
]
