"""Storage contract shared by the SQLite and JSON document backends."""

from abc import ABC, abstractmethod
from typing import Optional

from ..core.deadline import Deadline
from ..core.errors import NotFoundError
from ..core.models import Category, Item


class ItemStore(ABC):
    """Persists items and resolves their categories.

    A store owns its backing resource from construction until `close()`;
    use it as a context manager to scope that lifetime.
    """

    backend: str = ""

    @abstractmethod
    def add_item(
        self,
        name: str,
        category_name: str,
        image_filename: str,
        deadline: Optional[Deadline] = None,
    ) -> Item:
        """Append one item, resolving its category in the same write."""
        pass

    @abstractmethod
    def list_items(self, deadline: Optional[Deadline] = None) -> list[Item]:
        """Return every item in storage order."""
        pass

    @abstractmethod
    def list_categories(self, deadline: Optional[Deadline] = None) -> list[Category]:
        pass

    def get_item_at(self, position: int, deadline: Optional[Deadline] = None) -> Item:
        """Return the item at zero-based `position` in `list_items` order."""
        items = self.list_items(deadline)
        if not 0 <= position < len(items):
            raise NotFoundError(
                f"No item at position {position} (catalog holds {len(items)} item(s))"
            )
        return items[position]

    def count(self, deadline: Optional[Deadline] = None) -> int:
        return len(self.list_items(deadline))

    def close(self) -> None:
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
