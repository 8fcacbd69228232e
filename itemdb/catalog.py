"""Item catalog: ties content addressing, image storage and persistence together."""

import logging
from pathlib import Path
from typing import Optional

from .core.addresser import ContentAddresser
from .core.deadline import Deadline
from .core.errors import NotFoundError, ValidationError
from .core.models import Category, Item
from .storage.base import ItemStore
from .storage.images import ImageStore

logger = logging.getLogger(__name__)


class ItemCatalog:
    """Adds, lists and searches items.

    Holds no item state of its own; every read is answered from the store.
    """

    def __init__(self, store: ItemStore, images: ImageStore):
        self.store = store
        self.images = images

    def add_item(
        self,
        name: str,
        category_name: str,
        image_path: Optional[str | Path],
        deadline: Optional[Deadline] = None,
    ) -> Item:
        """Add an item whose image is already on disk at `image_path`.

        An empty name is accepted. The image must exist; it is copied into
        the image directory under its content-addressed name.
        """
        logger.info("Receive item: %s", name)
        logger.info("Receive category: %s", category_name)
        if not image_path:
            raise ValidationError("Image not found: no image was provided")
        image_path = Path(image_path)
        if not image_path.is_file():
            raise ValidationError(f"Image not found: {image_path}")

        image_filename = ContentAddresser.filename_for_path(image_path)
        self.images.adopt(image_path, image_filename)
        return self.store.add_item(name, category_name, image_filename, deadline)

    def list_all(self, deadline: Optional[Deadline] = None) -> list[Item]:
        return self.store.list_items(deadline)

    def get_by_position(self, position: int | str, deadline: Optional[Deadline] = None) -> Item:
        """Return the item at a zero-based position, given as int or decimal token."""
        if isinstance(position, str):
            token = position.strip()
            if not token.isdecimal():
                raise NotFoundError(f"Invalid item position: {position!r}")
            position = int(token)
        if position < 0:
            raise NotFoundError(f"No item at position {position}")
        return self.store.get_item_at(position, deadline)

    def search(self, keyword: str, deadline: Optional[Deadline] = None) -> list[Item]:
        """Items whose name, category, image filename or id equals `keyword` exactly."""
        return [item for item in self.store.list_items(deadline) if item.matches(keyword)]

    def categories(self, deadline: Optional[Deadline] = None) -> list[Category]:
        return self.store.list_categories(deadline)

    def count(self, deadline: Optional[Deadline] = None) -> int:
        return self.store.count(deadline)

    def close(self) -> None:
        self.store.close()
