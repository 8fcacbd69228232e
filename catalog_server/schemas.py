"""Pydantic schemas for API responses."""
from pydantic import BaseModel

from itemdb.core.models import Item


class MessageResponse(BaseModel):
    """Plain message body, also used for errors."""
    message: str


class HealthResponse(BaseModel):
    status: str = "ok"


class ItemResponse(BaseModel):
    """A single item as seen by clients."""
    name: str
    category: str
    image: str

    @classmethod
    def from_item(cls, item: Item) -> "ItemResponse":
        return cls(**item.to_dict())


class ItemListResponse(BaseModel):
    """Response for /items and /search."""
    items: list[ItemResponse]

    @classmethod
    def from_items(cls, items: list[Item]) -> "ItemListResponse":
        return cls(items=[ItemResponse.from_item(item) for item in items])
