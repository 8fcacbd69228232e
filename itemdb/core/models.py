"""Data models for catalog records."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Category:
    """A category name and its stable identifier."""

    id: int
    name: str

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name}


@dataclass(frozen=True)
class Item:
    """Represents one catalog entry."""

    name: str
    category: str  # display name
    image_filename: str  # <sha256 hex>.jpg
    category_id: Optional[int] = None
    id: Optional[int] = None  # assigned by the relational backend only

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "category": self.category,
            "image": self.image_filename,
        }

    @classmethod
    def from_dict(
        cls,
        data: dict,
        category_id: Optional[int] = None,
        item_id: Optional[int] = None,
    ) -> "Item":
        return cls(
            name=data["name"],
            category=data["category"],
            image_filename=data["image"],
            category_id=category_id,
            id=item_id,
        )

    def matches(self, keyword: str) -> bool:
        """Whole-field, case-sensitive equality against the searchable fields."""
        if keyword in (self.name, self.category, self.image_filename):
            return True
        return self.id is not None and str(self.id) == keyword
