"""Cart model holding line items in insertion order."""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List

from cartlines.errors import (
    DuplicateLineItemError,
    LineItemNotFoundError,
    LineItemNotRemovableError,
)
from cartlines.models import LineItem


@dataclass
class Cart:
    """Shopping cart owning its line items."""
    token: str
    line_items: List[LineItem] = field(default_factory=list)
    created_at: str = ""
    updated_at: str = ""

    def __post_init__(self):
        now = datetime.now(timezone.utc).isoformat()
        if not self.created_at:
            self.created_at = now
        if not self.updated_at:
            self.updated_at = now

    def touch(self) -> None:
        self.updated_at = datetime.now(timezone.utc).isoformat()

    @property
    def total_quantity(self) -> int:
        """Total number of units in cart."""
        return sum(item.quantity for item in self.line_items)

    def has(self, line_item_id: str) -> bool:
        return any(item.id == line_item_id for item in self.line_items)

    def get(self, line_item_id: str) -> LineItem:
        """
        Get a line item by id.

        Raises:
            LineItemNotFoundError: If the cart has no such item
        """
        for item in self.line_items:
            if item.id == line_item_id:
                return item
        raise LineItemNotFoundError(line_item_id)

    def add(self, line_item: LineItem) -> LineItem:
        """
        Add a line item to the cart.

        Merging into an existing entry is CartService's job, since the
        item's handler has to validate the merged quantity.

        Returns:
            The added line item

        Raises:
            DuplicateLineItemError: If the id is already in the cart
        """
        if self.has(line_item.id):
            raise DuplicateLineItemError(line_item.id)

        self.line_items.append(line_item)
        self.touch()
        return line_item

    def remove(self, line_item_id: str) -> LineItem:
        """
        Remove a line item from the cart.

        Raises:
            LineItemNotFoundError: If the cart has no such item
            LineItemNotRemovableError: If the item is flagged non-removable
        """
        item = self.get(line_item_id)
        if not item.removable:
            raise LineItemNotRemovableError(line_item_id)
        self.line_items = [i for i in self.line_items if i.id != line_item_id]
        self.touch()
        return item

    def filter_type(self, line_item_type: str) -> List[LineItem]:
        """Line items of one type, in cart order."""
        return [item for item in self.line_items if item.type == line_item_type]

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "token": self.token,
            "line_items": [item.to_dict() for item in self.line_items],
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Cart":
        """Create from dictionary."""
        return cls(
            token=data["token"],
            line_items=[LineItem.from_dict(item) for item in data.get("line_items", [])],
            created_at=data.get("created_at", ""),
            updated_at=data.get("updated_at", ""),
        )
