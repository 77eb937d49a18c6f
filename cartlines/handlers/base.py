"""Base Handler for line item types.

Defines the interface every line item handler implements. The registry
asks each handler whether it supports a type tag and delegates creation
and updates to the first one that does.
"""

from abc import ABC, abstractmethod
from typing import Any, Mapping
from uuid import uuid4

from cartlines.errors import ERROR_FIELD_REQUIRED, LineItemNotStackableError, ValidationError
from cartlines.logging import get_logger
from cartlines.models import LineItem, LineItemRequest, LineItemUpdate, parse_request

logger = get_logger(__name__)


class LineItemHandler(ABC):
    """Creates and updates line items of one type.

    Subclasses set `line_item_type` and implement `create()`. The default
    `update()` applies the fields named in `updatable_fields` and ignores
    everything else in the update data.
    """

    line_item_type: str = ""
    updatable_fields: frozenset[str] = frozenset()

    def supports(self, line_item_type: Any) -> bool:
        """Check if this handler builds line items of the given type.

        Must stay pure and total: any input yields a bool.
        """
        return isinstance(line_item_type, str) and line_item_type == self.line_item_type

    @abstractmethod
    def create(self, data: Mapping[str, Any], context: Any = None) -> LineItem:
        """Build a new line item from caller data.

        Args:
            data: Mapping with `type` plus handler-specific fields
            context: Caller environment, opaque to the registry

        Returns:
            Fully populated LineItem

        Raises:
            ValidationError: If a field this handler needs is missing or malformed
        """

    def update(self, line_item: LineItem, data: Mapping[str, Any], context: Any = None) -> None:
        """Apply recognized fields from `data` onto `line_item` in place.

        Raises:
            ValidationError: If a recognized field is malformed
        """
        if not isinstance(data, Mapping):
            raise ValidationError("data", "Update data must be a mapping")
        update = parse_request(LineItemUpdate, data)
        changes = update.changes(self.updatable_fields)
        if not changes:
            return
        # Nothing is assigned until every change has been checked
        changes = self.prepare_changes(line_item, changes, context)
        self.apply_changes(line_item, changes, context)

    def prepare_changes(self, line_item: LineItem, changes: dict[str, Any], context: Any = None) -> dict[str, Any]:
        """Check and normalize changes without touching the line item.

        Subclasses extend this with their own field rules and return the
        (possibly rewritten) changes.

        Raises:
            ValidationError: If a change is not acceptable
            LineItemNotStackableError: If quantity changes on a non-stackable item
        """
        quantity = changes.get("quantity")
        if quantity is not None and quantity != line_item.quantity and not line_item.stackable:
            raise LineItemNotStackableError(line_item.id)
        return changes

    def apply_changes(self, line_item: LineItem, changes: dict[str, Any], context: Any = None) -> None:
        """Assign changes already checked by prepare_changes()."""
        for name, value in changes.items():
            if name == "quantity":
                if value is not None:
                    line_item.change_quantity(value)
            elif name == "payload":
                # Shallow merge: keys not mentioned are kept
                if value is not None:
                    line_item.payload.update(value)
            else:
                setattr(line_item, name, value)

        logger.debug(f"Updated {self.line_item_type} line item fields: {sorted(changes)}")

    # Helpers for subclasses

    def parse(self, data: Mapping[str, Any]) -> LineItemRequest:
        """Validate create data against the common request schema."""
        return parse_request(LineItemRequest, data)

    @staticmethod
    def new_id() -> str:
        """Generate a line item id."""
        return uuid4().hex

    @staticmethod
    def require(value: Any, field: str) -> None:
        """Raise ValidationError if value is None or empty."""
        if value is None or value == "":
            raise ValidationError(field, ERROR_FIELD_REQUIRED)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(line_item_type={self.line_item_type!r})"
