"""Custom line items: caller-defined label and price."""

from typing import Any, Mapping

from cartlines.handlers.base import LineItemHandler
from cartlines.models import LineItem, LineItemType


class CustomLineItemHandler(LineItemHandler):
    """Builds line items whose content is supplied entirely by the caller.

    Only `label` is required. Pass another `line_item_type` to reuse this
    handler for an application-specific tag.
    """

    updatable_fields = frozenset({"referenced_id", "quantity", "payload", "label", "price"})

    def __init__(self, line_item_type: str = LineItemType.CUSTOM.value) -> None:
        self.line_item_type = line_item_type

    def create(self, data: Mapping[str, Any], context: Any = None) -> LineItem:
        request = self.parse(data)
        self.require(request.label, "label")

        return LineItem(
            id=request.id or self.new_id(),
            type=self.line_item_type,
            referenced_id=request.referenced_id,
            quantity=request.quantity,
            payload=dict(request.payload),
            label=request.label,
            price=request.price,
            stackable=True if request.stackable is None else request.stackable,
            removable=True if request.removable is None else request.removable,
            good=False,
        )

    def prepare_changes(self, line_item: LineItem, changes: dict[str, Any], context: Any = None) -> dict[str, Any]:
        if "label" in changes:
            self.require(changes["label"], "label")
        return super().prepare_changes(line_item, changes, context)
