"""Promotion line items: a redeemed promotion code."""

from typing import Any, Mapping

from cartlines.handlers.base import LineItemHandler
from cartlines.models import LineItem, LineItemType


class PromotionLineItemHandler(LineItemHandler):
    """Builds `promotion` line items.

    The promotion code is the referenced id and is mirrored into
    `payload["code"]`. Quantity is always 1.
    """

    line_item_type = LineItemType.PROMOTION.value
    updatable_fields = frozenset({"referenced_id", "payload", "label"})

    def create(self, data: Mapping[str, Any], context: Any = None) -> LineItem:
        request = self.parse(data)
        self.require(request.referenced_id, "referencedId")

        return LineItem(
            id=request.id or self.new_id(),
            type=self.line_item_type,
            referenced_id=request.referenced_id,
            quantity=1,
            payload={**request.payload, "code": request.referenced_id},
            label=request.label,
            stackable=False,
            removable=True if request.removable is None else request.removable,
            good=False,
        )

    def prepare_changes(self, line_item: LineItem, changes: dict[str, Any], context: Any = None) -> dict[str, Any]:
        if "referenced_id" in changes:
            self.require(changes["referenced_id"], "referencedId")
        return super().prepare_changes(line_item, changes, context)

    def apply_changes(self, line_item: LineItem, changes: dict[str, Any], context: Any = None) -> None:
        super().apply_changes(line_item, changes, context)
        line_item.payload["code"] = line_item.referenced_id
