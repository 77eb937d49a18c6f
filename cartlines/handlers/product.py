"""Product line items: entries pointing at a catalog product."""

from typing import Any, Callable, Mapping, Optional

from cartlines.errors import ValidationError
from cartlines.handlers.base import LineItemHandler
from cartlines.models import LineItem, LineItemType

ERROR_PRODUCT_NOT_FOUND = "Product not found"


class ProductLineItemHandler(LineItemHandler):
    """Builds `product` line items.

    `referencedId` is required and doubles as the line item id when the
    caller does not supply one, so the same product added twice lands on
    the same cart entry.

    Args:
        product_exists: Optional catalog lookup; returning False rejects the id
        max_quantity: Upper bound for quantity
    """

    line_item_type = LineItemType.PRODUCT.value
    updatable_fields = frozenset({"referenced_id", "quantity", "payload", "label"})

    def __init__(
        self,
        product_exists: Optional[Callable[[str], bool]] = None,
        max_quantity: int = 100,
    ) -> None:
        self.product_exists = product_exists
        self.max_quantity = max_quantity

    def create(self, data: Mapping[str, Any], context: Any = None) -> LineItem:
        request = self.parse(data)
        self.require(request.referenced_id, "referencedId")
        self._check_product(request.referenced_id)
        self._check_quantity(request.quantity)

        return LineItem(
            id=request.id or request.referenced_id,
            type=self.line_item_type,
            referenced_id=request.referenced_id,
            quantity=request.quantity,
            payload=dict(request.payload),
            label=request.label,
            stackable=True if request.stackable is None else request.stackable,
            removable=True if request.removable is None else request.removable,
            good=True,
        )

    def prepare_changes(self, line_item: LineItem, changes: dict[str, Any], context: Any = None) -> dict[str, Any]:
        if "referenced_id" in changes:
            self.require(changes["referenced_id"], "referencedId")
            self._check_product(changes["referenced_id"])
        if changes.get("quantity") is not None:
            self._check_quantity(changes["quantity"])
        return super().prepare_changes(line_item, changes, context)

    def _check_product(self, referenced_id: str) -> None:
        if self.product_exists is not None and not self.product_exists(referenced_id):
            raise ValidationError("referencedId", ERROR_PRODUCT_NOT_FOUND)

    def _check_quantity(self, quantity: int) -> None:
        if quantity > self.max_quantity:
            raise ValidationError("quantity", f"Quantity exceeds maximum of {self.max_quantity}")
