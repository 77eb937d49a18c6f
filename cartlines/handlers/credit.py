"""Credit line items: a monetary credit with no catalog reference."""

from typing import Any, Mapping, Optional

from cartlines.errors import ValidationError
from cartlines.handlers.base import LineItemHandler
from cartlines.models import LineItem, LineItemType
from cartlines.money import parse_amount

DEFAULT_CREDIT_LABEL = "Credit"


def _context_currency(context: Any) -> Optional[str]:
    if isinstance(context, Mapping):
        return context.get("currency")
    return getattr(context, "currency", None)


def _parse_amount(value: Any):
    try:
        return parse_amount(value)
    except ValueError as e:
        raise ValidationError("payload.amount", str(e)) from e


class CreditLineItemHandler(LineItemHandler):
    """Builds `credit` line items.

    `payload["amount"]` is required and stored as a Decimal. Any
    referenced id in the data is ignored.
    """

    line_item_type = LineItemType.CREDIT.value
    updatable_fields = frozenset({"payload", "label"})

    def create(self, data: Mapping[str, Any], context: Any = None) -> LineItem:
        request = self.parse(data)
        payload = dict(request.payload)
        payload["amount"] = _parse_amount(payload.get("amount"))

        currency = _context_currency(context)
        if currency and "currency" not in payload:
            payload["currency"] = currency

        return LineItem(
            id=request.id or self.new_id(),
            type=self.line_item_type,
            referenced_id=None,
            quantity=1,
            payload=payload,
            label=request.label or DEFAULT_CREDIT_LABEL,
            stackable=False,
            removable=True if request.removable is None else request.removable,
            good=False,
        )

    def prepare_changes(self, line_item: LineItem, changes: dict[str, Any], context: Any = None) -> dict[str, Any]:
        payload = changes.get("payload")
        if payload is not None and "amount" in payload:
            changes = {**changes, "payload": {**payload, "amount": _parse_amount(payload["amount"])}}
        return super().prepare_changes(line_item, changes, context)
