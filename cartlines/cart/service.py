"""Cart service: builds line items through the registry and keeps them in a cart."""
from typing import Any, Mapping

from cartlines.errors import DuplicateLineItemError
from cartlines.logging import get_logger, sanitize_id_for_logging
from cartlines.models import LineItem
from cartlines.registry import LineItemFactoryRegistry

from .models import Cart

logger = get_logger(__name__)


def _same_entry(existing: LineItem, line_item: LineItem) -> bool:
    return (
        existing.stackable
        and existing.type == line_item.type
        and existing.referenced_id == line_item.referenced_id
    )


class CartService:
    """
    Cart operations on top of a LineItemFactoryRegistry.

    The registry only builds and updates line items; this service is the
    "add to cart" step that places them in a cart.

    Usage:
        service = CartService(build_default_registry())
        item = service.add_line_item(cart, {"type": "product", "referencedId": "p1"}, context)
        service.change_quantity(cart, item.id, 3, context)
        service.remove_line_item(cart, item.id)
    """

    def __init__(self, registry: LineItemFactoryRegistry):
        self.registry = registry

    def add_line_item(self, cart: Cart, data: Mapping[str, Any], context: Any = None) -> LineItem:
        """
        Create a line item from data and add it to the cart.

        If the cart already holds a stackable entry with the same id, type
        and referenced id, quantities are summed through the registry so
        the item's handler validates the new total.

        Raises:
            DuplicateLineItemError: If the id is taken by a different or non-stackable entry
        """
        line_item = self.registry.create(data, context)

        if not cart.has(line_item.id):
            stored = cart.add(line_item)
        else:
            stored = cart.get(line_item.id)
            if not _same_entry(stored, line_item):
                raise DuplicateLineItemError(line_item.id)
            self.registry.update(stored, {"quantity": stored.quantity + line_item.quantity}, context)
            cart.touch()

        logger.info(
            f"Added {stored.type} line item {sanitize_id_for_logging(stored.id)} "
            f"to cart {sanitize_id_for_logging(cart.token)} (qty={stored.quantity})"
        )
        return stored

    def update_line_item(
        self,
        cart: Cart,
        line_item_id: str,
        data: Mapping[str, Any],
        context: Any = None,
    ) -> LineItem:
        """Update a line item already in the cart."""
        line_item = cart.get(line_item_id)
        self.registry.update(line_item, data, context)
        cart.touch()
        logger.info(
            f"Updated line item {sanitize_id_for_logging(line_item_id)} "
            f"in cart {sanitize_id_for_logging(cart.token)}"
        )
        return line_item

    def change_quantity(
        self,
        cart: Cart,
        line_item_id: str,
        quantity: int,
        context: Any = None,
    ) -> LineItem:
        """Set a new quantity, validated by the item's handler."""
        return self.update_line_item(cart, line_item_id, {"quantity": quantity}, context)

    def remove_line_item(self, cart: Cart, line_item_id: str) -> LineItem:
        """Remove a line item from the cart."""
        removed = cart.remove(line_item_id)
        logger.info(
            f"Removed line item {sanitize_id_for_logging(line_item_id)} "
            f"from cart {sanitize_id_for_logging(cart.token)}"
        )
        return removed
