"""Line Item Factory Registry - entry point for building line items.

Holds the ordered list of handlers and dispatches create/update calls to
the first handler that supports a line item type. The registry never adds
the result to a cart; that is the caller's job (see cartlines.cart).
"""

from typing import Any, Callable, Iterable, Mapping, Optional

from cartlines.config import Settings, get_settings
from cartlines.errors import (
    ERROR_TYPE_REQUIRED,
    AmbiguousHandlerError,
    TypeNotSupportedError,
    ValidationError,
)
from cartlines.handlers import (
    CreditLineItemHandler,
    CustomLineItemHandler,
    LineItemHandler,
    ProductLineItemHandler,
    PromotionLineItemHandler,
)
from cartlines.logging import get_logger, sanitize_id_for_logging, sanitize_string_for_logging
from cartlines.models import LineItem

logger = get_logger(__name__)


class LineItemFactoryRegistry:
    """
    Dispatches line item creation and updates to registered handlers.

    Handlers are consulted in registration order and the first one whose
    `supports()` returns True wins. With `strict=True` a type claimed by
    more than one handler raises AmbiguousHandlerError instead.

    Usage:
        registry = LineItemFactoryRegistry([ProductLineItemHandler()])
        item = registry.create({"type": "product", "referencedId": "p1"}, context)
        registry.update(item, {"quantity": 3}, context)
    """

    def __init__(self, handlers: Iterable[LineItemHandler] = (), strict: bool = False):
        self._handlers: list[LineItemHandler] = []
        self.strict = strict
        for handler in handlers:
            self.register(handler)

    @property
    def handlers(self) -> tuple[LineItemHandler, ...]:
        """Registered handlers in resolution order."""
        return tuple(self._handlers)

    def register(self, handler: LineItemHandler) -> None:
        """Append a handler. Meant to be called at startup only.

        Raises:
            TypeError: If handler is not a LineItemHandler
        """
        if not isinstance(handler, LineItemHandler):
            raise TypeError(f"Expected LineItemHandler, got {type(handler).__name__}")
        self._handlers.append(handler)
        logger.info(f"Registered line item handler #{len(self._handlers)}: {handler!r}")

    def supports(self, line_item_type: Any) -> bool:
        """Check if any handler claims the type."""
        return any(handler.supports(line_item_type) for handler in self._handlers)

    def resolve(self, line_item_type: Any) -> LineItemHandler:
        """Find the handler for a line item type.

        Args:
            line_item_type: Type tag (e.g. 'product', 'promotion')

        Returns:
            The first registered handler supporting the type

        Raises:
            TypeNotSupportedError: If no handler supports the type
            AmbiguousHandlerError: If strict and several handlers match
        """
        matches = []
        for handler in self._handlers:
            if handler.supports(line_item_type):
                if not self.strict:
                    return handler
                matches.append(handler)

        if len(matches) > 1:
            raise AmbiguousHandlerError(line_item_type, [repr(h) for h in matches])
        if matches:
            return matches[0]

        logger.warning(
            f"No handler for line item type {sanitize_string_for_logging(str(line_item_type))}"
        )
        raise TypeNotSupportedError(line_item_type)

    def create(self, data: Mapping[str, Any], context: Any = None) -> LineItem:
        """Build a new line item with the handler for `data["type"]`.

        Args:
            data: Mapping with a non-empty `type` and handler-specific fields
            context: Caller environment, passed through untouched

        Returns:
            The LineItem produced by the handler, unchanged

        Raises:
            ValidationError: If `type` is missing or the handler rejects the data
            TypeNotSupportedError: If no handler supports the type
        """
        if not isinstance(data, Mapping):
            raise ValidationError("data", "Line item data must be a mapping")
        line_item_type = data.get("type")
        if not isinstance(line_item_type, str) or not line_item_type:
            raise ValidationError("type", ERROR_TYPE_REQUIRED)

        handler = self.resolve(line_item_type)
        logger.debug(f"Creating {sanitize_string_for_logging(line_item_type)} line item via {handler!r}")
        return handler.create(data, context)

    def update(self, line_item: LineItem, data: Mapping[str, Any], context: Any = None) -> None:
        """Apply `data` to an existing line item in place.

        Raises:
            TypeNotSupportedError: If no handler supports the item's type
            ValidationError: If the handler rejects the data
        """
        handler = self.resolve(line_item.type)
        logger.debug(
            f"Updating line item {sanitize_id_for_logging(line_item.id)} via {handler!r}"
        )
        handler.update(line_item, data, context)


def build_default_registry(
    settings: Optional[Settings] = None,
    product_exists: Optional[Callable[[str], bool]] = None,
) -> LineItemFactoryRegistry:
    """Registry with the product, promotion, credit and custom handlers.

    Args:
        settings: Registry settings (defaults to environment settings)
        product_exists: Optional catalog lookup for product references

    Returns:
        Configured LineItemFactoryRegistry
    """
    settings = settings or get_settings()
    return LineItemFactoryRegistry(
        [
            ProductLineItemHandler(product_exists=product_exists, max_quantity=settings.max_quantity),
            PromotionLineItemHandler(),
            CreditLineItemHandler(),
            CustomLineItemHandler(),
        ],
        strict=settings.strict_resolution,
    )
