"""
Line item errors.

Shared error messages plus the exception taxonomy raised by handlers,
the registry and the cart.
"""

from typing import Any

# Dispatch errors
ERROR_TYPE_REQUIRED = "Line item type is required"
ERROR_TYPE_NOT_SUPPORTED = "No handler supports line item type"
ERROR_AMBIGUOUS_HANDLER = "More than one handler supports line item type"

# Validation errors
ERROR_FIELD_REQUIRED = "Field is required"
ERROR_FIELD_INVALID = "Field is invalid"
ERROR_QUANTITY_INVALID = "Quantity must be a positive integer"

# Cart errors
ERROR_LINE_ITEM_NOT_FOUND = "Line item not found"
ERROR_LINE_ITEM_DUPLICATE = "Line item already in cart"
ERROR_LINE_ITEM_NOT_REMOVABLE = "Line item cannot be removed"
ERROR_LINE_ITEM_NOT_STACKABLE = "Line item quantity cannot be changed"


class LineItemError(Exception):
    """Base error for line item operations."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code


class TypeNotSupportedError(LineItemError):
    """No registered handler claims the line item type."""

    def __init__(self, line_item_type: Any) -> None:
        super().__init__(
            f"{ERROR_TYPE_NOT_SUPPORTED}: {line_item_type!r}",
            code="TYPE_NOT_SUPPORTED",
        )
        self.line_item_type = line_item_type


class AmbiguousHandlerError(LineItemError):
    """Several handlers claim the same type (strict resolution only)."""

    def __init__(self, line_item_type: str, handlers: list[str]) -> None:
        super().__init__(
            f"{ERROR_AMBIGUOUS_HANDLER}: {line_item_type!r} ({', '.join(handlers)})",
            code="AMBIGUOUS_HANDLER",
        )
        self.line_item_type = line_item_type
        self.handlers = handlers


class ValidationError(LineItemError):
    """Required field missing or malformed for the resolved handler."""

    def __init__(self, field: str, message: str = ERROR_FIELD_INVALID) -> None:
        super().__init__(f"{field}: {message}", code="VALIDATION_FAILED")
        self.field = field


class LineItemNotStackableError(LineItemError):
    """Quantity change attempted on a non-stackable line item."""

    def __init__(self, line_item_id: str) -> None:
        super().__init__(f"{ERROR_LINE_ITEM_NOT_STACKABLE}: {line_item_id}", code="NOT_STACKABLE")
        self.line_item_id = line_item_id


class LineItemNotFoundError(LineItemError):
    def __init__(self, line_item_id: str) -> None:
        super().__init__(f"{ERROR_LINE_ITEM_NOT_FOUND}: {line_item_id}", code="NOT_FOUND")
        self.line_item_id = line_item_id


class DuplicateLineItemError(LineItemError):
    def __init__(self, line_item_id: str) -> None:
        super().__init__(f"{ERROR_LINE_ITEM_DUPLICATE}: {line_item_id}", code="DUPLICATE")
        self.line_item_id = line_item_id


class LineItemNotRemovableError(LineItemError):
    def __init__(self, line_item_id: str) -> None:
        super().__init__(f"{ERROR_LINE_ITEM_NOT_REMOVABLE}: {line_item_id}", code="NOT_REMOVABLE")
        self.line_item_id = line_item_id
