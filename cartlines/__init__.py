"""
cartlines - pluggable line item factories for shopping carts

This package contains:
- registry: LineItemFactoryRegistry and the default handler set
- handlers: product, promotion, credit and custom line item handlers
- models: LineItem and request schemas
- cart: in-memory cart and cart service
- errors: exception taxonomy

Note: Imports are lazy so that `cartlines.logging` and `cartlines.config`
can be loaded without pulling in the whole package.
"""

__all__ = [
    "LineItem",
    "LineItemFactoryRegistry",
    "build_default_registry",
    "TypeNotSupportedError",
    "ValidationError",
]


def __getattr__(name):
    """Lazy attribute access."""
    if name == "LineItem":
        from cartlines.models import LineItem
        return LineItem
    elif name == "LineItemFactoryRegistry":
        from cartlines.registry import LineItemFactoryRegistry
        return LineItemFactoryRegistry
    elif name == "build_default_registry":
        from cartlines.registry import build_default_registry
        return build_default_registry
    elif name == "TypeNotSupportedError":
        from cartlines.errors import TypeNotSupportedError
        return TypeNotSupportedError
    elif name == "ValidationError":
        from cartlines.errors import ValidationError
        return ValidationError
    raise AttributeError(f"module 'cartlines' has no attribute '{name}'")
