"""Pytest configuration and fixtures"""
import os
from typing import Any, Mapping

import pytest

# Set test environment variables
os.environ.setdefault("LOG_LEVEL", "DEBUG")
os.environ.setdefault("LINE_ITEM_DEFAULT_CURRENCY", "EUR")

from cartlines.config import Settings, get_settings  # noqa: E402
from cartlines.context import CartContext  # noqa: E402
from cartlines.handlers import LineItemHandler  # noqa: E402
from cartlines.models import LineItem  # noqa: E402
from cartlines.registry import build_default_registry  # noqa: E402


class ExampleHandler(LineItemHandler):
    """Handler for type 'example' that always uses quantity 1."""

    line_item_type = "example"
    updatable_fields = frozenset({"referenced_id", "label"})

    def __init__(self, label: str = "example"):
        self.label = label
        self.calls: list[tuple[str, Any]] = []

    def create(self, data: Mapping[str, Any], context: Any = None) -> LineItem:
        self.calls.append(("create", context))
        request = self.parse(data)
        return LineItem(
            id=request.id or self.new_id(),
            type=self.line_item_type,
            referenced_id=request.referenced_id,
            quantity=1,
            label=self.label,
        )

    def update(self, line_item: LineItem, data: Mapping[str, Any], context: Any = None) -> None:
        self.calls.append(("update", context))
        super().update(line_item, data, context)


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Reload settings from the environment for every test"""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings():
    """Default settings"""
    return Settings()


@pytest.fixture
def context():
    """Sample cart context"""
    return CartContext(sales_channel_id="web", currency="EUR", locale="de")


@pytest.fixture
def registry(settings):
    """Registry with the default handlers"""
    return build_default_registry(settings)


@pytest.fixture
def example_handler():
    """Handler that forces quantity to 1"""
    return ExampleHandler()


@pytest.fixture
def sample_product_data():
    """Sample product line item request"""
    return {
        "type": "product",
        "referencedId": "prod-123",
        "quantity": 2,
        "label": "ChatGPT Plus",
        "payload": {"sku": "GPT-PLUS"},
    }
