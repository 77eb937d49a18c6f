"""Tests for the default line item handlers"""
from decimal import Decimal

import pytest

from cartlines.errors import LineItemNotStackableError, ValidationError
from cartlines.handlers import (
    CreditLineItemHandler,
    CustomLineItemHandler,
    LineItemHandler,
    ProductLineItemHandler,
    PromotionLineItemHandler,
)


class TestHandlerBase:
    """Tests for the LineItemHandler contract."""

    @pytest.mark.parametrize("value", ["product", "", "PRODUCT", None, 1, object()])
    def test_supports_is_total(self, value):
        """Test supports() returns a bool for any input."""
        result = ProductLineItemHandler().supports(value)

        assert result is (value == "product")

    def test_handler_is_abstract(self):
        """Test create() must be implemented."""
        with pytest.raises(TypeError):
            LineItemHandler()

    def test_update_requires_mapping(self):
        """Test update data must be a mapping."""
        handler = CustomLineItemHandler()
        item = handler.create({"type": "custom", "label": "Gift wrap"})

        with pytest.raises(ValidationError):
            handler.update(item, "label")

    def test_rejected_update_leaves_item_unchanged(self):
        """Test no field is assigned when any change is refused."""
        handler = CustomLineItemHandler()
        item = handler.create({"type": "custom", "label": "old", "price": "1.00", "stackable": False})

        with pytest.raises(LineItemNotStackableError):
            handler.update(item, {"label": "new", "price": "9.99", "quantity": 3})

        assert item.label == "old"
        assert item.price == Decimal("1.00")
        assert item.quantity == 1

    def test_update_rejects_bool_quantity(self):
        handler = CustomLineItemHandler()
        item = handler.create({"type": "custom", "label": "Gift wrap", "quantity": 2})

        with pytest.raises(ValidationError) as exc_info:
            handler.update(item, {"quantity": True})

        assert exc_info.value.field == "quantity"
        assert item.quantity == 2

    def test_repr(self):
        assert repr(PromotionLineItemHandler()) == "PromotionLineItemHandler(line_item_type='promotion')"


class TestProductHandler:
    """Tests for product line items."""

    def test_create(self, sample_product_data, context):
        """Test creating a product line item."""
        item = ProductLineItemHandler().create(sample_product_data, context)

        assert item.id == "prod-123"
        assert item.type == "product"
        assert item.referenced_id == "prod-123"
        assert item.quantity == 2
        assert item.label == "ChatGPT Plus"
        assert item.payload == {"sku": "GPT-PLUS"}
        assert item.good is True
        assert item.stackable is True

    def test_create_with_explicit_id(self):
        """Test caller-supplied id wins."""
        item = ProductLineItemHandler().create({"type": "product", "referencedId": "p1", "id": "li-9"})

        assert item.id == "li-9"

    def test_create_accepts_snake_case(self):
        """Test referenced_id is accepted as well as referencedId."""
        item = ProductLineItemHandler().create({"type": "product", "referenced_id": "p1"})

        assert item.referenced_id == "p1"

    def test_create_default_quantity(self):
        item = ProductLineItemHandler().create({"type": "product", "referencedId": "p1"})

        assert item.quantity == 1

    def test_create_missing_referenced_id(self):
        """Test referencedId is required."""
        with pytest.raises(ValidationError) as exc_info:
            ProductLineItemHandler().create({"type": "product", "quantity": 1})

        assert exc_info.value.field == "referencedId"

    @pytest.mark.parametrize("quantity", [0, -1, "abc", 1.5, True])
    def test_create_invalid_quantity(self, quantity):
        """Test malformed quantity."""
        with pytest.raises(ValidationError) as exc_info:
            ProductLineItemHandler().create({"type": "product", "referencedId": "p1", "quantity": quantity})

        assert exc_info.value.field == "quantity"

    def test_create_quantity_above_maximum(self):
        """Test max_quantity is enforced."""
        handler = ProductLineItemHandler(max_quantity=10)

        with pytest.raises(ValidationError) as exc_info:
            handler.create({"type": "product", "referencedId": "p1", "quantity": 11})

        assert exc_info.value.field == "quantity"

    def test_create_unknown_product(self):
        """Test catalog lookup rejects unknown products."""
        handler = ProductLineItemHandler(product_exists=lambda product_id: product_id == "p1")

        assert handler.create({"type": "product", "referencedId": "p1"}).referenced_id == "p1"
        with pytest.raises(ValidationError) as exc_info:
            handler.create({"type": "product", "referencedId": "missing"})

        assert exc_info.value.field == "referencedId"

    def test_update(self):
        """Test updating recognized fields."""
        handler = ProductLineItemHandler()
        item = handler.create({"type": "product", "referencedId": "p1", "payload": {"a": 1}})

        handler.update(item, {"quantity": 4, "label": "New", "payload": {"b": 2}, "price": "9.99"})

        assert item.quantity == 4
        assert item.label == "New"
        assert item.payload == {"a": 1, "b": 2}
        assert item.price is None  # price is not updatable on products

    def test_update_rejects_clearing_reference(self):
        handler = ProductLineItemHandler()
        item = handler.create({"type": "product", "referencedId": "p1"})

        with pytest.raises(ValidationError):
            handler.update(item, {"referencedId": None})

        assert item.referenced_id == "p1"

    def test_update_quantity_above_maximum(self):
        handler = ProductLineItemHandler(max_quantity=3)
        item = handler.create({"type": "product", "referencedId": "p1"})

        with pytest.raises(ValidationError):
            handler.update(item, {"quantity": 4})

        assert item.quantity == 1

    def test_rejected_update_over_maximum_keeps_label(self):
        handler = ProductLineItemHandler(max_quantity=3)
        item = handler.create({"type": "product", "referencedId": "p1", "label": "Old"})

        with pytest.raises(ValidationError):
            handler.update(item, {"label": "New", "payload": {"a": 1}, "quantity": 4})

        assert item.label == "Old"
        assert item.payload == {}

    def test_update_non_stackable_quantity(self):
        """Test quantity changes are refused on non-stackable products."""
        handler = ProductLineItemHandler()
        item = handler.create({"type": "product", "referencedId": "p1", "stackable": False})

        with pytest.raises(LineItemNotStackableError):
            handler.update(item, {"quantity": 2})


class TestPromotionHandler:
    """Tests for promotion line items."""

    def test_create(self):
        """Test promotion quantity is fixed at 1."""
        item = PromotionLineItemHandler().create(
            {"type": "promotion", "referencedId": "SAVE10", "quantity": 5}
        )

        assert item.referenced_id == "SAVE10"
        assert item.quantity == 1
        assert item.payload["code"] == "SAVE10"
        assert item.stackable is False
        assert item.good is False

    def test_create_missing_code(self):
        with pytest.raises(ValidationError) as exc_info:
            PromotionLineItemHandler().create({"type": "promotion"})

        assert exc_info.value.field == "referencedId"

    def test_update_code(self):
        """Test the payload code follows the referenced id."""
        handler = PromotionLineItemHandler()
        item = handler.create({"type": "promotion", "referencedId": "SAVE10"})

        handler.update(item, {"referencedId": "SAVE20", "quantity": 3})

        assert item.referenced_id == "SAVE20"
        assert item.payload["code"] == "SAVE20"
        assert item.quantity == 1


class TestCreditHandler:
    """Tests for credit line items."""

    def test_create(self, context):
        """Test credit amount and currency."""
        item = CreditLineItemHandler().create(
            {"type": "credit", "referencedId": "ignored", "payload": {"amount": "-10.50"}},
            context,
        )

        assert item.referenced_id is None
        assert item.payload["amount"] == Decimal("-10.50")
        assert item.payload["currency"] == "EUR"
        assert item.label == "Credit"
        assert item.quantity == 1
        assert item.stackable is False

    def test_create_with_mapping_context(self):
        """Test a plain dict context is also read for currency."""
        item = CreditLineItemHandler().create(
            {"type": "credit", "payload": {"amount": 5}}, {"currency": "USD"}
        )

        assert item.payload["currency"] == "USD"

    def test_create_keeps_caller_currency(self, context):
        item = CreditLineItemHandler().create(
            {"type": "credit", "payload": {"amount": 5, "currency": "GBP"}}, context
        )

        assert item.payload["currency"] == "GBP"

    def test_create_without_context(self):
        item = CreditLineItemHandler().create({"type": "credit", "payload": {"amount": 1.1}})

        assert item.payload == {"amount": Decimal("1.1")}

    @pytest.mark.parametrize("payload", [{}, {"amount": None}, {"amount": "ten"}, {"amount": "NaN"}, {"amount": [1]}])
    def test_create_invalid_amount(self, payload):
        """Test the amount must be a finite number."""
        with pytest.raises(ValidationError) as exc_info:
            CreditLineItemHandler().create({"type": "credit", "payload": payload})

        assert exc_info.value.field == "payload.amount"

    def test_update_amount(self):
        handler = CreditLineItemHandler()
        item = handler.create({"type": "credit", "payload": {"amount": 5}})

        handler.update(item, {"payload": {"amount": "7.25"}, "label": "Store credit"})

        assert item.payload["amount"] == Decimal("7.25")
        assert item.label == "Store credit"

    def test_update_invalid_amount(self):
        handler = CreditLineItemHandler()
        item = handler.create({"type": "credit", "payload": {"amount": 5}})

        with pytest.raises(ValidationError):
            handler.update(item, {"payload": {"amount": "x"}, "label": "Changed"})

        assert item.payload["amount"] == Decimal("5")
        assert item.label == "Credit"


class TestCustomHandler:
    """Tests for custom line items."""

    def test_create(self):
        """Test caller-supplied label and price."""
        item = CustomLineItemHandler().create(
            {"type": "custom", "label": "Gift wrap", "price": "2.50", "quantity": 2}
        )

        assert item.type == "custom"
        assert item.label == "Gift wrap"
        assert item.price == Decimal("2.50")
        assert item.quantity == 2
        assert len(item.id) == 32

    def test_create_requires_label(self):
        with pytest.raises(ValidationError) as exc_info:
            CustomLineItemHandler().create({"type": "custom", "price": 1})

        assert exc_info.value.field == "label"

    def test_create_invalid_price(self):
        with pytest.raises(ValidationError) as exc_info:
            CustomLineItemHandler().create({"type": "custom", "label": "x", "price": "free"})

        assert exc_info.value.field == "price"

    def test_custom_type_tag(self):
        """Test reusing the handler for another tag."""
        handler = CustomLineItemHandler(line_item_type="engraving")

        assert handler.supports("engraving")
        assert not handler.supports("custom")
        assert handler.create({"type": "engraving", "label": "Initials"}).type == "engraving"

    def test_update(self):
        handler = CustomLineItemHandler()
        item = handler.create({"type": "custom", "label": "Gift wrap"})

        handler.update(item, {"price": 3, "quantity": 2})

        assert item.price == Decimal("3")
        assert item.quantity == 2
        assert item.label == "Gift wrap"

    def test_update_rejects_empty_label(self):
        handler = CustomLineItemHandler()
        item = handler.create({"type": "custom", "label": "Gift wrap"})

        with pytest.raises(ValidationError):
            handler.update(item, {"label": ""})
