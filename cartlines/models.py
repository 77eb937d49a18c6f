"""
Line item models.

- LineItem: the cart entry built and mutated by handlers
- LineItemRequest / LineItemUpdate: pydantic schemas for caller data
"""
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from cartlines.errors import (
    ERROR_FIELD_REQUIRED,
    ERROR_QUANTITY_INVALID,
    LineItemNotStackableError,
    ValidationError,
)
from cartlines.money import to_decimal

# Fields that can never be reassigned once a LineItem exists
IMMUTABLE_FIELDS = frozenset({"id", "type"})


class LineItemType(str, Enum):
    """Line item types shipped with default handlers."""
    PRODUCT = "product"
    PROMOTION = "promotion"
    CREDIT = "credit"
    CUSTOM = "custom"


def _check_quantity(quantity: Any) -> None:
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
        raise ValidationError("quantity", ERROR_QUANTITY_INVALID)


@dataclass
class LineItem:
    """Single entry in a cart."""
    id: str
    type: str
    referenced_id: Optional[str] = None
    quantity: int = 1
    payload: dict[str, Any] = field(default_factory=dict)
    label: Optional[str] = None
    price: Optional[Decimal] = None  # Caller-supplied unit price, custom items only
    stackable: bool = True
    removable: bool = True
    good: bool = True

    def __post_init__(self):
        if not self.id or not isinstance(self.id, str):
            raise ValidationError("id", ERROR_FIELD_REQUIRED)
        if not self.type or not isinstance(self.type, str):
            raise ValidationError("type", ERROR_FIELD_REQUIRED)
        _check_quantity(self.quantity)
        if self.price is not None:
            self.price = to_decimal(self.price)

    def __setattr__(self, name: str, value: Any) -> None:
        if name in IMMUTABLE_FIELDS and name in self.__dict__:
            raise AttributeError(f"LineItem.{name} cannot be changed after creation")
        super().__setattr__(name, value)

    def change_quantity(self, quantity: int) -> None:
        """
        Set a new quantity.

        Raises:
            ValidationError: If quantity is not a positive integer
            LineItemNotStackableError: If the item is not stackable
        """
        _check_quantity(quantity)
        if quantity == self.quantity:
            return
        if not self.stackable:
            raise LineItemNotStackableError(self.id)
        self.quantity = quantity

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "type": self.type,
            "referenced_id": self.referenced_id,
            "quantity": self.quantity,
            "payload": _serialize_payload(self.payload),
            "label": self.label,
            "price": str(self.price) if self.price is not None else None,
            "stackable": self.stackable,
            "removable": self.removable,
            "good": self.good,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LineItem":
        """Create from dictionary."""
        try:
            line_item_id = data["id"]
            line_item_type = data["type"]
        except KeyError as e:
            raise ValidationError(str(e.args[0]), ERROR_FIELD_REQUIRED) from e

        price = data.get("price")
        return cls(
            id=line_item_id,
            type=line_item_type,
            referenced_id=data.get("referenced_id"),
            quantity=data.get("quantity", 1),
            payload=dict(data.get("payload") or {}),
            label=data.get("label"),
            price=to_decimal(price) if price is not None else None,
            stackable=data.get("stackable", True),
            removable=data.get("removable", True),
            good=data.get("good", True),
        )


def _serialize_payload(payload: dict[str, Any]) -> dict[str, Any]:
    return {
        key: str(value) if isinstance(value, Decimal) else value
        for key, value in payload.items()
    }


# ============================================================
# Request schemas
# ============================================================

def _reject_bool(v: Any) -> Any:
    if isinstance(v, bool):
        raise ValueError(ERROR_QUANTITY_INVALID)
    return v


class LineItemRequest(BaseModel):
    """Data accepted when creating a line item."""
    type: str = Field(min_length=1)
    id: Optional[str] = Field(default=None, min_length=1)
    referenced_id: Optional[str] = Field(default=None, alias="referencedId")
    quantity: int = Field(default=1, ge=1)
    payload: dict[str, Any] = Field(default_factory=dict)
    label: Optional[str] = None
    price: Optional[Decimal] = None
    stackable: Optional[bool] = None
    removable: Optional[bool] = None

    class Config:
        extra = "ignore"  # Handler-specific keys are read from the raw mapping
        populate_by_name = True

    @field_validator("quantity", mode="before")
    @classmethod
    def reject_bool_quantity(cls, v):
        return _reject_bool(v)

    @field_validator("payload", mode="before")
    @classmethod
    def default_payload(cls, v):
        return {} if v is None else v


class LineItemUpdate(BaseModel):
    """Partial update; only explicitly supplied fields are applied."""
    referenced_id: Optional[str] = Field(default=None, alias="referencedId")
    quantity: Optional[int] = Field(default=None, ge=1)
    payload: Optional[dict[str, Any]] = None
    label: Optional[str] = None
    price: Optional[Decimal] = None

    class Config:
        extra = "ignore"
        populate_by_name = True

    @field_validator("quantity", mode="before")
    @classmethod
    def reject_bool_quantity(cls, v):
        return _reject_bool(v)

    def changes(self, allowed: frozenset[str]) -> dict[str, Any]:
        """Explicitly supplied fields that are in `allowed`, in schema order."""
        return {
            name: getattr(self, name)
            for name in type(self).model_fields
            if name in self.model_fields_set and name in allowed
        }


SchemaT = TypeVar("SchemaT", bound=BaseModel)


def parse_request(schema: Type[SchemaT], data: Mapping[str, Any]) -> SchemaT:
    """
    Validate caller data against a schema.

    Raises:
        ValidationError: Carrying the first offending field name
    """
    try:
        return schema.model_validate(dict(data))
    except PydanticValidationError as e:
        error = e.errors()[0]
        field_name = ".".join(str(part) for part in error["loc"]) or "data"
        raise ValidationError(field_name, error["msg"]) from e
