"""Line item handlers.

Each handler builds and updates line items of one type tag.
"""

from cartlines.handlers.base import LineItemHandler
from cartlines.handlers.credit import CreditLineItemHandler
from cartlines.handlers.custom import CustomLineItemHandler
from cartlines.handlers.product import ProductLineItemHandler
from cartlines.handlers.promotion import PromotionLineItemHandler

__all__ = [
    "LineItemHandler",
    "ProductLineItemHandler",
    "PromotionLineItemHandler",
    "CreditLineItemHandler",
    "CustomLineItemHandler",
]
