"""Cart package: model and service facade."""
from .models import Cart
from .service import CartService

__all__ = [
    "Cart",
    "CartService",
]
