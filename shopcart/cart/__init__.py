"""Cart package: models, storage, and service facade."""
from .models import CartItem, Cart
from .storage import CartStore
from .service import CartService, get_cart_service

__all__ = [
    "CartItem",
    "Cart",
    "CartStore",
    "CartService",
    "get_cart_service",
]
