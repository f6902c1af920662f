"""
Router dependencies.

Authentication belongs to the hosting application: it overrides
``get_current_user`` (``app.dependency_overrides[get_current_user] = ...``)
with a dependency that returns the signed-in ``User``.
"""
from fastapi import HTTPException

from shopcart.cart import CartService, get_cart_service
from shopcart.errors import ERROR_UNAUTHORIZED
from shopcart.services.models import User


async def get_current_user() -> User:
    """Placeholder that rejects every request until the host wires auth in."""
    raise HTTPException(status_code=401, detail=ERROR_UNAUTHORIZED)


async def get_service() -> CartService:
    return await get_cart_service()


__all__ = ["get_current_user", "get_service"]
