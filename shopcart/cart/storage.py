"""Redis-backed cart store, one JSON record per user."""
import json
from typing import Optional

from shopcart.db import RedisKeys
from shopcart.errors import ConflictError, PersistenceError
from shopcart.logging import get_logger

from .models import Cart

logger = get_logger(__name__)


class CartStore:
    """
    Persists carts in Redis under ``cart:{email}``.

    Records carry no TTL: a cart is created once and only ever emptied.
    """

    def __init__(self, redis) -> None:
        self.redis = redis

    async def find_by_user(self, email: str) -> Optional[Cart]:
        """Load the user's cart, or None if they never had one."""
        key = RedisKeys.cart_key(email)
        try:
            data = await self.redis.get(key)
        except Exception as e:
            logger.error("Failed to get cart from Redis: %s", type(e).__name__, exc_info=True)
            raise PersistenceError(f"Cart store unavailable: {e}") from e

        if not data:
            return None

        try:
            return Cart.from_dict(json.loads(data))
        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            logger.error("Corrupted cart record at %s: %s", key, type(e).__name__)
            raise PersistenceError("Corrupted cart record") from e

    async def create(self, email: str) -> Cart:
        """Create an empty cart; fails if one already exists for this user.

        Raises:
            ConflictError: another request created the cart first
            PersistenceError: Redis unavailable
        """
        cart = Cart(email=email, cart_items=[])
        try:
            created = await self.redis.set(
                RedisKeys.cart_key(email),
                json.dumps(cart.to_dict()),
                nx=True,
            )
        except Exception as e:
            logger.error("Failed to create cart in Redis: %s", type(e).__name__, exc_info=True)
            raise PersistenceError(f"Cart store unavailable: {e}") from e

        if not created:
            raise ConflictError("User cart creation failed because user already have a cart")
        return cart

    async def save(self, cart: Cart) -> Cart:
        """Overwrite the stored cart with ``cart``; ``updated_at`` moves only on success."""
        previous_updated_at = cart.updated_at
        cart.touch()
        try:
            await self.redis.set(RedisKeys.cart_key(cart.email), json.dumps(cart.to_dict()))
        except Exception as e:
            cart.updated_at = previous_updated_at
            logger.error("Failed to save cart to Redis: %s", type(e).__name__, exc_info=True)
            raise PersistenceError(f"Cart store unavailable: {e}") from e
        return cart
