"""User Repository - wallet writes.

All methods use async/await with supabase-py v2.
"""

from shopcart.config import USERS_TABLE
from shopcart.errors import PersistenceError
from shopcart.logging import get_logger
from shopcart.services.models import User
from shopcart.services.money import to_float

from .base import BaseRepository

logger = get_logger(__name__)


class UserRepository(BaseRepository):
    """User database operations."""

    async def save_wallet(self, user: User) -> User:
        """Persist user.wallet_money as-is.

        Raises:
            PersistenceError: the write failed or matched no row
        """
        try:
            result = await (
                self.client.table(USERS_TABLE)
                .update({"wallet_money": to_float(user.wallet_money)})
                .eq("id", user.id)
                .execute()
            )
        except Exception as e:
            # Don't log the user id (user-controlled), just the error type
            logger.error("Failed to save wallet: %s", type(e).__name__, exc_info=True)
            raise PersistenceError(f"User store unavailable: {e}") from e

        if not result.data:
            raise PersistenceError("Wallet update matched no user")
        return user
