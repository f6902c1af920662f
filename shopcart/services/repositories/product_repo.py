"""Product Repository - read-only catalog lookups."""
from typing import Optional

from pydantic import ValidationError

from shopcart.config import PRODUCTS_TABLE
from shopcart.errors import PersistenceError
from shopcart.logging import get_logger, sanitize_for_logging
from shopcart.services.models import Product

from .base import BaseRepository

logger = get_logger(__name__)


class ProductRepository(BaseRepository):
    """Product catalog operations."""

    async def get_by_id(self, product_id: str) -> Optional[Product]:
        """Get product by ID, or None if the catalog has no such product."""
        try:
            result = (
                await self.client.table(PRODUCTS_TABLE)
                .select("*")
                .eq("id", str(product_id))
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.error(
                "Catalog lookup failed for product %s: %s",
                sanitize_for_logging(product_id),
                type(e).__name__,
                exc_info=True,
            )
            raise PersistenceError(f"Catalog unavailable: {e}") from e

        if not result.data:
            return None

        try:
            return Product(**result.data[0])
        except ValidationError as e:
            logger.error(
                "Invalid catalog record for product %s: %d field errors",
                sanitize_for_logging(product_id),
                e.error_count(),
            )
            raise PersistenceError("Invalid catalog record") from e
