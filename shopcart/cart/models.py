"""Cart models with snapshot pricing."""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import List

from shopcart import config
from shopcart.services.models import Product
from shopcart.services.money import multiply


def _utcnow() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class CartItem:
    """Single line in the cart.

    ``product`` is a copy of the catalog record taken when the line was
    added; later catalog price changes do not reach it.
    """
    product: Product
    quantity: int

    @property
    def product_id(self) -> str:
        return self.product.id

    @property
    def total_cost(self) -> Decimal:
        """Snapshot cost times quantity."""
        return multiply(self.product.cost, self.quantity)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "product": self.product.model_dump(mode="json"),
            "quantity": self.quantity,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CartItem":
        """Create from dictionary."""
        return cls(
            product=Product(**data["product"]),
            quantity=int(data["quantity"]),
        )


@dataclass
class Cart:
    """A user's cart, keyed by email. Item order is insertion order."""
    email: str
    cart_items: List[CartItem] = field(default_factory=list)
    payment_option: str = config.DEFAULT_PAYMENT_OPTION
    created_at: str = ""
    updated_at: str = ""

    def __post_init__(self):
        now = _utcnow()
        if not self.created_at:
            self.created_at = now
        if not self.updated_at:
            self.updated_at = now

    @property
    def is_empty(self) -> bool:
        return not self.cart_items

    @property
    def total_cost(self) -> Decimal:
        """Sum of snapshot cost x quantity over all lines."""
        return sum((item.total_cost for item in self.cart_items), Decimal("0"))

    def find_item_index(self, product_id: str) -> int:
        """Index of the line holding ``product_id``, or -1."""
        wanted = str(product_id)
        for index, item in enumerate(self.cart_items):
            if item.product_id == wanted:
                return index
        return -1

    def has_product(self, product_id: str) -> bool:
        return self.find_item_index(product_id) != -1

    def touch(self) -> None:
        self.updated_at = _utcnow()

    def to_dict(self) -> dict:
        """Convert to dictionary for Redis storage."""
        return {
            "email": self.email,
            "cart_items": [item.to_dict() for item in self.cart_items],
            "payment_option": self.payment_option,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Cart":
        """Create from dictionary."""
        return cls(
            email=data["email"],
            cart_items=[CartItem.from_dict(item) for item in data.get("cart_items", [])],
            payment_option=data.get("payment_option", config.DEFAULT_PAYMENT_OPTION),
            created_at=data.get("created_at", ""),
            updated_at=data.get("updated_at", ""),
        )
