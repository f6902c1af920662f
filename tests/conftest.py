"""Pytest configuration and fixtures"""
import os
from decimal import Decimal
from typing import Any, Dict, Optional
from unittest.mock import AsyncMock, Mock

import pytest

# Set test environment variables
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test_key")
os.environ.setdefault("UPSTASH_REDIS_REST_URL", "https://test.upstash.io")
os.environ.setdefault("UPSTASH_REDIS_REST_TOKEN", "test_token")

from shopcart.cart import CartService, CartStore  # noqa: E402
from shopcart.services.models import Product, User  # noqa: E402


class FakeRedis:
    """In-memory stand-in for the async Upstash client (get/set with nx)."""

    def __init__(self):
        self.data: Dict[str, str] = {}
        self.fail_writes = False

    async def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    async def set(self, key: str, value: str, nx: bool = False, **_: Any):
        if self.fail_writes:
            raise ConnectionError("redis down")
        if nx and key in self.data:
            return None
        self.data[key] = value
        return True


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def cart_store(fake_redis):
    return CartStore(fake_redis)


@pytest.fixture
def sample_product_data():
    """Sample product row"""
    return {
        "id": "prod-100",
        "name": "Noise Cancelling Headphones",
        "category": "Electronics",
        "cost": 100,
        "rating": 4.5,
        "image": "https://example.com/headphones.png",
    }


@pytest.fixture
def catalog(sample_product_data):
    """Product id -> Product for the fake catalog"""
    return {
        "prod-100": Product(**sample_product_data),
        "prod-50": Product(id="prod-50", name="USB-C Cable", category="Accessories", cost=50),
        "prod-30": Product(id="prod-30", name="Mouse Pad", category="Accessories", cost="30.50"),
    }


@pytest.fixture
def mock_products(catalog):
    """ProductRepository double backed by ``catalog``"""
    products = Mock()
    products.get_by_id = AsyncMock(side_effect=lambda product_id: catalog.get(str(product_id)))
    return products


@pytest.fixture
def mock_users():
    """UserRepository double whose writes succeed"""
    users = Mock()
    users.save_wallet = AsyncMock(side_effect=lambda user: user)
    return users


@pytest.fixture
def user():
    """User with an address and 300 in the wallet"""
    return User(
        id="user-1",
        email="crio-user@gmail.com",
        name="crio-user",
        wallet_money=Decimal("300"),
        address="ITPL Main Road, Bangalore, India - 560066",
    )


@pytest.fixture
def user_without_address():
    return User(
        id="user-2",
        email="crio-user-2@gmail.com",
        name="crio-user-2",
        wallet_money=Decimal("500"),
    )


@pytest.fixture
def cart_service(cart_store, mock_products, mock_users):
    return CartService(store=cart_store, products=mock_products, users=mock_users)
