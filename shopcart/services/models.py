"""Database Models - Pydantic models for catalog products and user accounts."""
from decimal import Decimal
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from shopcart import config
from shopcart.services.money import parse_money, to_decimal as _to_decimal


class Product(BaseModel):
    """Catalog product. Carts keep a copy of this as it was at add time."""
    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    category: Optional[str] = None
    cost: Decimal = Field(ge=0)
    rating: Optional[float] = None
    image: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def convert_id_to_str(cls, v):
        # Postgres may hand back integer or uuid ids
        return str(v)

    @field_validator("cost", mode="before")
    @classmethod
    def convert_cost_to_decimal(cls, v):
        # A bad price must fail the record, not become free
        return parse_money(v)


class User(BaseModel):
    """User account, wallet-relevant fields only."""
    model_config = ConfigDict(extra="ignore")

    id: str
    email: str
    name: Optional[str] = None
    wallet_money: Decimal = Decimal("0")
    address: str = config.DEFAULT_ADDRESS
    created_at: Optional[datetime] = None

    @field_validator("id", mode="before")
    @classmethod
    def convert_id_to_str(cls, v):
        return str(v)

    @field_validator("wallet_money", mode="before")
    @classmethod
    def convert_to_decimal(cls, v):
        return _to_decimal(v)

    @field_validator("address", mode="before")
    @classmethod
    def default_address_when_null(cls, v):
        return config.DEFAULT_ADDRESS if v is None else v

    def has_set_non_default_address(self) -> bool:
        """True once the user replaced the placeholder address with a real one."""
        address = self.address.strip()
        return bool(address) and address != config.DEFAULT_ADDRESS
