"""
Cart API Pydantic Models

Request and response bodies for the cart endpoints.
"""
from pydantic import BaseModel, ConfigDict, Field


class AddToCartRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    product_id: str = Field(alias="productId", min_length=1)
    quantity: int = Field(ge=1)


class UpdateCartItemRequest(BaseModel):
    """quantity == 0 removes the product from the cart."""
    model_config = ConfigDict(populate_by_name=True)

    product_id: str = Field(alias="productId", min_length=1)
    quantity: int = Field(ge=0)


class ProductResponse(BaseModel):
    id: str
    name: str
    category: str | None = None
    cost: float
    rating: float | None = None
    image: str | None = None


class CartItemResponse(BaseModel):
    product: ProductResponse
    quantity: int


class CartResponse(BaseModel):
    email: str
    cart_items: list[CartItemResponse]
    payment_option: str
    total_cost: float
    created_at: str
    updated_at: str
