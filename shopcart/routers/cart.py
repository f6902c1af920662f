"""
Cart Router

Thin HTTP layer over CartService. Domain errors keep their status code and
message; anything unexpected becomes a 500.
"""
from fastapi import APIRouter, Depends, HTTPException, Response

from shopcart.cart import Cart, CartService
from shopcart.errors import ApiError
from shopcart.logging import get_logger
from shopcart.services.models import User
from shopcart.services.money import to_float

from .deps import get_current_user, get_service
from .models import (
    AddToCartRequest,
    CartItemResponse,
    CartResponse,
    ProductResponse,
    UpdateCartItemRequest,
)

logger = get_logger(__name__)

router = APIRouter(tags=["cart"])


def _to_http(error: ApiError) -> HTTPException:
    return HTTPException(status_code=error.status_code, detail=error.message)


def _format_cart_response(cart: Cart) -> CartResponse:
    return CartResponse(
        email=cart.email,
        cart_items=[
            CartItemResponse(
                product=ProductResponse(
                    id=item.product.id,
                    name=item.product.name,
                    category=item.product.category,
                    cost=to_float(item.product.cost),
                    rating=item.product.rating,
                    image=item.product.image,
                ),
                quantity=item.quantity,
            )
            for item in cart.cart_items
        ],
        payment_option=cart.payment_option,
        total_cost=to_float(cart.total_cost),
        created_at=cart.created_at,
        updated_at=cart.updated_at,
    )


@router.get("/cart", response_model=CartResponse)
async def get_cart(
    user: User = Depends(get_current_user),
    service: CartService = Depends(get_service),
):
    """Get the signed-in user's cart."""
    try:
        cart = await service.get_cart_by_user(user)
    except ApiError as e:
        raise _to_http(e)
    return _format_cart_response(cart)


@router.post("/cart", response_model=CartResponse)
async def add_to_cart(
    request: AddToCartRequest,
    user: User = Depends(get_current_user),
    service: CartService = Depends(get_service),
):
    """Add a product to the cart, creating the cart on first use."""
    try:
        cart = await service.add_product_to_cart(user, request.product_id, request.quantity)
    except ApiError as e:
        raise _to_http(e)
    return _format_cart_response(cart)


@router.put("/cart", response_model=CartResponse)
async def update_cart_item(
    request: UpdateCartItemRequest,
    user: User = Depends(get_current_user),
    service: CartService = Depends(get_service),
):
    """Change a product's quantity; quantity 0 removes it (204, no body)."""
    try:
        if request.quantity == 0:
            await service.delete_product_from_cart(user, request.product_id)
            return Response(status_code=204)
        cart = await service.update_product_in_cart(user, request.product_id, request.quantity)
    except ApiError as e:
        raise _to_http(e)
    return _format_cart_response(cart)


@router.put("/cart/checkout", status_code=204)
async def checkout(
    user: User = Depends(get_current_user),
    service: CartService = Depends(get_service),
):
    """Pay for the cart from the wallet and empty it."""
    try:
        await service.checkout(user)
    except ApiError as e:
        if e.status_code >= 500:
            logger.error("Checkout failed: %s", e.message)
        raise _to_http(e)
    return Response(status_code=204)
