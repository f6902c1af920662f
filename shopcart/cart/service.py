"""Cart service: line-item mutations and wallet checkout."""
from typing import Optional

from shopcart.db import get_redis, get_supabase
from shopcart.errors import (
    ERROR_ADDRESS_NOT_SET,
    ERROR_CART_EMPTY,
    ERROR_CART_NOT_FOUND,
    ERROR_CART_REQUIRED_FOR_DELETE,
    ERROR_CART_REQUIRED_FOR_UPDATE,
    ERROR_INSUFFICIENT_BALANCE,
    ERROR_INVALID_QUANTITY,
    ERROR_PRODUCT_ALREADY_IN_CART,
    ERROR_PRODUCT_MISSING_FROM_CART,
    ERROR_PRODUCT_NOT_IN_CART,
    ERROR_PRODUCT_NOT_IN_DATABASE,
    BadRequestError,
    InternalError,
    NotFoundError,
    PersistenceError,
)
from shopcart.logging import get_logger, mask_email
from shopcart.services.models import Product, User
from shopcart.services.money import compare, subtract
from shopcart.services.repositories import ProductRepository, UserRepository

from .models import Cart, CartItem
from .storage import CartStore

logger = get_logger(__name__)


class CartService:
    """
    Cart operations for one authenticated user per call.

    Every check runs before any write. Store and repository failures surface
    as InternalError; rule violations as NotFoundError / BadRequestError.
    """

    def __init__(
        self,
        store: CartStore,
        products: ProductRepository,
        users: UserRepository,
    ) -> None:
        self.store = store
        self.products = products
        self.users = users

    async def _find_cart(self, user: User) -> Optional[Cart]:
        try:
            return await self.store.find_by_user(user.email)
        except PersistenceError as e:
            raise InternalError() from e

    async def _find_product(self, product_id: str) -> Optional[Product]:
        try:
            return await self.products.get_by_id(product_id)
        except PersistenceError as e:
            raise InternalError() from e

    async def _save_cart(self, cart: Cart) -> Cart:
        try:
            return await self.store.save(cart)
        except PersistenceError as e:
            raise InternalError() from e

    async def get_cart_by_user(self, user: User) -> Cart:
        """Return the user's cart.

        Raises:
            NotFoundError: the user has no cart
        """
        cart = await self._find_cart(user)
        if cart is None:
            raise NotFoundError(ERROR_CART_NOT_FOUND)
        return cart

    async def add_product_to_cart(self, user: User, product_id: str, quantity: int) -> Cart:
        """
        Add a new line for ``product_id`` to the user's cart.

        The cart is created on first use. That creation is kept even if a
        later check rejects the product.

        Raises:
            InternalError: cart could not be created or saved
            BadRequestError: product unknown, already in the cart, or quantity < 1
        """
        cart = await self._find_cart(user)
        if cart is None:
            try:
                cart = await self.store.create(user.email)
            except PersistenceError as e:
                # ConflictError lands here too: a parallel request won the create
                raise InternalError() from e

        product = await self._find_product(product_id)
        if product is None:
            raise BadRequestError(ERROR_PRODUCT_NOT_IN_DATABASE)

        if cart.has_product(product.id):
            raise BadRequestError(ERROR_PRODUCT_ALREADY_IN_CART)

        if quantity < 1:
            raise BadRequestError(ERROR_INVALID_QUANTITY)

        cart.cart_items.append(CartItem(product=product, quantity=quantity))
        return await self._save_cart(cart)

    async def update_product_in_cart(self, user: User, product_id: str, quantity: int) -> Cart:
        """
        Set the quantity of a product already in the cart.

        Raises:
            BadRequestError: no cart, unknown product, product not in cart,
                or quantity < 1
        """
        cart = await self._find_cart(user)
        if cart is None:
            raise BadRequestError(ERROR_CART_REQUIRED_FOR_UPDATE)

        product = await self._find_product(product_id)
        if product is None:
            raise BadRequestError(ERROR_PRODUCT_NOT_IN_DATABASE)

        index = cart.find_item_index(product.id)
        if index == -1:
            raise BadRequestError(ERROR_PRODUCT_NOT_IN_CART)

        if quantity < 1:
            raise BadRequestError(ERROR_INVALID_QUANTITY)

        cart.cart_items[index].quantity = quantity
        return await self._save_cart(cart)

    async def delete_product_from_cart(self, user: User, product_id: str) -> None:
        """Remove the line for ``product_id``; other lines keep their order."""
        cart = await self._find_cart(user)
        if cart is None:
            raise BadRequestError(ERROR_CART_REQUIRED_FOR_DELETE)

        index = cart.find_item_index(product_id)
        if index == -1:
            raise BadRequestError(ERROR_PRODUCT_MISSING_FROM_CART)

        del cart.cart_items[index]
        await self._save_cart(cart)

    async def checkout(self, user: User) -> None:
        """
        Pay for the cart from the user's wallet and empty the cart.

        The total uses the cost captured when each line was added. The wallet
        debit is written first; if emptying the cart then fails the debit is
        reversed before the error is raised.

        Raises:
            NotFoundError: the user has no cart
            BadRequestError: empty cart, default address, or insufficient funds
            InternalError: a write failed; the wallet is restored unless the
                refund write fails too, in which case ``user`` keeps the
                debited balance that storage holds
        """
        cart = await self._find_cart(user)
        if cart is None:
            raise NotFoundError(ERROR_CART_NOT_FOUND)

        if cart.is_empty:
            raise BadRequestError(ERROR_CART_EMPTY)

        if not user.has_set_non_default_address():
            raise BadRequestError(ERROR_ADDRESS_NOT_SET)

        total_cost = cart.total_cost
        if compare(total_cost, user.wallet_money) > 0:
            raise BadRequestError(ERROR_INSUFFICIENT_BALANCE)

        previous_balance = user.wallet_money
        previous_items = list(cart.cart_items)

        user.wallet_money = subtract(previous_balance, total_cost)
        try:
            await self.users.save_wallet(user)
        except PersistenceError as e:
            user.wallet_money = previous_balance
            raise InternalError() from e

        cart.cart_items = []
        try:
            await self.store.save(cart)
        except PersistenceError as e:
            cart.cart_items = previous_items
            await self._refund_wallet(user, previous_balance)
            raise InternalError() from e

        logger.info(
            "Checkout completed for %s: %s items, total %s",
            mask_email(user.email),
            len(previous_items),
            total_cost,
        )

    async def _refund_wallet(self, user: User, previous_balance) -> None:
        """
        Compensate a wallet debit whose cart clear did not persist.

        ``user.wallet_money`` always ends equal to what storage holds: the
        restored balance on success, the debited one if the refund fails.
        """
        debited_balance = user.wallet_money
        user.wallet_money = previous_balance
        try:
            await self.users.save_wallet(user)
        except PersistenceError:
            user.wallet_money = debited_balance
            # Wallet stays debited while the cart still holds its items
            logger.critical(
                "Checkout inconsistent for %s: wallet debited to %s, refund to %s failed",
                mask_email(user.email),
                debited_balance,
                previous_balance,
                exc_info=True,
            )
            return
        logger.warning(
            "Checkout rolled back for %s: cart write failed, wallet restored",
            mask_email(user.email),
        )


_cart_service: Optional[CartService] = None


async def get_cart_service() -> CartService:
    """Get CartService singleton wired to Supabase and Redis."""
    global _cart_service
    if _cart_service is None:
        client = await get_supabase()
        _cart_service = CartService(
            store=CartStore(get_redis()),
            products=ProductRepository(client),
            users=UserRepository(client),
        )
    return _cart_service
