"""
Cart Errors

Message constants shared by the service and the router, and the exception
types the service raises. Routers translate ApiError into HTTPException.
"""

# Cart lookup
ERROR_CART_NOT_FOUND = "User does not have a cart"
ERROR_CART_REQUIRED_FOR_UPDATE = "User does not have a cart. Use POST to create cart and add a product"
ERROR_CART_REQUIRED_FOR_DELETE = "Cart not exist for User"

# Cart contents
ERROR_PRODUCT_NOT_IN_DATABASE = "Product doesn't exist in database"
ERROR_PRODUCT_ALREADY_IN_CART = (
    "Product already in cart. Use the cart sidebar to update or remove product from cart"
)
ERROR_PRODUCT_NOT_IN_CART = "Product not in cart"
ERROR_PRODUCT_MISSING_FROM_CART = "Product doesn't exist in cart"
ERROR_INVALID_QUANTITY = "Quantity must be a positive integer"

# Checkout
ERROR_CART_EMPTY = "Cart is empty"
ERROR_ADDRESS_NOT_SET = "Address not set"
ERROR_INSUFFICIENT_BALANCE = "User has insufficient money to process"

# Generic
ERROR_INTERNAL = "Internal Server Error"
ERROR_UNAUTHORIZED = "Please authenticate"


class ApiError(Exception):
    """Domain failure carrying an HTTP-like status code and a user-facing message."""

    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.status_code}, {self.message!r})"


class NotFoundError(ApiError):
    """Requested aggregate does not exist."""

    status_code = 404


class BadRequestError(ApiError):
    """Caller-correctable rule violation."""

    status_code = 400


class InternalError(ApiError):
    """Unexpected persistence failure."""

    status_code = 500

    def __init__(self, message: str = ERROR_INTERNAL) -> None:
        super().__init__(message)


class PersistenceError(Exception):
    """Cart store or repository could not complete a read/write."""


class ConflictError(PersistenceError):
    """A create-if-absent lost the race: the record already exists."""


