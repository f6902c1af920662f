"""shopcart - per-user shopping cart and wallet checkout."""

__version__ = "1.0.0"
