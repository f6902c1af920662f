"""Catalog and user-account collaborators used by the cart service."""
