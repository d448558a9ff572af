"""
Shared test fixtures for the mytested library.

Usage:
    from tests.fixtures import (
        HomeController,
        ProductsController,
        ProductRepository,
        Product,
        ViewResult,
        RedirectResult,
        make_context,
    )
"""

from tests.fixtures.controllers import (
    HomeController,
    Product,
    ProductRepository,
    ProductsController,
    RedirectResult,
    ViewResult,
)
from tests.fixtures.contexts import make_context

__all__ = [
    "HomeController",
    "Product",
    "ProductRepository",
    "ProductsController",
    "RedirectResult",
    "ViewResult",
    "make_context",
]
