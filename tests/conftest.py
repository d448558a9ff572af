"""
Shared pytest fixtures for the mytested library tests.

This module provides:
- Controller fixtures (home_controller, products_controller)
- Harness fixtures (home_harness, products_harness)
- Context fixtures (empty_context, index_context)
- Assertion registry isolation (autouse)
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from mytested import AssertionRegistry, ControllerTestContext, ControllerTestHarness
from tests.fixtures import (
    HomeController,
    Product,
    ProductRepository,
    ProductsController,
    ViewResult,
    make_context,
)

# =============================================================================
# Registry Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def isolated_assertion_registry() -> Iterator[None]:
    """Remove assertions registered by a test once it finishes."""
    before = set(AssertionRegistry.names())
    yield
    for name in set(AssertionRegistry.names()) - before:
        AssertionRegistry.unregister(name)


# =============================================================================
# Controller Fixtures
# =============================================================================


@pytest.fixture
def home_controller() -> HomeController:
    return HomeController()


@pytest.fixture
def product_repository() -> ProductRepository:
    """Provide a repository with two products."""
    return ProductRepository(
        products={
            1: Product(id=1, name="Keyboard", price=49.5),
            2: Product(id=2, name="Mouse", price=20.0),
        }
    )


@pytest.fixture
def products_controller(product_repository: ProductRepository) -> ProductsController:
    return ProductsController(product_repository)


# =============================================================================
# Harness Fixtures
# =============================================================================


@pytest.fixture
def home_harness(home_controller: HomeController) -> ControllerTestHarness:
    return ControllerTestHarness(home_controller)


@pytest.fixture
def products_harness(products_controller: ProductsController) -> ControllerTestHarness:
    return ControllerTestHarness(products_controller)


# =============================================================================
# Context Fixtures
# =============================================================================


@pytest.fixture
def empty_context(home_controller: HomeController) -> ControllerTestContext:
    """Provide a context with no recorded invocation."""
    return ControllerTestContext(home_controller)


@pytest.fixture
def index_context(home_controller: HomeController) -> ControllerTestContext:
    """Provide a context recording HomeController.Index returning a ViewResult."""
    return make_context(home_controller, action_name="Index", result=ViewResult("Index"))
