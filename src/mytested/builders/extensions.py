"""
Assertion vocabulary extensions.

This module contains the @assertion decorator for adding operations to
every builder that operates after an action has been invoked, and the
AssertionRegistry that stores them.

An extension receives the builder it was called on and must return a
builder carrying the same test context, so chains stay composable:

Example:
    >>> from mytested import AndProvideTestBuilder, assertion
    >>>
    >>> @assertion()
    ... def should_return_view(builder, view_name):
    ...     result = builder.action_result()
    ...     if getattr(result, "view_name", None) != view_name:
    ...         raise AssertionError(f"Expected view {view_name!r}")
    ...     builder.test_context.record_assertion(f"returns view {view_name!r}")
    ...     return AndProvideTestBuilder(builder.test_context)
    >>>
    >>> harness.calling("index").should_return_view("Index").and_also().should_not_throw()
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, ClassVar, TypeVar

from mytested.exceptions import DuplicateAssertionError

logger = logging.getLogger(__name__)

# Type variable for assertion functions - preserves the exact type of the decorated function
F = TypeVar("F", bound=Callable[..., Any])

AssertionFunc = Callable[..., Any]


class AssertionRegistry:
    """
    Process-wide registry of assertion-vocabulary operations.

    The registry holds vocabulary only, never chain state, so sharing it
    between tests does not couple their contexts. Use unregister() or
    clear() to keep test-local registrations from leaking.
    """

    _operations: ClassVar[dict[str, AssertionFunc]] = {}

    @classmethod
    def register(cls, name: str, func: AssertionFunc, *, replace: bool = False) -> None:
        """
        Register an assertion operation under a name.

        Args:
            name: Attribute name the operation is reachable under
            func: Callable taking the builder as first argument
            replace: Allow replacing an existing registration

        Raises:
            DuplicateAssertionError: If the name is already registered
                (and replace is False) or shadows a builder attribute
            ValueError: If the name is not a public identifier
        """
        if not name.isidentifier() or name.startswith("_"):
            raise ValueError(f"Assertion name must be a public identifier, got {name!r}")

        if _is_builder_attribute(name):
            raise DuplicateAssertionError(
                name, f"Assertion '{name}' would shadow an existing builder attribute"
            )

        if name in cls._operations:
            if not replace:
                raise DuplicateAssertionError(name)
            logger.warning("Replacing registered assertion '%s'", name)

        cls._operations[name] = func
        logger.debug("Registered assertion '%s' -> %s", name, getattr(func, "__qualname__", func))

    @classmethod
    def unregister(cls, name: str) -> None:
        """Remove an assertion operation. Unknown names are ignored."""
        if cls._operations.pop(name, None) is not None:
            logger.debug("Unregistered assertion '%s'", name)

    @classmethod
    def get(cls, name: str) -> AssertionFunc | None:
        return cls._operations.get(name)

    @classmethod
    def names(cls) -> list[str]:
        """Get the registered assertion names in registration order."""
        return list(cls._operations)

    @classmethod
    def clear(cls) -> None:
        cls._operations.clear()


def _is_builder_attribute(name: str) -> bool:
    from mytested.builders.actions import ActionResultTestBuilder
    from mytested.builders.and_provide import AndProvideTestBuilder

    return hasattr(ActionResultTestBuilder, name) or hasattr(AndProvideTestBuilder, name)


def assertion(name: str | None = None, *, replace: bool = False) -> Callable[[F], F]:
    """
    Decorator registering a function as an assertion-vocabulary operation.

    The decorated function becomes callable as a method on every
    BaseTestBuilderWithInvokedAction. Its first parameter receives the
    builder; it must return a builder carrying the same test context
    (typically an AndProvideTestBuilder).

    Args:
        name: Attribute name to register under (defaults to the function name)
        replace: Allow replacing an existing registration

    Returns:
        A decorator that registers the function and returns it unchanged

    Raises:
        DuplicateAssertionError: If the name collides with an existing
            registration or a builder attribute
    """

    def decorator(func: F) -> F:
        AssertionRegistry.register(name or func.__name__, func, replace=replace)
        return func

    return decorator


__all__ = [
    "AssertionRegistry",
    "assertion",
]
