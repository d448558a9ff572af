"""
Base test builders shared by every link of a fluent assertion chain.

This module provides:
- BaseTestBuilder: Root of all builders, holds the shared test context
- InvokedActionView: Read-only accessors for the invoked action
- BaseTestBuilderWithInvokedAction: Foundation for assertion builders that
  operate after an action has executed

Every builder holds a reference to the same ControllerTestContext; no
builder copies it. Assertion-vocabulary operations registered with the
@assertion decorator are resolved on BaseTestBuilderWithInvokedAction
and on the And-continuation builder.

Example:
    >>> context = harness.calling("index").test_context
    >>> builder = BaseTestBuilderWithInvokedAction(context)
    >>> builder.invoked_action_name()
    'index'
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, TypeVar

from mytested.builders.extensions import AssertionRegistry
from mytested.context import ControllerTestContext, InvokedAction
from mytested.exceptions import InvalidStateError

logger = logging.getLogger(__name__)

TBuilder = TypeVar("TBuilder", bound="BaseTestBuilder")


class BaseTestBuilder:
    """
    Root of the test builder hierarchy.

    Accepts a ControllerTestContext at construction and stores it for
    descendants. Exposes no assertions, only the shared context and
    helpers for building the next link of a chain.

    Raises:
        InvalidStateError: If no context is given. The check runs before
            any state is assigned, so no partially built builder exists.
    """

    def __init__(self, test_context: ControllerTestContext) -> None:
        """
        Initialize the builder with the chain's test context.

        Args:
            test_context: Context containing data about the currently
                executed assertion chain
        """
        builder_type = type(self).__name__
        if test_context is None:
            raise InvalidStateError(
                "test context must be provided; a chain cannot be built without one",
                builder_type=builder_type,
            )
        if not isinstance(test_context, ControllerTestContext):
            raise InvalidStateError(
                f"expected a ControllerTestContext, got {type(test_context).__name__}",
                builder_type=builder_type,
            )

        self._test_context = test_context

    @property
    def test_context(self) -> ControllerTestContext:
        """Get the context shared by the whole chain."""
        return self._test_context

    def _chain(self, builder_type: type[TBuilder]) -> TBuilder:
        """Build the next link of the chain on the same context."""
        return builder_type(self._test_context)

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return f"{type(self).__name__}({self._test_context!r})"


class InvokedActionView:
    """
    Read-only view over the invoked-action part of a test context.

    Implements the InvokedActionProvider protocol. Builders compose a view
    instead of inheriting the accessors, so any builder can expose them.
    Every accessor reads through to the context on each call.
    """

    def __init__(self, test_context: ControllerTestContext) -> None:
        self._test_context = test_context

    def invoked_action(self) -> InvokedAction:
        action = self._test_context.invoked_action
        if action is None:
            raise InvalidStateError("no action has been invoked on this context")
        return action

    def invoked_action_name(self) -> str:
        return self.invoked_action().action_name

    def controller(self) -> Any:
        return self._test_context.controller

    def controller_type(self) -> type:
        return self._test_context.controller_type

    def action_arguments(self) -> Mapping[str, Any]:
        return self._test_context.action_arguments

    def action_result(self) -> Any:
        return self._test_context.action_result

    def caught_exception(self) -> BaseException | None:
        return self._test_context.caught_exception


class _ProvidesInvokedAction:
    """Delegates the InvokedActionProvider accessors to a composed view."""

    _invoked_action_view: InvokedActionView

    def invoked_action(self) -> InvokedAction:
        """Get the descriptor of the invoked action."""
        return self._invoked_action_view.invoked_action()

    def invoked_action_name(self) -> str:
        """Get the name of the invoked action."""
        return self._invoked_action_view.invoked_action_name()

    def controller(self) -> Any:
        """Get the controller instance under test."""
        return self._invoked_action_view.controller()

    def controller_type(self) -> type:
        """Get the class of the controller under test."""
        return self._invoked_action_view.controller_type()

    def action_arguments(self) -> Mapping[str, Any]:
        """Get the bound action arguments."""
        return self._invoked_action_view.action_arguments()

    def action_result(self) -> Any:
        """Get the value returned by the action."""
        return self._invoked_action_view.action_result()

    def caught_exception(self) -> BaseException | None:
        """Get the exception raised by the action, if any."""
        return self._invoked_action_view.caught_exception()


class _ResolvesRegisteredAssertions:
    """Resolves operations registered with @assertion as bound methods."""

    _test_context: ControllerTestContext

    def __getattr__(self, name: str) -> Any:
        # Only reached when normal lookup fails
        if name.startswith("_"):
            raise AttributeError(name)

        operation = AssertionRegistry.get(name)
        if operation is None:
            raise AttributeError(
                f"'{type(self).__name__}' object has no attribute or registered assertion '{name}'"
            )

        def bound(*args: Any, **kwargs: Any) -> BaseTestBuilder:
            result = operation(self, *args, **kwargs)
            return self._verify_chained(name, result)

        bound.__name__ = name
        bound.__doc__ = operation.__doc__
        return bound

    def _verify_chained(self, name: str, result: Any) -> BaseTestBuilder:
        """Check that an extension kept the chain on this builder's context."""
        if not isinstance(result, BaseTestBuilder):
            raise TypeError(
                f"Assertion '{name}' must return a test builder, got {type(result).__name__}"
            )
        if result.test_context is not self._test_context:
            raise InvalidStateError(
                f"assertion '{name}' returned a builder carrying a different test context",
                builder_type=type(result).__name__,
            )
        return result


class BaseTestBuilderWithInvokedAction(
    _ResolvesRegisteredAssertions, _ProvidesInvokedAction, BaseTestBuilder
):
    """
    Base for builders that operate after an action has been invoked.

    Adds read-only accessors for the invoked action (name, controller,
    arguments, result, caught exception) and resolves operations registered
    with the @assertion decorator as bound methods.

    Example:
        >>> @assertion()
        ... def should_redirect(builder, to):
        ...     assert builder.action_result().location == to
        ...     return AndProvideTestBuilder(builder.test_context)
        >>>
        >>> harness.calling("logout").should_redirect("/").and_also().should_not_throw()

    Raises:
        InvalidStateError: If the context has no recorded invocation
    """

    def __init__(self, test_context: ControllerTestContext) -> None:
        super().__init__(test_context)
        if not test_context.has_invoked_action:
            raise InvalidStateError(
                "an action must be invoked before assertions can be made",
                builder_type=type(self).__name__,
            )
        self._invoked_action_view = InvokedActionView(test_context)


__all__ = [
    "BaseTestBuilder",
    "InvokedActionView",
    "BaseTestBuilderWithInvokedAction",
]
