"""
Protocol definitions for the mytested library.

Protocols:
- ContextCarrier: Anything holding a ControllerTestContext (every builder)
- InvokedActionProvider: Read access to the invoked action and its outcome

Example:
    >>> from mytested.protocols import InvokedActionProvider
    >>>
    >>> def describe(provider: InvokedActionProvider) -> str:
    ...     return f"{provider.controller_type().__name__}.{provider.invoked_action_name()}"
"""

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from mytested.context import ControllerTestContext, InvokedAction


@runtime_checkable
class ContextCarrier(Protocol):
    """
    Protocol for objects that carry a test context.

    Every builder in a fluent chain satisfies this protocol. Assertion
    extensions must return a carrier holding the same context they received.
    """

    @property
    def test_context(self) -> ControllerTestContext:
        """The context shared by the whole chain."""
        ...


@runtime_checkable
class InvokedActionProvider(Protocol):
    """
    Protocol for read access to an invoked action.

    Implemented by InvokedActionView and exposed by every builder that
    operates after an action has executed, including the And-continuation
    builder.
    """

    def invoked_action(self) -> InvokedAction:
        """Get the descriptor of the invoked action."""
        ...

    def invoked_action_name(self) -> str:
        """Get the name of the invoked action."""
        ...

    def controller(self) -> Any:
        """Get the controller instance under test."""
        ...

    def controller_type(self) -> type:
        """Get the class of the controller under test."""
        ...

    def action_arguments(self) -> Mapping[str, Any]:
        """Get the bound action arguments."""
        ...

    def action_result(self) -> Any:
        """Get the value returned by the action."""
        ...

    def caught_exception(self) -> BaseException | None:
        """Get the exception raised by the action, if any."""
        ...


__all__ = ["ContextCarrier", "InvokedActionProvider"]
