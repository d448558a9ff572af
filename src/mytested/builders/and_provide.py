"""
Continuation builder reached after an assertion passes.

Example:
    >>> (
    ...     harness.calling("index")
    ...     .should_return(ViewResult)
    ...     .and_also()
    ...     .should_pass_for(lambda result: result.view_name == "Index")
    ... )
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from mytested.builders.base import (
    BaseTestBuilder,
    InvokedActionView,
    _ProvidesInvokedAction,
    _ResolvesRegisteredAssertions,
)
from mytested.context import ControllerTestContext

if TYPE_CHECKING:
    from mytested.builders.actions import ActionResultTestBuilder


class AndProvideTestBuilder(
    _ResolvesRegisteredAssertions, _ProvidesInvokedAction, BaseTestBuilder
):
    """
    Provides controller and action information.

    Composes an InvokedActionView to re-expose the invoked-action accessors
    and resolves operations registered with @assertion, like every builder
    that operates after an invocation. The built-in vocabulary is resumed
    through and_also(). Holds the same context as the builder that produced
    it and has no side effects.
    """

    def __init__(self, test_context: ControllerTestContext) -> None:
        """
        Initialize the builder.

        Args:
            test_context: Controller test context containing data about the
                currently executed assertion chain
        """
        super().__init__(test_context)
        self._invoked_action_view = InvokedActionView(test_context)

    def and_also(self) -> ActionResultTestBuilder:
        """
        Resume making assertions about the invoked action.

        Returns:
            An ActionResultTestBuilder on the same test context
        """
        from mytested.builders.actions import ActionResultTestBuilder

        return self._chain(ActionResultTestBuilder)

    def and_(self) -> ActionResultTestBuilder:
        """Alias of and_also()."""
        return self.and_also()


__all__ = ["AndProvideTestBuilder"]
