"""
Assertions about the outcome of an invoked controller action.

ActionResultTestBuilder is the builder a chain starts from: it is returned
by the harness right after the action runs. Every assertion returns an
AndProvideTestBuilder on the same context, so assertions chain through
and_also():

Example:
    >>> (
    ...     ControllerTestHarness(HomeController())
    ...     .calling("index")
    ...     .should_not_throw()
    ...     .and_also()
    ...     .should_return(ViewResult)
    ...     .and_also()
    ...     .should_pass_for(lambda r: r.view_name == "Index", "renders Index")
    ... )

Note:
    Failures raise plain AssertionError and are never wrapped, so pytest
    reports them like any other failed assert.
"""

from __future__ import annotations

import re
from typing import Any, NoReturn

from mytested.builders.and_provide import AndProvideTestBuilder
from mytested.builders.base import BaseTestBuilderWithInvokedAction
from mytested.types import ResultPredicate


def _type_names(expected: type | tuple[type, ...]) -> str:
    if isinstance(expected, tuple):
        return " or ".join(t.__name__ for t in expected)
    return expected.__name__


class ActionResultTestBuilder(BaseTestBuilderWithInvokedAction):
    """
    Generic assertions over an action's returned value or raised exception.

    Attributes:
        test_context: The context shared by the whole chain (read-only)
    """

    def should_return(
        self,
        expected_type: type | tuple[type, ...] | None = None,
    ) -> AndProvideTestBuilder:
        """
        Assert that the action returned without raising.

        Args:
            expected_type: If provided, the result must be an instance of it
                (a tuple of types accepts any of them)

        Returns:
            AndProvideTestBuilder for continuing the chain

        Raises:
            AssertionError: If the action raised, or the result has the wrong type

        Example:
            >>> harness.calling("index").should_return(ViewResult)
        """
        self._ensure_completed("return a value")

        result = self.action_result()
        if expected_type is None:
            return self._passed("returns a value")

        expected_name = _type_names(expected_type)
        if not isinstance(result, expected_type):
            self._fail(
                f"returns {expected_name}",
                f"Expected {self._action_label()} to return {expected_name}, "
                f"but it returned {type(result).__name__}: {result!r}",
            )

        return self._passed(f"returns {expected_name}")

    def should_return_value(self, expected: Any) -> AndProvideTestBuilder:
        """
        Assert that the action returned a value equal to expected.

        Raises:
            AssertionError: If the action raised or the values differ
        """
        self._ensure_completed(f"return {expected!r}")

        result = self.action_result()
        if result != expected:
            self._fail(
                f"returns {expected!r}",
                f"Expected {self._action_label()} to return {expected!r}, "
                f"but it returned {result!r}",
            )

        return self._passed(f"returns {expected!r}")

    def should_return_none(self) -> AndProvideTestBuilder:
        """Assert that the action returned None without raising."""
        self._ensure_completed("return None")

        result = self.action_result()
        if result is not None:
            self._fail(
                "returns None",
                f"Expected {self._action_label()} to return None, but it returned {result!r}",
            )

        return self._passed("returns None")

    def should_throw(
        self,
        exception_type: type[BaseException] = Exception,
        match: str | None = None,
    ) -> AndProvideTestBuilder:
        """
        Assert that the action raised an exception.

        Args:
            exception_type: The expected exception class
            match: Optional regular expression searched in str(exception)

        Returns:
            AndProvideTestBuilder for continuing the chain

        Raises:
            AssertionError: If nothing was raised, the type differs, or the
                message does not match

        Example:
            >>> harness.calling("delete", item_id=0).should_throw(ValueError, match="positive")
        """
        description = f"throws {exception_type.__name__}"
        exception = self.caught_exception()

        if exception is None:
            self._fail(
                description,
                f"Expected {self._action_label()} to throw {exception_type.__name__}, "
                f"but it returned {self.action_result()!r}",
            )

        if not isinstance(exception, exception_type):
            self._fail(
                description,
                f"Expected {self._action_label()} to throw {exception_type.__name__}, "
                f"but it threw {type(exception).__name__}: {exception}",
            )

        if match is not None:
            description = f"{description} matching {match!r}"
        if match is not None and re.search(match, str(exception)) is None:
            self._fail(
                description,
                f"Expected {type(exception).__name__} message to match {match!r}, "
                f"got {str(exception)!r}",
            )

        return self._passed(description)

    def should_not_throw(self) -> AndProvideTestBuilder:
        """Assert that the action completed without raising."""
        self._ensure_completed("complete without exception")
        return self._passed("does not throw")

    def should_pass_for(
        self,
        predicate: ResultPredicate,
        description: str | None = None,
    ) -> AndProvideTestBuilder:
        """
        Assert that a predicate holds for the action result.

        Exceptions raised by the predicate itself propagate unchanged,
        so plain assert statements inside it report normally.

        Args:
            predicate: Callable receiving the result, returning truthy on success
            description: Text used in the failure message and assertion log

        Raises:
            AssertionError: If the action raised or the predicate returned falsy

        Example:
            >>> harness.calling("details", 5).should_pass_for(
            ...     lambda product: product.id == 5,
            ...     "returns the requested product",
            ... )
        """
        label = description or getattr(predicate, "__name__", "predicate")
        self._ensure_completed(f"satisfy {label}")

        result = self.action_result()
        if not predicate(result):
            self._fail(
                label,
                f"Expected {self._action_label()} result to satisfy {label}, "
                f"but it did not. Result: {result!r}",
            )

        return self._passed(label)

    def _ensure_completed(self, expectation: str) -> None:
        exception = self.caught_exception()
        if exception is not None:
            self._fail(
                expectation,
                f"Expected {self._action_label()} to {expectation}, "
                f"but it threw {type(exception).__name__}: {exception}",
            )

    def _action_label(self) -> str:
        return f"{self.controller_type().__name__}.{self.invoked_action_name()}"

    def _passed(self, description: str) -> AndProvideTestBuilder:
        self.test_context.record_assertion(description, passed=True)
        return self._chain(AndProvideTestBuilder)

    def _fail(self, description: str, message: str) -> NoReturn:
        self.test_context.record_assertion(description, passed=False)
        raise AssertionError(message)


__all__ = ["ActionResultTestBuilder"]
