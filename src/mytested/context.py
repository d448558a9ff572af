"""
Test context carrying the state of one simulated controller invocation.

A ControllerTestContext is created once per invocation by the harness and
passed by reference into every builder of a fluent chain. Builders read
from it and assertion logic records into it; nothing copies it.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import UTC, datetime
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from mytested.config import DEFAULT_CONFIG, TestingConfig
from mytested.exceptions import InvalidStateError

logger = logging.getLogger(__name__)


class InvokedAction(BaseModel):
    """
    Immutable description of the controller action that was invoked.

    Attributes:
        action_name: Name of the action method
        controller_type: Class of the controller the action belongs to
        arguments: Bound action arguments keyed by parameter name
        invoked_at: When the action was invoked (UTC timestamp)
        is_async: Whether the action was a coroutine function

    Example:
        >>> action = InvokedAction(
        ...     action_name="index",
        ...     controller_type=HomeController,
        ...     arguments={"page": 1},
        ... )
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    action_name: str = Field(
        ...,
        min_length=1,
        description="Name of the invoked action",
    )
    controller_type: type = Field(
        ...,
        description="Class of the controller owning the action",
    )
    arguments: Mapping[str, Any] = Field(
        default_factory=dict,
        validate_default=True,
        description="Bound action arguments keyed by parameter name (read-only)",
    )
    invoked_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="When the action was invoked (UTC)",
    )
    is_async: bool = Field(
        default=False,
        description="Whether the action was awaited",
    )

    @field_validator("arguments", mode="after")
    @classmethod
    def freeze_arguments(cls, value: Mapping[str, Any]) -> Mapping[str, Any]:
        """Store arguments behind a read-only proxy over a private copy."""
        return MappingProxyType(dict(value))


class AssertionRecord(BaseModel):
    """Diagnostic record of one assertion performed against a context."""

    model_config = ConfigDict(frozen=True)

    description: str
    passed: bool = True
    recorded_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class ControllerTestContext:
    """
    Mutable carrier of everything known about one controller invocation.

    Holds the controller under test (a shared reference owned by the caller),
    the invoked action, its arguments and its outcome, plus a log of the
    assertions performed so far.

    Example:
        >>> context = ControllerTestContext(HomeController())
        >>> context.record_invocation(
        ...     InvokedAction(action_name="index", controller_type=HomeController),
        ...     result=ViewResult("Index"),
        ... )
        >>> context.action_name
        'index'

    Thread Safety:
        Not thread-safe. Each test case must create its own context; chains
        built on one context must stay on one thread.
    """

    __test__ = False

    def __init__(self, controller: Any, config: TestingConfig | None = None) -> None:
        """
        Initialize the context for a controller.

        Args:
            controller: The controller instance under test
            config: Chain configuration (defaults to DEFAULT_CONFIG)
        """
        self._controller = controller
        self._config = config or DEFAULT_CONFIG
        self._invoked_action: InvokedAction | None = None
        self._action_result: Any = None
        self._caught_exception: BaseException | None = None
        self._assertions: list[AssertionRecord] = []

    @property
    def config(self) -> TestingConfig:
        return self._config

    @property
    def controller(self) -> Any:
        """Get the controller instance under test."""
        return self._controller

    @property
    def controller_type(self) -> type:
        """Get the class of the controller under test."""
        return type(self._controller)

    @property
    def invoked_action(self) -> InvokedAction | None:
        """Get the invoked action descriptor, or None before invocation."""
        return self._invoked_action

    @property
    def has_invoked_action(self) -> bool:
        return self._invoked_action is not None

    @property
    def action_name(self) -> str | None:
        if self._invoked_action is None:
            return None
        return self._invoked_action.action_name

    @property
    def action_arguments(self) -> Mapping[str, Any]:
        """Get the bound action arguments (empty before invocation)."""
        if self._invoked_action is None:
            return {}
        return dict(self._invoked_action.arguments)

    @property
    def action_result(self) -> Any:
        """Get the value returned by the action (None if it raised)."""
        return self._action_result

    @property
    def caught_exception(self) -> BaseException | None:
        """Get the exception raised by the action, if one was captured."""
        return self._caught_exception

    @property
    def assertions(self) -> list[AssertionRecord]:
        """
        Get the assertions recorded so far.

        Returns:
            Copy of the assertion log to prevent external modification.
        """
        return self._assertions.copy()

    @property
    def assertion_count(self) -> int:
        return len(self._assertions)

    def record_invocation(
        self,
        action: InvokedAction,
        result: Any = None,
        exception: BaseException | None = None,
    ) -> None:
        """
        Record the invoked action and its outcome.

        Args:
            action: Descriptor of the invoked action
            result: Value returned by the action
            exception: Exception raised by the action, if any

        Raises:
            InvalidStateError: If an invocation was already recorded. A
                context describes exactly one invocation.
        """
        if self._invoked_action is not None:
            raise InvalidStateError(
                f"action '{self._invoked_action.action_name}' was already invoked on this "
                "context; create a new context for each invocation"
            )

        self._invoked_action = action
        self._action_result = result
        self._caught_exception = exception

        logger.debug(
            "Recorded invocation of %s.%s (exception=%s)",
            action.controller_type.__name__,
            action.action_name,
            type(exception).__name__ if exception is not None else None,
        )

    def record_assertion(self, description: str, passed: bool = True) -> None:
        """
        Append an assertion record to the diagnostic log.

        Does nothing when assertion recording is disabled in the config.
        When the log exceeds max_recorded_assertions the oldest records
        are dropped.

        Args:
            description: What was asserted
            passed: Whether the assertion passed
        """
        if not self._config.record_assertions:
            return

        self._assertions.append(AssertionRecord(description=description, passed=passed))

        limit = self._config.max_recorded_assertions
        if limit is not None and len(self._assertions) > limit:
            del self._assertions[: len(self._assertions) - limit]

        logger.debug("Assertion recorded on %r: %s (passed=%s)", self, description, passed)

    def clear_assertions(self) -> None:
        """Clear the assertion log, keeping the invocation state."""
        self._assertions.clear()

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        action = self.action_name or "<not invoked>"
        return (
            f"ControllerTestContext(controller={self.controller_type.__name__}, "
            f"action={action}, assertions={len(self._assertions)})"
        )


__all__ = ["ControllerTestContext", "InvokedAction", "AssertionRecord"]
