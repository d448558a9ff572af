"""Library exceptions for the mytested package."""

from typing import Any


class MyTestedError(Exception):
    """Base exception for mytested library."""

    pass


class InvalidStateError(MyTestedError):
    """
    Raised when a test builder cannot be constructed in a valid state.

    This error occurs when:
    - A builder is given no test context
    - A builder that needs an invoked action gets a context without one
    - An assertion extension returns a builder carrying a different context
    - An action invocation is recorded twice on the same context

    Attributes:
        reason: Human readable description of the invalid state
        builder_type: Name of the builder being constructed, if any
    """

    def __init__(self, reason: str, builder_type: str | None = None) -> None:
        self.reason = reason
        self.builder_type = builder_type
        prefix = f"{builder_type}: " if builder_type else ""
        super().__init__(f"{prefix}{reason}")


class ActionInvocationError(MyTestedError):
    """Raised when a controller action cannot be resolved or bound to its arguments."""

    def __init__(self, controller_type: type[Any], action_name: str, message: str) -> None:
        self.controller_type = controller_type
        self.action_name = action_name
        super().__init__(
            f"Cannot invoke action '{action_name}' on {controller_type.__name__}: {message}"
        )


class DuplicateAssertionError(MyTestedError):
    """Raised when an assertion name is registered twice or shadows a builder attribute."""

    def __init__(self, name: str, message: str | None = None) -> None:
        self.name = name
        super().__init__(message or f"Assertion '{name}' is already registered")


__all__ = [
    "MyTestedError",
    "InvalidStateError",
    "ActionInvocationError",
    "DuplicateAssertionError",
]
