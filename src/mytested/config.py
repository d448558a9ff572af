"""
Configuration for controller test chains.

This module provides:
- TestingConfig: Settings shared by the harness and the test context
- DEFAULT_CONFIG: The configuration used when none is given
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TestingConfig:
    """
    Configuration for a controller test chain.

    Controls how the invocation harness treats action exceptions and how
    much diagnostic bookkeeping the test context keeps.

    Attributes:
        record_assertions: Keep a log of assertions performed on the context
        max_recorded_assertions: Upper bound for the assertion log
            (None = unbounded). Oldest records are dropped first.
        capture_exceptions: Store exceptions raised by the action in the
            context instead of propagating them to the test
        log_invocations: Emit debug log records for each action invocation

    Example:
        >>> config = TestingConfig(
        ...     capture_exceptions=False,
        ...     max_recorded_assertions=50,
        ... )
        >>> harness = ControllerTestHarness(HomeController(), config=config)
    """

    # Pytest would otherwise try to collect this class
    __test__ = False

    record_assertions: bool = True
    max_recorded_assertions: int | None = None
    capture_exceptions: bool = True
    log_invocations: bool = True

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.max_recorded_assertions is not None and self.max_recorded_assertions < 1:
            raise ValueError(
                f"max_recorded_assertions must be positive, got {self.max_recorded_assertions}. "
                "Use None (default) to keep every assertion record."
            )


DEFAULT_CONFIG = TestingConfig()


__all__ = ["TestingConfig", "DEFAULT_CONFIG"]
