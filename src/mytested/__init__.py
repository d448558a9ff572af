"""
mytested - Fluent assertion chains for testing controller actions.

This library provides:
- ControllerTestHarness for invoking an action and starting a chain
- A shared ControllerTestContext carried by every link of the chain
- Builders for asserting on the action outcome, with and_also() continuations
- An @assertion decorator for extending the assertion vocabulary

Example:
    >>> from mytested import ControllerTestHarness
    >>>
    >>> (
    ...     ControllerTestHarness(HomeController)
    ...     .calling("index")
    ...     .should_return(ViewResult)
    ...     .and_also()
    ...     .should_not_throw()
    ... )
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("mytested-py")
except PackageNotFoundError:
    # Package not installed (running from source without install)
    __version__ = "0.0.0.dev0"

from mytested.builders import (
    ActionResultTestBuilder,
    AndProvideTestBuilder,
    AssertionRegistry,
    BaseTestBuilder,
    BaseTestBuilderWithInvokedAction,
    InvokedActionView,
    assertion,
)
from mytested.config import DEFAULT_CONFIG, TestingConfig
from mytested.context import AssertionRecord, ControllerTestContext, InvokedAction
from mytested.exceptions import (
    ActionInvocationError,
    DuplicateAssertionError,
    InvalidStateError,
    MyTestedError,
)
from mytested.harness import ControllerTestHarness, begin_chain
from mytested.protocols import ContextCarrier, InvokedActionProvider

__all__ = [
    "__version__",
    # Harness
    "ControllerTestHarness",
    "begin_chain",
    # Context
    "ControllerTestContext",
    "InvokedAction",
    "AssertionRecord",
    # Builders
    "BaseTestBuilder",
    "BaseTestBuilderWithInvokedAction",
    "InvokedActionView",
    "ActionResultTestBuilder",
    "AndProvideTestBuilder",
    # Extensions
    "AssertionRegistry",
    "assertion",
    # Protocols
    "ContextCarrier",
    "InvokedActionProvider",
    # Configuration
    "TestingConfig",
    "DEFAULT_CONFIG",
    # Exceptions
    "MyTestedError",
    "InvalidStateError",
    "ActionInvocationError",
    "DuplicateAssertionError",
]
