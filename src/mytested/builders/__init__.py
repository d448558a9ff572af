"""
Fluent test builders for controller action assertions.

Components:
    BaseTestBuilder: Root of all builders, holds the shared test context
    BaseTestBuilderWithInvokedAction: Foundation for post-invocation builders
    InvokedActionView: Read-only accessors for the invoked action
    ActionResultTestBuilder: Generic assertions over an action's outcome
    AndProvideTestBuilder: Continuation node reached after an assertion passes
    assertion / AssertionRegistry: Extension point for the assertion vocabulary
"""

from mytested.builders.actions import ActionResultTestBuilder
from mytested.builders.and_provide import AndProvideTestBuilder
from mytested.builders.base import (
    BaseTestBuilder,
    BaseTestBuilderWithInvokedAction,
    InvokedActionView,
)
from mytested.builders.extensions import AssertionRegistry, assertion

__all__ = [
    "BaseTestBuilder",
    "BaseTestBuilderWithInvokedAction",
    "InvokedActionView",
    "ActionResultTestBuilder",
    "AndProvideTestBuilder",
    "AssertionRegistry",
    "assertion",
]
