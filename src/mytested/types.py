"""Common type definitions for the mytested library."""

from collections.abc import Callable, Mapping
from typing import Any, TypeVar

# Type variable for controller instances
TController = TypeVar("TController")

# Action arguments keyed by parameter name
ActionArguments = Mapping[str, Any]

# Predicate evaluated against an action result
ResultPredicate = Callable[[Any], object]
