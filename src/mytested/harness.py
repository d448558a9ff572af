"""
Invocation harness for controller action tests.

This module provides the entry points of a fluent chain: the
ControllerTestHarness invokes an action on a controller, records the
outcome in a fresh ControllerTestContext, and hands the context to
begin_chain(), which returns the first assertion builder.

Example:
    >>> from mytested import ControllerTestHarness
    >>>
    >>> def test_index_renders_view():
    ...     (
    ...         ControllerTestHarness(HomeController)
    ...         .calling("index")
    ...         .should_return(ViewResult)
    ...         .and_also()
    ...         .should_pass_for(lambda result: result.view_name == "Index")
    ...     )
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from typing import Any

from mytested.builders.actions import ActionResultTestBuilder
from mytested.config import DEFAULT_CONFIG, TestingConfig
from mytested.context import ControllerTestContext, InvokedAction
from mytested.exceptions import ActionInvocationError

logger = logging.getLogger(__name__)

# An action is given by method name, by the function defined on the
# controller class, or by a method bound to the controller instance
ActionRef = str | Callable[..., Any]


def begin_chain(context: ControllerTestContext) -> ActionResultTestBuilder:
    """
    Start a fluent assertion chain on an invoked context.

    Args:
        context: Context with a recorded action invocation

    Returns:
        The first assertion builder of the chain

    Raises:
        InvalidStateError: If context is None or has no recorded invocation
    """
    builder = ActionResultTestBuilder(context)
    logger.debug("Beginning assertion chain on %r", context)
    return builder


class ControllerTestHarness:
    """
    Invokes controller actions and starts assertion chains on the outcome.

    Each call to calling() or calling_async() creates a new, independent
    ControllerTestContext, so chains started from the same harness never
    observe each other's state.

    Example:
        >>> harness = ControllerTestHarness(ProductsController(repository))
        >>> harness.calling("details", 42).should_return(Product)
        >>> harness.calling(ProductsController.delete, 0).should_throw(ValueError)

    Thread Safety:
        Not thread-safe. Use one harness per test.
    """

    def __init__(self, controller: Any, config: TestingConfig | None = None) -> None:
        """
        Initialize the harness.

        Args:
            controller: Controller instance, or a controller class that can be
                instantiated without arguments
            config: Chain configuration (defaults to DEFAULT_CONFIG)
        """
        if inspect.isclass(controller):
            controller = controller()
        self._controller = controller
        self._config = config or DEFAULT_CONFIG

    @property
    def controller(self) -> Any:
        """Get the controller instance actions are invoked on."""
        return self._controller

    @property
    def config(self) -> TestingConfig:
        return self._config

    def calling(self, action: ActionRef, *args: Any, **kwargs: Any) -> ActionResultTestBuilder:
        """
        Invoke a synchronous action and start an assertion chain.

        Args:
            action: Method name, function defined on the controller class,
                or method bound to the controller
            *args: Positional action arguments
            **kwargs: Keyword action arguments

        Returns:
            ActionResultTestBuilder for the invocation

        Raises:
            ActionInvocationError: If the action cannot be resolved, is a
                coroutine function, or the arguments do not bind
            Exception: Whatever the action raised, when capture_exceptions
                is disabled
        """
        name, method = self._resolve(action)
        if inspect.iscoroutinefunction(method):
            raise ActionInvocationError(
                type(self._controller), name, "action is a coroutine function; use calling_async()"
            )

        arguments, call_args, call_kwargs = self._bind(name, method, args, kwargs)
        context = ControllerTestContext(self._controller, self._config)
        self._log_invocation(name, arguments)

        try:
            result = method(*call_args, **call_kwargs)
        except Exception as e:
            if not self._config.capture_exceptions:
                raise
            self._capture(context, name, arguments, e, is_async=False)
        else:
            context.record_invocation(
                self._describe(name, arguments, is_async=False), result=result
            )

        return begin_chain(context)

    async def calling_async(
        self,
        action: ActionRef,
        *args: Any,
        **kwargs: Any,
    ) -> ActionResultTestBuilder:
        """
        Invoke an action, awaiting its result, and start an assertion chain.

        Synchronous actions are accepted too. The returned chain is
        synchronous; only the invocation is awaited.

        Example:
            >>> builder = await harness.calling_async("fetch", 7)
            >>> builder.should_return(Product)

        Raises:
            ActionInvocationError: If the action cannot be resolved or the
                arguments do not bind
        """
        name, method = self._resolve(action)
        arguments, call_args, call_kwargs = self._bind(name, method, args, kwargs)
        context = ControllerTestContext(self._controller, self._config)
        self._log_invocation(name, arguments)
        is_async = inspect.iscoroutinefunction(method)

        try:
            result = method(*call_args, **call_kwargs)
            if inspect.isawaitable(result):
                is_async = True
                result = await result
        except Exception as e:
            if not self._config.capture_exceptions:
                raise
            self._capture(context, name, arguments, e, is_async=is_async)
        else:
            context.record_invocation(
                self._describe(name, arguments, is_async=is_async), result=result
            )

        return begin_chain(context)

    def _resolve(self, action: ActionRef) -> tuple[str, Callable[..., Any]]:
        controller_type = type(self._controller)

        if isinstance(action, str):
            if action.startswith("_"):
                raise ActionInvocationError(
                    controller_type, action, "private and special names are not actions"
                )
            method = getattr(self._controller, action, None)
            if method is None:
                raise ActionInvocationError(controller_type, action, "no such action")
            if not (inspect.ismethod(method) or inspect.isfunction(method)):
                raise ActionInvocationError(
                    controller_type, action, "attribute is not a method of the controller"
                )
            return action, method

        if inspect.ismethod(action):
            if action.__self__ is not self._controller:
                raise ActionInvocationError(
                    controller_type,
                    action.__name__,
                    "method is bound to a different controller instance",
                )
            return action.__name__, action

        name = getattr(action, "__name__", None)
        if not inspect.isfunction(action) or name is None or name == "<lambda>":
            raise ActionInvocationError(
                controller_type,
                repr(action),
                "actions must be given by name or as a method of the controller",
            )
        if inspect.getattr_static(controller_type, name, None) is not action:
            raise ActionInvocationError(
                controller_type, name, f"function is not defined on {controller_type.__name__}"
            )
        return name, getattr(self._controller, name)

    def _bind(
        self,
        name: str,
        method: Callable[..., Any],
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> tuple[dict[str, Any], tuple[Any, ...], dict[str, Any]]:
        try:
            bound = inspect.signature(method).bind(*args, **kwargs)
        except TypeError as e:
            raise ActionInvocationError(type(self._controller), name, str(e)) from e
        bound.apply_defaults()
        return dict(bound.arguments), bound.args, bound.kwargs

    def _describe(self, name: str, arguments: dict[str, Any], is_async: bool) -> InvokedAction:
        return InvokedAction(
            action_name=name,
            controller_type=type(self._controller),
            arguments=arguments,
            is_async=is_async,
        )

    def _capture(
        self,
        context: ControllerTestContext,
        name: str,
        arguments: dict[str, Any],
        error: Exception,
        is_async: bool,
    ) -> None:
        logger.debug(
            "Captured %s raised by %s.%s: %s",
            type(error).__name__,
            type(self._controller).__name__,
            name,
            error,
        )
        context.record_invocation(
            self._describe(name, arguments, is_async=is_async), exception=error
        )

    def _log_invocation(self, name: str, arguments: dict[str, Any]) -> None:
        if self._config.log_invocations:
            logger.debug(
                "Invoking %s.%s with arguments %r",
                type(self._controller).__name__,
                name,
                arguments,
            )

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return f"ControllerTestHarness(controller={type(self._controller).__name__})"


__all__ = ["ControllerTestHarness", "begin_chain", "ActionRef"]
