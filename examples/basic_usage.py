"""
Basic Usage Example

This example demonstrates fluent assertion chains for controller actions:
- Invoking actions by name and by method reference
- Chaining assertions with and_also()
- Reading invoked-action data from a continuation node
- Extending the assertion vocabulary with @assertion

Run with: python examples/basic_usage.py
"""

import asyncio
import logging
from dataclasses import dataclass

from mytested import (
    AndProvideTestBuilder,
    ControllerTestHarness,
    TestingConfig,
    assertion,
)

# =============================================================================
# Application Code
# =============================================================================


@dataclass(frozen=True)
class ViewResult:
    view_name: str
    model: object = None


@dataclass(frozen=True)
class RedirectResult:
    location: str


class AccountController:
    """A controller with synchronous and asynchronous actions."""

    def __init__(self) -> None:
        self.signed_in = {"alice"}

    def profile(self, username: str) -> ViewResult:
        if username not in self.signed_in:
            raise PermissionError(f"{username} is not signed in")
        return ViewResult("Profile", model={"username": username})

    def logout(self, username: str) -> RedirectResult:
        self.signed_in.discard(username)
        return RedirectResult("/")

    async def refresh(self, username: str) -> ViewResult:
        await asyncio.sleep(0)
        return self.profile(username)


# =============================================================================
# Vocabulary Extension
# =============================================================================


@assertion()
def should_redirect_to(builder, location: str) -> AndProvideTestBuilder:
    """Assert that the action redirected to a location."""
    result = builder.action_result()
    if not isinstance(result, RedirectResult) or result.location != location:
        raise AssertionError(f"Expected redirect to {location!r}, got {result!r}")
    builder.test_context.record_assertion(f"redirects to {location!r}")
    return AndProvideTestBuilder(builder.test_context)


# =============================================================================
# Demonstration
# =============================================================================


async def main() -> None:
    logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    harness = ControllerTestHarness(AccountController)

    # Chain assertions, then read back what was invoked
    node = (
        harness.calling("profile", "alice")
        .should_not_throw()
        .and_also()
        .should_return(ViewResult)
        .and_also()
        .should_pass_for(lambda result: result.model["username"] == "alice", "shows alice")
    )
    print(f"Invoked {node.controller_type().__name__}.{node.invoked_action_name()}")
    print(f"Arguments: {dict(node.action_arguments())}")
    print(f"Assertions: {[r.description for r in node.test_context.assertions]}")

    # Exceptions raised by the action are captured for should_throw()
    harness.calling(AccountController.profile, "bob").should_throw(
        PermissionError, match="not signed in"
    )

    # Registered assertions chain like built-in ones
    harness.calling("logout", "alice").should_redirect_to("/").and_also().should_not_throw()

    # Async actions are awaited by the harness; the chain stays synchronous
    strict = ControllerTestHarness(
        AccountController(), config=TestingConfig(capture_exceptions=False)
    )
    builder = await strict.calling_async("refresh", "alice")
    builder.should_return_value(ViewResult("Profile", model={"username": "alice"}))

    print("All assertions passed")


if __name__ == "__main__":
    asyncio.run(main())
