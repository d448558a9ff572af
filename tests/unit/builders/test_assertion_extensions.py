"""
Unit tests for the @assertion decorator and AssertionRegistry.
"""

from __future__ import annotations

import logging

import pytest

from mytested.builders.actions import ActionResultTestBuilder
from mytested.builders.and_provide import AndProvideTestBuilder
from mytested.builders.base import BaseTestBuilder
from mytested.builders.extensions import AssertionRegistry, assertion
from mytested.context import ControllerTestContext
from mytested.exceptions import DuplicateAssertionError, InvalidStateError
from tests.fixtures import HomeController, RedirectResult, make_context


def _redirects_to(builder, location):
    """Assert the action redirected to a location."""
    result = builder.action_result()
    if not isinstance(result, RedirectResult) or result.location != location:
        raise AssertionError(f"Expected redirect to {location!r}, got {result!r}")
    builder.test_context.record_assertion(f"redirects to {location!r}")
    return AndProvideTestBuilder(builder.test_context)


@pytest.fixture
def logout_builder(home_controller) -> ActionResultTestBuilder:
    context = make_context(home_controller, action_name="logout", result=RedirectResult("/"))
    return ActionResultTestBuilder(context)


class TestAssertionDecorator:
    """Tests for registering assertions with @assertion."""

    def test_registers_under_function_name(self):
        @assertion()
        def should_redirect(builder, location):
            return _redirects_to(builder, location)

        assert AssertionRegistry.get("should_redirect") is should_redirect

    def test_registers_under_explicit_name(self):
        assertion("should_redirect_to")(_redirects_to)

        assert AssertionRegistry.get("should_redirect_to") is _redirects_to
        assert "should_redirect_to" in AssertionRegistry.names()

    def test_returns_function_unchanged(self):
        decorated = assertion("should_redirect_to")(_redirects_to)
        assert decorated is _redirects_to

    def test_duplicate_name_rejected(self):
        assertion("should_redirect_to")(_redirects_to)

        with pytest.raises(DuplicateAssertionError) as exc_info:
            assertion("should_redirect_to")(_redirects_to)
        assert exc_info.value.name == "should_redirect_to"

    def test_replace_allows_override(self, caplog):
        assertion("should_redirect_to")(_redirects_to)

        def replacement(builder, location):
            return _redirects_to(builder, location)

        with caplog.at_level(logging.WARNING, logger="mytested.builders.extensions"):
            assertion("should_redirect_to", replace=True)(replacement)

        assert AssertionRegistry.get("should_redirect_to") is replacement
        assert "Replacing registered assertion 'should_redirect_to'" in caplog.text

    @pytest.mark.parametrize("name", ["should_return", "and_also", "test_context"])
    def test_builder_attribute_collision_rejected(self, name):
        with pytest.raises(DuplicateAssertionError, match="shadow an existing builder attribute"):
            AssertionRegistry.register(name, _redirects_to)

    @pytest.mark.parametrize("name", ["_private", "not an identifier", ""])
    def test_invalid_name_rejected(self, name):
        with pytest.raises(ValueError, match="public identifier"):
            AssertionRegistry.register(name, _redirects_to)

    def test_unregister(self):
        assertion("should_redirect_to")(_redirects_to)

        AssertionRegistry.unregister("should_redirect_to")

        assert AssertionRegistry.get("should_redirect_to") is None

    def test_unregister_unknown_name_is_ignored(self):
        AssertionRegistry.unregister("never_registered")


class TestRegisteredAssertionOnBuilders:
    """Tests for calling registered assertions through builders."""

    def test_callable_on_builder(self, logout_builder):
        assertion("should_redirect_to")(_redirects_to)

        continued = logout_builder.should_redirect_to("/")

        assert isinstance(continued, AndProvideTestBuilder)
        assert continued.test_context is logout_builder.test_context

    def test_bound_operation_keeps_name_and_doc(self, logout_builder):
        assertion("should_redirect_to")(_redirects_to)

        bound = logout_builder.should_redirect_to

        assert bound.__name__ == "should_redirect_to"
        assert bound.__doc__ == "Assert the action redirected to a location."

    def test_chains_with_builtin_vocabulary(self, logout_builder):
        assertion("should_redirect_to")(_redirects_to)

        (
            logout_builder.should_not_throw()
            .and_also()
            .should_redirect_to("/")
            .and_also()
            .should_return(RedirectResult)
        )

        descriptions = [r.description for r in logout_builder.test_context.assertions]
        assert descriptions == ["does not throw", "redirects to '/'", "returns RedirectResult"]

    def test_assertion_failure_propagates_unchanged(self, logout_builder):
        assertion("should_redirect_to")(_redirects_to)

        with pytest.raises(AssertionError, match="Expected redirect to '/home'"):
            logout_builder.should_redirect_to("/home")

    def test_non_builder_return_rejected(self, logout_builder):
        @assertion()
        def should_be_sloppy(builder):
            return None

        with pytest.raises(TypeError, match="must return a test builder, got NoneType"):
            logout_builder.should_be_sloppy()

    def test_foreign_context_rejected(self, logout_builder):
        @assertion()
        def should_escape(builder):
            other = make_context(HomeController(), action_name="index")
            return AndProvideTestBuilder(other)

        with pytest.raises(InvalidStateError, match="different test context"):
            logout_builder.should_escape()

    def test_may_return_any_builder_on_same_context(self, logout_builder):
        @assertion()
        def should_stay(builder):
            return BaseTestBuilder(builder.test_context)

        result = logout_builder.should_stay()

        assert type(result) is BaseTestBuilder
        assert isinstance(result.test_context, ControllerTestContext)

    def test_registry_cleared_between_tests(self):
        """The autouse fixture removed registrations from earlier tests."""
        assert AssertionRegistry.get("should_redirect_to") is None
