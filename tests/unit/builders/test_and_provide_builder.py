"""
Unit tests for the AndProvideTestBuilder continuation node.
"""

from __future__ import annotations

import pytest

from mytested.builders.actions import ActionResultTestBuilder
from mytested.builders.and_provide import AndProvideTestBuilder
from mytested.builders.base import BaseTestBuilder, BaseTestBuilderWithInvokedAction
from mytested.builders.extensions import assertion
from mytested.exceptions import InvalidStateError
from mytested.protocols import InvokedActionProvider
from tests.fixtures import HomeController, ViewResult, make_context


class TestAndProvideTestBuilderConstruction:
    def test_none_context_raises_invalid_state(self):
        with pytest.raises(InvalidStateError) as exc_info:
            AndProvideTestBuilder(None)  # type: ignore[arg-type]
        assert exc_info.value.builder_type == "AndProvideTestBuilder"

    def test_holds_same_context(self, index_context):
        builder = AndProvideTestBuilder(index_context)
        assert builder.test_context is index_context

    def test_composes_rather_than_extends_invoked_action_builder(self, index_context):
        builder = AndProvideTestBuilder(index_context)

        assert isinstance(builder, BaseTestBuilder)
        assert not isinstance(builder, BaseTestBuilderWithInvokedAction)
        assert isinstance(builder, InvokedActionProvider)

    def test_construction_has_no_side_effects(self, index_context):
        AndProvideTestBuilder(index_context)

        assert index_context.assertion_count == 0
        assert index_context.action_name == "Index"


class TestAndProvideTestBuilderAccessors:
    """Accessors read exactly the data stored in the context."""

    def test_home_index_scenario(self, home_controller):
        context = make_context(home_controller, action_name="Index", result=ViewResult("Index"))

        builder = AndProvideTestBuilder(context)

        assert builder.invoked_action_name() == "Index"
        assert builder.controller_type() is HomeController
        assert builder.action_result() == ViewResult("Index")

    def test_read_through(self, home_controller):
        error = ValueError("boom")
        context = make_context(
            home_controller,
            action_name="fail",
            exception=error,
            arguments={"message": "boom"},
        )

        builder = AndProvideTestBuilder(context)

        assert builder.invoked_action() is context.invoked_action
        assert builder.controller() is home_controller
        assert builder.action_arguments() == {"message": "boom"}
        assert builder.action_result() is None
        assert builder.caught_exception() is error


class TestAndProvideTestBuilderContinuation:
    def test_and_also_returns_assertion_builder_on_same_context(self, index_context):
        continued = AndProvideTestBuilder(index_context).and_also()

        assert isinstance(continued, ActionResultTestBuilder)
        assert continued.test_context is index_context

    def test_and_alias(self, index_context):
        continued = AndProvideTestBuilder(index_context).and_()

        assert isinstance(continued, ActionResultTestBuilder)
        assert continued.test_context is index_context

    def test_and_also_requires_invoked_action(self, empty_context):
        """Resuming assertions on a context without invocation fails fast."""
        builder = AndProvideTestBuilder(empty_context)

        with pytest.raises(InvalidStateError, match="an action must be invoked"):
            builder.and_also()



def _renders(builder, view_name):
    """Assert the action rendered a view."""
    result = builder.action_result()
    if getattr(result, "view_name", None) != view_name:
        raise AssertionError(f"Expected view {view_name!r}, got {result!r}")
    builder.test_context.record_assertion(f"renders {view_name!r}")
    return AndProvideTestBuilder(builder.test_context)


class TestAndProvideTestBuilderRegisteredAssertions:
    """Registered assertions are reachable from the continuation node."""

    def test_registered_assertion_keeps_context(self, index_context):
        assertion("should_render")(_renders)
        builder = AndProvideTestBuilder(index_context)

        continued = builder.should_render("Index")

        assert isinstance(continued, AndProvideTestBuilder)
        assert continued.test_context is index_context
        assert index_context.assertions[-1].description == "renders 'Index'"

    def test_registered_assertion_failure_propagates(self, index_context):
        assertion("should_render")(_renders)

        with pytest.raises(AssertionError, match="Expected view 'About'"):
            AndProvideTestBuilder(index_context).should_render("About")

    def test_chains_registered_assertions_without_and_also(self, home_harness):
        assertion("should_render")(_renders)

        final = home_harness.calling("index").should_return().should_render("Index")

        descriptions = [r.description for r in final.test_context.assertions]
        assert descriptions == ["returns a value", "renders 'Index'"]

    def test_foreign_context_rejected(self, index_context, home_controller):
        @assertion()
        def should_escape(builder):
            return AndProvideTestBuilder(make_context(home_controller))

        with pytest.raises(InvalidStateError, match="different test context"):
            AndProvideTestBuilder(index_context).should_escape()

    def test_unregistered_name_raises_attribute_error(self, index_context):
        builder = AndProvideTestBuilder(index_context)

        with pytest.raises(AttributeError, match="no attribute or registered assertion"):
            builder.should_return(ViewResult)
