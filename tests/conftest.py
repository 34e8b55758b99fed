"""Shared component fixtures and element trees for vdomap tests."""

from __future__ import annotations

import pytest

from vdomap.cache import StandinCache
from vdomap.host import Component, create_element, create_factory

# =============================================================================
# Stateless Components
# =============================================================================

def some_stateless_component(props, context=None):
    return create_element("div")


def another_stateless_component(props, context=None):
    return create_element(some_stateless_component)


def third_stateless_component(props, context=None):
    return create_element(SomeComponentClass)


# =============================================================================
# Component Classes
# =============================================================================

class SomeComponentClass(Component):
    def render(self):
        return create_element("div")


class AnotherComponentClass(Component):
    def render(self):
        return create_element(SomeComponentClass)


class ThirdComponentClass(Component):
    def render(self):
        return create_element(some_stateless_component)


class GreetingComponent(Component):
    """Reads props and context, and counts construction."""

    constructed = 0

    def __init__(self, props, context=None):
        super().__init__(props, context)
        GreetingComponent.constructed += 1

    def render(self):
        greeting = (self.context or {}).get("greeting", "hello")
        return create_element("p", {"class": "greeting"}, greeting, " ", self.props["name"])


div = create_factory("div")
span = create_factory("span")


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def cache() -> StandinCache:
    """A fresh stand-in cache, isolated from the shared default."""
    return StandinCache()


@pytest.fixture
def root_element():
    """Tree nesting every element, child and node shape in each other."""
    return div(
        {},
        False,  # boolean
        None,  # child: null
        "string",  # child: string
        div(),  # child: element: string
        [  # fragment
            True,  # boolean
            span({"key": 1}, "text"),  # child: element: string
            create_element(another_stateless_component, {"key": 2}),  # stateless
            create_element(ThirdComponentClass, {"key": 3}),  # stateful
            [  # fragment
                create_element(third_stateless_component),  # stateless
                div(),  # child: element: string
            ],
        ],
        create_element(AnotherComponentClass),  # stateful
        42,  # child: number
    )
