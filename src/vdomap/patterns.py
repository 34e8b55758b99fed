"""
Pattern matchers over the three variant families.

A pattern supplies one handler per variant; match_* turns it into a total
dispatch function. Matchers never recurse on their own: descending into
fragments, element children or component output is left to the pattern.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import assert_never, Any, Protocol

from vdomap.host import Element
from vdomap.variants import (
    MISSING,
    Missing,
    PrimitiveElement,
    ComponentElement,
    NullChild,
    StringChild,
    NumberChild,
    ElementChild,
    BooleanNode,
    FragmentNode,
    ChildNode,
    classify_element,
    classify_child,
    classify_node,
)

# =============================================================================
# Protocols
# =============================================================================

class ElementPattern[T](Protocol):
    def string(self, el: Element, tag: str, children: Any | Missing) -> T: ...
    def component(self, el: Element, type: Callable[..., Any]) -> T: ...


class ChildPattern[T](Protocol):
    def null(self) -> T: ...
    def string(self, x: str) -> T: ...
    def number(self, x: int | float) -> T: ...
    def element(self, x: Element) -> T: ...


class NodePattern[T](Protocol):
    def boolean(self, x: bool) -> T: ...
    def fragment(self, xs: Sequence[Any]) -> T: ...
    def child(self, x: Any) -> T: ...


# =============================================================================
# Matchers
# =============================================================================

def match_element[T](pattern: ElementPattern[T]) -> Callable[[Element], T]:
    """
    Build an element dispatcher.

    The string branch receives the element's children prop already extracted
    (MISSING when there is none). The component branch receives the raw type;
    the component is not invoked.
    """
    def dispatch(el: Element) -> T:
        match classify_element(el):
            case PrimitiveElement(tag=tag):
                return pattern.string(el, tag, el.props.get("children", MISSING))
            case ComponentElement(type=component_type):
                return pattern.component(el, component_type)
            case unreachable:
                assert_never(unreachable)

    return dispatch


def match_child[T](pattern: ChildPattern[T]) -> Callable[[Any], T]:
    def dispatch(x: Any) -> T:
        match classify_child(x):
            case NullChild():
                return pattern.null()
            case StringChild(value=value):
                return pattern.string(value)
            case NumberChild(value=value):
                return pattern.number(value)
            case ElementChild(value=value):
                return pattern.element(value)
            case unreachable:
                assert_never(unreachable)

    return dispatch


def match_node[T](pattern: NodePattern[T]) -> Callable[[Any], T]:
    """Build a node dispatcher. Fragment items are handed over unprocessed."""
    def dispatch(x: Any) -> T:
        match classify_node(x):
            case BooleanNode(value=value):
                return pattern.boolean(value)
            case FragmentNode(items=items):
                return pattern.fragment(items)
            case ChildNode():
                return pattern.child(x)
            case unreachable:
                assert_never(unreachable)

    return dispatch
