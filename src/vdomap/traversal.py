"""
Traversals composed from the three pattern matchers.

Traversal rebuilds an equivalent tree: string elements are cloned with
transformed children, component elements get a stand-in type whose output is
transformed when the host eventually renders it. Subclasses swap individual
pattern classes to change single branches; TraceTraversal logs every visit.

The element/child/node dispatchers are created once per traversal instance.
Their identity is the stand-in cache key, so re-running the same traversal
hands the host the same stand-in types.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

import structlog

from vdomap.cache import StandinCache, default_cache
from vdomap.host import Element, clone_element, create_element
from vdomap.patterns import match_child, match_element, match_node
from vdomap.variants import MISSING, Missing

log = structlog.get_logger(__name__)


def _retype(el: Element, component_type: Callable[..., Any]) -> Element:
    props = dict(el.props)
    if el.key is not None:
        props["key"] = el.key
    return create_element(component_type, props)


# =============================================================================
# Identity Patterns
# =============================================================================

class IdentityElementPattern:
    def __init__(self, traversal: Traversal):
        self.traversal = traversal

    def string(self, el: Element, tag: str, children: Any | Missing) -> Element:
        if children is MISSING:
            return el
        return clone_element(el, None, self.traversal.descend().node(children))

    def component(self, el: Element, type: Callable[..., Any]) -> Element:
        standin = self.traversal.cache.wrap(type, self.traversal.descend().node)
        return _retype(el, standin)


class IdentityChildPattern:
    def __init__(self, traversal: Traversal):
        self.traversal = traversal

    def null(self) -> None:
        return None

    def string(self, x: str) -> str:
        return x

    def number(self, x: int | float) -> int | float:
        return x

    def element(self, x: Element) -> Element:
        return self.traversal.element(x)


class IdentityNodePattern:
    def __init__(self, traversal: Traversal):
        self.traversal = traversal

    def boolean(self, x: bool) -> bool:
        return x

    def fragment(self, xs: Sequence[Any]) -> Sequence[Any]:
        # Nested fragments stay nested
        node = self.traversal.descend().node
        items = [node(x) for x in xs]
        return tuple(items) if isinstance(xs, tuple) else items

    def child(self, x: Any) -> Any:
        return self.traversal.child(x)


# =============================================================================
# Traversal
# =============================================================================

class Traversal:
    """Identity traversal over elements, children and nodes."""

    element_pattern: type[IdentityElementPattern] = IdentityElementPattern
    child_pattern: type[IdentityChildPattern] = IdentityChildPattern
    node_pattern: type[IdentityNodePattern] = IdentityNodePattern

    def __init__(self, cache: StandinCache | None = None):
        self.cache = cache if cache is not None else default_cache
        self.element = match_element(self.element_pattern(self))
        self.child = match_child(self.child_pattern(self))
        self.node = match_node(self.node_pattern(self))

    def descend(self) -> Traversal:
        """Traversal used for sub-trees: fragment items, children, component output."""
        return self

    def __call__(self, node: Any) -> Any:
        return self.node(node)


# =============================================================================
# Describe
# =============================================================================

class DescribeNodePattern:
    """Names the node variant of a value."""

    def boolean(self, x: bool) -> str:
        return "boolean"

    def fragment(self, xs: Sequence[Any]) -> str:
        return "fragment"

    def child(self, x: Any) -> str:
        return "child"


describe_node = match_node(DescribeNodePattern())


# =============================================================================
# Trace
# =============================================================================

class TraceElementPattern(IdentityElementPattern):
    def string(self, el, tag, children):
        log.info(
            "node_visited",
            depth=self.traversal.depth,
            kind="element.string",
            tag=tag,
            children=None if children is MISSING else describe_node(children),
        )
        return super().string(el, tag, children)

    def component(self, el, type):
        log.info(
            "node_visited",
            depth=self.traversal.depth,
            kind="element.component",
            component=getattr(type, "__qualname__", repr(type)),
        )
        return super().component(el, type)


class TraceChildPattern(IdentityChildPattern):
    def null(self):
        log.info("node_visited", depth=self.traversal.depth, kind="child.null")
        return super().null()

    def string(self, x):
        log.info("node_visited", depth=self.traversal.depth, kind="child.string", value=x)
        return super().string(x)

    def number(self, x):
        log.info("node_visited", depth=self.traversal.depth, kind="child.number", value=x)
        return super().number(x)

    def element(self, x):
        log.info("node_visited", depth=self.traversal.depth, kind="child.element")
        return super().element(x)


class TraceNodePattern(IdentityNodePattern):
    def boolean(self, x):
        log.info("node_visited", depth=self.traversal.depth, kind="node.boolean", value=x)
        return super().boolean(x)

    def fragment(self, xs):
        log.info("node_visited", depth=self.traversal.depth, kind="node.fragment", size=len(xs))
        return super().fragment(xs)


class TraceTraversal(Traversal):
    """Identity traversal that logs every visited node with its depth."""

    element_pattern = TraceElementPattern
    child_pattern = TraceChildPattern
    node_pattern = TraceNodePattern

    def __init__(self, depth: int = 0, cache: StandinCache | None = None):
        self.depth = depth
        self._deeper: TraceTraversal | None = None
        super().__init__(cache)

    def descend(self) -> TraceTraversal:
        # Created once so the next level's dispatchers stay stable cache keys
        if self._deeper is None:
            self._deeper = type(self)(self.depth + 1, self.cache)
        return self._deeper
