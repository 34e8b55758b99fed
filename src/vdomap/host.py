"""
Host element model.

A minimal rendering host: elements, stateful components, element construction
and cloning, and materialization to an HTML string. The traversal engine only
consumes these operations; it never decides how or when a component runs.
"""

from __future__ import annotations

import html
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

# =============================================================================
# Elements
# =============================================================================

@dataclass(frozen=True)
class Element:
    """A tagged node: a type marker plus its props."""
    type: Any
    props: Mapping[str, Any] = field(default_factory=dict)
    key: Any = None


class Component:
    """Base for stateful components. Subclasses implement render()."""

    def __init__(self, props: Mapping[str, Any], context: Any = None):
        self.props = props
        self.context = context

    def render(self) -> Any:
        return None


def is_valid_element(value: Any) -> bool:
    return isinstance(value, Element)


def _with_children(props: dict[str, Any], children: tuple[Any, ...]) -> dict[str, Any]:
    # One child is stored bare, several as a list, none leaves props alone
    if len(children) == 1:
        props["children"] = children[0]
    elif children:
        props["children"] = list(children)
    return props


def create_element(type: Any, props: Mapping[str, Any] | None = None, *children: Any) -> Element:
    """Build an element; a "key" prop is split out onto the element."""
    props = dict(props or {})
    key = props.pop("key", None)
    return Element(type, _with_children(props, children), key)


def clone_element(element: Element, props: Mapping[str, Any] | None = None, *children: Any) -> Element:
    """Copy an element, merging props and replacing children when given."""
    merged = {**element.props, **(props or {})}
    key = merged.pop("key", element.key)
    return Element(element.type, _with_children(merged, children), key)


def create_factory(type: Any) -> Callable[..., Element]:
    """Partially apply create_element to a type."""

    def factory(props: Mapping[str, Any] | None = None, *children: Any) -> Element:
        return create_element(type, props, *children)

    factory.type = type
    return factory


# =============================================================================
# Materialization
# =============================================================================

VOID_TAGS: frozenset[str] = frozenset({"br", "hr", "img", "input", "meta", "link"})


def _render_attrs(props: Mapping[str, Any]) -> str:
    parts = []
    for name, value in props.items():
        if name == "children" or value is None or value is False:
            continue
        if value is True:
            parts.append(f" {name}")
        else:
            parts.append(f' {name}="{html.escape(str(value))}"')
    return "".join(parts)


def _invoke(component: Any, props: Mapping[str, Any], context: Any) -> Any:
    if isinstance(component, type) and callable(getattr(component, "render", None)):
        return component(props, context).render()
    return component(props, context)


def render_to_string(node: Any, context: Any = None) -> str:
    """Materialize a node tree into HTML, invoking components as it goes."""
    if node is None or isinstance(node, bool):
        return ""
    if isinstance(node, str):
        return html.escape(node)
    if isinstance(node, (int, float)):
        return str(node)
    if isinstance(node, (list, tuple)):
        return "".join(render_to_string(item, context) for item in node)
    if not is_valid_element(node):
        raise TypeError(f"render_to_string: cannot render {node!r}")

    if isinstance(node.type, str):
        tag = node.type
        attrs = _render_attrs(node.props)
        if tag in VOID_TAGS:
            return f"<{tag}{attrs}/>"
        inner = render_to_string(node.props.get("children"), context)
        return f"<{tag}{attrs}>{inner}</{tag}>"

    return render_to_string(_invoke(node.type, node.props, context), context)
