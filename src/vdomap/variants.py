"""
Variant families of the UI tree and their classifiers.

Every raw value handed over by the host belongs to exactly one variant of one
of three closed families:

    element: PrimitiveElement | ComponentElement
    child:   NullChild | StringChild | NumberChild | ElementChild
    node:    BooleanNode | FragmentNode | ChildNode

Variants are frozen dataclasses registered per family, so each family can be
enumerated at runtime. Classifiers never mutate their input and raise
UnrecognizedNodeShape for anything outside the family.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import dataclass_transform, Any, ClassVar

from vdomap.errors import UnrecognizedNodeShape
from vdomap.host import Element, is_valid_element

# =============================================================================
# Sentinels
# =============================================================================

class Missing(Enum):
    """Marks an element that carries no children prop at all."""
    MISSING = "missing"


MISSING = Missing.MISSING

# =============================================================================
# Variant Base
# =============================================================================

@dataclass_transform(frozen_default=True)
class Variant:
    """Base for variant types. Subclasses register under (family, tag)."""

    _family: ClassVar[str]
    _tag: ClassVar[str]
    _registry: ClassVar[dict[str, dict[str, type[Variant]]]] = {}

    def __init_subclass__(cls, family: str | None = None, tag: str | None = None, **kwargs):
        super().__init_subclass__(**kwargs)
        if family is not None:
            cls._family = family
            Variant._registry.setdefault(family, {})
            return
        dataclass(frozen=True)(cls)
        cls._tag = tag or cls.__name__.lower()
        Variant._registry[cls._family][cls._tag] = cls


def variants_of(family: str) -> dict[str, type[Variant]]:
    """Registered variants of a family, keyed by tag."""
    return dict(Variant._registry[family])


# =============================================================================
# Element
# =============================================================================

class ElementVariant(Variant, family="element"):
    pass


class PrimitiveElement(ElementVariant, tag="string"):
    tag: str


class ComponentElement(ElementVariant, tag="component"):
    type: Any


# =============================================================================
# Child
# =============================================================================

class ChildVariant(Variant, family="child"):
    pass


class NullChild(ChildVariant, tag="null"):
    value: None = None


class StringChild(ChildVariant, tag="string"):
    value: str


class NumberChild(ChildVariant, tag="number"):
    value: int | float


class ElementChild(ChildVariant, tag="element"):
    value: Element


# =============================================================================
# Node
# =============================================================================

class NodeVariant(Variant, family="node"):
    pass


class BooleanNode(NodeVariant, tag="boolean"):
    value: bool


class FragmentNode(NodeVariant, tag="fragment"):
    items: Sequence[Any]


class ChildNode(NodeVariant, tag="child"):
    child: ChildVariant


# =============================================================================
# Classifiers
# =============================================================================

def classify_element(el: Element) -> ElementVariant:
    if not is_valid_element(el):
        raise UnrecognizedNodeShape(el, "element")
    type_ = el.type
    if isinstance(type_, str):
        return PrimitiveElement(type_)
    if callable(type_):
        return ComponentElement(type_)
    raise UnrecognizedNodeShape(el, "element")


def classify_child(x: Any) -> ChildVariant:
    if x is None:
        return NullChild()
    if isinstance(x, str):
        return StringChild(x)
    # bool is an int subclass but belongs to the node family
    if isinstance(x, (int, float)) and not isinstance(x, bool):
        return NumberChild(x)
    if is_valid_element(x):
        return ElementChild(x)
    raise UnrecognizedNodeShape(x, "child")


def classify_node(x: Any) -> NodeVariant:
    if isinstance(x, bool):
        return BooleanNode(x)
    if isinstance(x, (list, tuple)):
        return FragmentNode(x)
    return ChildNode(classify_child(x))
