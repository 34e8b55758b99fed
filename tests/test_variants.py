"""Tests for vdomap.variants module."""

import pytest

from vdomap.errors import UnrecognizedNodeShape
from vdomap.host import create_element
from vdomap.variants import (
    MISSING,
    Missing,
    Variant,
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
    variants_of,
)
from tests.conftest import SomeComponentClass, some_stateless_component, div


class TestRegistry:
    """Test the per-family variant registry."""

    def test_element_family(self):
        """Test that the element family is closed over two variants."""
        assert variants_of("element") == {"string": PrimitiveElement, "component": ComponentElement}

    def test_child_family(self):
        """Test the child family."""
        assert variants_of("child") == {
            "null": NullChild,
            "string": StringChild,
            "number": NumberChild,
            "element": ElementChild,
        }

    def test_node_family(self):
        """Test the node family."""
        assert variants_of("node") == {"boolean": BooleanNode, "fragment": FragmentNode, "child": ChildNode}

    def test_variants_frozen(self):
        """Test that variants are immutable."""
        v = StringChild("x")
        with pytest.raises((AttributeError, TypeError)):
            v.value = "y"

    def test_variants_of_returns_copy(self):
        """Test that callers cannot extend a family through the result."""
        variants_of("node")["extra"] = object
        assert "extra" not in Variant._registry["node"]

    def test_missing_sentinel(self):
        """Test the MISSING sentinel."""
        assert MISSING is Missing.MISSING


class TestClassifyElement:
    """Test classify_element."""

    def test_string_tag(self):
        """Test that a string type is primitive."""
        assert classify_element(div()) == PrimitiveElement("div")

    def test_stateless_component(self):
        """Test that a function type is a component."""
        el = create_element(some_stateless_component)
        assert classify_element(el) == ComponentElement(some_stateless_component)

    def test_stateful_component(self):
        """Test that a class type is a component."""
        assert classify_element(create_element(SomeComponentClass)) == ComponentElement(SomeComponentClass)

    @pytest.mark.parametrize("tag", [None, 42, object()])
    def test_unknown_type(self, tag):
        """Test that other type markers are rejected."""
        el = create_element(tag)
        with pytest.raises(UnrecognizedNodeShape) as exc_info:
            classify_element(el)
        assert exc_info.value.value is el
        assert exc_info.value.classifier == "element"

    def test_not_an_element(self):
        """Test that non-elements are rejected."""
        with pytest.raises(UnrecognizedNodeShape):
            classify_element({"type": "div", "props": {}})


class TestClassifyChild:
    """Test classify_child."""

    def test_null(self):
        assert classify_child(None) == NullChild()

    def test_string(self):
        assert classify_child("") == StringChild("")

    def test_int(self):
        assert classify_child(0) == NumberChild(0)

    def test_float(self):
        assert classify_child(1.5) == NumberChild(1.5)

    def test_element(self):
        el = div()
        assert classify_child(el) == ElementChild(el)

    @pytest.mark.parametrize("value", [True, False, ["x"], ("x",), {"a": 1}, object(), b"bytes"])
    def test_rejected(self, value):
        """Test that booleans, sequences and foreign values are not children."""
        with pytest.raises(UnrecognizedNodeShape) as exc_info:
            classify_child(value)
        assert exc_info.value.value is value
        assert exc_info.value.classifier == "child"


class TestClassifyNode:
    """Test classify_node."""

    @pytest.mark.parametrize("value", [True, False])
    def test_boolean(self, value):
        """Test that booleans are not mistaken for numbers."""
        assert classify_node(value) == BooleanNode(value)

    def test_list_fragment(self):
        """Test that a list is a fragment with its items unclassified."""
        items = ["foo", [True]]
        variant = classify_node(items)
        assert variant == FragmentNode(items)
        assert variant.items is items

    def test_tuple_fragment(self):
        assert classify_node(("a",)) == FragmentNode(("a",))

    def test_empty_fragment(self):
        assert classify_node([]) == FragmentNode([])

    @pytest.mark.parametrize("value", [None, "s", 3, 2.5])
    def test_child(self, value):
        """Test that children are delegated to classify_child."""
        assert classify_node(value) == ChildNode(classify_child(value))

    def test_element_child(self):
        el = div()
        assert classify_node(el) == ChildNode(ElementChild(el))

    def test_total_over_legal_shapes(self):
        """Test that every legal node shape classifies to exactly one variant."""
        for value in [True, False, [], ["a"], None, "s", 1, 1.0, div()]:
            variant = classify_node(value)
            assert type(variant) in variants_of("node").values()

    @pytest.mark.parametrize("value", [object(), {"a": 1}, {1, 2}, b"x"])
    def test_rejected(self, value):
        """Test that foreign values raise carrying the value."""
        with pytest.raises(UnrecognizedNodeShape) as exc_info:
            classify_node(value)
        assert exc_info.value.value is value

    def test_input_not_mutated(self):
        """Test that classification leaves the input alone."""
        items = ["a", ["b"]]
        classify_node(items)
        assert items == ["a", ["b"]]
