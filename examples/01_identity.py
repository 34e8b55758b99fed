"""
Identity Traversal Example
==========================

This example rebuilds a UI tree with the identity traversal and checks that
it materializes exactly like the original. It covers:

1. Building a tree with string elements, fragments and both kinds of components
2. Running the identity traversal over it
3. Seeing component types replaced by cached stand-ins
4. Rendering both trees and comparing the output
"""

from vdomap import Traversal
from vdomap.host import Component, create_element, create_factory, render_to_string

div = create_factory("div")
span = create_factory("span")


# ============================================================================
# Step 1: Components
# ============================================================================


def badge(props, context=None):
    """A stateless component."""
    return span({"class": "badge"}, props["label"])


class Card(Component):
    """A stateful component rendering its title and a badge."""

    def render(self):
        return div(
            {"class": "card"},
            create_element("h2", {}, self.props["title"]),
            create_element(badge, {"label": "new"}),
        )


# ============================================================================
# Step 2: A tree covering every shape
# ============================================================================


def build_tree():
    return div(
        {"id": "root"},
        False,
        None,
        "intro",
        [
            True,
            create_element(Card, {"key": "a", "title": "First"}),
            [create_element(badge, {"label": "solo"}), 7],
        ],
    )


# ============================================================================
# Step 3: Transform and compare
# ============================================================================


def main():
    tree = build_tree()
    identity = Traversal()
    rebuilt = identity.element(tree)

    card = rebuilt.props["children"][3][1]
    print(f"original component type: {tree.props['children'][3][1].type!r}")
    print(f"stand-in type:           {card.type!r}")
    print(f"stand-in subclasses Card: {issubclass(card.type, Card)}")

    # The same traversal hands out the same stand-in on every run
    again = identity.element(tree).props["children"][3][1]
    assert again.type is card.type

    original_html = render_to_string(tree)
    rebuilt_html = render_to_string(rebuilt)
    print(original_html)
    assert original_html == rebuilt_html
    print("identity traversal renders identically")


if __name__ == "__main__":
    main()
