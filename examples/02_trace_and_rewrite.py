"""
Tracing and Rewriting Example
=============================

Two traversals built by swapping pattern classes:

1. TraceTraversal logs every visited node with its depth, including nodes
   produced later by components when the host renders them
2. A custom traversal overrides a single branch (string leaves) and the change
   reaches into component output through the stand-ins
"""

from vdomap import TraceTraversal, Traversal
from vdomap.config import configure_logging
from vdomap.host import Component, create_element, create_factory, render_to_string
from vdomap.traversal import IdentityChildPattern

div = create_factory("div")
span = create_factory("span")


class Greeting(Component):
    def render(self):
        return span({}, "hello ", self.props["name"])


tree = div({}, "Welcome", [create_element(Greeting, {"name": "world"}), 3])


# ============================================================================
# Tracing
# ============================================================================


def trace():
    configure_logging(verbose=True)
    traced = TraceTraversal().element(tree)
    # Component output is traced during rendering
    print(render_to_string(traced))


# ============================================================================
# Rewriting a single branch
# ============================================================================


class ShoutChildPattern(IdentityChildPattern):
    def string(self, x):
        return x.upper()


class Shout(Traversal):
    child_pattern = ShoutChildPattern


def shout():
    print(render_to_string(Shout().element(tree)))
    # <div>WELCOME<span>HELLO WORLD</span>3</div>


if __name__ == "__main__":
    trace()
    shout()
