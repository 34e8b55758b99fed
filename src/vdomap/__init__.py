"""vdomap - pattern matching and transformation over host UI trees."""

from vdomap.cache import (
    LevelMap,
    ReleasableMap,
    StandinCache,
    WeakIdentityMap,
    default_cache,
    make_standin,
    wrap_component_type,
)
from vdomap.errors import UnrecognizedNodeShape
from vdomap.patterns import (
    ChildPattern,
    ElementPattern,
    NodePattern,
    match_child,
    match_element,
    match_node,
)
from vdomap.traversal import (
    TraceTraversal,
    Traversal,
    describe_node,
)
from vdomap.variants import (
    MISSING,
    BooleanNode,
    ChildNode,
    ComponentElement,
    ElementChild,
    FragmentNode,
    NullChild,
    NumberChild,
    PrimitiveElement,
    StringChild,
    classify_child,
    classify_element,
    classify_node,
    variants_of,
)

__all__ = [
    "MISSING",
    # Variants
    "BooleanNode",
    "ChildNode",
    "ChildPattern",
    "ComponentElement",
    "ElementChild",
    # Patterns
    "ElementPattern",
    "FragmentNode",
    # Cache
    "LevelMap",
    "NodePattern",
    "NullChild",
    "NumberChild",
    "PrimitiveElement",
    "ReleasableMap",
    "StandinCache",
    "StringChild",
    "TraceTraversal",
    # Traversals
    "Traversal",
    # Errors
    "UnrecognizedNodeShape",
    "WeakIdentityMap",
    # Classification
    "classify_child",
    "classify_element",
    "classify_node",
    "default_cache",
    "describe_node",
    "make_standin",
    "match_child",
    "match_element",
    "match_node",
    "variants_of",
    "wrap_component_type",
]
