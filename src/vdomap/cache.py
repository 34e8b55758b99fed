"""
Stand-in cache for component types.

Transforming a component element means replacing its type with a stand-in
that runs the original and pipes the output through a transform. The host
compares component types by identity, so for a given (type, transform) pair
the same stand-in must come back for as long as it is in use. Stand-ins live
in a two-level map: component type -> transform -> stand-in, every level
keyed by reference identity.

Level maps are pluggable. WeakIdentityMap forgets an entry as soon as its key
is garbage collected; ReleasableMap keeps entries until they are explicitly
discarded.
"""

from __future__ import annotations

import contextlib
import functools
import threading
import weakref
from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from vdomap.config import Settings

log = structlog.get_logger(__name__)

type Transform = Callable[[Any], Any]

# =============================================================================
# Level Maps
# =============================================================================

class LevelMap(Protocol):
    """Identity-keyed map used for one cache level."""

    def get(self, key: Any) -> Any | None: ...
    def set(self, key: Any, value: Any) -> None: ...
    def discard(self, key: Any) -> bool: ...
    def values(self) -> Iterator[Any]: ...
    def __len__(self) -> int: ...


class _StrongRef:
    """Reference-shaped holder for keys that reject weak references."""

    __slots__ = ("obj",)

    def __init__(self, obj: Any):
        self.obj = obj

    def __call__(self) -> Any:
        return self.obj


class WeakIdentityMap:
    """
    Map keyed by object identity that drops entries whose key has died.

    With weak_values=True the value is held weakly too, and the entry goes
    away once either side is collected. Keys that cannot be weakly referenced
    are held strongly.
    """

    def __init__(self, *, weak_values: bool = False):
        self.weak_values = weak_values
        self._entries: dict[int, tuple[Any, Any]] = {}

    def _remover(self, ident: int) -> Callable[[weakref.ref], None]:
        self_ref = weakref.ref(self)

        def remove(ref: weakref.ref) -> None:
            mapping = self_ref()
            if mapping is None:
                return
            entry = mapping._entries.get(ident)
            # The id may already belong to a newer entry
            if entry is not None and (entry[0] is ref or entry[1] is ref):
                del mapping._entries[ident]
                log.debug("cache_entry_evicted", ident=ident)

        return remove

    def _live(self, entry: tuple[Any, Any]) -> tuple[Any, Any] | None:
        key, value = entry[0](), entry[1]
        if key is None:
            return None
        if self.weak_values:
            value = value()
            if value is None:
                return None
        return key, value

    def get(self, key: Any) -> Any | None:
        entry = self._entries.get(id(key))
        if entry is None:
            return None
        live = self._live(entry)
        if live is None or live[0] is not key:
            return None
        return live[1]

    def set(self, key: Any, value: Any) -> None:
        ident = id(key)
        remove = self._remover(ident)
        try:
            key_ref = weakref.ref(key, remove)
        except TypeError:
            log.warning("cache_key_not_weakrefable", key=repr(key))
            key_ref = _StrongRef(key)
        value_ref = weakref.ref(value, remove) if self.weak_values else value
        self._entries[ident] = (key_ref, value_ref)

    def discard(self, key: Any) -> bool:
        entry = self._entries.get(id(key))
        if entry is None or entry[0]() is not key:
            return False
        del self._entries[id(key)]
        return True

    def values(self) -> Iterator[Any]:
        for entry in list(self._entries.values()):
            live = self._live(entry)
            if live is not None:
                yield live[1]

    def __len__(self) -> int:
        return sum(1 for _ in self.values())


class ReleasableMap:
    """
    Map keyed by object identity with explicit liveness.

    Entries are held strongly until discard() retires their key. Retired
    entries are appended to `evicted` as (key, value) pairs.
    """

    def __init__(self, *, weak_values: bool = False):
        # Liveness is explicit here, values are always held strongly
        self._entries: dict[int, tuple[Any, Any]] = {}
        self.evicted: list[tuple[Any, Any]] = []

    def get(self, key: Any) -> Any | None:
        entry = self._entries.get(id(key))
        return entry[1] if entry is not None else None

    def set(self, key: Any, value: Any) -> None:
        self._entries[id(key)] = (key, value)

    def discard(self, key: Any) -> bool:
        entry = self._entries.pop(id(key), None)
        if entry is None:
            return False
        self.evicted.append(entry)
        return True

    def values(self) -> Iterator[Any]:
        return iter([value for _, value in self._entries.values()])

    def __len__(self) -> int:
        return len(self._entries)


# =============================================================================
# Stand-in Synthesis
# =============================================================================

def is_stateful(component_type: Any) -> bool:
    """True for class components exposing a render() method."""
    return isinstance(component_type, type) and callable(getattr(component_type, "render", None))


def make_standin(component_type: Any, transform: Transform) -> Any:
    """
    Build a component type that behaves like `component_type` but passes its
    output through `transform`.

    Class components get a subclass overriding render(), so construction and
    every other method are inherited unchanged. Plain callables get a
    forwarding function.
    """
    if is_stateful(component_type):
        class StandIn(component_type):
            def render(self):
                return transform(super().render())

        StandIn.__name__ = component_type.__name__
        StandIn.__qualname__ = component_type.__qualname__
        StandIn.__module__ = component_type.__module__
        StandIn.__wrapped__ = component_type
        return StandIn

    @functools.wraps(component_type)
    def standin(*args, **kwargs):
        return transform(component_type(*args, **kwargs))

    return standin


# =============================================================================
# Cache
# =============================================================================

class StandinCache:
    """
    Two-level stand-in cache.

    Args:
        map_factory: Builds the map for each level. Called with
            weak_values=False for the component type level and
            weak_values=True for the transform level.
        serialize: Guard population with a lock so that concurrent first
            requests for the same pair agree on one stand-in. When False,
            racing callers may each receive their own stand-in; the one stored
            last is returned from then on.
    """

    def __init__(
        self,
        map_factory: Callable[..., LevelMap] = WeakIdentityMap,
        *,
        serialize: bool = True,
    ):
        self._map_factory = map_factory
        self._types: LevelMap = map_factory(weak_values=False)
        self._lock = threading.Lock() if serialize else contextlib.nullcontext()

    @classmethod
    def from_settings(cls, settings: Settings) -> StandinCache:
        return cls(serialize=settings.serialize_cache)

    def wrap(self, component_type: Any, transform: Transform) -> Any:
        """Return the stand-in for (component_type, transform), creating it on first use."""
        with self._lock:
            transforms = self._types.get(component_type)
            if transforms is None:
                transforms = self._map_factory(weak_values=True)
                self._types.set(component_type, transforms)

            standin = transforms.get(transform)
            if standin is None:
                standin = make_standin(component_type, transform)
                transforms.set(transform, standin)
                log.debug(
                    "standin_created",
                    component=getattr(component_type, "__qualname__", repr(component_type)),
                    stateful=is_stateful(component_type),
                )
            return standin

    def release(self, obj: Any) -> None:
        """Retire a component type or transform from both levels."""
        with self._lock:
            for transforms in list(self._types.values()):
                transforms.discard(obj)
            self._types.discard(obj)

    def __len__(self) -> int:
        return sum(len(transforms) for transforms in self._types.values())


default_cache = StandinCache()


def wrap_component_type(component_type: Any, transform: Transform) -> Any:
    """Stand-in for (component_type, transform) from the shared cache."""
    return default_cache.wrap(component_type, transform)
