from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

_NO_KEY = object()


@dataclass(frozen=True, slots=True, eq=False, repr=False)
class Context:
    """Immutable, chainable carrier of request-scoped values.

    Each handle stores at most one key/value pair plus a reference to the
    handle it was derived from. Extending a handle never touches the parent,
    so any number of handles may be derived from the same parent, from any
    thread or task, without coordination.

    Lookups walk the chain from the newest entry to the root, so they cost
    O(depth).
    """

    parent: "Context | None" = None
    key: Any = field(default=_NO_KEY)
    value: Any = None

    @classmethod
    def background(cls) -> "Context":
        """Return the empty root handle"""
        return _BACKGROUND

    def with_value(self, key: Any, value: Any) -> "Context":
        """Return a new handle that carries ``key`` -> ``value`` on top of this one"""
        if key is None:
            raise ValueError("context key must not be None")
        return Context(parent=self, key=key, value=value)

    def lookup(self, key: Any) -> Any:
        """Return the newest value stored under ``key``, or None"""
        for entry_key, entry_value in self.entries():
            if entry_key == key:
                return entry_value
        return None

    def entries(self) -> Iterator[tuple[Any, Any]]:
        """Yield (key, value) pairs from newest to oldest"""
        node: Context | None = self
        while node is not None:
            if node.key is not _NO_KEY:
                yield node.key, node.value
            node = node.parent

    def __repr__(self) -> str:
        if self.key is _NO_KEY:
            return "Context.background()"
        depth = sum(1 for _ in self.entries())
        return f"<Context key={self.key!r} depth={depth}>"


_BACKGROUND = Context()
