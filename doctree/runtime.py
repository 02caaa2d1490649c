"""Explicit snapshot of the runtime state that doctree documents.

The collector never reads interpreter-wide tables directly. Instead every
resolver and builder receives a :class:`NamespaceRegistry`: the loaded
namespaces, their interned vars, and a :class:`ClassResolver` able to reflect
on the classes those namespaces construct.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, Iterator, List, Mapping, Optional, Protocol, Tuple

_UNBOUND = object()


@dataclass(eq=False)
class Var:
    """A named binding interned in a namespace, with metadata and a value."""

    name: str
    meta: Mapping[str, Any] = field(default_factory=dict)
    value: Any = _UNBOUND
    namespace: Optional[str] = None

    @property
    def bound(self) -> bool:
        return self.value is not _UNBOUND

    def deref(self) -> Any:
        """Return the bound value, raising ``LookupError`` for unbound vars."""
        if self.value is _UNBOUND:
            raise LookupError(f"Var {self.qualified_name} is unbound")
        return self.value

    @property
    def qualified_name(self) -> str:
        if self.namespace:
            return f"{self.namespace}/{self.name}"
        return self.name

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return f"Var({self.qualified_name!r})"


@dataclass(eq=False)
class Namespace:
    """A loaded, dotted-name module and the vars interned in it."""

    name: str
    meta: Mapping[str, Any] = field(default_factory=dict)
    interns: Dict[str, Var] = field(default_factory=dict)

    def intern(self, var: Var) -> Var:
        var.namespace = self.name
        self.interns[var.name] = var
        return var

    def find_var(self, name: str) -> Optional[Var]:
        return self.interns.get(name)

    @property
    def skipped(self) -> bool:
        return bool(self.meta.get("skip"))

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return f"Namespace({self.name!r})"


@dataclass(frozen=True)
class ClassReflection:
    """Reflective view of a constructed class."""

    name: str
    bases: Tuple[str, ...] = ()
    is_interface: bool = False


class ClassResolver(Protocol):
    """Resolves a qualified class name to its reflection, or ``None``."""

    def __call__(self, qualified_name: str) -> Optional[ClassReflection]:
        ...


def _no_classes(qualified_name: str) -> Optional[ClassReflection]:
    return None


class NamespaceRegistry:
    """Read-only collection of loaded namespaces keyed by dotted name."""

    def __init__(
        self,
        namespaces: Iterable[Namespace] = (),
        class_resolver: Optional[Callable[[str], Optional[ClassReflection]]] = None,
    ) -> None:
        self._namespaces: Dict[str, Namespace] = {}
        for namespace in namespaces:
            self.add(namespace)
        self._class_resolver = class_resolver or _no_classes

    def add(self, namespace: Namespace) -> Namespace:
        self._namespaces[namespace.name] = namespace
        for var in namespace.interns.values():
            var.namespace = namespace.name
        return namespace

    def find(self, name: str) -> Optional[Namespace]:
        return self._namespaces.get(name)

    def find_var(self, namespace: str, name: str) -> Optional[Var]:
        found = self._namespaces.get(namespace)
        if found is None:
            return None
        return found.find_var(name)

    def names(self) -> List[str]:
        return sorted(self._namespaces)

    def resolve_class(self, qualified_name: str) -> Optional[ClassReflection]:
        """Reflect on ``qualified_name``; resolver errors propagate to the caller."""
        return self._class_resolver(qualified_name)

    def __iter__(self) -> Iterator[Namespace]:
        for name in self.names():
            yield self._namespaces[name]

    def __len__(self) -> int:
        return len(self._namespaces)

    def __contains__(self, name: object) -> bool:
        return name in self._namespaces


def munge_namespace(name: str) -> str:
    """Convert a namespace name into the root used for its class names."""
    return name.replace("-", "_")


def class_to_var(registry: NamespaceRegistry, class_name: str) -> Optional[Var]:
    """Return the var a class name points back to, if its namespace is loaded."""
    demunged = class_name.replace("_", "-")
    namespace, dot, symbol = demunged.rpartition(".")
    if not dot:
        return None
    found = registry.find(namespace) or registry.find(class_name.rpartition(".")[0])
    if found is None:
        return None
    return found.find_var(symbol) or found.find_var(class_name.rpartition(".")[2])


__all__ = [
    "ClassReflection",
    "ClassResolver",
    "Namespace",
    "NamespaceRegistry",
    "Var",
    "class_to_var",
    "munge_namespace",
]
