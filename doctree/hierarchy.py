"""Select the namespaces to document and infer their hierarchy."""

from __future__ import annotations

from typing import Collection, Iterable, List, Optional, Sequence

from .runtime import Namespace, NamespaceRegistry


def parse_roots(namespaces_to_document: str | Iterable[str]) -> List[str]:
    """Split a colon-separated root list, dropping empty entries."""
    if isinstance(namespaces_to_document, str):
        parts: Iterable[str] = namespaces_to_document.split(":")
    else:
        parts = namespaces_to_document
    return [part.strip() for part in parts if part and part.strip()]


def matches_roots(name: str, roots: Sequence[str]) -> bool:
    return any(name == root or name.startswith(f"{root}.") for root in roots)


def relevant_namespaces(
    registry: NamespaceRegistry, namespaces_to_document: str | Iterable[str]
) -> List[Namespace]:
    """Loaded namespaces matching a root, minus skipped ones, sorted by name."""
    roots = parse_roots(namespaces_to_document)
    relevant: List[Namespace] = []
    for name in registry.names():
        if not matches_roots(name, roots):
            continue
        namespace = registry.find(name)
        if namespace is not None and not namespace.skipped:
            relevant.append(namespace)
    return relevant


def _prefixes(name: str) -> List[str]:
    parts = name.split(".")
    return [".".join(parts[: index + 1]) for index in range(len(parts))]


def base_namespace(
    namespace: Namespace,
    registry: NamespaceRegistry,
    relevant: Collection[Namespace],
) -> Namespace:
    """Return the shortest loaded, relevant prefix namespace of ``namespace``.

    A namespace with no such ancestor is its own base.
    """
    for prefix in _prefixes(namespace.name):
        candidate = registry.find(prefix)
        if candidate is not None and not candidate.skipped and candidate in relevant:
            return candidate
    return namespace


def base_namespaces(
    registry: NamespaceRegistry, namespaces_to_document: str | Iterable[str]
) -> List[Namespace]:
    relevant = relevant_namespaces(registry, namespaces_to_document)
    relevant_set = set(relevant)
    return [ns for ns in relevant if base_namespace(ns, registry, relevant_set) is ns]


def sub_namespaces(namespace: Namespace, registry: NamespaceRegistry) -> List[Namespace]:
    """Loaded, non-skipped namespaces nested below ``namespace``."""
    prefix = f"{namespace.name}."
    return [
        candidate
        for candidate in registry
        if candidate.name.startswith(prefix) and not candidate.skipped
    ]


def short_name(name: str, trim_prefix: Optional[str]) -> str:
    if trim_prefix and name.startswith(trim_prefix):
        return name[len(trim_prefix) :]
    return name


__all__ = [
    "base_namespace",
    "base_namespaces",
    "matches_roots",
    "parse_roots",
    "relevant_namespaces",
    "short_name",
    "sub_namespaces",
]
