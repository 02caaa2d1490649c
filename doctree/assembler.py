"""Assemble the base-namespace / subspace documentation tree."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional

from .docstrings import remove_leading_whitespace
from .hierarchy import base_namespaces, short_name, sub_namespaces
from .logging import get_logger
from .models import ModuleEntry
from .runtime import Namespace, NamespaceRegistry
from .symbols import DEFAULT_CONVENTION, TypeConvention, interfaces_info, members_info, types_info


def build_entry(namespace: Namespace, trim_prefix: Optional[str]) -> ModuleEntry:
    """Entry for ``namespace`` carrying only its own namespace-level metadata."""
    meta = namespace.meta
    return ModuleEntry(
        full_name=namespace.name,
        short_name=short_name(namespace.name, trim_prefix),
        doc=remove_leading_whitespace(meta.get("doc")),
        author=meta.get("author"),
        see_also=meta.get("see_also"),
        added=meta.get("added"),
        deprecated=meta.get("deprecated"),
        namespace=namespace,
    )


def add_symbols(
    entry: ModuleEntry,
    registry: NamespaceRegistry,
    convention: TypeConvention = DEFAULT_CONVENTION,
    logger: Optional[logging.Logger] = None,
) -> ModuleEntry:
    namespace = entry.namespace
    if namespace is None:
        raise ValueError(f"Entry {entry.full_name} has no namespace attached")
    entry.members = members_info(namespace)
    entry.interfaces = interfaces_info(namespace)
    entry.types = types_info(namespace, registry, convention, logger)
    return entry


def build_entry_list(
    namespaces: Iterable[Namespace],
    registry: NamespaceRegistry,
    trim_prefix: Optional[str],
    convention: TypeConvention = DEFAULT_CONVENTION,
    logger: Optional[logging.Logger] = None,
) -> List[ModuleEntry]:
    entries = [
        add_symbols(build_entry(namespace, trim_prefix), registry, convention, logger)
        for namespace in namespaces
    ]
    return sorted(entries, key=lambda entry: entry.short_name)


def add_subspaces(
    entry: ModuleEntry,
    registry: NamespaceRegistry,
    trim_prefix: Optional[str],
    convention: TypeConvention = DEFAULT_CONVENTION,
    logger: Optional[logging.Logger] = None,
) -> ModuleEntry:
    """Attach every non-empty namespace nested below ``entry``."""
    if entry.namespace is None:
        raise ValueError(f"Entry {entry.full_name} has no namespace attached")
    candidates = build_entry_list(
        sub_namespaces(entry.namespace, registry), registry, trim_prefix, convention, logger
    )
    entry.subspaces = [candidate for candidate in candidates if not candidate.is_empty()]
    return entry


def stamp_base_name(entry: ModuleEntry, base_name: Optional[str] = None) -> ModuleEntry:
    """Record the short name of the top-level base on ``entry`` and its subspaces."""
    base = base_name if base_name is not None else entry.short_name
    entry.base_name = base
    for subspace in entry.subspaces:
        stamp_base_name(subspace, base)
    return entry


def clean_entries(entries: Iterable[ModuleEntry]) -> List[Dict[str, Any]]:
    """Drop namespace back-references at every depth and return plain data."""
    return [entry.to_dict() for entry in entries]


def project_info(
    registry: NamespaceRegistry,
    namespaces_to_document: str | Iterable[str],
    trim_prefix: Optional[str] = None,
    *,
    convention: TypeConvention = DEFAULT_CONVENTION,
    logger: Optional[logging.Logger] = None,
) -> List[Dict[str, Any]]:
    """Build the complete documentation tree for the selected namespaces."""
    log = logger or get_logger("assembler")
    bases = base_namespaces(registry, namespaces_to_document)
    log.debug("Documenting %d base namespaces", len(bases))
    entries = build_entry_list(bases, registry, trim_prefix, convention, log)
    for entry in entries:
        add_subspaces(entry, registry, trim_prefix, convention, log)
        stamp_base_name(entry)
        log.debug(
            "Namespace %s: %d members, %d interfaces, %d types, %d subspaces",
            entry.full_name,
            len(entry.members),
            len(entry.interfaces),
            len(entry.types),
            len(entry.subspaces),
        )
    return clean_entries(entries)


__all__ = [
    "add_subspaces",
    "add_symbols",
    "build_entry",
    "build_entry_list",
    "clean_entries",
    "project_info",
    "stamp_base_name",
]
