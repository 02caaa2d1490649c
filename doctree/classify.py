"""Classify vars and extract their documentation metadata."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, List, Optional

from .docstrings import remove_leading_whitespace
from .models import SymbolInfo, SymbolKind
from .runtime import Var

# Keys every interface descriptor carries. Probing for them is the only way to
# recognise an interface definition from its bound value.
INTERFACE_DESCRIPTOR_KEYS = frozenset(
    {"on", "on_interface", "sigs", "var", "method_map", "method_builders"}
)


def is_interface(var: Optional[Var]) -> bool:
    """Return True if ``var`` is bound to an interface descriptor.

    The probe never raises: an unbound var, a value that cannot be
    dereferenced, or a mapping that fails while being inspected is simply not
    an interface.
    """
    if var is None or not var.bound:
        return False
    try:
        value = var.deref()
        if not isinstance(value, Mapping):
            return False
        return all(key in value for key in INTERFACE_DESCRIPTOR_KEYS)
    except Exception:
        return False


def is_multimethod(value: Any) -> bool:
    """Return True for multi-dispatch callables such as ``functools.singledispatch``."""
    try:
        return (
            callable(value)
            and callable(getattr(value, "dispatch", None))
            and isinstance(getattr(value, "registry", None), Mapping)
        )
    except Exception:
        return False


def _bound_value(var: Var) -> Any:
    try:
        return var.deref()
    except Exception:
        return None


def symbol_kind(var: Var) -> SymbolKind:
    """Determine the kind of ``var``; the first matching rule wins."""
    meta = var.meta
    if meta.get("macro"):
        return SymbolKind.MACRO
    if is_multimethod(_bound_value(var)):
        return SymbolKind.MULTIMETHOD
    if meta.get("arglists"):
        return SymbolKind.FUNCTION
    if meta.get("forms"):
        return SymbolKind.TYPE_ALIAS
    if is_interface(var):
        return SymbolKind.INTERFACE
    return SymbolKind.VALUE


def has_doc(var: Var) -> bool:
    return bool(var.meta.get("wiki_doc") or var.meta.get("doc"))


def _shapes(arglists: Any) -> Optional[List[List[str]]]:
    if not arglists:
        return None
    return [[str(param) for param in shape] for shape in arglists]


def symbol_info(var: Var) -> SymbolInfo:
    """Build the :class:`SymbolInfo` for a single var."""
    meta = var.meta
    forms = meta.get("forms")
    return SymbolInfo(
        name=var.name,
        doc=remove_leading_whitespace(meta.get("doc")),
        kind=symbol_kind(var),
        parameter_shapes=_shapes(meta.get("arglists")),
        source_file=meta.get("file"),
        source_line=meta.get("line"),
        added=meta.get("added"),
        deprecated=meta.get("deprecated"),
        dynamic=meta.get("dynamic"),
        forms=list(forms) if forms else None,
    )


__all__ = [
    "INTERFACE_DESCRIPTOR_KEYS",
    "has_doc",
    "is_interface",
    "is_multimethod",
    "symbol_info",
    "symbol_kind",
]
