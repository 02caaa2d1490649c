"""Core data models for the documentation tree."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from .runtime import Namespace


class SymbolKind(str, Enum):
    """What a documented symbol is."""

    VALUE = "value"
    FUNCTION = "function"
    MACRO = "macro"
    MULTIMETHOD = "multimethod"
    TYPE_ALIAS = "type-alias"
    INTERFACE = "interface"


@dataclass
class SymbolInfo:
    """Documentation facts for one var."""

    name: str
    doc: Optional[str]
    kind: SymbolKind
    parameter_shapes: Optional[List[List[str]]] = None
    source_file: Optional[str] = None
    source_line: Optional[int] = None
    added: Optional[str] = None
    deprecated: Optional[str] = None
    dynamic: Optional[bool] = None
    forms: Optional[List[Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"name": self.name, "doc": self.doc, "kind": self.kind.value}
        _put_optional(
            data,
            parameter_shapes=self.parameter_shapes,
            source_file=self.source_file,
            source_line=self.source_line,
            added=self.added,
            deprecated=self.deprecated,
            dynamic=self.dynamic,
            forms=self.forms,
        )
        return data


@dataclass
class InterfaceInfo:
    """An interface definition with its member functions and implementers."""

    name: str
    doc: Optional[str]
    member_functions: List[SymbolInfo] = field(default_factory=list)
    known_implementers: List[str] = field(default_factory=list)
    source_file: Optional[str] = None
    source_line: Optional[int] = None
    added: Optional[str] = None
    deprecated: Optional[str] = None
    kind: SymbolKind = SymbolKind.INTERFACE

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "name": self.name,
            "doc": self.doc,
            "kind": self.kind.value,
            "member_functions": [member.to_dict() for member in self.member_functions],
            "known_implementers": list(self.known_implementers),
        }
        _put_optional(
            data,
            source_file=self.source_file,
            source_line=self.source_line,
            added=self.added,
            deprecated=self.deprecated,
        )
        return data


@dataclass
class TypeInfo:
    """A structured record or type discovered through its factory."""

    name: str
    kind: str
    fields: List[str] = field(default_factory=list)
    interfaces: List[str] = field(default_factory=list)
    protocols: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "kind": self.kind,
            "fields": list(self.fields),
            "interfaces": list(self.interfaces),
            "protocols": list(self.protocols),
        }


@dataclass
class ModuleEntry:
    """One node of the documentation tree.

    ``namespace`` points back at the live namespace while the tree is being
    assembled and is dropped by :meth:`to_dict`.
    """

    full_name: str
    short_name: str
    doc: Optional[str]
    author: Optional[Any] = None
    see_also: Optional[Any] = None
    added: Optional[str] = None
    deprecated: Optional[str] = None
    members: List[SymbolInfo] = field(default_factory=list)
    interfaces: List[InterfaceInfo] = field(default_factory=list)
    types: List[TypeInfo] = field(default_factory=list)
    subspaces: List["ModuleEntry"] = field(default_factory=list)
    base_name: Optional[str] = None
    namespace: Optional[Namespace] = field(default=None, repr=False, compare=False)

    def is_empty(self) -> bool:
        return not (self.doc or self.members or self.types or self.interfaces)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "full_name": self.full_name,
            "short_name": self.short_name,
            "doc": self.doc,
        }
        _put_optional(
            data,
            author=self.author,
            see_also=self.see_also,
            added=self.added,
            deprecated=self.deprecated,
        )
        data.update(
            {
                "members": [member.to_dict() for member in self.members],
                "interfaces": [interface.to_dict() for interface in self.interfaces],
                "types": [type_info.to_dict() for type_info in self.types],
                "subspaces": [entry.to_dict() for entry in self.subspaces],
                "base_name": self.base_name,
            }
        )
        return data


def _put_optional(data: Dict[str, Any], **values: Any) -> None:
    for key, value in values.items():
        if value is not None:
            data[key] = _plain(value)


def _plain(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    if isinstance(value, dict):
        return {str(key): _plain(item) for key, item in value.items()}
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    return str(value)


__all__ = [
    "InterfaceInfo",
    "ModuleEntry",
    "SymbolInfo",
    "SymbolKind",
    "TypeInfo",
]
