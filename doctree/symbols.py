"""Build the member, interface, and type views of a namespace."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, FrozenSet, List, Optional, Sequence, Tuple

from .classify import has_doc, is_interface, symbol_info, symbol_kind
from .docstrings import remove_leading_whitespace
from .logging import get_logger
from .models import InterfaceInfo, SymbolInfo, TypeInfo
from .runtime import ClassReflection, Namespace, NamespaceRegistry, Var, class_to_var, munge_namespace

RECORD_MARKER = "dataclasses.dataclass"


@dataclass(frozen=True)
class TypeConvention:
    """Naming contract used to discover structured types.

    Every type a namespace defines is expected to come with a factory var named
    ``factory_prefix + TypeName`` whose first parameter shape lists the fields
    in declaration order. The class itself is found under the munged namespace
    name, and a record is any class whose bases include ``record_marker``.
    """

    factory_prefix: str = "->"
    record_marker: str = RECORD_MARKER
    skip_bases: FrozenSet[str] = field(
        default_factory=lambda: frozenset(
            {
                RECORD_MARKER,
                "builtins.tuple",
                "typing.Generic",
                "typing.Protocol",
                "abc.ABC",
            }
        )
    )

    def type_name(self, symbol_name: str) -> Optional[str]:
        """Return the type name a factory symbol stands for, if it is one."""
        if symbol_name.startswith(self.factory_prefix) and len(symbol_name) > len(self.factory_prefix):
            return symbol_name[len(self.factory_prefix) :]
        return None

    def factory_name(self, type_name: str) -> str:
        return f"{self.factory_prefix}{type_name}"

    def class_name(self, namespace: str, type_name: str) -> str:
        return f"{munge_namespace(namespace)}.{type_name}"


DEFAULT_CONVENTION = TypeConvention()


def _sorted_vars(namespace: Namespace) -> List[Var]:
    return sorted(namespace.interns.values(), key=lambda var: var.name)


def documented_vars(namespace: Namespace) -> List[Var]:
    """Vars of ``namespace`` that belong in its top-level member list."""
    return [
        var
        for var in _sorted_vars(namespace)
        if has_doc(var)
        and not is_interface(var)
        and var.meta.get("interface") is None
        and not var.meta.get("skip")
        and not var.meta.get("private")
    ]


def members_info(namespace: Namespace) -> List[SymbolInfo]:
    return [symbol_info(var) for var in documented_vars(namespace)]


def _signature_docs(var: Var) -> bool:
    try:
        sigs = var.deref().get("sigs") or {}
        return any(isinstance(sig, Mapping) and sig.get("doc") for sig in sigs.values())
    except Exception:
        return False


def interface_vars(namespace: Namespace) -> List[Var]:
    """Interface definitions that carry a doc on themselves or a signature."""
    return [
        var
        for var in _sorted_vars(namespace)
        if is_interface(var) and (has_doc(var) or _signature_docs(var))
    ]


def interface_members(interface: Var, namespace: Namespace) -> List[SymbolInfo]:
    return [
        symbol_info(var)
        for var in _sorted_vars(namespace)
        if var.meta.get("interface") is interface
    ]


def type_display_name(value: Any) -> str:
    """Render an implementer key (a class or a name) as a type name."""
    if isinstance(value, str):
        return value
    if isinstance(value, type):
        module = getattr(value, "__module__", None)
        if module in (None, "builtins"):
            return value.__qualname__
        return f"{module}.{value.__qualname__}"
    if value is None:
        return "None"
    return str(value)


def known_implementers(interface: Var) -> List[str]:
    impls = interface.deref().get("impls") or {}
    return sorted(type_display_name(key) for key in impls)


def interfaces_info(namespace: Namespace) -> List[InterfaceInfo]:
    infos: List[InterfaceInfo] = []
    for var in interface_vars(namespace):
        meta = var.meta
        infos.append(
            InterfaceInfo(
                name=var.name,
                doc=remove_leading_whitespace(meta.get("doc")),
                kind=symbol_kind(var),
                member_functions=interface_members(var, namespace),
                known_implementers=known_implementers(var),
                source_file=meta.get("file"),
                source_line=meta.get("line"),
                added=meta.get("added"),
                deprecated=meta.get("deprecated"),
            )
        )
    return infos


def type_candidates(
    namespace: Namespace,
    registry: NamespaceRegistry,
    convention: TypeConvention = DEFAULT_CONVENTION,
    logger: Optional[logging.Logger] = None,
) -> List[Tuple[str, ClassReflection]]:
    """Find the types ``namespace`` defines by their factory vars.

    Candidates whose class cannot be resolved or reflected are left out.
    """
    log = logger or get_logger("symbols")
    names = sorted(
        type_name
        for type_name in (convention.type_name(name) for name in namespace.interns)
        if type_name
    )
    found: List[Tuple[str, ClassReflection]] = []
    for type_name in names:
        class_name = convention.class_name(namespace.name, type_name)
        try:
            reflection = registry.resolve_class(class_name)
        except Exception as exc:
            log.debug("Skipping type %s: %s", class_name, exc)
            continue
        if reflection is None:
            log.debug("No class found for factory %s in %s", type_name, namespace.name)
            continue
        found.append((type_name, reflection))
    return found


def _implements_interface(registry: NamespaceRegistry, class_name: str) -> bool:
    try:
        return is_interface(class_to_var(registry, class_name))
    except Exception:
        return False


def _is_abstract_interface(registry: NamespaceRegistry, class_name: str) -> bool:
    try:
        reflection = registry.resolve_class(class_name)
    except Exception:
        return False
    return reflection is not None and reflection.is_interface


def _factory_fields(namespace: Namespace, factory: str) -> List[str]:
    var = namespace.find_var(factory)
    if var is None:
        return []
    arglists: Sequence[Sequence[Any]] = var.meta.get("arglists") or ()
    if not arglists:
        return []
    return [str(param) for param in arglists[0]]


def types_info(
    namespace: Namespace,
    registry: NamespaceRegistry,
    convention: TypeConvention = DEFAULT_CONVENTION,
    logger: Optional[logging.Logger] = None,
) -> List[TypeInfo]:
    log = logger or get_logger("symbols")
    infos: List[TypeInfo] = []
    for type_name, reflection in type_candidates(namespace, registry, convention, log):
        try:
            bases = set(reflection.bases)
            protocols = {base for base in bases if _implements_interface(registry, base)}
            interfaces = {
                base
                for base in bases
                if base not in convention.skip_bases
                and base not in protocols
                and _is_abstract_interface(registry, base)
            }
            infos.append(
                TypeInfo(
                    name=type_name,
                    kind="record" if convention.record_marker in bases else "type",
                    fields=_factory_fields(namespace, convention.factory_name(type_name)),
                    interfaces=sorted(interfaces),
                    protocols=sorted(protocols),
                )
            )
        except Exception as exc:
            log.debug("Skipping type %s in %s: %s", type_name, namespace.name, exc)
    return infos


__all__ = [
    "DEFAULT_CONVENTION",
    "RECORD_MARKER",
    "TypeConvention",
    "documented_vars",
    "interface_members",
    "interface_vars",
    "interfaces_info",
    "known_implementers",
    "members_info",
    "type_candidates",
    "type_display_name",
    "types_info",
]
