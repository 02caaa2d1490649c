"""Snapshot live Python modules into a :class:`NamespaceRegistry`.

Python constructs are mapped onto var metadata as follows:

* functions defined in a module become vars with ``arglists``, ``file`` and
  ``line``; ``__added__``, ``__deprecated__``, ``__dynamic__`` and
  ``__wiki_doc__`` attributes are copied when present.
* ``typing.Protocol`` classes become interface descriptors. Their methods are
  interned as ``Protocol.method`` vars pointing back at the interface.
* every other class gets a ``->Name`` factory var whose parameter shape lists
  its fields (dataclass fields, named tuple fields, or ``__init__`` parameters).
* module-level values listed in ``__var_docs__`` become documented values;
  ``contextvars.ContextVar`` values are flagged dynamic and typing aliases
  carry their ``forms``.
* module attributes ``__author__``, ``__see_also__``, ``__added__``,
  ``__deprecated__`` and ``__doctree_skip__`` describe the namespace.
"""

from __future__ import annotations

import contextvars
import dataclasses
import inspect
import sys
import typing
from types import ModuleType
from typing import Any, Dict, Iterable, List, Mapping, Optional

from .logging import get_logger
from .runtime import ClassReflection, Namespace, NamespaceRegistry, Var
from .symbols import DEFAULT_CONVENTION, RECORD_MARKER, TypeConvention

logger = get_logger("introspect")

_MODULE_META = {
    "author": "__author__",
    "see_also": "__see_also__",
    "added": "__added__",
    "deprecated": "__deprecated__",
    "skip": "__doctree_skip__",
}

_OBJECT_META = {
    "added": "__added__",
    "deprecated": "__deprecated__",
    "dynamic": "__dynamic__",
    "wiki_doc": "__wiki_doc__",
    "skip": "__doctree_skip__",
}


def is_protocol_class(obj: Any) -> bool:
    return (
        inspect.isclass(obj)
        and bool(getattr(obj, "_is_protocol", False))
        and obj is not typing.Protocol
    )


def is_record_class(cls: type) -> bool:
    if dataclasses.is_dataclass(cls):
        return True
    return issubclass(cls, tuple) and hasattr(cls, "_fields")


def _parameter_label(parameter: inspect.Parameter) -> str:
    if parameter.kind is inspect.Parameter.VAR_POSITIONAL:
        return f"*{parameter.name}"
    if parameter.kind is inspect.Parameter.VAR_KEYWORD:
        return f"**{parameter.name}"
    return parameter.name


def arglists_for(func: Any, *, drop_self: bool = False) -> List[List[str]]:
    """Parameter shapes of ``func``; empty when no signature is available."""
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        return []
    params = [_parameter_label(param) for param in signature.parameters.values()]
    if drop_self and params and params[0] in ("self", "cls"):
        params = params[1:]
    return [params]


def _source_location(obj: Any) -> Dict[str, Any]:
    location: Dict[str, Any] = {}
    target = inspect.unwrap(obj) if callable(obj) else obj
    try:
        source_file = inspect.getsourcefile(target)
    except (TypeError, OSError):
        source_file = None
    if source_file:
        location["file"] = source_file
    code = getattr(target, "__code__", None)
    line = getattr(code, "co_firstlineno", None) or getattr(target, "__firstlineno__", None)
    if isinstance(line, int):
        location["line"] = line
    return location


def _copy_attributes(obj: Any, mapping: Mapping[str, str]) -> Dict[str, Any]:
    copied: Dict[str, Any] = {}
    for key, attribute in mapping.items():
        value = getattr(obj, attribute, None)
        if value is not None:
            copied[key] = value
    return copied


def function_meta(func: Any, name: str) -> Dict[str, Any]:
    meta: Dict[str, Any] = {"name": name, "doc": getattr(func, "__doc__", None)}
    arglists = arglists_for(func)
    if arglists:
        meta["arglists"] = arglists
    meta.update(_source_location(func))
    meta.update(_copy_attributes(func, _OBJECT_META))
    if name.startswith("_"):
        meta["private"] = True
    return meta


def factory_fields(cls: type) -> List[str]:
    """Field names of ``cls`` in declaration order."""
    if dataclasses.is_dataclass(cls):
        return [item.name for item in dataclasses.fields(cls) if item.init]
    if issubclass(cls, tuple) and hasattr(cls, "_fields"):
        return list(cls._fields)
    shapes = arglists_for(cls.__init__, drop_self=True) if "__init__" in vars(cls) else []
    return shapes[0] if shapes else []


def _protocol_methods(cls: type) -> Dict[str, Any]:
    """Public methods of a protocol, including those of the protocols it extends."""
    methods: Dict[str, Any] = {}
    for base in reversed(cls.__mro__):
        if not is_protocol_class(base):
            continue
        for name, member in vars(base).items():
            if inspect.isfunction(member) and not name.startswith("_"):
                methods[name] = member
    return dict(sorted(methods.items()))


def qualified_class_name(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"


class PythonClassResolver:
    """Reflects on module-level classes of the snapshotted modules."""

    def __init__(self, modules: Mapping[str, ModuleType]) -> None:
        self._modules = modules

    def __call__(self, qualified_name: str) -> Optional[ClassReflection]:
        module_name, _, class_name = qualified_name.rpartition(".")
        module = self._modules.get(module_name)
        if module is None:
            return None
        cls = getattr(module, class_name, None)
        if not inspect.isclass(cls):
            return None
        return reflect_class(cls)


def reflect_class(cls: type) -> ClassReflection:
    bases = [qualified_class_name(base) for base in cls.__mro__[1:] if base is not object]
    if is_record_class(cls):
        bases.append(RECORD_MARKER)
    return ClassReflection(
        name=qualified_class_name(cls),
        bases=tuple(bases),
        is_interface=is_protocol_class(cls) or inspect.isabstract(cls),
    )


def _defined_in(obj: Any, module: ModuleType) -> bool:
    return getattr(obj, "__module__", None) == module.__name__


def _module_classes(modules: Iterable[ModuleType]) -> List[type]:
    classes: List[type] = []
    for module in modules:
        try:
            classes.extend(
                value
                for value in list(vars(module).values())
                if inspect.isclass(value) and _defined_in(value, module)
            )
        except Exception as exc:
            logger.debug("Could not list classes of %s: %s", module.__name__, exc)
    return classes


def _implementers(protocol: type, classes: Iterable[type]) -> List[type]:
    return [
        cls
        for cls in classes
        if cls is not protocol and protocol in cls.__mro__ and not is_protocol_class(cls)
    ]


def _intern_protocol(
    namespace: Namespace, name: str, cls: type, classes: Iterable[type]
) -> None:
    var = Var(name=name, meta={"name": name, "doc": cls.__doc__, **_source_location(cls)})
    methods = _protocol_methods(cls)
    sigs = {
        method_name: {
            "name": method_name,
            "arglists": arglists_for(method, drop_self=True),
            "doc": method.__doc__,
        }
        for method_name, method in methods.items()
    }
    var.value = {
        "on": qualified_class_name(cls),
        "on_interface": cls,
        "sigs": sigs,
        "var": var,
        "method_map": {method_name: method_name for method_name in methods},
        "method_builders": {},
        "impls": {impl: {} for impl in _implementers(cls, classes)},
    }
    var.meta.update(_copy_attributes(cls, _OBJECT_META))
    namespace.intern(var)

    for method_name, method in methods.items():
        meta = function_meta(method, method_name)
        meta["arglists"] = arglists_for(method, drop_self=True) or [[]]
        meta["interface"] = var
        namespace.intern(Var(name=f"{name}.{method_name}", meta=meta, value=method))


def _intern_factory(
    namespace: Namespace, name: str, cls: type, convention: TypeConvention
) -> None:
    factory = convention.factory_name(name)
    doc = cls.__doc__ or f"Positional factory function for class {qualified_class_name(cls)}."
    meta: Dict[str, Any] = {"name": factory, "doc": doc, "arglists": [factory_fields(cls)]}
    meta.update(_source_location(cls))
    meta.update(_copy_attributes(cls, _OBJECT_META))
    if name.startswith("_"):
        meta["private"] = True
    namespace.intern(Var(name=factory, meta=meta, value=cls))


def _is_type_alias(value: Any) -> bool:
    if typing.get_origin(value) is not None:
        return True
    alias_type = getattr(typing, "TypeAliasType", None)
    return alias_type is not None and isinstance(value, alias_type)


def _intern_value(namespace: Namespace, module: ModuleType, name: str, doc: str) -> None:
    meta: Dict[str, Any] = {"name": name, "doc": doc}
    module_file = getattr(module, "__file__", None)
    if module_file:
        meta["file"] = module_file
    if name.startswith("_"):
        meta["private"] = True
    var = Var(name=name, meta=meta)
    if hasattr(module, name):
        value = getattr(module, name)
        var.value = value
        if isinstance(value, contextvars.ContextVar):
            meta["dynamic"] = True
        elif _is_type_alias(value):
            meta["forms"] = [repr(value)]
    namespace.intern(var)


def namespace_from_module(
    module: ModuleType,
    classes: Iterable[type] = (),
    convention: TypeConvention = DEFAULT_CONVENTION,
) -> Namespace:
    """Build the namespace view of a single loaded module."""
    meta: Dict[str, Any] = {"doc": module.__doc__}
    meta.update(_copy_attributes(module, _MODULE_META))
    namespace = Namespace(name=module.__name__, meta=meta)
    known_classes = list(classes)

    for name, value in sorted(vars(module).items()):
        if name.startswith("__") or not _defined_in(value, module):
            continue
        if is_protocol_class(value):
            _intern_protocol(namespace, name, value, known_classes)
        elif inspect.isclass(value):
            _intern_factory(namespace, name, value, convention)
        elif callable(value):
            namespace.intern(Var(name=name, meta=function_meta(value, name), value=value))

    var_docs = getattr(module, "__var_docs__", None) or {}
    for name, doc in sorted(var_docs.items()):
        if name not in namespace.interns:
            _intern_value(namespace, module, name, doc)
    return namespace


def registry_from_modules(
    modules: Iterable[ModuleType], convention: TypeConvention = DEFAULT_CONVENTION
) -> NamespaceRegistry:
    by_name = {
        module.__name__: module
        for module in modules
        if isinstance(module, ModuleType) and getattr(module, "__name__", None)
    }
    classes = _module_classes(by_name.values())
    namespaces = []
    for name in sorted(by_name):
        try:
            namespaces.append(namespace_from_module(by_name[name], classes, convention))
        except Exception as exc:
            logger.warning("Could not introspect %s: %s", name, exc)
    logger.debug("Snapshot holds %d namespaces", len(namespaces))
    return NamespaceRegistry(namespaces, PythonClassResolver(by_name))


def snapshot(convention: TypeConvention = DEFAULT_CONVENTION) -> NamespaceRegistry:
    """Registry of every module currently loaded in this interpreter."""
    return registry_from_modules(list(sys.modules.values()), convention)


__all__ = [
    "PythonClassResolver",
    "arglists_for",
    "factory_fields",
    "function_meta",
    "is_protocol_class",
    "is_record_class",
    "namespace_from_module",
    "qualified_class_name",
    "reflect_class",
    "registry_from_modules",
    "snapshot",
]
