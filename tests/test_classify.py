"""Tests for var classification."""

from __future__ import annotations

import functools
from collections.abc import Mapping

from doctree.classify import INTERFACE_DESCRIPTOR_KEYS, is_interface, symbol_info, symbol_kind
from doctree.models import SymbolKind
from doctree.runtime import Var
from tests._fixtures.registry_builder import RegistryBuilder


class _ExplodingMapping(Mapping):
    def __getitem__(self, key):
        raise NotImplementedError("lookup unsupported")

    def __iter__(self):
        raise NotImplementedError("iteration unsupported")

    def __len__(self) -> int:
        return 6

    def __contains__(self, key) -> bool:
        raise NotImplementedError("membership unsupported")


class _ExplodingVar(Var):
    def deref(self):
        raise RuntimeError("cannot dereference")


def test_interface_probe_requires_every_descriptor_key() -> None:
    descriptor = {key: None for key in INTERFACE_DESCRIPTOR_KEYS}
    partial = dict(descriptor)
    partial.pop("method_builders")

    assert is_interface(Var(name="Full", value=descriptor)) is True
    assert is_interface(Var(name="Partial", value=partial)) is False
    assert is_interface(Var(name="NotAMap", value=["on", "sigs"])) is False


def test_interface_probe_never_raises() -> None:
    assert is_interface(None) is False
    assert is_interface(Var(name="unbound")) is False
    assert is_interface(Var(name="odd", value=_ExplodingMapping())) is False
    assert is_interface(_ExplodingVar(name="broken", value={})) is False


def test_macro_flag_wins_over_everything() -> None:
    var = Var(name="when-ready", meta={"macro": True, "arglists": [["body"]]}, value=lambda: None)

    assert symbol_kind(var) is SymbolKind.MACRO


def test_singledispatch_function_is_multimethod() -> None:
    @functools.singledispatch
    def render(value):
        return str(value)

    var = Var(name="render", meta={"arglists": [["value"]]}, value=render)

    assert symbol_kind(var) is SymbolKind.MULTIMETHOD


def test_kind_order_for_plain_metadata() -> None:
    assert symbol_kind(Var(name="f", meta={"arglists": [["x"]]}, value=len)) is SymbolKind.FUNCTION
    assert symbol_kind(Var(name="Alias", meta={"forms": ["list[int]"]}, value=list)) is SymbolKind.TYPE_ALIAS
    assert symbol_kind(Var(name="limit", meta={"doc": "Max."}, value=10)) is SymbolKind.VALUE
    assert symbol_kind(Var(name="missing", meta={"doc": "Unbound."})) is SymbolKind.VALUE


def test_exploding_value_falls_through_to_value() -> None:
    assert symbol_kind(_ExplodingVar(name="broken", meta={"doc": "x"}, value=1)) is SymbolKind.VALUE


def test_interface_kind(registry_builder: RegistryBuilder) -> None:
    var = registry_builder.interface("geo", "Shape", methods={"area": "Area of the shape."})

    assert symbol_kind(var) is SymbolKind.INTERFACE


def test_symbol_info_copies_metadata_and_cleans_doc() -> None:
    var = Var(
        name="distance",
        meta={
            "doc": "Distance between points.\n    Uses the euclidean metric.",
            "arglists": [["a", "b"], ["a", "b", "metric"]],
            "file": "geo/core.py",
            "line": 12,
            "added": "1.2",
            "deprecated": "2.0",
            "dynamic": True,
        },
        value=lambda a, b, metric=None: 0,
    )

    info = symbol_info(var)

    assert info.name == "distance"
    assert info.doc == "Distance between points.\nUses the euclidean metric."
    assert info.kind is SymbolKind.FUNCTION
    assert info.parameter_shapes == [["a", "b"], ["a", "b", "metric"]]
    assert info.source_file == "geo/core.py"
    assert info.source_line == 12
    assert info.added == "1.2"
    assert info.deprecated == "2.0"
    assert info.dynamic is True


def test_symbol_info_omits_missing_optional_keys() -> None:
    data = symbol_info(Var(name="limit", meta={"doc": "Max."}, value=3)).to_dict()

    assert data == {"name": "limit", "doc": "Max.", "kind": "value"}
