"""Collect a structured documentation tree from loaded Python modules."""

from .assembler import project_info
from .collector import Collector, collect_info_to_file
from .runtime import ClassReflection, Namespace, NamespaceRegistry, Var

__all__ = [
    "ClassReflection",
    "Collector",
    "Namespace",
    "NamespaceRegistry",
    "Var",
    "collect_info_to_file",
    "project_info",
]
