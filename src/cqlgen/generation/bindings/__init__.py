"""Binding libraries and the per-compile bindings accumulator."""

from .library import BindingsLibrary, CQL_DEFAULT_BINDINGS, library_from_mapping
from .accumulator import Binding, BindingsAccumulator

__all__ = [
    "BindingsLibrary",
    "CQL_DEFAULT_BINDINGS",
    "library_from_mapping",
    "Binding",
    "BindingsAccumulator",
]
