"""Data module for method definitions and bundled example problems."""

from roots_lab.data.methods import (
    DERIVATIVE_STEP,
    MAX_ITERATIONS,
    STATUS_OK,
    Method,
    MethodSpec,
    get_display_name,
    get_spec,
    list_methods,
    parse_method,
)
from roots_lab.data.presets import Preset, get_preset, list_presets

__all__ = [
    "DERIVATIVE_STEP",
    "MAX_ITERATIONS",
    "STATUS_OK",
    "Method",
    "MethodSpec",
    "Preset",
    "get_display_name",
    "get_preset",
    "get_spec",
    "list_methods",
    "list_presets",
    "parse_method",
]
