from __future__ import annotations

from .data import load_data, make_data
from .errors import (
    ConfigLoadError,
    DataLoadError,
    ExpressionSyntaxError,
    InvalidTagError,
    MissingTagError,
    TempletError,
)
from .template import Template, render, render_file
from .types import ListValue, MapValue, RenderOptions, ScalarValue, Value

__all__ = [
    "Template",
    "render",
    "render_file",
    "make_data",
    "load_data",
    "ScalarValue",
    "ListValue",
    "MapValue",
    "Value",
    "RenderOptions",
    "TempletError",
    "InvalidTagError",
    "MissingTagError",
    "ExpressionSyntaxError",
    "DataLoadError",
    "ConfigLoadError",
]
