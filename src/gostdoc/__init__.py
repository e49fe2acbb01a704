"""gostdoc: describe Go struct types (fields, types, tags, comments) as TSV or JSON."""

from __future__ import annotations

from . import errors
from .builder import ParseOptions, build_metadata
from .emit import OutputFormat, emit
from .scan import scan_package

__all__ = [
    "OutputFormat",
    "ParseOptions",
    "build_metadata",
    "emit",
    "errors",
    "scan_package",
]
