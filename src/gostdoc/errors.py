"""Domain-specific errors for gostdoc."""

from __future__ import annotations


class GostdocError(Exception):
    """Base error for gostdoc."""


class UnresolvableTypeError(GostdocError):
    """Raised when a field type expression has a shape the resolver does not know."""


class NotAStructDeclarationError(GostdocError):
    """Raised when a type declaration is not a struct; the builder treats it as a skip."""


class MalformedTagError(GostdocError):
    """Raised when a struct field tag cannot be parsed as `key:"value"` pairs."""


class UnsupportedFormatError(GostdocError):
    """Raised when an output format selector is not one of the known formats."""


class ScanError(GostdocError):
    """Raised when reading Go source declarations fails."""
