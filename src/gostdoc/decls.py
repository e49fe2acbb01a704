from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Union

from .typeexpr import TypeExpr


@dataclass(frozen=True)
class EmbeddedField:
    type: TypeExpr
    tag: str | None = None  # tag text without surrounding back-quotes
    doc: str = ""


@dataclass(frozen=True)
class NamedFields:
    # `A, B int` declares several fields sharing one type and tag.
    names: tuple[str, ...]
    type: TypeExpr
    tag: str | None = None
    doc: str = ""

    def __post_init__(self) -> None:
        if not self.names:
            raise ValueError("NamedFields requires at least one name; use EmbeddedField")


FieldDecl = Union[EmbeddedField, NamedFields]


@dataclass(frozen=True)
class TypeDecl:
    name: str
    fields: tuple[FieldDecl, ...] = ()
    is_struct: bool = True
    doc: str = ""


def field_decl(
    *,
    names: Sequence[str],
    type: TypeExpr,
    tag: str | None = None,
    doc: str = "",
) -> FieldDecl:
    """Build a field declaration from a Go AST style name list (empty = embedded)."""
    if not names:
        return EmbeddedField(type=type, tag=tag, doc=doc)
    return NamedFields(names=tuple(names), type=type, tag=tag, doc=doc)
