from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from .decls import EmbeddedField, FieldDecl, NamedFields, TypeDecl
from .errors import NotAStructDeclarationError
from .model import FieldDescriptor, MetadataSet, StructDescriptor
from .tags import parse_tag
from .typeexpr import Pointer, TypeExpr, resolve_base, resolve_full

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParseOptions:
    ignore_struct_suffix: tuple[str, ...] = ()
    # When set, only declarations with these names are considered.
    only_types: tuple[str, ...] | None = None


def build_metadata(decls: Iterable[TypeDecl], *, opts: ParseOptions | None = None) -> MetadataSet:
    """Build the struct metadata set for declarations in source order.

    Excluded and non-struct declarations are skipped. Type resolution and tag
    errors abort the whole build; no partial set is returned.
    """
    opts = opts or ParseOptions()
    structs: list[StructDescriptor] = []
    for decl in decls:
        if opts.only_types is not None and decl.name not in opts.only_types:
            logger.debug("skip %s: not in requested types", decl.name)
            continue
        if _is_ignored(decl.name, opts.ignore_struct_suffix):
            logger.debug("skip %s: ignored struct suffix", decl.name)
            continue
        try:
            structs.append(_build_struct(decl))
        except NotAStructDeclarationError:
            logger.debug("skip %s: not a struct type", decl.name)
            continue

    logger.info("collected %d struct(s)", len(structs))
    return MetadataSet(structs=tuple(structs))


def _is_ignored(name: str, suffixes: Iterable[str]) -> bool:
    return any(name.endswith(suf) for suf in suffixes if suf)


def _build_struct(decl: TypeDecl) -> StructDescriptor:
    if not decl.is_struct:
        raise NotAStructDeclarationError(decl.name)

    fields: list[FieldDescriptor] = []
    for fd in decl.fields:
        fields.extend(_build_fields(fd))
    return StructDescriptor(name=decl.name, fields=tuple(fields), doc=decl.doc.rstrip("\n"))


def _embedded_name(expr: TypeExpr) -> str:
    # `*T` embeds T; the pointer marks indirection, not part of the field name.
    # The legacy tool kept the `*` here (`*pkg.Base`); fields are named `pkg.Base`.
    if isinstance(expr, Pointer):
        expr = expr.inner
    return resolve_full(expr)


def _build_fields(fd: FieldDecl) -> list[FieldDescriptor]:
    type_name = resolve_base(fd.type)
    tags = tuple(parse_tag(fd.tag))
    doc = fd.doc.rstrip("\n")

    if isinstance(fd, EmbeddedField):
        names = [_embedded_name(fd.type)]
        embedded = True
    elif isinstance(fd, NamedFields):
        names = list(fd.names)
        embedded = False
    else:
        raise TypeError(f"unknown field declaration: {type(fd).__name__}")

    return [
        FieldDescriptor(
            name=name,
            embedded=embedded,
            doc=doc,
            raw_tag=fd.tag,
            type_name=type_name,
            type_expr=fd.type,
            tags=tags,
        )
        for name in names
    ]
