from __future__ import annotations

from dataclasses import dataclass

from . import typeexpr
from .typeexpr import TypeExpr


@dataclass(frozen=True)
class TagEntry:
    name: str
    value: str

    def tag_string(self) -> str:
        return f'{self.name}:"{self.value}"'


@dataclass(frozen=True)
class FieldDescriptor:
    name: str  # declared name, or resolve_full(type) for embedded fields
    embedded: bool
    doc: str
    raw_tag: str | None
    type_name: str  # resolve_base(type_expr)
    type_expr: TypeExpr
    tags: tuple[TagEntry, ...] = ()

    @property
    def type_full_name(self) -> str:
        return typeexpr.resolve_full(self.type_expr)

    @property
    def is_ptr(self) -> bool:
        return typeexpr.is_ptr(self.type_expr)

    @property
    def is_array(self) -> bool:
        return typeexpr.is_array(self.type_expr)

    @property
    def is_ptr_array(self) -> bool:
        return typeexpr.is_ptr_array(self.type_expr)

    @property
    def is_array_ptr(self) -> bool:
        return typeexpr.is_array_ptr(self.type_expr)

    @property
    def is_ptr_array_ptr(self) -> bool:
        return typeexpr.is_ptr_array_ptr(self.type_expr)

    def tag_strings(self) -> list[str]:
        return [t.tag_string() for t in self.tags]


@dataclass(frozen=True)
class StructDescriptor:
    name: str
    fields: tuple[FieldDescriptor, ...] = ()
    doc: str = ""  # type doc comment; not part of the emitted formats


@dataclass(frozen=True)
class MetadataSet:
    structs: tuple[StructDescriptor, ...] = ()

    def __iter__(self):
        return iter(self.structs)

    def __len__(self) -> int:
        return len(self.structs)
