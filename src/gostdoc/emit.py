from __future__ import annotations

import enum
import json
from typing import Any

from .errors import UnsupportedFormatError
from .model import FieldDescriptor, MetadataSet, StructDescriptor


class OutputFormat(str, enum.Enum):
    TSV = "tsv"
    TSV_SHORT = "tsvshort"
    JSON = "json"

    @classmethod
    def parse(cls, value: "str | OutputFormat") -> "OutputFormat":
        if isinstance(value, OutputFormat):
            return value
        key = str(value).strip().lower()
        key = _ALIASES.get(key, key)
        for fmt in cls:
            if fmt.value == key:
                return fmt
        raise UnsupportedFormatError(f"format is not supported: {value!r}")


_ALIASES = {
    "full": "tsv",
    "short": "tsvshort",
}


def emit(metadata: MetadataSet, *, fmt: "str | OutputFormat") -> bytes:
    """Render the metadata set as UTF-8 bytes in the selected format."""
    fmt = OutputFormat.parse(fmt)
    if fmt is OutputFormat.JSON:
        text = json.dumps(to_json_obj(metadata), indent=2, ensure_ascii=False) + "\n"
        return text.encode("utf-8")

    lines: list[str] = []
    for st in metadata.structs:
        for field in st.fields:
            lines.append(_tsv_line(st, field, short=fmt is OutputFormat.TSV_SHORT))
        lines.append("\n")
    return "".join(lines).encode("utf-8")


def _tsv_line(st: StructDescriptor, field: FieldDescriptor, *, short: bool) -> str:
    if short:
        return f"{st.name}\t{field.type_name}\t{field.name}\n"
    tags = " ".join(field.tag_strings())
    return f"{st.name}\t{field.type_name}\t{field.name}\t{tags}\t{field.doc}\n"


def to_json_obj(metadata: MetadataSet) -> dict[str, Any]:
    return {"structs": [_struct_obj(st) for st in metadata.structs]}


def _struct_obj(st: StructDescriptor) -> dict[str, Any]:
    return {"name": st.name, "fields": [_field_obj(f) for f in st.fields]}


def _field_obj(field: FieldDescriptor) -> dict[str, Any]:
    obj: dict[str, Any] = {
        "type": field.type_name,
        "comment": field.doc,
        "name": field.name,
        "embed": field.embedded,
    }
    if field.tags:
        obj["tags"] = [{"name": t.name, "value": t.value} for t in field.tags]
    return obj
