from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from .emit import OutputFormat


@dataclass(frozen=True)
class ExtractConfig:
    fmt: OutputFormat = OutputFormat.TSV
    ignore_struct_suffix: tuple[str, ...] = ()
    only_types: tuple[str, ...] | None = None
    output: Path | None = None  # None = stdout


def parse_name_list(value: str | None) -> tuple[str, ...]:
    """Split a comma-separated list, trimming entries and dropping empty ones."""
    if not value:
        return ()
    return tuple(s for s in (v.strip() for v in value.split(",")) if s)


def load_config(
    *,
    fmt: str | None = None,
    ignore_struct_suffix: str | None = None,
    types: str | None = None,
    output: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> ExtractConfig:
    """Resolve extraction settings; explicit values win over the environment.

    Environment defaults: `GOSTDOC_FORMAT` and `GOSTDOC_IGNORE_STRUCT_SUFFIX`.
    """
    env = os.environ if environ is None else environ
    if fmt is None:
        fmt = env.get("GOSTDOC_FORMAT") or OutputFormat.TSV.value
    if ignore_struct_suffix is None:
        ignore_struct_suffix = env.get("GOSTDOC_IGNORE_STRUCT_SUFFIX")

    only_types = parse_name_list(types) or None
    return ExtractConfig(
        fmt=OutputFormat.parse(fmt),
        ignore_struct_suffix=parse_name_list(ignore_struct_suffix),
        only_types=only_types,
        output=Path(output) if output else None,
    )
