from __future__ import annotations

import argparse
import importlib.metadata
import logging
import sys
from typing import Sequence

from .errors import GostdocError


def main(argv: Sequence[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="gostdoc")
    sub = parser.add_subparsers(dest="cmd", required=True)

    sub.add_parser("version", help="Print gostdoc version.")

    p_ext = sub.add_parser(
        "extract",
        help="Describe the struct types of a Go package as TSV or JSON.",
    )
    p_ext.add_argument(
        "paths",
        nargs="*",
        default=["."],
        help="Package directory, or .go files of a single package (default: current directory).",
    )
    p_ext.add_argument(
        "--type",
        dest="types",
        default=None,
        help="Comma-separated list of type names to describe (default: all).",
    )
    p_ext.add_argument("--output", default=None, help="Output file name (default: stdout).")
    p_ext.add_argument(
        "--format",
        default=None,
        help="Output format: tsv, tsvshort, json (default: GOSTDOC_FORMAT or tsv).",
    )
    p_ext.add_argument(
        "--ignore-struct-suffix",
        default=None,
        help="Comma-separated list of struct name suffixes to skip.",
    )
    p_ext.add_argument("-v", "--verbose", action="store_true", help="Log progress to stderr.")

    args = parser.parse_args(argv)
    if args.cmd == "version":
        try:
            print(importlib.metadata.version("gostdoc"))
        except Exception:
            # Best-effort fallback for editable/local-only contexts.
            print("0.0.0")
        return

    if args.cmd == "extract":
        logging.basicConfig(
            level=logging.DEBUG if args.verbose else logging.WARNING,
            format="gostdoc: %(levelname)s %(name)s: %(message)s",
            stream=sys.stderr,
        )
        try:
            _extract(args)
        except GostdocError as e:
            raise SystemExit(f"gostdoc: {e}") from None
        return


def _extract(args: argparse.Namespace) -> None:
    from .builder import ParseOptions, build_metadata
    from .config import load_config
    from .emit import emit
    from .scan import scan_package

    # Format errors surface here, before the Go source is scanned.
    cfg = load_config(
        fmt=args.format,
        ignore_struct_suffix=args.ignore_struct_suffix,
        types=args.types,
        output=args.output,
    )

    decls = scan_package(paths=args.paths)
    metadata = build_metadata(
        decls,
        opts=ParseOptions(ignore_struct_suffix=cfg.ignore_struct_suffix, only_types=cfg.only_types),
    )
    if not metadata.structs:
        logging.getLogger(__name__).warning("no struct types found")

    src = emit(metadata, fmt=cfg.fmt)
    if cfg.output is None:
        sys.stdout.buffer.write(src)
        sys.stdout.buffer.flush()
        return
    try:
        cfg.output.write_bytes(src)
    except OSError as e:
        raise SystemExit(f"gostdoc: writing output: {e}") from e
