from __future__ import annotations

import sys

import gostdoc


def main() -> None:
    # Requires the Go toolchain on PATH; the package is parsed with go/ast.
    pkg_dir = sys.argv[1] if len(sys.argv) > 1 else "."

    decls = gostdoc.scan_package(paths=[pkg_dir])
    metadata = gostdoc.build_metadata(
        decls,
        opts=gostdoc.ParseOptions(ignore_struct_suffix=("Request", "Response")),
    )

    for st in metadata.structs:
        ptrs = [f.name for f in st.fields if f.is_ptr]
        print(f"{st.name}: {len(st.fields)} field(s), pointer fields: {', '.join(ptrs) or '-'}")

    sys.stdout.buffer.write(gostdoc.emit(metadata, fmt=gostdoc.OutputFormat.TSV_SHORT))


if __name__ == "__main__":
    main()
