from __future__ import annotations

import json
import logging
import subprocess
import tempfile
from pathlib import Path
from typing import Any, Sequence

from .decls import TypeDecl, field_decl
from .errors import ScanError
from .tags import strip_tag_literal
from .typeexpr import expr_from_json

logger = logging.getLogger(__name__)


def scan_package(*, paths: Sequence[str | Path], env: dict[str, str] | None = None) -> list[TypeDecl]:
    """Read type declarations of one Go package by parsing its source with `go/ast`.

    `paths` is either a single package directory (all non-test `.go` files in it)
    or a list of `.go` files belonging to the same package. Declarations are
    returned in file order, then source order.
    """
    if not paths:
        raise ScanError("no Go package directory or files given")
    targets = [str(Path(p).resolve()) for p in paths]

    with tempfile.TemporaryDirectory(prefix="gostdoc-goscan-") as td:
        scan_dir = Path(td)
        (scan_dir / "go.mod").write_text(
            "\n".join(
                [
                    "module gostdoc.goscan",
                    "",
                    "go 1.22",
                    "",
                ]
            ),
            encoding="utf-8",
        )
        (scan_dir / "main.go").write_text(_scanner_go_source(), encoding="utf-8")

        logger.debug("running go scanner on %s", ", ".join(targets))
        try:
            proc = subprocess.run(
                ["go", "run", ".", *targets],
                cwd=str(scan_dir),
                env=env,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=False,
                check=False,
            )
        except FileNotFoundError as e:
            raise ScanError(
                "Go toolchain not found (`go` is missing from PATH). "
                "Install Go and ensure `go` is available on PATH."
            ) from e

    stdout = (proc.stdout or b"").decode("utf-8", errors="replace")
    stderr = (proc.stderr or b"").decode("utf-8", errors="replace")
    if proc.returncode != 0:
        raise ScanError(f"go scan failed\n{stderr or stdout}")

    obj = _decode_output(stdout)
    decls = decls_from_json(obj)
    logger.info("scanned %d type declaration(s) in package %s", len(decls), obj.get("package") or "?")
    return decls


def _decode_output(out: str) -> dict[str, Any]:
    # `go run` may print toolchain messages before the JSON document.
    start = out.find("{")
    if start == -1:
        raise ScanError(f"failed to parse go scan output\n{out}")
    try:
        obj, _end = json.JSONDecoder().raw_decode(out, start)
    except ValueError as e:
        raise ScanError(f"failed to parse go scan output: {e}\n{out}") from e
    if not isinstance(obj, dict):
        raise ScanError("go scan output is not a JSON object")
    return obj


def decls_from_json(obj: dict[str, Any]) -> list[TypeDecl]:
    raw_decls = obj.get("decls")
    if raw_decls is None:
        return []
    if not isinstance(raw_decls, list):
        raise ScanError("go scan output: 'decls' must be a list")

    decls: list[TypeDecl] = []
    for d in raw_decls:
        if not isinstance(d, dict):
            raise ScanError("go scan output: declaration must be an object")
        name = d.get("name")
        if not isinstance(name, str) or not name:
            raise ScanError("go scan output: declaration is missing 'name'")
        is_struct = bool(d.get("struct"))
        fields = []
        for f in d.get("fields") or []:
            if not isinstance(f, dict):
                raise ScanError(f"go scan output: field of {name} must be an object")
            names = f.get("names") or []
            if not isinstance(names, list) or not all(isinstance(n, str) for n in names):
                raise ScanError(f"go scan output: bad field names in {name}")
            tag = f.get("tag")
            if tag is not None and not isinstance(tag, str):
                raise ScanError(f"go scan output: bad tag in {name}")
            fields.append(
                field_decl(
                    names=names,
                    type=expr_from_json(f.get("type")),
                    tag=strip_tag_literal(tag),
                    doc=_field_doc(f),
                )
            )
        decls.append(
            TypeDecl(
                name=name,
                fields=tuple(fields),
                is_struct=is_struct,
                doc=str(d.get("doc") or ""),
            )
        )
    return decls


def _field_doc(f: dict[str, Any]) -> str:
    # Trailing line comment first, then the comment block above the field.
    comment = f.get("comment")
    if isinstance(comment, str) and comment.strip():
        return comment
    doc = f.get("doc")
    if isinstance(doc, str):
        return doc
    return ""


def _scanner_go_source() -> str:
    # Keep this file stdlib-only so `go run` doesn't need network access.
    return r'''
package main

import (
	"encoding/json"
	"fmt"
	"go/ast"
	"go/parser"
	"go/token"
	"os"
	"path/filepath"
	"strings"
)

type outField struct {
	Names   []string               `json:"names"`
	Type    map[string]interface{} `json:"type"`
	Tag     *string                `json:"tag"`
	Doc     string                 `json:"doc"`
	Comment string                 `json:"comment"`
}

type outDecl struct {
	Name   string     `json:"name"`
	Struct bool       `json:"struct"`
	Doc    string     `json:"doc"`
	Fields []outField `json:"fields"`
}

type outObj struct {
	Package string    `json:"package"`
	Decls   []outDecl `json:"decls"`
}

func main() {
	args := os.Args[1:]
	if len(args) == 0 {
		fmt.Fprintln(os.Stderr, "usage: goscan <dir> | <files...>")
		os.Exit(2)
	}

	files, err := resolveFiles(args)
	if err != nil {
		fmt.Fprintln(os.Stderr, err.Error())
		os.Exit(1)
	}

	fs := token.NewFileSet()
	out := outObj{Decls: []outDecl{}}
	for _, file := range files {
		af, err := parser.ParseFile(fs, file, nil, parser.ParseComments)
		if err != nil {
			fmt.Fprintf(os.Stderr, "parse %s: %v\n", file, err)
			os.Exit(1)
		}
		if out.Package == "" {
			out.Package = af.Name.Name
		} else if out.Package != af.Name.Name {
			fmt.Fprintf(os.Stderr, "files belong to different packages: %s and %s\n", out.Package, af.Name.Name)
			os.Exit(1)
		}
		out.Decls = append(out.Decls, collectDecls(af)...)
	}

	enc := json.NewEncoder(os.Stdout)
	enc.SetEscapeHTML(false)
	if err := enc.Encode(out); err != nil {
		fmt.Fprintf(os.Stderr, "encode: %v\n", err)
		os.Exit(1)
	}
}

func resolveFiles(args []string) ([]string, error) {
	if len(args) != 1 {
		return args, nil
	}
	info, err := os.Stat(args[0])
	if err != nil {
		return nil, err
	}
	if !info.IsDir() {
		return args, nil
	}
	entries, err := os.ReadDir(args[0])
	if err != nil {
		return nil, err
	}
	files := []string{}
	for _, e := range entries {
		n := e.Name()
		if e.IsDir() || !strings.HasSuffix(n, ".go") || strings.HasSuffix(n, "_test.go") {
			continue
		}
		files = append(files, filepath.Join(args[0], n))
	}
	if len(files) == 0 {
		return nil, fmt.Errorf("no Go files in %s", args[0])
	}
	return files, nil
}

func collectDecls(af *ast.File) []outDecl {
	out := []outDecl{}
	for _, decl := range af.Decls {
		gd, ok := decl.(*ast.GenDecl)
		if !ok || gd.Tok != token.TYPE {
			continue
		}
		for _, spec := range gd.Specs {
			ts, ok := spec.(*ast.TypeSpec)
			if !ok || ts.Name == nil {
				continue
			}
			doc := ts.Doc
			if doc == nil && len(gd.Specs) == 1 {
				doc = gd.Doc
			}
			d := outDecl{Name: ts.Name.Name, Doc: doc.Text(), Fields: []outField{}}
			st, ok := ts.Type.(*ast.StructType)
			if ok && !ts.Assign.IsValid() {
				d.Struct = true
				if st.Fields != nil {
					for _, f := range st.Fields.List {
						d.Fields = append(d.Fields, renderField(f))
					}
				}
			}
			out = append(out, d)
		}
	}
	return out
}

func renderField(f *ast.Field) outField {
	of := outField{
		Names:   []string{},
		Type:    renderExpr(f.Type),
		Doc:     f.Doc.Text(),
		Comment: f.Comment.Text(),
	}
	for _, n := range f.Names {
		of.Names = append(of.Names, n.Name)
	}
	if f.Tag != nil {
		v := f.Tag.Value
		of.Tag = &v
	}
	return of
}

func renderExpr(e ast.Expr) map[string]interface{} {
	switch t := e.(type) {
	case *ast.Ident:
		return map[string]interface{}{"kind": "ident", "name": t.Name}
	case *ast.SelectorExpr:
		return map[string]interface{}{"kind": "selector", "x": renderExpr(t.X), "sel": renderExpr(t.Sel)}
	case *ast.StarExpr:
		return map[string]interface{}{"kind": "star", "x": renderExpr(t.X)}
	case *ast.ArrayType:
		m := map[string]interface{}{"kind": "array", "elt": renderExpr(t.Elt)}
		if t.Len != nil {
			m["len"] = lenText(t.Len)
		}
		return m
	case *ast.MapType:
		return map[string]interface{}{"kind": "map", "key": renderExpr(t.Key), "value": renderExpr(t.Value)}
	case *ast.StructType:
		return map[string]interface{}{"kind": "struct"}
	case *ast.ParenExpr:
		return renderExpr(t.X)
	case *ast.FuncType:
		return map[string]interface{}{"kind": "func"}
	case *ast.ChanType:
		return map[string]interface{}{"kind": "chan"}
	case *ast.InterfaceType:
		return map[string]interface{}{"kind": "interface"}
	case *ast.Ellipsis:
		return map[string]interface{}{"kind": "ellipsis"}
	case *ast.IndexExpr, *ast.IndexListExpr:
		return map[string]interface{}{"kind": "generic"}
	default:
		return map[string]interface{}{"kind": fmt.Sprintf("%T", e)}
	}
}

func lenText(e ast.Expr) string {
	switch l := e.(type) {
	case *ast.BasicLit:
		return l.Value
	case *ast.Ident:
		return l.Name
	case *ast.Ellipsis:
		return "..."
	default:
		return "?"
	}
}
'''
