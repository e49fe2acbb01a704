from __future__ import annotations

import json
from pathlib import Path

import pytest

from gostdoc.decls import TypeDecl, field_decl
from gostdoc.typeexpr import Named, Unresolvable


def _patch_scan(monkeypatch, decls):
    from gostdoc import scan

    seen: list = []

    def fake_scan_package(*, paths, env=None):  # noqa: ANN001
        seen.append(list(paths))
        return decls

    monkeypatch.setattr(scan, "scan_package", fake_scan_package)
    return seen


def test_extract_to_stdout(monkeypatch, capsysbinary, user_decls):
    from gostdoc.cli import main

    seen = _patch_scan(monkeypatch, user_decls)
    main(["extract", "--format", "tsvshort", "--ignore-struct-suffix", "Params", "pkgdir"])

    out = capsysbinary.readouterr().out.decode("utf-8")
    assert seen == [["pkgdir"]]
    assert out.startswith("User\tpkg.Base\tpkg.Base\n")
    assert "UserParams" not in out


def test_extract_defaults_to_current_dir(monkeypatch, capsysbinary, user_decls):
    from gostdoc.cli import main

    monkeypatch.delenv("GOSTDOC_FORMAT", raising=False)
    monkeypatch.delenv("GOSTDOC_IGNORE_STRUCT_SUFFIX", raising=False)
    seen = _patch_scan(monkeypatch, user_decls)
    main(["extract"])
    assert seen == [["."]]
    assert b'json:"id,omitempty" db:"id"' in capsysbinary.readouterr().out


def test_extract_json_to_file(monkeypatch, tmp_path: Path, user_decls):
    from gostdoc.cli import main

    _patch_scan(monkeypatch, user_decls)
    out = tmp_path / "structs.json"
    main(["extract", "--format", "json", "--type", "UserParams", "--output", str(out)])

    doc = json.loads(out.read_text(encoding="utf-8"))
    assert [s["name"] for s in doc["structs"]] == ["UserParams"]


def test_unsupported_format_fails_before_scanning(monkeypatch, capsysbinary):
    from gostdoc.cli import main

    seen = _patch_scan(monkeypatch, [])
    with pytest.raises(SystemExit, match=r"format is not supported"):
        main(["extract", "--format", "xml"])
    assert seen == []
    assert capsysbinary.readouterr().out == b""


def test_build_error_produces_no_output(monkeypatch, capsysbinary):
    from gostdoc.cli import main

    bad = TypeDecl(name="Bad", fields=(field_decl(names=["C"], type=Unresolvable("chan")),))
    ok = TypeDecl(name="Ok", fields=(field_decl(names=["A"], type=Named("int")),))
    _patch_scan(monkeypatch, [ok, bad])
    with pytest.raises(SystemExit, match=r"can't detect type name"):
        main(["extract"])
    assert capsysbinary.readouterr().out == b""


def test_version(capsys):
    from gostdoc.cli import main

    main(["version"])
    assert capsys.readouterr().out.strip()
