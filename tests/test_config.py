from __future__ import annotations

from pathlib import Path

import pytest

from gostdoc.config import load_config, parse_name_list
from gostdoc.emit import OutputFormat
from gostdoc.errors import UnsupportedFormatError


def test_parse_name_list():
    assert parse_name_list(" Req, Params,, ") == ("Req", "Params")
    assert parse_name_list("") == ()
    assert parse_name_list(None) == ()


def test_load_config_defaults():
    cfg = load_config(environ={})
    assert cfg.fmt is OutputFormat.TSV
    assert cfg.ignore_struct_suffix == ()
    assert cfg.only_types is None
    assert cfg.output is None


def test_environment_defaults_and_overrides():
    env = {"GOSTDOC_FORMAT": "json", "GOSTDOC_IGNORE_STRUCT_SUFFIX": "Req"}
    cfg = load_config(environ=env)
    assert cfg.fmt is OutputFormat.JSON
    assert cfg.ignore_struct_suffix == ("Req",)

    cfg = load_config(fmt="tsvshort", ignore_struct_suffix="", types="A,B", output="out.tsv", environ=env)
    assert cfg.fmt is OutputFormat.TSV_SHORT
    assert cfg.ignore_struct_suffix == ()
    assert cfg.only_types == ("A", "B")
    assert cfg.output == Path("out.tsv")


def test_bad_format_rejected():
    with pytest.raises(UnsupportedFormatError):
        load_config(fmt="xml", environ={})
