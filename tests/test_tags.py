from __future__ import annotations

import pytest

from gostdoc.errors import MalformedTagError
from gostdoc.model import TagEntry
from gostdoc.tags import get_keys, lookup, parse_tag, strip_tag_literal


def test_parse_tag_keeps_order():
    assert parse_tag('json:"id,omitempty" db:"id"') == [
        TagEntry(name="json", value="id,omitempty"),
        TagEntry(name="db", value="id"),
    ]


def test_duplicate_keys_use_first_value():
    tag = 'a:"1" b:"x" a:"2"'
    assert get_keys(tag) == ["a", "b", "a"]
    assert lookup(tag, "a") == "1"
    assert parse_tag(tag) == [
        TagEntry(name="a", value="1"),
        TagEntry(name="b", value="x"),
        TagEntry(name="a", value="1"),
    ]


def test_missing_or_empty_tag():
    assert parse_tag(None) == []
    assert parse_tag("") == []
    assert parse_tag("   ") == []
    assert lookup('json:"x"', "db") is None


def test_escaped_quotes_and_spaces_in_values():
    tag = r'validate:"required,oneof=a b" doc:"say \"hi\"\tnow"'
    assert parse_tag(tag) == [
        TagEntry(name="validate", value="required,oneof=a b"),
        TagEntry(name="doc", value='say "hi"\tnow'),
    ]


def test_unicode_escapes():
    assert lookup(r'x:"é\x41\101"', "x") == "éAA"


def test_extra_spaces_between_pairs():
    assert get_keys('  a:"1"    b:""  ') == ["a", "b"]
    assert lookup('a:"1" b:""', "b") == ""


def test_tag_string_round_trips_value_text():
    assert TagEntry(name="json", value="id,omitempty").tag_string() == 'json:"id,omitempty"'


@pytest.mark.parametrize(
    "tag",
    [
        'json:"id',
        'json:"id" db',
        "json:id",
        'json "id"',
        ':"x"',
        r'a:"\q"',
        r'a:"\x4"',
    ],
)
def test_malformed_tags(tag):
    with pytest.raises(MalformedTagError):
        parse_tag(tag)


def test_strip_tag_literal():
    assert strip_tag_literal('`json:"a"`') == 'json:"a"'
    assert strip_tag_literal('"json:\\"a\\""') == 'json:"a"'
    assert strip_tag_literal(None) is None
    assert strip_tag_literal('json:"a"') == 'json:"a"'


@pytest.mark.parametrize("sep", ["\t", "\n", " \t ", "\r\n"])
def test_any_whitespace_separates_pairs(sep):
    tag = f'json:"id"{sep}db:"id"'
    assert get_keys(tag) == ["json", "db"]
    assert parse_tag(tag) == [TagEntry(name="json", value="id"), TagEntry(name="db", value="id")]
    assert parse_tag(f"\t{tag}\n") == parse_tag(tag)


def test_whitespace_inside_key_is_still_rejected():
    with pytest.raises(MalformedTagError):
        parse_tag('js\ton:"id"')


def test_invalid_utf8_value_is_rejected():
    with pytest.raises(MalformedTagError, match=r"not valid UTF-8"):
        parse_tag(r'x:"\xff"')
    assert lookup(r'x:"\xc3\xa9"', "x") == "é"
