from __future__ import annotations

from .errors import MalformedTagError
from .model import TagEntry


_SIMPLE_ESCAPES = {
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
    "\\": "\\",
    '"': '"',
}


def strip_tag_literal(raw: str | None) -> str | None:
    """Strip the back-quotes (or double quotes) around a tag as written in source."""
    if raw is None:
        return None
    if len(raw) >= 2 and raw[0] == raw[-1] == "`":
        return raw[1:-1]
    if len(raw) >= 2 and raw[0] == raw[-1] == '"':
        return _unquote(raw[1:-1], key="<tag>")
    return raw


def get_keys(tag: str) -> list[str]:
    """Return tag keys in order of appearance, duplicates included."""
    return [k for k, _v in _scan_pairs(tag)]


def lookup(tag: str, key: str) -> str | None:
    """Return the value of the first `key:"..."` pair, or None if the key is absent."""
    for k, v in _scan_pairs(tag):
        if k == key:
            return v
    return None


def parse_tag(tag: str | None) -> list[TagEntry]:
    """Parse a tag (delimiters already stripped) into one entry per key occurrence.

    A repeated key gets the value of its first occurrence in every entry,
    matching the struct tag lookup convention of the Go runtime.
    """
    if not tag:
        return []
    pairs = _scan_pairs(tag)
    first: dict[str, str] = {}
    for k, v in pairs:
        first.setdefault(k, v)
    return [TagEntry(name=k, value=first[k]) for k, _v in pairs]


def _scan_pairs(tag: str) -> list[tuple[str, str]]:
    out: list[tuple[str, str]] = []
    i = 0
    n = len(tag)
    while i < n:
        while i < n and tag[i].isspace():
            i += 1
        if i >= n:
            break

        start = i
        while i < n and tag[i] > " " and tag[i] not in ':"\x7f':
            i += 1
        if i == start:
            raise MalformedTagError(f"invalid tag key at offset {start}: {tag!r}")
        if i + 1 >= n or tag[i] != ":" or tag[i + 1] != '"':
            raise MalformedTagError(f"expected :\"value\" after key {tag[start:i]!r}: {tag!r}")
        key = tag[start:i]

        # Opening quote at i+1; find the closing quote, skipping escaped characters.
        i += 2
        vstart = i
        while i < n and tag[i] != '"':
            if tag[i] == "\\":
                i += 1
            i += 1
        if i >= n:
            raise MalformedTagError(f"unterminated quoted value for key {key!r}: {tag!r}")
        out.append((key, _unquote(tag[vstart:i], key=key)))
        i += 1
    return out


def _unquote(body: str, *, key: str) -> str:
    # Go interpreted string literal rules; \x and octal escapes produce raw bytes.
    buf = bytearray()
    i = 0
    n = len(body)
    while i < n:
        ch = body[i]
        if ch == "\n":
            raise MalformedTagError(f"newline in quoted value for key {key!r}")
        if ch != "\\":
            buf += ch.encode("utf-8")
            i += 1
            continue
        if i + 1 >= n:
            raise MalformedTagError(f"trailing backslash in value for key {key!r}")
        esc = body[i + 1]
        i += 2
        if esc in _SIMPLE_ESCAPES:
            buf += _SIMPLE_ESCAPES[esc].encode("utf-8")
        elif esc == "x":
            buf.append(_hex(body[i : i + 2], 2, key=key))
            i += 2
        elif esc == "u":
            buf += _codepoint(body[i : i + 4], 4, key=key)
            i += 4
        elif esc == "U":
            buf += _codepoint(body[i : i + 8], 8, key=key)
            i += 8
        elif esc in "01234567":
            digits = body[i - 1 : i + 2]
            if len(digits) != 3 or any(c not in "01234567" for c in digits):
                raise MalformedTagError(f"invalid octal escape in value for key {key!r}")
            v = int(digits, 8)
            if v > 0xFF:
                raise MalformedTagError(f"octal escape out of range in value for key {key!r}")
            buf.append(v)
            i += 2
        else:
            raise MalformedTagError(f"invalid escape \\{esc} in value for key {key!r}")
    try:
        return buf.decode("utf-8")
    except UnicodeDecodeError:
        raise MalformedTagError(f"value for key {key!r} is not valid UTF-8") from None


def _hex(digits: str, width: int, *, key: str) -> int:
    if len(digits) != width:
        raise MalformedTagError(f"short hex escape in value for key {key!r}")
    try:
        return int(digits, 16)
    except ValueError:
        raise MalformedTagError(f"invalid hex escape in value for key {key!r}") from None


def _codepoint(digits: str, width: int, *, key: str) -> bytes:
    cp = _hex(digits, width, key=key)
    if cp > 0x10FFFF or 0xD800 <= cp <= 0xDFFF:
        raise MalformedTagError(f"invalid unicode escape in value for key {key!r}")
    return chr(cp).encode("utf-8")
