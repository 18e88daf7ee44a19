"""Flat key/value codec for build receipts.

Receipts use the ``.properties`` format so they stay interchangeable with
receipts produced by JVM build stages: ISO-8859-1 text, ``#``/``!`` comments,
``=``, ``:`` or whitespace separators, backslash escapes and line
continuations.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from datetime import datetime

__all__ = ["parse_properties", "format_properties"]

_ENCODING = "iso-8859-1"

_UNESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
_ESCAPES = {"\\": "\\\\", "\t": "\\t", "\n": "\\n", "\r": "\\r", "\f": "\\f"}
_SPECIALS = "=:#!"
_WHITESPACE = " \t\f"
_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def _logical_lines(text: str) -> list[str]:
    lines: list[str] = []
    pending: str | None = None
    for raw in _LINE_BREAK.split(text):
        line = raw.lstrip(_WHITESPACE)
        if pending is None:
            if not line or line[0] in "#!":
                continue
        else:
            line = pending + line

        trailing = len(line) - len(line.rstrip("\\"))
        if trailing % 2 == 1:
            pending = line[:-1]
            continue
        pending = None
        lines.append(line)

    if pending is not None:
        lines.append(pending)
    return lines


def _unescape(text: str) -> str:
    out: list[str] = []
    i = 0
    while i < len(text):
        ch = text[i]
        if ch != "\\" or i + 1 >= len(text):
            out.append(ch)
            i += 1
            continue
        nxt = text[i + 1]
        if nxt == "u" and i + 6 <= len(text):
            try:
                out.append(chr(int(text[i + 2 : i + 6], 16)))
                i += 6
                continue
            except ValueError:
                pass
        out.append(_UNESCAPES.get(nxt, nxt))
        i += 2
    return _join_surrogates(out)


def _join_surrogates(chars: list[str]) -> str:
    # \uXXXX escapes are UTF-16 code units; pairs above the BMP arrive split
    out: list[str] = []
    i = 0
    while i < len(chars):
        ch = chars[i]
        if "\ud800" <= ch <= "\udbff" and i + 1 < len(chars) and "\udc00" <= chars[i + 1] <= "\udfff":
            out.append(chr(0x10000 + ((ord(ch) - 0xD800) << 10) + (ord(chars[i + 1]) - 0xDC00)))
            i += 2
            continue
        out.append(ch)
        i += 1
    return "".join(out)


def _split_key_value(line: str) -> tuple[str, str]:
    i = 0
    while i < len(line):
        ch = line[i]
        if ch == "\\":
            i += 2
            continue
        if ch in "=:" or ch in _WHITESPACE:
            break
        i += 1

    key = line[:i]
    rest = line[i:].lstrip(_WHITESPACE)
    if rest[:1] in ("=", ":"):
        rest = rest[1:].lstrip(_WHITESPACE)
    return key, rest


def parse_properties(data: bytes) -> dict[str, str]:
    """Decode a properties document. Later duplicate keys win."""
    props: dict[str, str] = {}
    for line in _logical_lines(data.decode(_ENCODING)):
        key, value = _split_key_value(line)
        props[_unescape(key)] = _unescape(value)
    return props


def _escape_code_point(code: int) -> str:
    if code > 0xFFFF:
        code -= 0x10000
        return f"\\u{0xD800 + (code >> 10):04X}\\u{0xDC00 + (code & 0x3FF):04X}"
    return f"\\u{code:04X}"


def _escape(text: str, *, is_key: bool) -> str:
    out: list[str] = []
    for index, ch in enumerate(text):
        if ch in _ESCAPES:
            out.append(_ESCAPES[ch])
        elif ch == " " and (is_key or index == 0):
            out.append("\\ ")
        elif ch in _SPECIALS:
            out.append("\\" + ch)
        elif ord(ch) < 0x20 or ord(ch) > 0x7E:
            out.append(_escape_code_point(ord(ch)))
        else:
            out.append(ch)
    return "".join(out)



def format_properties(props: Mapping[str, str], *, stamp: datetime | None = None) -> bytes:
    """Encode ``props`` with a leading date comment, one ``key=value`` per line."""
    lines: list[str] = []
    if stamp is not None:
        lines.append("#" + stamp.strftime("%a %b %d %H:%M:%S %Z %Y"))
    for key, value in props.items():
        lines.append(f"{_escape(key, is_key=True)}={_escape(value, is_key=False)}")
    return ("\n".join(lines) + "\n").encode(_ENCODING)
