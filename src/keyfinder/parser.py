# src/keyfinder/parser.py
"""
JSON lexer and recursive-descent parser that keeps source offsets.

The standard library decoder throws away positions, but search results must
report the line of every property name, so documents are parsed here into the
model tree (JsonObject / JsonArray / JsonScalar) with start/end offsets.

Duplicate keys inside one object follow the usual JSON convention: the last
occurrence wins.
"""

from __future__ import annotations

import json
import re
from typing import Iterator, List, Optional, Tuple

from .config import MAX_DEPTH
from .errors import JsonParseError
from .models import JsonArray, JsonObject, JsonProperty, JsonScalar, JsonValue

_NUMBER = r"-?(?:0|[1-9]\d*)(?:\.\d+)?(?:[eE][+-]?\d+)?"
_STRING = r'"(?:[^"\\\x00-\x1F]|\\.)*"'

_TOKEN_RE = re.compile(
    rf"(?P<STRING>{_STRING})|"
    rf"(?P<NUMBER>{_NUMBER})|"
    r"(?P<LITERAL>true|false|null)|"
    r"(?P<PUNCT>[{}\[\],:])|"
    r"(?P<WHITESPACE>[ \t\r\n]+)"
)

_LITERALS = {"true": ("boolean", True), "false": ("boolean", False), "null": ("null", None)}

# (kind, raw text, start offset)
Token = Tuple[str, str, int]


def lex(text: str) -> Iterator[Token]:
    """Yield tokens, rejecting any character the grammar does not cover."""
    pos = 0
    for m in _TOKEN_RE.finditer(text):
        if m.start() != pos:
            raise JsonParseError(f"invalid character at offset {pos}", pos)
        pos = m.end()
        kind = m.lastgroup
        if kind == "WHITESPACE":
            continue
        yield (kind, m.group(), m.start())
    if pos != len(text):
        raise JsonParseError(f"invalid character at offset {pos}", pos)


class _Tokens:
    """Token stream with one token of lookahead."""

    def __init__(self, text: str) -> None:
        self._iter = lex(text)
        self._peeked: Optional[Token] = None
        self._end = len(text)

    def peek(self) -> Optional[Token]:
        if self._peeked is None:
            self._peeked = next(self._iter, None)
        return self._peeked

    def next(self) -> Token:
        tok = self.peek()
        if tok is None:
            raise JsonParseError("unexpected end of input", self._end)
        self._peeked = None
        return tok

    def expect(self, raw: str) -> Token:
        tok = self.next()
        if tok[0] != "PUNCT" or tok[1] != raw:
            raise JsonParseError(f"expected '{raw}' at offset {tok[2]}, got {tok[1]!r}", tok[2])
        return tok


def _decode_string(raw: str, start: int) -> str:
    try:
        return json.loads(raw)
    except ValueError as exc:
        raise JsonParseError(f"bad string at offset {start}: {exc}", start) from None


def _parse_value(tokens: _Tokens, depth: int) -> JsonValue:
    if depth > MAX_DEPTH:
        raise JsonParseError("depth limit exceeded")
    kind, raw, start = tokens.next()
    end = start + len(raw)

    if kind == "STRING":
        return JsonScalar("string", _decode_string(raw, start), raw, start, end)
    if kind == "NUMBER":
        value = float(raw) if any(c in raw for c in ".eE") else int(raw)
        return JsonScalar("number", value, raw, start, end)
    if kind == "LITERAL":
        lit_kind, value = _LITERALS[raw]
        return JsonScalar(lit_kind, value, raw, start, end)
    if raw == "{":
        return _parse_object(tokens, start, depth + 1)
    if raw == "[":
        return _parse_array(tokens, start, depth + 1)
    raise JsonParseError(f"unexpected {raw!r} at offset {start}, value expected", start)


def _parse_array(tokens: _Tokens, start: int, depth: int) -> JsonArray:
    items: List[JsonValue] = []
    tok = tokens.peek()
    if tok is not None and tok[1] == "]" and tok[0] == "PUNCT":
        tokens.next()
        return JsonArray(items, start, tok[2] + 1)

    while True:
        items.append(_parse_value(tokens, depth))
        tok = tokens.next()
        if tok[0] == "PUNCT" and tok[1] == "]":
            return JsonArray(items, start, tok[2] + 1)
        if tok[0] != "PUNCT" or tok[1] != ",":
            raise JsonParseError(f"expected ',' or ']' at offset {tok[2]}", tok[2])


def _parse_object(tokens: _Tokens, start: int, depth: int) -> JsonObject:
    obj = JsonObject(start=start)
    tok = tokens.peek()
    if tok is not None and tok[0] == "PUNCT" and tok[1] == "}":
        tokens.next()
        obj.end = tok[2] + 1
        return obj

    while True:
        kind, raw, key_start = tokens.next()
        if kind != "STRING":
            raise JsonParseError(f"expected property name at offset {key_start}", key_start)
        name = _decode_string(raw, key_start)
        tokens.expect(":")
        value = _parse_value(tokens, depth)
        obj.properties[name] = JsonProperty(name, value, key_start)

        tok = tokens.next()
        if tok[0] == "PUNCT" and tok[1] == "}":
            obj.end = tok[2] + 1
            return obj
        if tok[0] != "PUNCT" or tok[1] != ",":
            raise JsonParseError(f"expected ',' or '}}' at offset {tok[2]}", tok[2])


def parse(text: str) -> JsonValue:
    """
    Parse JSON text into the model tree.

    Any value is accepted at the root (RFC 8259); trailing data after the root
    value is rejected. A leading UTF-8 BOM is tolerated.
    """
    if text.startswith("\ufeff"):
        # keep offsets aligned with the original text
        text = " " + text[1:]
    tokens = _Tokens(text)
    if tokens.peek() is None:
        raise JsonParseError("empty document", 0)
    root = _parse_value(tokens, 0)
    extra = tokens.peek()
    if extra is not None:
        raise JsonParseError(f"extra data after root value at offset {extra[2]}", extra[2])
    return root
