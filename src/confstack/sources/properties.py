"""Parser for java.util.Properties style `.properties` text."""

from __future__ import annotations

from typing import Dict, Iterator, List, Tuple

from confstack.errors import SourceParseError

_WHITESPACE = " \t\f"
_SEPARATORS = "=:"
_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}


def parse_properties(text: str, *, source: str = "<string>") -> Dict[str, str]:
    result: Dict[str, str] = {}
    for line in _logical_lines(text):
        raw_key, raw_value = _split_key_value(line)
        result[_unescape(raw_key, source)] = _unescape(raw_value, source)
    return result


def _ends_with_continuation(line: str) -> bool:
    backslashes = len(line) - len(line.rstrip("\\"))
    return backslashes % 2 == 1


def _logical_lines(text: str) -> Iterator[str]:
    pending: List[str] = []
    for physical in text.splitlines():
        stripped = physical.lstrip(_WHITESPACE)
        if not pending:
            if not stripped or stripped[0] in "#!":
                continue
        if _ends_with_continuation(stripped):
            pending.append(stripped[:-1])
            continue
        pending.append(stripped)
        yield "".join(pending)
        pending = []
    if pending:
        yield "".join(pending)


def _split_key_value(line: str) -> Tuple[str, str]:
    i = 0
    length = len(line)
    while i < length:
        char = line[i]
        if char == "\\":
            i += 2
            continue
        if char in _SEPARATORS or char in _WHITESPACE:
            break
        i += 1
    key = line[:i]

    j = min(i, length)
    while j < length and line[j] in _WHITESPACE:
        j += 1
    if j < length and line[j] in _SEPARATORS:
        j += 1
    while j < length and line[j] in _WHITESPACE:
        j += 1
    return key, line[j:]


def _unescape(text: str, source: str) -> str:
    if "\\" not in text:
        return text
    out: List[str] = []
    i = 0
    length = len(text)
    while i < length:
        char = text[i]
        if char != "\\":
            out.append(char)
            i += 1
            continue
        if i + 1 >= length:
            break
        nxt = text[i + 1]
        if nxt == "u":
            digits = text[i + 2 : i + 6]
            if len(digits) != 4:
                raise SourceParseError(source, f"Malformed \\uxxxx encoding: {text[i:i + 6]!r}")
            try:
                out.append(chr(int(digits, 16)))
            except ValueError as exc:
                raise SourceParseError(source, f"Malformed \\uxxxx encoding: {text[i:i + 6]!r}") from exc
            i += 6
            continue
        out.append(_ESCAPES.get(nxt, nxt))
        i += 2
    return "".join(out)
