"""Tokenizer for command parameter strings.

Tokens are pulled one at a time from the head of a parameter string. A token
is a double-quoted literal, a single-quoted literal, a brace-delimited literal
(nesting allowed) or a bare word. Delimiters are kept on the returned token;
unescaping is left to :func:`chatcmd.core.commands.parser.escape_param_value`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional

QUOTE_CHARS = ("'", '"')
ESCAPE_CHAR = "\\"
OPEN_BRACE = "{"
CLOSE_BRACE = "}"


class ScanState(Enum):
    PLAIN = "plain"
    IN_SINGLE_QUOTE = "single_quote"
    IN_DOUBLE_QUOTE = "double_quote"
    IN_BRACE = "brace"


@dataclass(frozen=True)
class ParamToken:
    """A raw token and its absolute offsets in the scanned string."""

    raw: str
    start: int
    end: int

    @property
    def is_literal(self) -> bool:
        """True when the token was quoted or brace-delimited."""
        return self.raw[:1] in QUOTE_CHARS or self.raw[:1] == OPEN_BRACE


def _initial_state(char: str) -> ScanState:
    if char == '"':
        return ScanState.IN_DOUBLE_QUOTE
    if char == "'":
        return ScanState.IN_SINGLE_QUOTE
    if char == OPEN_BRACE:
        return ScanState.IN_BRACE
    return ScanState.PLAIN


def _scan_plain(text: str, start: int) -> int:
    index = start
    while index < len(text) and not text[index].isspace():
        index += 1
    return index


def _scan_quoted(text: str, start: int, closing: str) -> Optional[int]:
    index = start + 1
    while index < len(text):
        char = text[index]
        if char == ESCAPE_CHAR and index + 1 < len(text) and text[index + 1] in QUOTE_CHARS:
            index += 2
            continue
        if char == closing:
            return index + 1
        index += 1
    return None


def _scan_brace(text: str, start: int) -> Optional[int]:
    depth = 0
    for index in range(start, len(text)):
        char = text[index]
        if char == OPEN_BRACE:
            depth += 1
        elif char == CLOSE_BRACE:
            depth -= 1
            if depth == 0:
                return index + 1
    return None


def _token_end(text: str, start: int, state: ScanState) -> int:
    if state is ScanState.IN_DOUBLE_QUOTE:
        end = _scan_quoted(text, start, '"')
    elif state is ScanState.IN_SINGLE_QUOTE:
        end = _scan_quoted(text, start, "'")
    elif state is ScanState.IN_BRACE:
        end = _scan_brace(text, start)
    else:
        end = None
    # Unterminated literals are read as bare words.
    if end is None:
        return _scan_plain(text, start)
    return end


def scan_param_value(text: str, pos: int = 0) -> Optional[ParamToken]:
    """Return the next token at or after ``pos``, or None if only whitespace remains."""
    start = pos
    while start < len(text) and text[start].isspace():
        start += 1
    if start >= len(text):
        return None

    end = _token_end(text, start, _initial_state(text[start]))
    return ParamToken(raw=text[start:end], start=start, end=end)


def next_param_value(text: str) -> Optional[str]:
    """Return the raw text of the first token in ``text``, delimiters included."""
    token = scan_param_value(text)
    return token.raw if token else None


def iter_param_tokens(text: str, pos: int = 0) -> Iterator[ParamToken]:
    """Yield every token of ``text`` from left to right."""
    token = scan_param_value(text, pos)
    while token is not None:
        yield token
        token = scan_param_value(text, token.end)
