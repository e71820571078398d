"""Tokenizer for SCSS/CSS source.

Produces a lazy stream of tokens with source positions. Only enough of the
language is recognised to recover block structure, comments, at-rules and
selectors; values are passed through as identifier/other tokens.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

from pcoslint.parser.errors import ParseError

__all__ = ["Token", "TokenKind", "tokenize"]


class TokenKind(Enum):
    SELECTOR_FRAGMENT = "selector-fragment"
    IDENTIFIER = "identifier"
    AT_KEYWORD = "at-keyword"
    BRACE_OPEN = "brace-open"
    BRACE_CLOSE = "brace-close"
    COMMENT = "comment"
    PARAMETER_LIST = "parameter-list"
    STRING = "string"
    SEMICOLON = "semicolon"
    OTHER = "other"


@dataclass(frozen=True)
class Token:
    """A lexical token.

    ``offset``/``end`` index into the source text (end exclusive), so
    callers can slice the original text for a run of tokens.
    """

    kind: TokenKind
    value: str
    line: int
    column: int
    offset: int
    end: int
    end_line: int
    end_column: int


_FRAGMENT_STARTS = frozenset(".&%#")
_WORD_EXTRA = frozenset("-_$.&%#\\")


def _is_word_char(ch: str) -> bool:
    return ch.isalnum() or ch in _WORD_EXTRA


class _Scanner:
    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0
        self.line = 1
        self.line_start = 0

    @property
    def column(self) -> int:
        return self.pos - self.line_start + 1

    def peek(self, ahead: int = 0) -> str:
        index = self.pos + ahead
        return self.text[index] if index < len(self.text) else ""

    def advance_to(self, index: int) -> None:
        newlines = self.text.count("\n", self.pos, index)
        if newlines:
            self.line += newlines
            self.line_start = self.text.rfind("\n", self.pos, index) + 1
        self.pos = index

    def emit(self, kind: TokenKind, start: int, line: int, column: int) -> Token:
        return Token(
            kind=kind,
            value=self.text[start:self.pos],
            line=line,
            column=column,
            offset=start,
            end=self.pos,
            end_line=self.line,
            end_column=self.column,
        )

    # ---- multi-character constructs ----

    def skip_string(self, line: int, column: int) -> None:
        quote = self.text[self.pos]
        i = self.pos + 1
        while i < len(self.text):
            ch = self.text[i]
            if ch == "\\":
                i += 2
                continue
            if ch == quote:
                self.advance_to(i + 1)
                return
            if ch == "\n":
                break
            i += 1
        raise ParseError("Unterminated string", line=line, column=column)

    def skip_parens(self, line: int, column: int) -> None:
        depth = 0
        i = self.pos
        while i < len(self.text):
            ch = self.text[i]
            if ch in "\"'":
                self.advance_to(i)
                self.skip_string(self.line, self.column)
                i = self.pos
                continue
            if ch == "(":
                depth += 1
            elif ch == ")":
                depth -= 1
                if depth == 0:
                    self.advance_to(i + 1)
                    return
            i += 1
        raise ParseError("Unterminated parameter list", line=line, column=column)

    def skip_interpolation(self, line: int, column: int) -> None:
        # Positioned at "#{".
        depth = 0
        i = self.pos + 1
        while i < len(self.text):
            ch = self.text[i]
            if ch == "{":
                depth += 1
            elif ch == "}":
                depth -= 1
                if depth == 0:
                    self.advance_to(i + 1)
                    return
            i += 1
        raise ParseError("Unterminated interpolation", line=line, column=column)

    def skip_word(self) -> None:
        while self.pos < len(self.text):
            if self.peek() == "#" and self.peek(1) == "{":
                self.skip_interpolation(self.line, self.column)
            elif self.peek() == "\\" and self.peek(1) not in ("", "\n"):
                # Escaped character inside a selector, e.g. ".sm\:hidden".
                self.pos += 2
            elif _is_word_char(self.peek()):
                self.pos += 1
            else:
                break


def tokenize(text: str) -> Iterator[Token]:
    """Yield the tokens of *text* in source order.

    Raises :class:`ParseError` for an unterminated comment, string,
    parameter list or interpolation, reporting the opening position.
    """
    s = _Scanner(text)
    length = len(text)
    while s.pos < length:
        ch = s.peek()
        start, line, column = s.pos, s.line, s.column

        if ch.isspace():
            s.advance_to(s.pos + 1)
            continue

        if ch == "/" and s.peek(1) == "*":
            close = text.find("*/", s.pos + 2)
            if close == -1:
                raise ParseError("Unterminated comment", line=line, column=column)
            s.advance_to(close + 2)
            yield s.emit(TokenKind.COMMENT, start, line, column)
            continue

        if ch == "/" and s.peek(1) == "/":
            newline = text.find("\n", s.pos)
            s.advance_to(length if newline == -1 else newline)
            continue

        if ch in "\"'":
            s.skip_string(line, column)
            yield s.emit(TokenKind.STRING, start, line, column)
            continue

        if ch == "(":
            s.skip_parens(line, column)
            yield s.emit(TokenKind.PARAMETER_LIST, start, line, column)
            continue

        if ch == "{":
            s.advance_to(s.pos + 1)
            yield s.emit(TokenKind.BRACE_OPEN, start, line, column)
            continue

        if ch == "}":
            s.advance_to(s.pos + 1)
            yield s.emit(TokenKind.BRACE_CLOSE, start, line, column)
            continue

        if ch == ";":
            s.advance_to(s.pos + 1)
            yield s.emit(TokenKind.SEMICOLON, start, line, column)
            continue

        if ch == "@" and _is_word_char(s.peek(1)):
            s.pos += 1
            s.skip_word()
            yield s.emit(TokenKind.AT_KEYWORD, start, line, column)
            continue

        if _is_word_char(ch):
            s.skip_word()
            kind = TokenKind.SELECTOR_FRAGMENT if ch in _FRAGMENT_STARTS else TokenKind.IDENTIFIER
            yield s.emit(kind, start, line, column)
            continue

        s.advance_to(s.pos + 1)
        yield s.emit(TokenKind.OTHER, start, line, column)
