"""Token kinds and the tokenizer's single-token recognizer."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from typing import Any, Callable, Optional, Tuple


class TokenKind(enum.Enum):
    ERROR = enum.auto()
    WHITESPACE = enum.auto()
    COMMENT = enum.auto()
    LINE_BREAK = enum.auto()
    IDENTIFIER = enum.auto()
    NUMBER = enum.auto()
    STRING = enum.auto()
    KEYWORD_ASM = enum.auto()
    KEYWORD_TRUE = enum.auto()
    KEYWORD_FALSE = enum.auto()
    PAREN_OPEN = enum.auto()
    PAREN_CLOSE = enum.auto()
    BRACKET_OPEN = enum.auto()
    BRACKET_CLOSE = enum.auto()
    BRACE_OPEN = enum.auto()
    BRACE_CLOSE = enum.auto()
    DOT = enum.auto()
    COMMA = enum.auto()
    COLON = enum.auto()
    COLON_COLON = enum.auto()
    ARROW_RIGHT = enum.auto()
    ARROW_LEFT = enum.auto()
    HEAVY_ARROW_RIGHT = enum.auto()
    HASH = enum.auto()
    EQUAL = enum.auto()
    PLUS = enum.auto()
    MINUS = enum.auto()
    ASTERISK = enum.auto()
    SLASH = enum.auto()
    PERCENT = enum.auto()
    QUESTION = enum.auto()
    EXCLAMATION = enum.auto()
    AMPERSAND = enum.auto()
    VERTICAL_BAR = enum.auto()
    CIRCUMFLEX = enum.auto()
    TILDE = enum.auto()
    GRAVE = enum.auto()
    AT = enum.auto()
    DOUBLE_AMPERSAND = enum.auto()
    DOUBLE_VERTICAL_BAR = enum.auto()
    DOUBLE_EQUAL = enum.auto()
    EXCLAMATION_EQUAL = enum.auto()
    LESS_THAN = enum.auto()
    DOUBLE_LESS_THAN = enum.auto()
    LESS_THAN_EQUAL = enum.auto()
    GREATER_THAN = enum.auto()
    DOUBLE_GREATER_THAN = enum.auto()
    TRIPLE_GREATER_THAN = enum.auto()
    GREATER_THAN_EQUAL = enum.auto()

    def is_ignorable(self) -> bool:
        return self in _IGNORABLE

    def is_allowed_pattern_token(self) -> bool:
        return self in _PATTERN_TOKENS

    def printable(self) -> str:
        """A human-readable description used in diagnostics."""
        return _PRINTABLE[self]


_IGNORABLE = frozenset({TokenKind.WHITESPACE, TokenKind.COMMENT, TokenKind.LINE_BREAK})

_PATTERN_TOKENS = frozenset({
    TokenKind.IDENTIFIER,
    TokenKind.NUMBER,
    TokenKind.KEYWORD_ASM,
    TokenKind.KEYWORD_TRUE,
    TokenKind.KEYWORD_FALSE,
    TokenKind.PAREN_OPEN,
    TokenKind.PAREN_CLOSE,
    TokenKind.BRACKET_OPEN,
    TokenKind.BRACKET_CLOSE,
    TokenKind.DOT,
    TokenKind.COMMA,
    TokenKind.ARROW_LEFT,
    TokenKind.ARROW_RIGHT,
    TokenKind.HASH,
    TokenKind.PLUS,
    TokenKind.MINUS,
    TokenKind.ASTERISK,
    TokenKind.SLASH,
    TokenKind.PERCENT,
    TokenKind.EXCLAMATION,
    TokenKind.AMPERSAND,
    TokenKind.VERTICAL_BAR,
    TokenKind.CIRCUMFLEX,
    TokenKind.TILDE,
    TokenKind.AT,
    TokenKind.LESS_THAN,
    TokenKind.GREATER_THAN,
})

_PRINTABLE = {
    TokenKind.ERROR: "error",
    TokenKind.WHITESPACE: "whitespace",
    TokenKind.COMMENT: "comment",
    TokenKind.LINE_BREAK: "line break",
    TokenKind.IDENTIFIER: "identifier",
    TokenKind.NUMBER: "number",
    TokenKind.STRING: "string",
    TokenKind.KEYWORD_ASM: "`asm` keyword",
    TokenKind.KEYWORD_TRUE: "`true` keyword",
    TokenKind.KEYWORD_FALSE: "`false` keyword",
    TokenKind.PAREN_OPEN: "`(`",
    TokenKind.PAREN_CLOSE: "`)`",
    TokenKind.BRACKET_OPEN: "`[`",
    TokenKind.BRACKET_CLOSE: "`]`",
    TokenKind.BRACE_OPEN: "`{`",
    TokenKind.BRACE_CLOSE: "`}`",
    TokenKind.DOT: "`.`",
    TokenKind.COMMA: "`,`",
    TokenKind.COLON: "`:`",
    TokenKind.COLON_COLON: "`::`",
    TokenKind.ARROW_RIGHT: "`->`",
    TokenKind.ARROW_LEFT: "`<-`",
    TokenKind.HEAVY_ARROW_RIGHT: "`=>`",
    TokenKind.HASH: "`#`",
    TokenKind.EQUAL: "`=`",
    TokenKind.PLUS: "`+`",
    TokenKind.MINUS: "`-`",
    TokenKind.ASTERISK: "`*`",
    TokenKind.SLASH: "`/`",
    TokenKind.PERCENT: "`%`",
    TokenKind.QUESTION: "`?`",
    TokenKind.EXCLAMATION: "`!`",
    TokenKind.AMPERSAND: "`&`",
    TokenKind.VERTICAL_BAR: "`|`",
    TokenKind.CIRCUMFLEX: "`^`",
    TokenKind.TILDE: "`~`",
    TokenKind.AT: "`@`",
    TokenKind.GRAVE: "```",
    TokenKind.DOUBLE_AMPERSAND: "`&&`",
    TokenKind.DOUBLE_VERTICAL_BAR: "`||`",
    TokenKind.DOUBLE_EQUAL: "`==`",
    TokenKind.EXCLAMATION_EQUAL: "`!=`",
    TokenKind.LESS_THAN: "`<`",
    TokenKind.DOUBLE_LESS_THAN: "`<<`",
    TokenKind.LESS_THAN_EQUAL: "`<=`",
    TokenKind.GREATER_THAN: "`>`",
    TokenKind.DOUBLE_GREATER_THAN: "`>>`",
    TokenKind.TRIPLE_GREATER_THAN: "`>>>`",
    TokenKind.GREATER_THAN_EQUAL: "`>=`",
}


@dataclass
class Token:
    span: Any
    kind: TokenKind


_Match = Optional[Tuple[TokenKind, int]]

_WHITESPACE_RE = re.compile(r"[ \t\r]+")
_IDENTIFIER_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_NUMBER_RE = re.compile(r"[0-9][A-Za-z0-9_]*|\$[0-9A-Fa-f_]+|%[01_]+")
_STRING_RE = re.compile(r'"[^"]*"')

_KEYWORDS = {
    "asm": TokenKind.KEYWORD_ASM,
    "true": TokenKind.KEYWORD_TRUE,
    "false": TokenKind.KEYWORD_FALSE,
}

_SPECIALS = (
    ("\n", TokenKind.LINE_BREAK),
    ("(", TokenKind.PAREN_OPEN),
    (")", TokenKind.PAREN_CLOSE),
    ("[", TokenKind.BRACKET_OPEN),
    ("]", TokenKind.BRACKET_CLOSE),
    ("{", TokenKind.BRACE_OPEN),
    ("}", TokenKind.BRACE_CLOSE),
    (".", TokenKind.DOT),
    (",", TokenKind.COMMA),
    ("::", TokenKind.COLON_COLON),
    (":", TokenKind.COLON),
    ("->", TokenKind.ARROW_RIGHT),
    ("<-", TokenKind.ARROW_LEFT),
    ("=>", TokenKind.HEAVY_ARROW_RIGHT),
    ("#", TokenKind.HASH),
    ("+", TokenKind.PLUS),
    ("-", TokenKind.MINUS),
    ("*", TokenKind.ASTERISK),
    ("/", TokenKind.SLASH),
    ("%", TokenKind.PERCENT),
    ("^", TokenKind.CIRCUMFLEX),
    ("~", TokenKind.TILDE),
    ("@", TokenKind.AT),
    ("`", TokenKind.GRAVE),
    ("&&", TokenKind.DOUBLE_AMPERSAND),
    ("&", TokenKind.AMPERSAND),
    ("||", TokenKind.DOUBLE_VERTICAL_BAR),
    ("|", TokenKind.VERTICAL_BAR),
    ("==", TokenKind.DOUBLE_EQUAL),
    ("=", TokenKind.EQUAL),
    ("?", TokenKind.QUESTION),
    ("!=", TokenKind.EXCLAMATION_EQUAL),
    ("!", TokenKind.EXCLAMATION),
    ("<=", TokenKind.LESS_THAN_EQUAL),
    ("<<", TokenKind.DOUBLE_LESS_THAN),
    ("<", TokenKind.LESS_THAN),
    (">=", TokenKind.GREATER_THAN_EQUAL),
    (">>>", TokenKind.TRIPLE_GREATER_THAN),
    (">>", TokenKind.DOUBLE_GREATER_THAN),
    (">", TokenKind.GREATER_THAN),
)


def _byte_len(text: str) -> int:
    return len(text.encode("utf-8"))


def _check_whitespace(src: str) -> _Match:
    m = _WHITESPACE_RE.match(src)
    return (TokenKind.WHITESPACE, _byte_len(m.group())) if m else None


def _check_comment(src: str) -> _Match:
    if not src.startswith(";"):
        return None

    if not src.startswith(";*"):
        end = src.find("\n", 1)
        if end < 0:
            end = len(src)
        return TokenKind.COMMENT, _byte_len(src[:end])

    i = 2
    nesting = 0
    while i < len(src):
        if src.startswith(";*", i):
            nesting += 1
            i += 2
        elif src.startswith("*;", i):
            i += 2
            if nesting == 0:
                break
            nesting -= 1
        else:
            i += 1
    return TokenKind.COMMENT, _byte_len(src[:i])


def _check_number(src: str) -> _Match:
    m = _NUMBER_RE.match(src)
    return (TokenKind.NUMBER, _byte_len(m.group())) if m else None


def _check_identifier(src: str) -> _Match:
    if src.startswith("$"):
        return TokenKind.IDENTIFIER, 1
    m = _IDENTIFIER_RE.match(src)
    if not m:
        return None
    ident = m.group()
    return _KEYWORDS.get(ident, TokenKind.IDENTIFIER), len(ident)


def _check_special(src: str) -> _Match:
    for text, kind in _SPECIALS:
        if src.startswith(text):
            return kind, len(text)
    return None


def _check_string(src: str) -> _Match:
    m = _STRING_RE.match(src)
    return (TokenKind.STRING, _byte_len(m.group())) if m else None


_CHECKS: Tuple[Callable[[str], _Match], ...] = (
    _check_whitespace,
    _check_comment,
    _check_number,
    _check_identifier,
    _check_special,
    _check_string,
)


def decide_next_token(src: str) -> Tuple[TokenKind, int]:
    """Classify the token at the start of `src`, returning its kind and UTF-8 byte length.

    Text that starts no valid token gives an ERROR token spanning one character.
    """
    for check in _CHECKS:
        result = check(src)
        if result is not None:
            return result
    return TokenKind.ERROR, max(1, _byte_len(src[:1]))


def is_whitespace(c: str) -> bool:
    return c in (" ", "\t", "\r")