"""Conversion of string and number token excerpts into values."""

from __future__ import annotations

from typing import Any, Iterator, List, Optional, Tuple

from asmcore.util.bigint import BigInt

_USIZE_MAX = (1 << 64) - 1

_RADIX_BITS = {2: 1, 8: 3, 16: 4}


class ExcerptError(ValueError):
    """A token excerpt whose contents are not valid."""

    def __init__(self, message: str, span: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.span = span


def _digit(c: Optional[str], radix: int) -> Optional[int]:
    if c is None or len(c) != 1 or not c.isascii() or not c.isalnum():
        return None
    value = int(c, 36)
    return value if value < radix else None


def _unescape(chars: Iterator[str], span: Any) -> str:
    def invalid() -> ExcerptError:
        return ExcerptError("invalid escape sequence", span)

    c = next(chars, None)
    simple = {"0": "\0", "t": "\t", "r": "\r", "n": "\n", "'": "'", '"': '"', "\\": "\\"}
    if c in simple:
        return simple[c]

    if c == "x":
        byte = 0
        for _ in range(2):
            d = _digit(next(chars, None), 16)
            if d is None:
                raise invalid()
            byte = (byte << 4) + d
        if byte > 0x7F:
            raise invalid()
        return chr(byte)

    if c == "u":
        if next(chars, None) != "{":
            raise invalid()
        codepoint = 0
        for _ in range(7):
            nc = next(chars, None)
            if nc == "}":
                break
            d = _digit(nc, 16)
            if d is None:
                raise invalid()
            codepoint = (codepoint << 4) + d
        else:
            raise invalid()
        if codepoint > 0x10FFFF or 0xD800 <= codepoint <= 0xDFFF:
            raise invalid()
        return chr(codepoint)

    raise invalid()


def excerpt_as_string_contents(excerpt: str, span: Any = None) -> str:
    """Strip the quotes from a string excerpt and resolve its escape sequences."""
    if len(excerpt) < 2:
        raise ValueError("string excerpt must include its quotes")

    chars = iter(excerpt[1:-1])
    result: List[str] = []
    for c in chars:
        result.append(_unescape(chars, span) if c == "\\" else c)
    return "".join(result)


def _parse_radix(excerpt: str) -> Tuple[int, int]:
    if excerpt[0] == "0" and len(excerpt) > 1:
        return {"b": (2, 2), "o": (8, 2), "x": (16, 2)}.get(excerpt[1], (10, 0))
    if excerpt[0] == "%":
        return 2, 1
    if excerpt[0] == "$":
        return 16, 1
    return 10, 0


def _digits(excerpt: str, span: Any) -> Tuple[int, List[int]]:
    if not excerpt:
        raise ValueError("number excerpt must not be empty")
    radix, start = _parse_radix(excerpt)
    digits = []
    for c in excerpt[start:]:
        if c == "_":
            continue
        d = _digit(c, radix)
        if d is None:
            raise ExcerptError("invalid digits", span)
        digits.append(d)
    return radix, digits


def excerpt_as_usize(excerpt: str, span: Any = None) -> int:
    """Parse a number excerpt that must fit an unsigned 64-bit integer."""
    radix, digits = _digits(excerpt, span)
    value = 0
    for d in digits:
        value = value * radix + d
        if value > _USIZE_MAX:
            raise ExcerptError("value is too large", span)
    return value


def excerpt_as_bigint(excerpt: str, span: Any = None) -> BigInt:
    """Parse a number excerpt; binary, octal and hex literals get a size from their digits."""
    radix, digits = _digits(excerpt, span)
    if not digits:
        raise ExcerptError("invalid value", span)

    value = 0
    for d in digits:
        value = value * radix + d

    bits = _RADIX_BITS.get(radix)
    size = bits * len(digits) if bits is not None else None
    return BigInt(value, size)