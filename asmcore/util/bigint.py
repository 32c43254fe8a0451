"""Arbitrary-precision integers that may carry a definite bit size."""

from __future__ import annotations

import functools
from typing import Any, Optional, Tuple

BIGINT_MAX_BITS = 8 * 100_000_000

_USIZE_LIMIT = 1 << 64
_U32_LIMIT = 1 << 32

_OUT_OF_RANGE = "value is out of supported range"


class BigIntError(ValueError):
    """An integer operation that cannot be carried out."""

    def __init__(self, message: str, span: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.span = span


def _mask(bits: int) -> int:
    return (1 << bits) - 1


def _magnitude_bits(value: int) -> int:
    return abs(value).bit_length()


def _signed_bytes_be(value: int) -> bytes:
    if value >= 0:
        length = value.bit_length() // 8 + 1
    else:
        length = (-value - 1).bit_length() // 8 + 1
    return value.to_bytes(length, "big", signed=True)


def _trunc_div(lhs: int, rhs: int) -> int:
    quotient = abs(lhs) // abs(rhs)
    return -quotient if (lhs < 0) != (rhs < 0) else quotient


@functools.total_ordering
class BigInt:
    """An integer value together with an optional size in bits.

    Equality and ordering look at the value only, never at the size.
    """

    __slots__ = ("value", "size")

    def __init__(self, value: int = 0, size: Optional[int] = None) -> None:
        self.value = value.value if isinstance(value, BigInt) else int(value)
        self.size = size

    @classmethod
    def from_bytes_be(cls, data: bytes) -> "BigInt":
        """Read big-endian two's complement bytes; the size is 8 bits per byte."""
        return cls(int.from_bytes(bytes(data), "big", signed=True), len(data) * 8)

    def as_string(self) -> str:
        """Decode the value's signed big-endian bytes as UTF-8, replacing errors."""
        return _signed_bytes_be(self.value).decode("utf-8", errors="replace")

    def set_bit(self, index: int, value: bool) -> None:
        if value:
            self.value |= 1 << index
        else:
            self.value &= ~(1 << index)

    def get_bit(self, index: int) -> bool:
        return bool((self.value >> index) & 1)

    def min_size(self) -> int:
        """The fewest bits that hold the value (with a sign bit if negative)."""
        if self.value == 0:
            return 1
        if self.value < 0:
            return _magnitude_bits(self.value + 1) + 1
        return self.value.bit_length()

    def size_or_min_size(self) -> int:
        return self.size if self.size is not None else self.min_size()

    def sign(self) -> int:
        return (self.value > 0) - (self.value < 0)

    def maybe_usize(self) -> Optional[int]:
        """The value if it fits an unsigned 64-bit integer, else None."""
        if 0 <= self.value < _USIZE_LIMIT:
            return self.value
        return None

    def checked_usize(self, span: Any = None) -> int:
        result = self.maybe_usize()
        if result is None:
            raise BigIntError(_OUT_OF_RANGE, span)
        return result

    def checked_nonzero_usize(self, span: Any = None) -> int:
        result = self.maybe_usize()
        if not result:
            raise BigIntError(_OUT_OF_RANGE, span)
        return result

    def _largest_bits(self, rhs: "BigInt") -> int:
        return max(_magnitude_bits(self.value), _magnitude_bits(rhs.value))

    def checked_add(self, rhs: "BigInt", span: Any = None) -> "BigInt":
        if self._largest_bits(rhs) >= BIGINT_MAX_BITS - 1:
            raise BigIntError(_OUT_OF_RANGE, span)
        return BigInt(self.value + rhs.value)

    def checked_sub(self, rhs: "BigInt", span: Any = None) -> "BigInt":
        if self._largest_bits(rhs) >= BIGINT_MAX_BITS - 2:
            raise BigIntError(_OUT_OF_RANGE, span)
        return BigInt(self.value - rhs.value)

    def checked_mul(self, rhs: "BigInt", span: Any = None) -> "BigInt":
        if self._largest_bits(rhs) >= BIGINT_MAX_BITS // 2:
            raise BigIntError(_OUT_OF_RANGE, span)
        return BigInt(self.value * rhs.value)

    def checked_div(self, rhs: "BigInt", span: Any = None) -> "BigInt":
        """Division rounding toward zero."""
        if rhs.value == 0:
            raise BigIntError("division by zero", span)
        return BigInt(_trunc_div(self.value, rhs.value))

    def checked_mod(self, rhs: "BigInt", span: Any = None) -> "BigInt":
        """Remainder taking the sign of the dividend."""
        if rhs.value == 0:
            raise BigIntError("modulo by zero", span)
        return BigInt(self.value - rhs.value * _trunc_div(self.value, rhs.value))

    def checked_shl(self, rhs: "BigInt", span: Any = None) -> "BigInt":
        amount = rhs.value
        if not 0 <= amount < _U32_LIMIT:
            raise BigIntError(_OUT_OF_RANGE, span)
        if _magnitude_bits(self.value) + amount >= BIGINT_MAX_BITS:
            raise BigIntError(_OUT_OF_RANGE, span)
        return BigInt(self.value << amount)

    def checked_shr(self, rhs: "BigInt", span: Any = None) -> "BigInt":
        amount = rhs.value
        if not 0 <= amount < _USIZE_LIMIT:
            raise BigIntError(_OUT_OF_RANGE, span)
        return BigInt(self.value >> amount)

    def slice(self, left: int, right: int) -> "BigInt":
        """Bits from `left` (exclusive) down to `right` (inclusive), sized."""
        if left < right:
            raise BigIntError("invalid slice range")
        if self.size is not None and self.value >= 0 and left == self.size and right == 0:
            return BigInt(self.value, self.size)
        width = left - right
        return BigInt((self.value >> right) & _mask(width), width)

    def checked_slice(self, left: int, right: int, span: Any = None) -> "BigInt":
        if left < right:
            raise BigIntError("invalid slice range", span)
        return self.slice(left, right)

    def concat(
        self,
        lhs_slice: Tuple[int, int],
        rhs: "BigInt",
        rhs_slice: Tuple[int, int],
    ) -> "BigInt":
        """Join a bit range of self (high part) with a bit range of rhs (low part)."""
        lhs_size = lhs_slice[0] - lhs_slice[1]
        rhs_size = rhs_slice[0] - rhs_slice[1]
        high = (self.value >> lhs_slice[1]) & _mask(lhs_size)
        low = (rhs.value >> rhs_slice[1]) & _mask(rhs_size)
        return BigInt((high << rhs_size) | low, lhs_size + rhs_size)

    def convert_le(self) -> "BigInt":
        """Reverse the byte order of a sized value."""
        if self.size is None:
            raise BigIntError("attempting `le` conversion on an unsized value")
        value = self.slice(self.size, 0).value
        length = max((value.bit_length() + 7) // 8, 1, self.size // 8)
        swapped = int.from_bytes(value.to_bytes(length, "little"), "big")
        return BigInt(swapped, self.size)

    def __invert__(self) -> "BigInt":
        return BigInt(~self.value)

    def __neg__(self) -> "BigInt":
        return BigInt(-self.value)

    def __and__(self, rhs: "BigInt") -> "BigInt":
        return BigInt(self.value & rhs.value)

    def __or__(self, rhs: "BigInt") -> "BigInt":
        return BigInt(self.value | rhs.value)

    def __xor__(self, rhs: "BigInt") -> "BigInt":
        return BigInt(self.value ^ rhs.value)

    def __eq__(self, rhs: object) -> bool:
        if not isinstance(rhs, BigInt):
            return NotImplemented
        return self.value == rhs.value

    def __lt__(self, rhs: object) -> bool:
        if not isinstance(rhs, BigInt):
            return NotImplemented
        return self.value < rhs.value

    def __hash__(self) -> int:
        return hash(self.value)

    def __format__(self, spec: str) -> str:
        return format(self.value, spec)

    def __repr__(self) -> str:
        text = hex(self.value)
        if self.size is not None:
            text += f"`{self.size}"
        return text