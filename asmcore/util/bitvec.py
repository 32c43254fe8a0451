"""A growable vector of bits, with markers tying output ranges to source spans."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional

from asmcore.util.bigint import BigInt


@dataclass
class BitVecSpan:
    """A range of output bits produced by one piece of source."""

    addr: BigInt
    offset: Optional[int]
    size: int
    span: Any


@dataclass
class BitVec:
    """Bits indexed from 0, where bit 0 is the first bit of the output."""

    spans: List[BitVecSpan] = field(default_factory=list)
    _data: int = field(default=0, repr=False)
    _len: int = field(default=0, repr=False)

    def __init__(self) -> None:
        self.spans = []
        self._data = 0
        self._len = 0

    def write_bit(self, index: int, value: bool) -> None:
        if value:
            self._data |= 1 << index
        else:
            self._data &= ~(1 << index)
        self._len = max(self._len, index + 1)

    def read_bit(self, index: int) -> bool:
        """Bits never written read as zero."""
        return bool((self._data >> index) & 1)

    def __len__(self) -> int:
        return self._len

    def write_bigint(self, index: int, bigint: BigInt) -> None:
        """Write a sized integer most significant bit first, starting at `index`."""
        if bigint.size is None:
            raise ValueError("cannot write an integer with indefinite size")
        size = bigint.size
        for i in range(size):
            self.write_bit(index + i, bigint.get_bit(size - 1 - i))
        self._len = max(self._len, index + size)

    def write_bigint_with_span(
        self, span: Any, offset: int, addr: BigInt, bigint: BigInt
    ) -> None:
        self.write_bigint(offset, bigint)
        self.mark_span(offset, bigint.size, addr, span)

    def mark_span(
        self, offset: Optional[int], size: int, addr: BigInt, span: Any
    ) -> None:
        self.spans.append(BitVecSpan(addr=addr, offset=offset, size=size, span=span))

    def to_bigint(self) -> BigInt:
        """The whole vector as one integer, bit 0 being the most significant."""
        value = 0
        for i in range(self._len):
            value = (value << 1) | self.read_bit(i)
        return BigInt(value, self._len)