import pytest

from asmcore.util.bigint import BigInt
from asmcore.util.bitvec import BitVec, BitVecSpan


def test_new_is_empty():
    bv = BitVec()
    assert len(bv) == 0
    assert bv.spans == []


def test_write_and_read_bit():
    bv = BitVec()
    bv.write_bit(5, True)
    assert bv.read_bit(5) is True
    assert bv.read_bit(4) is False
    assert len(bv) == 6


def test_overwrite_bit_with_false():
    bv = BitVec()
    bv.write_bit(2, True)
    bv.write_bit(2, False)
    assert bv.read_bit(2) is False
    assert len(bv) == 3


def test_write_bigint_msb_first():
    bv = BitVec()
    bv.write_bigint(0, BigInt(0b1010, 4))
    assert [bv.read_bit(i) for i in range(4)] == [True, False, True, False]


def test_write_bigint_extends_length():
    bv = BitVec()
    bv.write_bigint(8, BigInt(0xF, 4))
    assert len(bv) == 12
    assert not any(bv.read_bit(i) for i in range(8))


def test_write_bigint_requires_size():
    bv = BitVec()
    with pytest.raises(ValueError):
        bv.write_bigint(0, BigInt(5))


@pytest.mark.parametrize("value,size", [(0xAB, 8), (0x1234, 16), (0, 3), (0b101, 3)])
def test_to_bigint_round_trip(value, size):
    bv = BitVec()
    bv.write_bigint(0, BigInt(value, size))
    result = bv.to_bigint()
    assert result == BigInt(value)
    assert result.size == size


def test_write_bigint_with_span_records_span():
    bv = BitVec()
    addr = BigInt(0x100)
    bv.write_bigint_with_span("span-a", 16, addr, BigInt(0xFF, 8))
    assert bv.spans == [BitVecSpan(addr=addr, offset=16, size=8, span="span-a")]
    assert bv.read_bit(16) is True


def test_mark_span_without_offset():
    bv = BitVec()
    bv.mark_span(None, 0, BigInt(7), "label")
    assert bv.spans[0].offset is None
    assert bv.spans[0].span == "label"
    assert len(bv) == 0