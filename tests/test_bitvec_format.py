import pytest

from asmcore.util.bigint import BigInt
from asmcore.util.bitvec import BitVec
from asmcore.util import bitvec_format as fmt


def make(data: bytes) -> BitVec:
    bv = BitVec()
    if data:
        bv.write_bigint(0, BigInt.from_bytes_be(data))
    return bv


SAMPLE = bytes(range(0, 200, 5))


def test_binary_round_trip():
    assert fmt.format_binary(make(SAMPLE)) == SAMPLE


def test_binary_pads_partial_byte():
    bv = BitVec()
    bv.write_bigint(0, BigInt(0b101, 3))
    assert fmt.format_binary(bv) == bytes([0b10100000])


def test_hexstr_matches_bytes():
    assert fmt.format_hexstr(make(SAMPLE)) == SAMPLE.hex()


def test_binstr_round_trip():
    text = fmt.format_binstr(make(SAMPLE))
    assert len(text) == len(SAMPLE) * 8
    assert int(text, 2) == int.from_bytes(SAMPLE, "big")


def test_hexdump_short_data():
    out = fmt.format_hexdump(make(b"Hi"))
    assert out.count("\n") == 1
    assert out.startswith(" 0 | 48 69 ")
    assert "| Hi" in out
    assert out.endswith(" |\n")


def test_hexdump_line_count():
    out = fmt.format_hexdump(make(bytes(40)))
    assert out.count("\n") == 3


def test_hexdump_replaces_unprintable():
    out = fmt.format_hexdump(make(b"\x01|\n"))
    assert "| .. ." in out


def test_bindump_contains_bits():
    out = fmt.format_bindump(make(b"H"))
    assert f"{ord('H'):08b}" in out
    assert "| H" in out


def test_mif():
    out = fmt.format_mif(make(SAMPLE))
    assert out.startswith(f"DEPTH = {len(SAMPLE)};\nWIDTH = 8;\n")
    assert "ADDRESS_RADIX = HEX;\nDATA_RADIX = HEX;\n\nCONTENT\nBEGIN\n" in out
    assert out.endswith("END;")
    body = out.split("BEGIN\n")[1].split("END;")[0].splitlines()
    assert bytes(int(line.split(":")[1].strip(" ;"), 16) for line in body) == SAMPLE


def test_mif_empty_raises():
    with pytest.raises(ValueError):
        fmt.format_mif(BitVec())


def test_intelhex_records():
    data = bytes(range(40))
    out = fmt.format_intelhex(make(data), 8)
    lines = out.split("\n")
    assert lines[-1] == ":00000001FF"
    records = [bytes.fromhex(line[1:]) for line in lines[:-1]]
    assert [r[0] for r in records] == [32, 8]
    assert all(sum(r) % 256 == 0 for r in records)
    assert int.from_bytes(records[1][1:3], "big") == 32
    assert b"".join(r[4:-1] for r in records) == data


def test_intelhex_empty():
    assert fmt.format_intelhex(BitVec(), 8) == ":00000001FF"


def test_separator_decimal():
    out = fmt.format_separator(make(SAMPLE[:10]), 10, ", ")
    assert [int(x) for x in out.split(", ")] == list(SAMPLE[:10])


def test_separator_line_breaks_every_16():
    out = fmt.format_separator(make(bytes(20)), 16, ",")
    first, second = out.split("\n")
    assert first.count("0x00") == 16
    assert second.count("0x00") == 4


def test_separator_invalid_radix():
    with pytest.raises(ValueError):
        fmt.format_separator(make(b"a"), 8, ",")


def test_c_array():
    out = fmt.format_c_array(make(SAMPLE[:20]), 16)
    assert out.startswith("const unsigned char data[] = {\n\t/* 0x")
    assert out.endswith("\n};")
    values = [
        int(tok, 16)
        for tok in out.replace(",", " ").split()
        if tok.startswith("0x") and tok not in ("0x00", "0x10") or tok in ("0x00,",)
    ]
    assert len(out.splitlines()) == 4
    assert all(f"0x{b:02x}" in out for b in SAMPLE[:20])
    assert values


def test_c_array_empty_raises():
    with pytest.raises(ValueError):
        fmt.format_c_array(BitVec(), 10)


def test_logisim_round_trip():
    out = fmt.format_logisim(make(SAMPLE), 8)
    assert out.startswith("v2.0 raw\n")
    tokens = out[len("v2.0 raw\n"):].split()
    assert bytes(int(t, 16) for t in tokens) == SAMPLE


def test_logisim_16_bit_chunks():
    out = fmt.format_logisim(make(bytes([0x12, 0x34])), 16)
    assert out.split("\n", 1)[1].split() == ["1234"]