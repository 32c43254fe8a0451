"""Text and binary renderings of a bit vector."""

from __future__ import annotations

from asmcore.util.bitvec import BitVec


def _read_bits(bitvec: BitVec, start: int, count: int) -> int:
    value = 0
    for i in range(start, start + count):
        value = (value << 1) | bitvec.read_bit(i)
    return value


def _digit_char(digit: int) -> str:
    return "0123456789abcdefghijklmnopqrstuvwxyz"[digit]


def _byte_count(bitvec: BitVec) -> int:
    return (len(bitvec) + 7) // 8


def _require_nonempty(bitvec: BitVec) -> int:
    byte_num = _byte_count(bitvec)
    if byte_num == 0:
        raise ValueError("cannot format empty output")
    return byte_num


def _format_byte(byte: int, radix: int) -> str:
    if radix == 10:
        return str(byte)
    if radix == 16:
        return f"0x{byte:02x}"
    raise ValueError("invalid radix")


def format_binary(bitvec: BitVec) -> bytes:
    """Pack the bits into bytes, padding the last byte with zeros."""
    return bytes(_read_bits(bitvec, i, 8) for i in range(0, len(bitvec), 8))


def format_binstr(bitvec: BitVec) -> str:
    return format_str(bitvec, 1)


def format_hexstr(bitvec: BitVec) -> str:
    return format_str(bitvec, 4)


def format_str(bitvec: BitVec, bits_per_digit: int) -> str:
    return "".join(
        _digit_char(_read_bits(bitvec, i, bits_per_digit))
        for i in range(0, len(bitvec), bits_per_digit)
    )


def format_bindump(bitvec: BitVec) -> str:
    return format_dump(bitvec, 1, 8, 8)


def format_hexdump(bitvec: BitVec) -> str:
    return format_dump(bitvec, 4, 8, 16)


def format_dump(
    bitvec: BitVec, digit_bits: int, byte_bits: int, bytes_per_line: int
) -> str:
    """A dump with an address column, digit groups and, for 8-bit bytes, text."""
    length = len(bitvec)
    line_bits = byte_bits * bytes_per_line
    line_start = 0
    line_end = (length + (bytes_per_line - 1) * byte_bits) // line_bits
    if length < byte_bits:
        line_end = line_start + 1

    addr_width = len(f"{(line_end - 1) * bytes_per_line:x}")
    parts = []

    for line_index in range(line_start, line_end):
        parts.append(f" {line_index * bytes_per_line:0{addr_width}x} | ")

        for byte_index in range(bytes_per_line):
            byte_first_bit = (line_index * bytes_per_line + byte_index) * byte_bits
            for digit_index in range(byte_bits // digit_bits):
                first_bit = byte_first_bit + digit_index * digit_bits
                if first_bit >= length:
                    parts.append(".")
                else:
                    parts.append(_digit_char(_read_bits(bitvec, first_bit, digit_bits)))
            parts.append(" ")
            if byte_index % 4 == 3 and byte_index < bytes_per_line - 1:
                parts.append(" ")

        parts.append("| ")

        if byte_bits == 8:
            for byte_index in range(bytes_per_line):
                byte_first_bit = (line_index * bytes_per_line + byte_index) * byte_bits
                if byte_first_bit >= length:
                    parts.append(".")
                    continue
                c = chr(_read_bits(bitvec, byte_first_bit, byte_bits))
                if c in " \t\r\n":
                    parts.append(" ")
                elif ord(c) >= 0x80 or c < " " or c == "|":
                    parts.append(".")
                else:
                    parts.append(c)
            parts.append(" |")

        parts.append("\n")

    return "".join(parts)


def format_mif(bitvec: BitVec) -> str:
    """A memory initialization file with 8-bit words."""
    byte_num = _require_nonempty(bitvec)
    addr_width = len(f"{byte_num - 1:x}")

    lines = [
        f"DEPTH = {byte_num};\n",
        "WIDTH = 8;\n",
        "ADDRESS_RADIX = HEX;\n",
        "DATA_RADIX = HEX;\n",
        "\n",
        "CONTENT\n",
        "BEGIN\n",
    ]
    for index in range(0, len(bitvec), 8):
        byte = _read_bits(bitvec, index, 8)
        lines.append(f" {index // 8:>{addr_width}X}: {byte:02X};\n")
    lines.append("END;")
    return "".join(lines)


def format_intelhex(bitvec: BitVec, address_unit: int) -> str:
    """Intel HEX data records of up to 32 bytes, then the end-of-file record."""
    lines = []
    bytes_left = _byte_count(bitvec)
    index = 0

    while index < len(bitvec):
        bytes_in_row = min(bytes_left, 32)
        address = index // address_unit

        record = [f":{bytes_in_row:02X}{address:04X}00"]
        checksum = bytes_in_row + ((address >> 8) & 0xFF) + (address & 0xFF)

        for _ in range(bytes_in_row):
            byte = _read_bits(bitvec, index, 8)
            index += 8
            record.append(f"{byte:02X}")
            checksum += byte

        bytes_left -= bytes_in_row
        record.append(f"{(-checksum) & 0xFF:02X}\n")
        lines.append("".join(record))

    lines.append(":00000001FF")
    return "".join(lines)


def format_separator(bitvec: BitVec, radix: int, separator: str) -> str:
    """Bytes in base 10 or 16, separated, with a line break every 16 bytes."""
    parts = []
    index = 0
    while index < len(bitvec):
        byte = _read_bits(bitvec, index, 8)
        index += 8
        parts.append(_format_byte(byte, radix))
        if index < len(bitvec):
            parts.append(separator)
            if (index // 8) % 16 == 0:
                parts.append("\n")
    return "".join(parts)


def format_c_array(bitvec: BitVec, radix: int) -> str:
    """A C array definition holding the bytes, 16 per line with offsets."""
    byte_num = _require_nonempty(bitvec)
    if radix not in (10, 16):
        raise ValueError("invalid radix")
    addr_width = len(f"{byte_num - 1:x}")

    parts = ["const unsigned char data[] = {\n", f"\t/* 0x{0:0{addr_width}x} */ "]
    index = 0
    while index < len(bitvec):
        byte = _read_bits(bitvec, index, 8)
        index += 8
        parts.append(_format_byte(byte, radix))
        if index < len(bitvec):
            parts.append(", ")
            if (index // 8) % 16 == 0:
                parts.append(f"\n\t/* 0x{index // 8:0{addr_width}x} */ ")

    parts.append("\n};")
    return "".join(parts)


def format_logisim(bitvec: BitVec, bits_per_chunk: int) -> str:
    """A Logisim raw image with chunks of up to 16 bits."""
    width = bits_per_chunk // 4
    parts = ["v2.0 raw\n"]
    index = 0
    while index < len(bitvec):
        value = _read_bits(bitvec, index, bits_per_chunk) & 0xFFFF
        index += bits_per_chunk
        parts.append(f"{value:0{width}x} " if width > 0 else f"{value:x} ")
        if (index // 8) % 16 == 0:
            parts.append("\n")
    return "".join(parts)