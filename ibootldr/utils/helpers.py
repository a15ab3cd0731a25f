"""
Common byte helpers for ibootldr.
"""

import struct


def p64(value: int) -> bytes:
    """Pack 64-bit value as little-endian bytes."""
    return struct.pack("<Q", value & 0xFFFFFFFFFFFFFFFF)


def u64(data: bytes) -> int:
    """
    Unpack exactly 8 little-endian bytes to an unsigned integer.

    Short input is rejected, not padded.
    """
    if len(data) != 8:
        raise ValueError(f"u64 needs 8 bytes, got {len(data)}")
    return struct.unpack("<Q", data)[0]


def hexdump(data: bytes, offset: int = 0, width: int = 16) -> str:
    """
    Generate hexdump of binary data.

    Args:
        data: Binary data to dump
        offset: Starting offset for display
        width: Bytes per line

    Returns:
        Formatted hexdump string
    """
    lines = []
    for i in range(0, len(data), width):
        chunk = data[i:i + width]
        hex_part = " ".join(f"{b:02x}" for b in chunk)
        ascii_part = "".join(
            chr(b) if 32 <= b < 127 else "." for b in chunk
        )
        lines.append(f"{offset + i:08x}  {hex_part:<{width * 3}}  |{ascii_part}|")
    return "\n".join(lines)
