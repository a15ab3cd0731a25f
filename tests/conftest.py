"""Shared fixtures for building synthetic iBoot images."""

import pytest

from ibootldr.utils.helpers import p64


def build_image(
    size: int = 0x2000,
    tag: bytes = b"iBoot",
    version: bytes = b"7429.0.0.0.1",
    base_offset: int = 0x300,
    base_address: int = 0x18001C000,
) -> bytes:
    """
    Build a zero-filled image with a tag, version window and base field.

    Pass None for any field to leave it out.
    """
    data = bytearray(size)

    if tag is not None:
        data[0x200:0x200 + len(tag)] = tag

    if version is not None:
        window = version[:0x7A].ljust(0x7A, b"\x00")
        data[0x286:0x286 + 0x7A] = window

    if base_address is not None and base_offset is not None:
        data[base_offset:base_offset + 8] = p64(base_address)

    return bytes(data[:size])


@pytest.fixture
def make_image():
    """Factory fixture for synthetic images."""
    return build_image


@pytest.fixture
def iboot_image():
    """The 0x2000-byte iBoot 7429 image with base 0x18001c000."""
    return build_image()


@pytest.fixture
def iboot_file(tmp_path, iboot_image):
    """The standard image written to disk."""
    path = tmp_path / "iBoot.bin"
    path.write_bytes(iboot_image)
    return path
