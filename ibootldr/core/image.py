"""
Read-only view over a firmware file's bytes.
"""

import hashlib
from pathlib import Path
from typing import Optional, Union

from ibootldr.core.errors import TruncatedImageError
from ibootldr.utils.helpers import u64
from ibootldr.utils.logging import get_logger

logger = get_logger(__name__)


class RawImage:
    """
    Immutable byte buffer for one firmware image.

    All reads are bounds checked; a read past the end raises
    TruncatedImageError rather than returning short or zero-filled data.

    Example:
        image = RawImage.from_path("iBoot.n71.RELEASE.bin")
        tag = image.read(0x200, 5)
    """

    def __init__(self, data: Union[bytes, bytearray, memoryview]):
        self._data = bytes(data)

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "RawImage":
        """
        Load an image from disk.

        Args:
            path: Path to firmware file

        Returns:
            RawImage holding the full file contents
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Firmware not found: {path}")

        data = path.read_bytes()
        logger.debug(f"Read {len(data):#x} bytes from {path}")
        return cls(data)

    @classmethod
    def coerce(cls, image: Union["RawImage", bytes, bytearray, memoryview]) -> "RawImage":
        """Wrap raw bytes, passing existing RawImage instances through."""
        if isinstance(image, RawImage):
            return image
        return cls(image)

    @property
    def data(self) -> bytes:
        return self._data

    @property
    def sha256(self) -> str:
        return hashlib.sha256(self._data).hexdigest()

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RawImage):
            return NotImplemented
        return self._data == other._data

    def __hash__(self) -> int:
        return hash(self._data)

    def __repr__(self) -> str:
        return f"RawImage(size={len(self._data):#x})"

    def has_range(self, offset: int, length: int) -> bool:
        """Check whether [offset, offset + length) lies inside the image."""
        return offset >= 0 and length >= 0 and offset + length <= len(self._data)

    def read(self, offset: int, length: int, field: Optional[str] = None) -> bytes:
        """
        Read exactly `length` bytes at `offset`.

        Args:
            offset: File offset
            length: Number of bytes
            field: Name of the header field, used in the error message

        Returns:
            The requested bytes

        Raises:
            TruncatedImageError: if the image is too short
        """
        if not self.has_range(offset, length):
            raise TruncatedImageError(offset, length, len(self._data) - offset, field)
        return self._data[offset:offset + length]

    def read_u64_le(self, offset: int, field: Optional[str] = None) -> int:
        """Read an unsigned 64-bit little-endian value."""
        return u64(self.read(offset, 8, field))
