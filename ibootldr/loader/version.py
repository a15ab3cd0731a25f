"""
Version string extraction.

The header carries a build string such as ``7429.0.0.0.1`` followed by
padding and other build metadata. Only the leading dotted component is
used: it selects where the base address field lives.
"""

import re
from dataclasses import dataclass
from typing import Union

from ibootldr.core.errors import InvalidVersionEncodingError, InvalidVersionFormatError
from ibootldr.core.image import RawImage
from ibootldr.utils.logging import get_logger

logger = get_logger(__name__)

VERSION_OFFSET = 0x286
VERSION_LENGTH = 0x7A

U64_MAX = 0xFFFFFFFFFFFFFFFF

_DIGITS = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class IBootVersion:
    """Decoded version window and its major number."""
    raw: str
    major: int

    @property
    def display(self) -> str:
        """Printable version token, cut at the first NUL."""
        return self.raw.split("\x00", 1)[0].strip()

    def __str__(self) -> str:
        return self.display


def read_version_string(image: Union[RawImage, bytes]) -> str:
    """
    Decode the version window as UTF-8.

    The text is returned untrimmed, padding included.

    Raises:
        TruncatedImageError: if the window runs past the end of the image
        InvalidVersionEncodingError: if the bytes are not valid UTF-8
    """
    image = RawImage.coerce(image)
    window = image.read(VERSION_OFFSET, VERSION_LENGTH, "version string")

    try:
        return window.decode("utf-8")
    except UnicodeDecodeError as e:
        raise InvalidVersionEncodingError(str(e)) from e


def parse_version_major(text: str) -> int:
    """
    Parse the leading dot-separated component as an unsigned integer.

    Anything after the first '.' is ignored. Signs, whitespace and
    non-ASCII digits are rejected, as are values that do not fit in 64 bits.

    Raises:
        InvalidVersionFormatError: if the component is not a plain integer
    """
    component = text.split(".", 1)[0]

    if not _DIGITS.fullmatch(component):
        raise InvalidVersionFormatError(component)

    major = int(component)
    if major > U64_MAX:
        raise InvalidVersionFormatError(component)

    return major


def read_version(image: Union[RawImage, bytes]) -> IBootVersion:
    """Read and parse the version window in one step."""
    raw = read_version_string(image)
    version = IBootVersion(raw=raw, major=parse_version_major(raw))
    logger.debug(f"Version {version.display!r} (major {version.major})")
    return version
