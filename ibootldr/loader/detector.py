"""
Signature check for iBoot-family images.

Every stage of the family stores a product tag at a fixed header offset,
so a byte compare against the known tags is enough to claim an image.
"""

from enum import Enum
from typing import Optional, Union

from ibootldr.core.image import RawImage
from ibootldr.utils.logging import get_logger

logger = get_logger(__name__)

TAG_OFFSET = 0x200


class FormatTag(Enum):
    """Known product tags, in check order."""
    SECUREROM = "SecureROM"
    AVPBOOTER = "AVPBooter"
    IBOOT = "iBoot"
    IBEC = "iBEC"
    IBSS = "iBSS"

    @property
    def magic(self) -> bytes:
        return self.value.encode("ascii")


ImageLike = Union[RawImage, bytes, bytearray, memoryview]


def detect_tag(image: ImageLike) -> Optional[FormatTag]:
    """
    Find the product tag at the tag offset.

    Args:
        image: Image or raw bytes of any length

    Returns:
        The first matching FormatTag, or None
    """
    image = RawImage.coerce(image)

    for tag in FormatTag:
        magic = tag.magic
        if not image.has_range(TAG_OFFSET, len(magic)):
            continue
        if image.read(TAG_OFFSET, len(magic)) == magic:
            return tag

    return None


def is_supported(image: ImageLike) -> bool:
    """Check whether the bytes are an iBoot-family image."""
    return detect_tag(image) is not None


class FormatDetector:
    """
    Detector used by the loader pipeline.

    Args:
        assume_supported: Claim every image without probing. Intended for
            synthetic or stripped dumps only.
    """

    def __init__(self, assume_supported: bool = False):
        self.assume_supported = assume_supported

    def detect(self, image: ImageLike) -> Optional[FormatTag]:
        tag = detect_tag(image)
        if tag is not None:
            logger.debug(f"Found {tag.value} tag at 0x{TAG_OFFSET:x}")
        return tag

    def is_supported(self, image: ImageLike) -> bool:
        if self.assume_supported:
            return True
        return self.detect(image) is not None
