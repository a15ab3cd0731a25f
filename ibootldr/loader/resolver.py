"""
Base address resolution and layout derivation.

The base address is a little-endian u64 in the header. Its offset moved
between firmware generations, and the version major tells which
generation an image belongs to.
"""

from typing import Optional, Union

from ibootldr.core.image import RawImage
from ibootldr.core.layout import (
    ImageLayout,
    MemoryRegion,
    SectionSemantics,
    SegmentFlags,
    Symbol,
    SymbolType,
)
from ibootldr.loader.detector import detect_tag
from ibootldr.loader.version import IBootVersion, read_version
from ibootldr.utils.logging import get_logger

logger = get_logger(__name__)

BASE_ADDRESS_OFFSET_LEGACY = 0x318
BASE_ADDRESS_OFFSET_MODERN = 0x300
MODERN_VERSION_MAJOR = 6603

ARCHITECTURE = "aarch64"
ADDRESS_SIZE = 8
ENDIANNESS = "little"

REGION_NAME = "iBoot"
ENTRY_SYMBOL = "_start"

REGION_FLAGS = SegmentFlags(
    readable=True,
    writable=False,
    executable=True,
    contains_code=True,
    contains_data=True,
)


def select_base_address_offset(major: int) -> int:
    """Header offset of the base address field for a version major."""
    if major >= MODERN_VERSION_MAJOR:
        return BASE_ADDRESS_OFFSET_MODERN
    return BASE_ADDRESS_OFFSET_LEGACY


def build_layout(
    base_address: int,
    image_size: int,
    architecture: str = ARCHITECTURE,
    tag: Optional[str] = None,
    version: Optional[str] = None,
) -> ImageLayout:
    """
    Describe a raw image mapped whole at `base_address`.

    Produces the single read-only code region, the entry point and the
    `_start` function symbol, all at the base address.
    """
    region = MemoryRegion(
        name=REGION_NAME,
        start=base_address,
        length=image_size,
        backing_offset=0,
        backing_length=image_size,
        flags=REGION_FLAGS,
        semantics=SectionSemantics.READ_ONLY_CODE,
    )
    symbol = Symbol(name=ENTRY_SYMBOL, address=base_address, type=SymbolType.FUNCTION)

    return ImageLayout(
        base_address=base_address,
        region=region,
        entry_point=base_address,
        symbol=symbol,
        architecture=architecture,
        address_size=ADDRESS_SIZE,
        endianness=ENDIANNESS,
        tag=tag,
        version=version,
    )


class LayoutResolver:
    """
    Resolve the runtime layout of a detected iBoot image.

    The resolver holds no per-image state; one instance can be shared.

    Example:
        resolver = LayoutResolver()
        layout = resolver.resolve(RawImage.from_path("iBoot.bin"))
        print(hex(layout.base_address))

    Args:
        base_address_override: Use this base instead of the header field.
            The version window is not read in this mode.
        architecture: Architecture name handed to the host
    """

    def __init__(
        self,
        base_address_override: Optional[int] = None,
        architecture: str = ARCHITECTURE,
    ):
        self.base_address_override = base_address_override
        self.architecture = architecture

    def read_base_address(self, image: RawImage, version: IBootVersion) -> int:
        """
        Read the base address field for the image's generation.

        Raises:
            TruncatedImageError: if the field is past the end of the image
        """
        offset = select_base_address_offset(version.major)
        logger.debug(f"Base address field at 0x{offset:x} for major {version.major}")
        return image.read_u64_le(offset, "base address")

    def resolve(self, image: Union[RawImage, bytes]) -> ImageLayout:
        """
        Resolve the layout of an image.

        Args:
            image: A detected iBoot-family image

        Returns:
            ImageLayout describing the mapping

        Raises:
            TruncatedImageError: image too short for a header field
            InvalidVersionEncodingError: version window is not UTF-8
            InvalidVersionFormatError: version major is not an integer
        """
        image = RawImage.coerce(image)
        tag = detect_tag(image)
        tag_name = tag.value if tag else None

        if self.base_address_override is not None:
            base_address = self.base_address_override
            version_text = None
            logger.info(f"Using fixed base address 0x{base_address:x}")
        else:
            version = read_version(image)
            base_address = self.read_base_address(image, version)
            version_text = version.display
            logger.info(f"Base address at 0x{base_address:x}")

        return build_layout(
            base_address,
            len(image),
            architecture=self.architecture,
            tag=tag_name,
            version=version_text,
        )


def resolve(image: Union[RawImage, bytes]) -> ImageLayout:
    """Resolve an image with the default resolver."""
    return LayoutResolver().resolve(image)
