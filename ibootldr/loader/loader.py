"""
Detect-then-resolve pipeline.
"""

from pathlib import Path
from typing import Optional, Union

from ibootldr.core.errors import IBootError, UnsupportedFormatError
from ibootldr.core.image import RawImage
from ibootldr.core.layout import ImageLayout
from ibootldr.loader.detector import TAG_OFFSET, FormatDetector
from ibootldr.loader.resolver import LayoutResolver
from ibootldr.loader.sink import LayoutSink, apply_layout
from ibootldr.utils.config import LoaderConfig
from ibootldr.utils.logging import get_logger

logger = get_logger(__name__)

ImageSource = Union[RawImage, bytes, bytearray, str, Path]


def _open(source: ImageSource) -> RawImage:
    if isinstance(source, (str, Path)):
        return RawImage.from_path(source)
    return RawImage.coerce(source)


def load_image(source: ImageSource, config: Optional[LoaderConfig] = None) -> ImageLayout:
    """
    Detect and resolve an iBoot image.

    Args:
        source: RawImage, raw bytes, or a path to the firmware file
        config: Loader options (defaults apply when omitted)

    Returns:
        ImageLayout for the image

    Raises:
        UnsupportedFormatError: no format tag found
        IBootError: any resolution failure
    """
    config = config or LoaderConfig()
    image = _open(source)

    detector = FormatDetector(assume_supported=config.assume_supported)
    if not detector.is_supported(image):
        raise UnsupportedFormatError(
            f"no iBoot format tag at 0x{TAG_OFFSET:x} ({len(image):#x} byte image)"
        )

    resolver = LayoutResolver(
        base_address_override=config.base_address_override,
        architecture=config.architecture,
    )
    layout = resolver.resolve(image)
    logger.info(f"Loading {layout.tag or 'image'} at 0x{layout.base_address:x}")
    return layout


def try_load(
    source: ImageSource,
    config: Optional[LoaderConfig] = None,
    sink: Optional[LayoutSink] = None,
) -> Optional[ImageLayout]:
    """
    Load an image the way a host view would: decline on failure.

    Errors are logged and None is returned. On success the layout is also
    written to `sink` when one is given.
    """
    try:
        layout = load_image(source, config)
    except UnsupportedFormatError as e:
        logger.debug(f"Declining image: {e}")
        return None
    except IBootError as e:
        logger.error(f"Error resolving iBoot layout: {e}")
        return None

    if sink is not None:
        apply_layout(layout, sink)
    return layout
