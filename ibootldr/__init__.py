"""
ibootldr - iBoot Firmware Loader

Identifies iBoot-family bootloader images (SecureROM, AVPBooter, iBoot,
iBEC, iBSS) and reconstructs what a binary-analysis host needs to map
them: version, base address, the executable region, entry point and the
initial `_start` symbol.
"""

__version__ = "1.0.0"
__author__ = "ibootldr Team"

from ibootldr.core.errors import (
    IBootError,
    UnsupportedFormatError,
    TruncatedImageError,
    InvalidVersionEncodingError,
    InvalidVersionFormatError,
)
from ibootldr.core.image import RawImage
from ibootldr.core.layout import ImageLayout, MemoryRegion, Symbol
from ibootldr.loader import (
    FormatDetector,
    FormatTag,
    LayoutResolver,
    LayoutSink,
    RecordingSink,
    apply_layout,
    is_supported,
    load_image,
    resolve,
    try_load,
)

__all__ = [
    # Errors
    "IBootError",
    "UnsupportedFormatError",
    "TruncatedImageError",
    "InvalidVersionEncodingError",
    "InvalidVersionFormatError",
    # Core
    "RawImage",
    "ImageLayout",
    "MemoryRegion",
    "Symbol",
    # Loader
    "FormatDetector",
    "FormatTag",
    "LayoutResolver",
    "LayoutSink",
    "RecordingSink",
    "apply_layout",
    "is_supported",
    "load_image",
    "resolve",
    "try_load",
    # Version
    "__version__",
]
