"""Core modules for image access, layout values, and errors."""

from ibootldr.core.errors import (
    IBootError,
    UnsupportedFormatError,
    TruncatedImageError,
    InvalidVersionEncodingError,
    InvalidVersionFormatError,
)
from ibootldr.core.image import RawImage
from ibootldr.core.layout import (
    ImageLayout,
    MemoryRegion,
    SectionSemantics,
    SegmentFlags,
    Symbol,
    SymbolType,
)

__all__ = [
    "IBootError",
    "UnsupportedFormatError",
    "TruncatedImageError",
    "InvalidVersionEncodingError",
    "InvalidVersionFormatError",
    "RawImage",
    "ImageLayout",
    "MemoryRegion",
    "SectionSemantics",
    "SegmentFlags",
    "Symbol",
    "SymbolType",
]
