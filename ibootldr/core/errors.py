"""
Errors raised while identifying and laying out an iBoot image.

Every failure is recoverable: callers either handle it or decline to load
the image. Nothing here ever falls back to a default address.
"""

from typing import Optional


class IBootError(ValueError):
    """Base class for all loader failures."""


class UnsupportedFormatError(IBootError):
    """No known format tag was found at the header tag offset."""


class TruncatedImageError(IBootError):
    """The image ends before a required header field."""

    def __init__(self, offset: int, length: int, available: int, field: Optional[str] = None):
        self.offset = offset
        self.length = length
        self.available = available
        self.field = field
        what = field or "field"
        super().__init__(
            f"image truncated: {what} needs {length} bytes at 0x{offset:x}, "
            f"only {max(available, 0)} available"
        )


class InvalidVersionEncodingError(IBootError):
    """The version window is not valid UTF-8."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"version string is not valid UTF-8: {reason}")


class InvalidVersionFormatError(IBootError):
    """The leading version component is not a non-negative integer."""

    def __init__(self, component: str):
        self.component = component
        super().__init__(f"cannot parse version major from {component!r}")
