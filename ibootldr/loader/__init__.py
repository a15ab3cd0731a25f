"""
iBoot-family firmware loader.

Identifies SecureROM, AVPBooter, iBoot, iBEC and iBSS images and derives
the layout an analysis host needs to map them.

Example:
    from ibootldr.loader import is_supported, resolve, RecordingSink, apply_layout

    data = open("iBoot.n71.RELEASE.bin", "rb").read()
    if is_supported(data):
        layout = resolve(data)
        sink = RecordingSink()
        apply_layout(layout, sink)
"""

from ibootldr.loader.detector import (
    TAG_OFFSET,
    FormatDetector,
    FormatTag,
    detect_tag,
    is_supported,
)
from ibootldr.loader.version import (
    VERSION_LENGTH,
    VERSION_OFFSET,
    IBootVersion,
    parse_version_major,
    read_version,
    read_version_string,
)
from ibootldr.loader.resolver import (
    BASE_ADDRESS_OFFSET_LEGACY,
    BASE_ADDRESS_OFFSET_MODERN,
    MODERN_VERSION_MAJOR,
    LayoutResolver,
    build_layout,
    resolve,
    select_base_address_offset,
)
from ibootldr.loader.sink import LayoutSink, RecordingSink, apply_layout
from ibootldr.loader.loader import load_image, try_load

__all__ = [
    # Detection
    "TAG_OFFSET",
    "FormatDetector",
    "FormatTag",
    "detect_tag",
    "is_supported",
    # Version
    "VERSION_LENGTH",
    "VERSION_OFFSET",
    "IBootVersion",
    "parse_version_major",
    "read_version",
    "read_version_string",
    # Layout
    "BASE_ADDRESS_OFFSET_LEGACY",
    "BASE_ADDRESS_OFFSET_MODERN",
    "MODERN_VERSION_MAJOR",
    "LayoutResolver",
    "build_layout",
    "resolve",
    "select_base_address_offset",
    # Host boundary
    "LayoutSink",
    "RecordingSink",
    "apply_layout",
    "load_image",
    "try_load",
]
