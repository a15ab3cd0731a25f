"""
Layout description handed to the analysis host.

These are plain values: the host maps the region, records the entry point
and defines the symbol. Nothing here references the image buffer.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class SectionSemantics(Enum):
    """How the host should treat a section when rendering."""
    READ_ONLY_CODE = "read_only_code"


class SymbolType(Enum):
    """Kind of a synthesized symbol."""
    FUNCTION = "function"


@dataclass(frozen=True)
class SegmentFlags:
    """Permission and content flags for a mapped region."""
    readable: bool = True
    writable: bool = False
    executable: bool = True
    contains_code: bool = True
    contains_data: bool = True

    def to_dict(self) -> Dict[str, bool]:
        return {
            "readable": self.readable,
            "writable": self.writable,
            "executable": self.executable,
            "contains_code": self.contains_code,
            "contains_data": self.contains_data,
        }

    def __str__(self) -> str:
        return "".join([
            "r" if self.readable else "-",
            "w" if self.writable else "-",
            "x" if self.executable else "-",
        ])


@dataclass(frozen=True)
class MemoryRegion:
    """
    One contiguous mapping of the image.

    The backing range is the raw file, mapped 1:1 with no decompression or
    relocation, so `length == backing_length`.
    """
    name: str
    start: int
    length: int
    backing_offset: int
    backing_length: int
    flags: SegmentFlags = SegmentFlags()
    semantics: SectionSemantics = SectionSemantics.READ_ONLY_CODE

    @property
    def end(self) -> int:
        """Exclusive end address."""
        return self.start + self.length

    def contains(self, address: int) -> bool:
        return self.start <= address < self.end

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "start": self.start,
            "end": self.end,
            "length": self.length,
            "backing_offset": self.backing_offset,
            "backing_length": self.backing_length,
            "flags": self.flags.to_dict(),
            "semantics": self.semantics.value,
        }


@dataclass(frozen=True)
class Symbol:
    """A named location defined for the host."""
    name: str
    address: int
    type: SymbolType = SymbolType.FUNCTION

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "address": self.address, "type": self.type.value}

    def __str__(self) -> str:
        return f"{self.name}@0x{self.address:x}"


@dataclass(frozen=True)
class ImageLayout:
    """Complete result of resolving one image."""
    base_address: int
    region: MemoryRegion
    entry_point: int
    symbol: Symbol
    architecture: str = "aarch64"
    address_size: int = 8
    endianness: str = "little"
    tag: Optional[str] = None
    version: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "base_address": self.base_address,
            "entry_point": self.entry_point,
            "architecture": self.architecture,
            "address_size": self.address_size,
            "endianness": self.endianness,
            "tag": self.tag,
            "version": self.version,
            "region": self.region.to_dict(),
            "symbols": [self.symbol.to_dict()],
        }

    def summary(self) -> str:
        """Get layout summary."""
        lines = [
            "iBoot Layout",
            "=" * 40,
            f"Tag:          {self.tag or 'Unknown'}",
            f"Version:      {self.version or 'Unknown'}",
            f"Architecture: {self.architecture} ({self.address_size * 8}-bit, {self.endianness})",
            f"Base address: 0x{self.base_address:x}",
            f"Region:       [0x{self.region.start:x}, 0x{self.region.end:x}) {self.region.flags}",
            f"Entry point:  0x{self.entry_point:x}",
            f"Symbol:       {self.symbol}",
        ]
        return "\n".join(lines)
