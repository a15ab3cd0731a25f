"""
Output boundary towards an analysis host.

A host integration implements LayoutSink on top of its own object model
(segments, sections, symbols). The loader only ever talks to this
interface.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional

from ibootldr.core.layout import ImageLayout, MemoryRegion, Symbol
from ibootldr.utils.logging import get_logger

logger = get_logger(__name__)


class LayoutSink(ABC):
    """Receiver for the facts describing a loaded image."""

    @abstractmethod
    def set_architecture(self, name: str, address_size: int, endianness: str) -> None:
        """Set the default architecture of the view."""

    @abstractmethod
    def define_region(self, region: MemoryRegion) -> None:
        """Map a region of the image."""

    @abstractmethod
    def define_entry_point(self, address: int) -> None:
        """Register an entry point."""

    @abstractmethod
    def define_symbol(self, symbol: Symbol) -> None:
        """Define an auto symbol."""


@dataclass
class RecordingSink(LayoutSink):
    """Sink that keeps everything it is given. Used by the CLI and tests."""
    architecture: Optional[str] = None
    address_size: Optional[int] = None
    endianness: Optional[str] = None
    regions: List[MemoryRegion] = field(default_factory=list)
    entry_points: List[int] = field(default_factory=list)
    symbols: List[Symbol] = field(default_factory=list)

    def set_architecture(self, name: str, address_size: int, endianness: str) -> None:
        self.architecture = name
        self.address_size = address_size
        self.endianness = endianness

    def define_region(self, region: MemoryRegion) -> None:
        self.regions.append(region)

    def define_entry_point(self, address: int) -> None:
        self.entry_points.append(address)

    def define_symbol(self, symbol: Symbol) -> None:
        self.symbols.append(symbol)

    def symbol_at(self, address: int) -> Optional[Symbol]:
        for symbol in self.symbols:
            if symbol.address == address:
                return symbol
        return None


def apply_layout(layout: ImageLayout, sink: LayoutSink) -> None:
    """
    Write a resolved layout into a host sink.

    Order: architecture, region, entry point, symbol.
    """
    sink.set_architecture(layout.architecture, layout.address_size, layout.endianness)
    sink.define_region(layout.region)
    sink.define_entry_point(layout.entry_point)
    sink.define_symbol(layout.symbol)
    logger.debug(
        f"Applied {layout.region.name} region "
        f"[0x{layout.region.start:x}, 0x{layout.region.end:x}) to {type(sink).__name__}"
    )
