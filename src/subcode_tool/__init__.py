"""
Top-level package for R-W subchannel capture decoding.

This package collects the deinterleaver, P/Q parity correction, TOC range
lookup and boundary checks used to turn a raw CD subcode dump into a clean
stream of CD+G packs.
"""

from .audit import audit_boundaries, audit_sector, audit_tail
from .capture import (
    LEADIN_SKIP_SECTORS,
    PACK_SIZE,
    SECTOR_SIZE,
    SECTOR_SPREAD,
    SubcodeCapture,
)
from .deinterleave import DEINTERLEAVE_TABLE, deinterleave, source_offset, split_packs
from .events import DecodeEvent
from .pack import PackCategory, PackCorrection, classify_pack, correct_pack
from .parity import P_CODE, Q_CODE, BlockCode, UncorrectableBlock
from .pipeline import DecodeResult, SubcodeDecoder, decode_capture
from .stats import PackCounts, PackStatistics
from .toc import TableOfContents, TrackDescriptor, parse_end_lba

__all__ = [
    "__version__",
    "SubcodeCapture",
    "SECTOR_SIZE",
    "PACK_SIZE",
    "SECTOR_SPREAD",
    "LEADIN_SKIP_SECTORS",
    "DEINTERLEAVE_TABLE",
    "deinterleave",
    "source_offset",
    "split_packs",
    "BlockCode",
    "UncorrectableBlock",
    "P_CODE",
    "Q_CODE",
    "PackCategory",
    "PackCorrection",
    "correct_pack",
    "classify_pack",
    "TableOfContents",
    "TrackDescriptor",
    "parse_end_lba",
    "audit_sector",
    "audit_boundaries",
    "audit_tail",
    "DecodeEvent",
    "PackCounts",
    "PackStatistics",
    "DecodeResult",
    "SubcodeDecoder",
    "decode_capture",
]

__version__ = "0.0.1"
