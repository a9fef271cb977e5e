"""
R-W subchannel deinterleaver.

Each symbol of a pack is written to disc with a column-dependent delay of
0-7 packs, and three column pairs are transmitted swapped. Undoing that for
one sector needs the target sector plus two sectors of lookback. The table
below matches the karaoke-dx/cdgparse offsets
(0, 66, 125, 191, 100, 50, 150, 175, 8, 33, ...).
"""

from __future__ import annotations

from typing import List, Tuple

from .capture import PACK_SIZE, PACKS_PER_SECTOR, RW_MASK, SECTOR_SIZE, SECTOR_SPREAD

WINDOW_SIZE = (SECTOR_SPREAD + 1) * SECTOR_SIZE
COLUMN_SWAPS = {1: 18, 18: 1, 2: 5, 5: 2, 3: 23, 23: 3}


def source_column(column: int) -> int:
    return COLUMN_SWAPS.get(column, column)


def source_offset(index: int) -> int:
    """Map an output byte index (0-95) to its offset in the 3-sector window."""

    if index < 0 or index >= SECTOR_SIZE:
        raise ValueError(f"output index {index} outside 0..{SECTOR_SIZE - 1}")
    pack, column = divmod(index, PACK_SIZE)
    src = source_column(column)
    lookahead = src % 8
    return (pack + lookahead) * PACK_SIZE + src


DEINTERLEAVE_TABLE: Tuple[int, ...] = tuple(
    source_offset(i) for i in range(SECTOR_SIZE)
)


def deinterleave(window: bytes) -> bytes:
    if len(window) != WINDOW_SIZE:
        raise ValueError(
            f"deinterleave window must be {WINDOW_SIZE} bytes, got {len(window)}"
        )
    return bytes(window[offset] & RW_MASK for offset in DEINTERLEAVE_TABLE)


def split_packs(sector_data: bytes) -> List[bytearray]:
    if len(sector_data) != SECTOR_SIZE:
        raise ValueError(f"sector data must be {SECTOR_SIZE} bytes")
    return [
        bytearray(sector_data[i * PACK_SIZE : (i + 1) * PACK_SIZE])
        for i in range(PACKS_PER_SECTOR)
    ]


__all__ = [
    "COLUMN_SWAPS",
    "DEINTERLEAVE_TABLE",
    "WINDOW_SIZE",
    "deinterleave",
    "source_column",
    "source_offset",
    "split_packs",
]
