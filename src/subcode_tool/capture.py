"""
Raw R-W subchannel capture container.

A capture is a byte-for-byte dump of the 96-byte subcode area of every
sector read off a disc. Sectors are addressed from 0 at the start of the
dump; the decoder works on 3-sector windows because the interleave spreads
a pack across the target sector and the two sectors before it.
"""

from __future__ import annotations

from pathlib import Path

SECTOR_SIZE = 96
PACK_SIZE = 24
PACKS_PER_SECTOR = SECTOR_SIZE // PACK_SIZE
SECTOR_SPREAD = 2  # sectors of lookback needed by the deinterleaver
FRAMES_PER_SECOND = 75
LEADIN_SKIP_SECTORS = (10 * 60 + 2) * FRAMES_PER_SECOND
RW_MASK = 0x3F  # drop the P/Q channel bits


class SubcodeCapture:
    def __init__(self, raw: bytes):
        if len(raw) % SECTOR_SIZE:
            raise ValueError(
                f"capture length {len(raw)} is not a multiple of {SECTOR_SIZE} bytes"
            )
        self._raw = bytes(raw)

    @classmethod
    def from_file(cls, path: Path | str) -> "SubcodeCapture":
        data = Path(path).read_bytes()
        return cls.from_bytes(data)

    @classmethod
    def from_bytes(cls, data: bytes) -> "SubcodeCapture":
        return cls(data)

    @property
    def sector_count(self) -> int:
        return len(self._raw) // SECTOR_SIZE

    def __len__(self) -> int:
        return len(self._raw)

    def sector(self, index: int) -> bytes:
        if index < 0 or index >= self.sector_count:
            raise IndexError(f"sector {index} outside capture of {self.sector_count}")
        start = index * SECTOR_SIZE
        return self._raw[start : start + SECTOR_SIZE]

    def window(self, index: int) -> bytes:
        """
        Return the deinterleave window ending at ``index``.

        The window holds sectors ``index - SECTOR_SPREAD`` through ``index``
        inclusive, so the first sector with a full window is
        ``SECTOR_SPREAD``.
        """

        if index < SECTOR_SPREAD or index >= self.sector_count:
            raise IndexError(f"no full deinterleave window for sector {index}")
        start = (index - SECTOR_SPREAD) * SECTOR_SIZE
        return self._raw[start : (index + 1) * SECTOR_SIZE]


__all__ = [
    "SubcodeCapture",
    "SECTOR_SIZE",
    "PACK_SIZE",
    "PACKS_PER_SECTOR",
    "SECTOR_SPREAD",
    "FRAMES_PER_SECOND",
    "LEADIN_SKIP_SECTORS",
    "RW_MASK",
]
