"""
Lead-in / lead-out sanity checks.

Sectors outside the program area should carry no R-W payload. Anything
found there is reported as an oddity; it never stops the decode and is
never written to the output stream.
"""

from __future__ import annotations

from itertools import chain
from typing import List

from .capture import RW_MASK, SECTOR_SPREAD, SubcodeCapture
from .deinterleave import deinterleave, split_packs
from .events import BOUNDARY_PACK, LEADIN_NONZERO, TAIL_NONZERO, DecodeEvent
from .pack import correct_pack
from .parity import P_CODE, Q_CODE, BlockCode


def _nonzero_offsets(data: bytes, mask: int = 0xFF) -> List[int]:
    return [i for i, b in enumerate(data) if b & mask]


def audit_sector(
    capture: SubcodeCapture,
    index: int,
    p_code: BlockCode = P_CODE,
    q_code: BlockCode = Q_CODE,
) -> List[DecodeEvent]:
    if index < SECTOR_SPREAD:
        # not enough lookback to deinterleave; the raw bytes must be blank
        raw = capture.sector(index)
        offsets = _nonzero_offsets(raw)
        if not offsets:
            return []
        return [
            DecodeEvent(
                code=LEADIN_NONZERO,
                sector=index,
                pack=None,
                detail=f"{len(offsets)} non-zero raw bytes, first at {offsets[0]}",
                oddity=True,
            )
        ]

    events: List[DecodeEvent] = []
    for pack_index, pack in enumerate(split_packs(deinterleave(capture.window(index)))):
        correction = correct_pack(pack, p_code, q_code)
        problems = []
        if pack[0]:
            problems.append(f"mode={pack[0]:02x}")
        if correction.q_error:
            problems.append(f"q_error q={bytes(pack[:4]).hex()}")
        if correction.p_uncorrected:
            problems.append("p_uncorrected")
        if problems:
            events.append(
                DecodeEvent(
                    code=BOUNDARY_PACK,
                    sector=index,
                    pack=pack_index,
                    detail=" ".join(problems),
                    oddity=True,
                )
            )
    return events


def audit_boundaries(
    capture: SubcodeCapture,
    program_start: int,
    program_end: int,
    p_code: BlockCode = P_CODE,
    q_code: BlockCode = Q_CODE,
) -> List[DecodeEvent]:
    """Audit every sector before ``program_start`` or at/after ``program_end``."""

    count = capture.sector_count
    leadin = range(0, min(program_start, count))
    leadout = range(max(program_end, program_start), count)
    events: List[DecodeEvent] = []
    for index in chain(leadin, leadout):
        events.extend(audit_sector(capture, index, p_code, q_code))
    return events


def audit_tail(capture: SubcodeCapture) -> List[DecodeEvent]:
    """Flag R-W content in the last ``SECTOR_SPREAD`` sectors of the capture."""

    events: List[DecodeEvent] = []
    count = capture.sector_count
    for index in range(max(0, count - SECTOR_SPREAD), count):
        offsets = _nonzero_offsets(capture.sector(index), RW_MASK)
        if offsets:
            events.append(
                DecodeEvent(
                    code=TAIL_NONZERO,
                    sector=index,
                    pack=None,
                    detail=f"{len(offsets)} non-zero R-W bytes, first at {offsets[0]}",
                    oddity=True,
                )
            )
    return events


__all__ = ["audit_boundaries", "audit_sector", "audit_tail"]
