"""Sector-by-sector decode of a subchannel capture into corrected packs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .audit import audit_boundaries, audit_tail
from .capture import LEADIN_SKIP_SECTORS, SECTOR_SPREAD, SubcodeCapture
from .deinterleave import deinterleave, split_packs
from .events import (
    P_CORRECTED,
    P_UNCORRECTED,
    Q_ERROR,
    RANGE_CLAMPED,
    DecodeEvent,
)
from .pack import PackCorrection, classify_pack, correct_pack, expected_q_parity
from .parity import P_CODE, Q_CODE, BlockCode
from .stats import PackStatistics
from .toc import parse_end_lba


@dataclass
class DecodeResult:
    packs: bytes
    statistics: PackStatistics
    events: List[DecodeEvent] = field(default_factory=list)
    program_start: int = 0
    program_end: int = 0
    leadin_skip: int = LEADIN_SKIP_SECTORS

    @property
    def oddity(self) -> bool:
        return any(event.oddity for event in self.events)

    @property
    def sectors_decoded(self) -> int:
        return max(0, self.program_end - self.program_start)


class SubcodeDecoder:
    """Drives deinterleave, parity correction and the boundary audit."""

    def __init__(
        self,
        capture: SubcodeCapture,
        *,
        end_lba: Optional[int] = None,
        leadin_skip: int = LEADIN_SKIP_SECTORS,
        p_code: BlockCode = P_CODE,
        q_code: BlockCode = Q_CODE,
    ) -> None:
        if leadin_skip < SECTOR_SPREAD:
            raise ValueError(
                f"lead-in skip must be at least {SECTOR_SPREAD} sectors, got {leadin_skip}"
            )
        self.capture = capture
        self.end_lba = end_lba
        self.leadin_skip = leadin_skip
        self.p_code = p_code
        self.q_code = q_code

    def program_range(self) -> tuple[int, int, List[DecodeEvent]]:
        """Return absolute (start, end) sectors plus any range notices."""

        count = self.capture.sector_count
        events: List[DecodeEvent] = []
        if self.end_lba is None:
            end = count
        else:
            end = self.leadin_skip + self.end_lba
            if end > count:
                events.append(
                    DecodeEvent(
                        code=RANGE_CLAMPED,
                        sector=end,
                        pack=None,
                        detail=f"lead-out beyond capture end {count}; clamped",
                        oddity=True,
                    )
                )
                end = count
        start = min(self.leadin_skip, count)
        return start, max(start, end), events

    def run(self) -> DecodeResult:
        start, end, events = self.program_range()
        stats = PackStatistics()
        out = bytearray()

        for relative in range(end - self.leadin_skip):
            sector = self.leadin_skip + relative
            sector_data = deinterleave(self.capture.window(sector))
            for pack_index, pack in enumerate(split_packs(sector_data)):
                correction = correct_pack(pack, self.p_code, self.q_code)
                stats.record(classify_pack(pack, correction), correction)
                events.extend(self._pack_events(sector, pack_index, pack, correction))
                out.extend(pack)

        events.extend(
            audit_boundaries(self.capture, start, end, self.p_code, self.q_code)
        )
        events.extend(audit_tail(self.capture))

        return DecodeResult(
            packs=bytes(out),
            statistics=stats,
            events=events,
            program_start=start,
            program_end=end,
            leadin_skip=self.leadin_skip,
        )

    def _pack_events(
        self,
        sector: int,
        pack_index: int,
        pack: bytearray,
        correction: PackCorrection,
    ) -> List[DecodeEvent]:
        events: List[DecodeEvent] = []
        if correction.p_corrected:
            events.append(
                DecodeEvent(
                    code=P_CORRECTED,
                    sector=sector,
                    pack=pack_index,
                    detail=f"{correction.corrected_symbols} symbols",
                )
            )
        if correction.p_uncorrected:
            events.append(
                DecodeEvent(
                    code=P_UNCORRECTED,
                    sector=sector,
                    pack=pack_index,
                    detail=f"pack={bytes(pack).hex()}",
                )
            )
        if correction.q_error:
            events.append(
                DecodeEvent(
                    code=Q_ERROR,
                    sector=sector,
                    pack=pack_index,
                    detail=(
                        f"q={bytes(pack[:4]).hex()} "
                        f"expected_parity={expected_q_parity(pack, self.q_code).hex()}"
                    ),
                )
            )
        return events


def decode_capture(
    data: bytes,
    toc: Optional[bytes] = None,
    *,
    leadin_skip: int = LEADIN_SKIP_SECTORS,
) -> DecodeResult:
    capture = SubcodeCapture.from_bytes(data)
    end_lba = parse_end_lba(toc) if toc is not None else None
    return SubcodeDecoder(capture, end_lba=end_lba, leadin_skip=leadin_skip).run()


__all__ = ["DecodeResult", "SubcodeDecoder", "decode_capture"]
