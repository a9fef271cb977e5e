"""Text rendering for decode events and pack statistics."""

from __future__ import annotations

from typing import List

from .capture import FRAMES_PER_SECOND
from .events import P_CORRECTED, DecodeEvent
from .pipeline import DecodeResult
from .stats import PackStatistics


def format_msf(relative_sector: int) -> str:
    """Format a program-relative sector as ``MM:SS.FF`` (frames 0-74)."""

    sign = "-" if relative_sector < 0 else ""
    value = abs(relative_sector)
    seconds, frames = divmod(value, FRAMES_PER_SECOND)
    minutes, seconds = divmod(seconds, 60)
    return f"{sign}{minutes:02d}:{seconds:02d}.{frames:02d}"


def format_event(event: DecodeEvent, leadin_skip: int) -> str:
    stamp = format_msf(event.sector - leadin_skip)
    where = f"sector {event.sector}"
    if event.pack is not None:
        where += f" pack {event.pack}"
    return f"{stamp} {where}: {event.code} {event.detail}"


def format_statistics(stats: PackStatistics) -> List[str]:
    width = max(len(label) for label, _ in stats.rows())
    lines = [
        f"{'category':<{width}} {'total':>9} {'P-fixed':>9} {'P-bad':>9} {'Q-err':>9}"
    ]
    for label, counts in stats.rows():
        lines.append(
            f"{label:<{width}} {counts.total:>9} {counts.p_corrected:>9} "
            f"{counts.p_uncorrected:>9} {counts.q_error:>9}"
        )
    return lines


def summarize_result(result: DecodeResult) -> str:
    verdict = "oddity observed" if result.oddity else "OK"
    return f"Verdict: {verdict}"


def render_report(result: DecodeResult, *, verbose: bool = False) -> str:
    lines: List[str] = []
    for event in result.events:
        if event.oddity or verbose or event.code != P_CORRECTED:
            lines.append(format_event(event, result.leadin_skip))
    lines.append(
        f"Program area: sectors {result.program_start}-{result.program_end} "
        f"({result.sectors_decoded} decoded)"
    )
    lines.extend(format_statistics(result.statistics))
    lines.append(summarize_result(result))
    return "\n".join(lines) + "\n"


def result_to_dict(result: DecodeResult) -> dict:
    return {
        "program_start": result.program_start,
        "program_end": result.program_end,
        "leadin_skip": result.leadin_skip,
        "statistics": result.statistics.as_dict(),
        "events": [event.as_dict() for event in result.events],
        "oddity": result.oddity,
    }


__all__ = [
    "format_event",
    "format_msf",
    "format_statistics",
    "render_report",
    "result_to_dict",
    "summarize_result",
]
