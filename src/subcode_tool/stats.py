"""Per-category pack counters."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict, List, Tuple

from .pack import PackCategory, PackCorrection

ALL_LABEL = "All"


@dataclass
class PackCounts:
    total: int = 0
    p_corrected: int = 0
    p_uncorrected: int = 0
    q_error: int = 0

    def add(self, correction: PackCorrection) -> None:
        self.total += 1
        if correction.p_corrected:
            self.p_corrected += 1
        if correction.p_uncorrected:
            self.p_uncorrected += 1
        if correction.q_error:
            self.q_error += 1


class PackStatistics:
    """Counters for every pack category plus the ``All`` aggregate."""

    def __init__(self) -> None:
        self._counts: Dict[PackCategory, PackCounts] = {
            category: PackCounts() for category in PackCategory
        }
        self.all = PackCounts()

    def record(self, category: PackCategory, correction: PackCorrection) -> None:
        self._counts[category].add(correction)
        self.all.add(correction)

    def __getitem__(self, category: PackCategory) -> PackCounts:
        return self._counts[category]

    def rows(self) -> List[Tuple[str, PackCounts]]:
        rows = [(category.value, self._counts[category]) for category in PackCategory]
        rows.append((ALL_LABEL, self.all))
        return rows

    def as_dict(self) -> dict:
        return {label: asdict(counts) for label, counts in self.rows()}


__all__ = ["ALL_LABEL", "PackCounts", "PackStatistics"]
