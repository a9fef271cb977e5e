"""Decode event records produced by the pipeline and the boundary audit."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

P_CORRECTED = "P_CORRECTED"
P_UNCORRECTED = "P_UNCORRECTED"
Q_ERROR = "Q_ERROR"
LEADIN_NONZERO = "LEADIN_NONZERO"
BOUNDARY_PACK = "BOUNDARY_PACK"
TAIL_NONZERO = "TAIL_NONZERO"
RANGE_CLAMPED = "RANGE_CLAMPED"


@dataclass(frozen=True)
class DecodeEvent:
    code: str
    sector: int
    pack: Optional[int]
    detail: str
    oddity: bool = False

    def as_dict(self) -> dict:
        return {
            "code": self.code,
            "sector": self.sector,
            "pack": self.pack,
            "detail": self.detail,
            "oddity": self.oddity,
        }


__all__ = [
    "DecodeEvent",
    "P_CORRECTED",
    "P_UNCORRECTED",
    "Q_ERROR",
    "LEADIN_NONZERO",
    "BOUNDARY_PACK",
    "TAIL_NONZERO",
    "RANGE_CLAMPED",
]
