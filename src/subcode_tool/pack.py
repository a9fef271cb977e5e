"""Per-pack parity correction and classification."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .capture import PACK_SIZE
from .parity import P_CODE, Q_CODE, BlockCode, UncorrectableBlock

Q_BLOCK_SIZE = 4
MODE_GRAPHICS = 1


class PackCategory(Enum):
    ZERO = "zero"
    LINE_GRAPHICS = "line-graphics"
    CDG = "CD+G"
    CDEG = "CD+EG"
    OTHER_GRAPHICS = "other-graphics"
    OTHER = "other"

    def __str__(self) -> str:
        return self.value


_GRAPHICS_ITEMS = {
    0: PackCategory.LINE_GRAPHICS,
    1: PackCategory.CDG,
    2: PackCategory.CDEG,
}


@dataclass(frozen=True)
class PackCorrection:
    p_corrected: bool = False
    p_uncorrected: bool = False
    q_error: bool = False
    corrected_symbols: int = 0

    @property
    def clean(self) -> bool:
        return not (self.p_corrected or self.p_uncorrected or self.q_error)


def correct_pack(
    pack: bytearray, p_code: BlockCode = P_CODE, q_code: BlockCode = Q_CODE
) -> PackCorrection:
    """
    Check a 24-byte pack against P then Q.

    P errors are corrected in place when the code can resolve them; an
    uncorrectable pack is left exactly as it was. Q is only checked.
    """

    if len(pack) != PACK_SIZE:
        raise ValueError(f"pack must be {PACK_SIZE} bytes, got {len(pack)}")

    p_corrected = False
    p_uncorrected = False
    corrected_symbols = 0
    if not p_code.is_correct(pack):
        try:
            corrected_symbols = p_code.correct_errors(pack)
            p_corrected = True
        except UncorrectableBlock:
            p_uncorrected = True

    q_error = not q_code.is_correct(pack[:Q_BLOCK_SIZE])

    return PackCorrection(
        p_corrected=p_corrected,
        p_uncorrected=p_uncorrected,
        q_error=q_error,
        corrected_symbols=corrected_symbols,
    )


def classify_pack(pack: bytes, correction: PackCorrection) -> PackCategory:
    if correction.q_error:
        return PackCategory.OTHER
    mode = pack[0] >> 3
    if mode == 0:
        return PackCategory.ZERO
    if mode == MODE_GRAPHICS:
        return _GRAPHICS_ITEMS.get(pack[0] & 0b111, PackCategory.OTHER_GRAPHICS)
    return PackCategory.OTHER


def expected_q_parity(pack: bytes, q_code: BlockCode = Q_CODE) -> bytes:
    """Return the Q parity bytes 2..3 the pack's mode/instruction should carry."""

    return q_code.encode(bytes(pack[: q_code.data_size]))[q_code.data_size :]


__all__ = [
    "PackCategory",
    "PackCorrection",
    "classify_pack",
    "correct_pack",
    "expected_q_parity",
]
