"""
P and Q parity codes for R-W subchannel packs.

Both codes are Reed-Solomon over GF(64) (primitive polynomial x^6 + x + 1,
generator alpha = 2, roots starting at alpha^0). The field arithmetic is
delegated to ``reedsolo``; this module only fixes the code parameters and
exposes the three operations the pack corrector needs.
"""

from __future__ import annotations

from reedsolo import ReedSolomonError, RSCodec

GF64_EXP = 6
GF64_PRIM = 0x43
GF64_GENERATOR = 2
GF64_FCR = 0


class UncorrectableBlock(ValueError):
    """Raised when a block holds more symbol errors than its code can fix."""


class BlockCode:
    def __init__(self, name: str, block_size: int, data_size: int):
        if not 0 < data_size < block_size:
            raise ValueError("data_size must be positive and smaller than block_size")
        self.name = name
        self.block_size = block_size
        self.data_size = data_size
        self._codec = RSCodec(
            nsym=block_size - data_size,
            nsize=block_size,
            fcr=GF64_FCR,
            prim=GF64_PRIM,
            generator=GF64_GENERATOR,
            c_exp=GF64_EXP,
        )

    def __repr__(self) -> str:
        return f"BlockCode({self.name!r}, n={self.block_size}, k={self.data_size})"

    @property
    def parity_size(self) -> int:
        return self.block_size - self.data_size

    @property
    def max_errors(self) -> int:
        return self.parity_size // 2

    def _require_size(self, block: bytes, size: int, what: str) -> None:
        if len(block) != size:
            raise ValueError(
                f"{self.name} {what} must be {size} symbols, got {len(block)}"
            )

    def is_correct(self, block: bytes) -> bool:
        self._require_size(block, self.block_size, "block")
        return all(self._codec.check(bytearray(block)))

    def correct_errors(self, block: bytearray) -> int:
        """
        Correct ``block`` in place and return the number of fixed symbols.

        The block is left untouched when the errors cannot be resolved.
        """

        self._require_size(block, self.block_size, "block")
        try:
            _, corrected, errata = self._codec.decode(bytearray(block))
        except ReedSolomonError as exc:
            raise UncorrectableBlock(f"{self.name}: {exc}") from exc
        block[:] = corrected
        return len(errata)

    def encode(self, data: bytes) -> bytes:
        self._require_size(data, self.data_size, "data")
        return bytes(self._codec.encode(bytearray(data)))


P_CODE = BlockCode("P", block_size=24, data_size=20)
Q_CODE = BlockCode("Q", block_size=4, data_size=2)


__all__ = [
    "BlockCode",
    "UncorrectableBlock",
    "P_CODE",
    "Q_CODE",
    "GF64_EXP",
    "GF64_PRIM",
    "GF64_GENERATOR",
]
