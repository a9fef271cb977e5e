from __future__ import annotations

import importlib.util
import struct
import sys
from pathlib import Path

import pytest


def repo_src_path() -> Path:
    """Return the repository's ``src`` directory."""

    return Path(__file__).resolve().parents[1] / "src"


def _ensure_repo_on_path() -> None:
    if importlib.util.find_spec("subcode_tool") is None:
        sys.path.insert(0, str(repo_src_path()))


_ensure_repo_on_path()

from subcode_tool.capture import PACK_SIZE, SECTOR_SIZE, SECTOR_SPREAD  # noqa: E402
from subcode_tool.deinterleave import DEINTERLEAVE_TABLE  # noqa: E402
from subcode_tool.parity import P_CODE, Q_CODE  # noqa: E402


def make_pack(mode: int, instruction: int = 0, data: bytes = bytes(16)) -> bytes:
    """Build a pack with valid Q and P parity."""

    q_block = Q_CODE.encode(bytes([mode, instruction]))
    return P_CODE.encode(q_block + bytes(data))


def place_pack(raw: bytearray, sector: int, pack_index: int, pack: bytes) -> None:
    """Write ``pack`` into ``raw`` where the deinterleaver will find it."""

    base = (sector - SECTOR_SPREAD) * SECTOR_SIZE
    for column, value in enumerate(pack):
        raw[base + DEINTERLEAVE_TABLE[pack_index * PACK_SIZE + column]] = value


def raw_offset(sector: int, pack_index: int, column: int) -> int:
    base = (sector - SECTOR_SPREAD) * SECTOR_SIZE
    return base + DEINTERLEAVE_TABLE[pack_index * PACK_SIZE + column]


def build_toc(*tracks: tuple[int, int]) -> bytes:
    """Assemble a raw TOC from (track_number, address) pairs."""

    body = bytearray([1, max(1, len(tracks) - 1)])
    for track_number, address in tracks:
        body += struct.pack(">BBBBI", 0, 0x14, track_number, 0, address)
    return struct.pack(">H", len(body)) + bytes(body)


@pytest.fixture
def cdg_pack() -> bytes:
    return make_pack(0x09, 0x01, bytes(range(1, 17)))
