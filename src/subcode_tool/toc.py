"""
Table-of-contents parsing.

The descriptor is the raw READ TOC response: a big-endian data length that
excludes itself, first/last track numbers, then one 8-byte descriptor per
track with the lead-out (track 0xAA) last. Only the lead-out address is
needed to bound the program area.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple

LEADOUT_TRACK = 0xAA
TOC_HEADER_SIZE = 4
TRACK_DESCRIPTOR_SIZE = 8


@dataclass(frozen=True)
class TrackDescriptor:
    adr_control: int
    track_number: int
    address: int

    @property
    def is_leadout(self) -> bool:
        return self.track_number == LEADOUT_TRACK


@dataclass(frozen=True)
class TableOfContents:
    first_track: int
    last_track: int
    tracks: Tuple[TrackDescriptor, ...]

    @property
    def leadout(self) -> TrackDescriptor:
        return self.tracks[-1]

    @property
    def end_lba(self) -> int:
        return self.leadout.address

    @classmethod
    def from_file(cls, path: Path | str) -> "TableOfContents":
        return cls.from_bytes(Path(path).read_bytes())

    @classmethod
    def from_bytes(cls, data: bytes) -> "TableOfContents":
        if len(data) < TOC_HEADER_SIZE:
            raise ValueError(f"TOC too short ({len(data)} bytes)")
        (length,) = struct.unpack(">H", data[0:2])
        if length != len(data) - 2:
            raise ValueError(
                f"TOC length field {length} does not match buffer size {len(data)} - 2"
            )
        body = length - 2
        if body <= 0 or body % TRACK_DESCRIPTOR_SIZE:
            raise ValueError(
                f"TOC body of {body} bytes is not a whole number of track descriptors"
            )
        track_count = body // TRACK_DESCRIPTOR_SIZE

        tracks = []
        for idx in range(track_count):
            start = TOC_HEADER_SIZE + idx * TRACK_DESCRIPTOR_SIZE
            _, adr_control, track_number, _, address = struct.unpack(
                ">BBBBI", data[start : start + TRACK_DESCRIPTOR_SIZE]
            )
            tracks.append(
                TrackDescriptor(
                    adr_control=adr_control,
                    track_number=track_number,
                    address=address,
                )
            )

        if not tracks[-1].is_leadout:
            raise ValueError(
                f"last TOC descriptor is track {tracks[-1].track_number:#04x}, "
                f"expected lead-out {LEADOUT_TRACK:#04x}"
            )
        return cls(first_track=data[2], last_track=data[3], tracks=tuple(tracks))


def parse_end_lba(data: bytes) -> int:
    """Return the lead-out address from a raw TOC descriptor."""

    return TableOfContents.from_bytes(data).end_lba


__all__ = [
    "LEADOUT_TRACK",
    "TableOfContents",
    "TrackDescriptor",
    "parse_end_lba",
]
