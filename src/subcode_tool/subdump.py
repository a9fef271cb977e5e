"""Command-line front end: raw subchannel capture in, corrected packs out."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Optional, Sequence

from .capture import LEADIN_SKIP_SECTORS, SubcodeCapture
from .pipeline import SubcodeDecoder
from .report import render_report, result_to_dict
from .toc import TableOfContents


def _load_end_lba(toc_path: Path | None) -> Optional[int]:
    if toc_path is None:
        print("No TOC supplied; decoding to the end of the capture")
        return None
    if not toc_path.exists():
        print(f"TOC {toc_path} not found; decoding to the end of the capture")
        return None
    toc = TableOfContents.from_file(toc_path)
    print(f"TOC: {len(toc.tracks) - 1} tracks, lead-out at LBA {toc.end_lba}")
    return toc.end_lba


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="subcode_tool",
        description="Deinterleave and correct R-W subchannel packs from a raw capture",
    )
    parser.add_argument("capture", type=Path, help="Raw 96-byte-per-sector subcode dump")
    parser.add_argument("--out", required=True, type=Path, help="Output pack stream")
    parser.add_argument("--toc", type=Path, help="Raw TOC descriptor for the disc")
    parser.add_argument(
        "--leadin-skip",
        type=int,
        default=LEADIN_SKIP_SECTORS,
        help="Sectors between capture start and program LBA 0",
    )
    parser.add_argument(
        "--stats-json",
        type=Path,
        help="Optional JSON path for statistics and events",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Also report packs fixed by the P code",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    try:
        capture = SubcodeCapture.from_file(args.capture)
        end_lba = _load_end_lba(args.toc)
        decoder = SubcodeDecoder(
            capture, end_lba=end_lba, leadin_skip=args.leadin_skip
        )
        out_handle = args.out.open("wb")
    except (OSError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    with out_handle:
        result = decoder.run()
        out_handle.write(result.packs)

    sys.stdout.write(render_report(result, verbose=args.verbose))
    if args.stats_json is not None:
        args.stats_json.write_text(json.dumps(result_to_dict(result), indent=2))
    return 0


__all__ = ["build_arg_parser", "main"]
