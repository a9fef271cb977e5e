"""CLI entrypoint for subcode_tool."""

from __future__ import annotations

import sys

from .subdump import main


if __name__ == "__main__":
    sys.exit(main())
