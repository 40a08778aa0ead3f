#!/usr/bin/env python3
"""Runs the WebPilot command line from a source checkout."""

from __future__ import annotations

import importlib
import sys
from pathlib import Path


SRC_PATH = Path(__file__).resolve().parent / "src"
if SRC_PATH.is_dir():  # uninstalled checkout
    sys.path.insert(0, str(SRC_PATH))


def main() -> None:
    importlib.import_module("webpilot.cli").main()


if __name__ == "__main__":
    main()
