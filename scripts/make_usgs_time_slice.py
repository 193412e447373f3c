#!/usr/bin/env python3
"""USGS real-time time-slice runner.

Usage:
    python scripts/make_usgs_time_slice.py <queryTime> <inPath> <outPath>
    python scripts/make_usgs_time_slice.py 20150415_12 ./realtime ./slices --nearest-min 15
    python scripts/make_usgs_time_slice.py 20150415 ./realtime ./slices --config scripts/user_config.py
"""

import sys
from pathlib import Path

# Add src to path
project_root = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(project_root / "src"))

from hydroslice.cli import main


if __name__ == "__main__":
    sys.exit(main())
