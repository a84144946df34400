"""
run_collage_layout.py: CLI Entry Point

Runs the collage layout command line without installing the package by
forwarding to `src/collage_layout/cli.py`.

Usage:
    python run_collage_layout.py rects --layout layout.json --size 1200x800 --panels 3

For help on available commands, run:
    python run_collage_layout.py --help
"""
import sys
# Source code in src/ subdirectory
from pathlib import Path
sys.path.insert(0, str(Path(__file__).resolve().parent / "src"))

import collage_layout.cli as cl_cli

if __name__ == "__main__":
    sys.exit(cl_cli.main())
