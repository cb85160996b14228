#!/usr/bin/env python3
"""
mcaread - Inspect Minecraft region files.

Usage:
    python3 main.py info r.0.0.mca                  # List stored chunks
    python3 main.py block r.0.0.mca 2 3 5 64 9      # Block at x=5 y=64 z=9 of chunk (2, 3)
    python3 main.py biome r.0.0.mca 2 3 64          # Biome at y=64 of chunk (2, 3)
    python3 main.py heightmap r.0.0.mca 2 3         # Surface heights of chunk (2, 3)
    python3 main.py --help                          # Show help
"""

import sys
from pathlib import Path

# Add src to path so we can import without installing
sys.path.insert(0, str(Path(__file__).parent / "src"))


if __name__ == "__main__":
    from mcaread.cli import app
    app()
