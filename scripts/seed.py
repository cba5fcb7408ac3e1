#!/usr/bin/env python3
"""
Insert the three sample documents into sample_items.

Usage:
    MONGODB_URI='mongodb+srv://...' python scripts/seed.py
"""

import sys
from pathlib import Path

# Add parent directory to path to import opstools
sys.path.insert(0, str(Path(__file__).parent.parent))

from opstools import seed

if __name__ == "__main__":
    sys.exit(seed.run())
