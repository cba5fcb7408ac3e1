#!/usr/bin/env python3
"""
MongoDB healthcheck. Exits 0 only if the server answers a ping.

Usage:
    MONGODB_URI='mongodb+srv://...' python scripts/healthcheck.py
"""

import sys
from pathlib import Path

# Add parent directory to path to import opstools
sys.path.insert(0, str(Path(__file__).parent.parent))

from opstools import healthcheck

if __name__ == "__main__":
    sys.exit(healthcheck.run())
