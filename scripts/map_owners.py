"""
Owner Mapping Script
====================

Runs the map-owners command from a source checkout, without installing
the package.

USAGE:
------
python scripts/map_owners.py data/12345.json --source volusia --index
"""

import sys
from pathlib import Path

# Project root on sys.path so "ownership" imports from the checkout
sys.path.insert(0, str(Path(__file__).parent.parent))

from ownership.cli import main


if __name__ == "__main__":
    sys.exit(main())
