#!/usr/bin/env python
"""Replace customers, orders and products with CSV data.

Usage:
    uv run python scripts/import_data.py --data-dir ./csv_data --confirm
    uv run python scripts/import_data.py --dry-run
"""

import sys

from salesgraph.features.importer.cli import main

if __name__ == "__main__":
    sys.exit(main())
