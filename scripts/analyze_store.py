#!/usr/bin/env python3
"""
Store Analysis Script

Runs the catalog analysis for one store and prints the JSON report.

Usage:
    python3 scripts/analyze_store.py example.com
    python3 scripts/analyze_store.py https://www.example.in --max-products 1000
    python3 scripts/analyze_store.py example.com --output report.json
"""

import os
import sys

# Add project root to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from storepulse.cli import main

if __name__ == "__main__":
    sys.exit(main())
