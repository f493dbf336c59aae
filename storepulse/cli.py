"""
Store Analysis Command

Analyzes a storefront's public catalog and prints the report as JSON.

Usage:
    storepulse example.com
    storepulse https://www.example.in/ --max-products 1000
    storepulse example.com --output report.json --verbose

Environment (also read from .env):
    STOREPULSE_MAX_PRODUCTS: Default product cap
    STOREPULSE_USER_AGENT: User-Agent sent to the store

Exit codes:
    0 = analysis complete (possibly on a partial catalog)
    1 = analysis failed
"""

import argparse
import json
import logging
import os
import sys
from typing import List, Optional

from dotenv import load_dotenv

from .analysis import analyze
from .common.config_loader import load_fetch_settings
from .common.log_config import setup_logging
from .models import AnalysisError

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Competitive intelligence from a storefront's public catalog",
    )
    parser.add_argument("store", help="Store URL or domain (e.g. example.com)")
    parser.add_argument(
        "--max-products", type=int, default=None,
        help="Maximum products to analyze (0 = all; default: config or $STOREPULSE_MAX_PRODUCTS)",
    )
    parser.add_argument("--output", "-o", help="Write the JSON report to this file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    parser.add_argument("--quiet", "-q", action="store_true", help="Warnings and errors only")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    args = parse_args(argv)
    setup_logging(verbose=args.verbose, quiet=args.quiet)

    env_max = os.environ.get("STOREPULSE_MAX_PRODUCTS")
    try:
        env_max_products = int(env_max) if env_max else None
    except ValueError:
        logger.error("STOREPULSE_MAX_PRODUCTS must be an integer, got %r", env_max)
        return 1

    settings = load_fetch_settings(
        max_products=env_max_products,
        user_agent=os.environ.get("STOREPULSE_USER_AGENT") or None,
    )

    try:
        result = analyze(args.store, args.max_products, settings=settings)
    except AnalysisError as e:
        logger.error("Analysis failed: %s", e)
        json.dump({"success": False, "error": e.to_dict()}, sys.stderr, ensure_ascii=False, indent=2)
        sys.stderr.write("\n")
        return 1

    report = json.dumps(result.to_dict(), ensure_ascii=False, indent=2)

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(report + "\n")
        logger.info("Report written to %s", args.output)
    else:
        print(report)

    return 0


if __name__ == "__main__":
    sys.exit(main())
