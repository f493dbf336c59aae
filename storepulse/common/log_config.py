"""
Logging setup for the storepulse command line.

Library modules only create loggers; the CLI attaches the handler here.
Log lines go to stderr so the JSON report on stdout stays parseable.
"""

import logging
import sys

LOG_FORMAT = "%(levelname)-8s %(name)s: %(message)s"


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """
    Attach a stderr handler to the ``storepulse`` logger.

    Args:
        verbose: Log at DEBUG (page requests, fetch state changes)
        quiet: Log at WARNING (partial catalogs, failures only)
    """
    level = logging.INFO
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    package_logger = logging.getLogger("storepulse")
    package_logger.setLevel(level)

    # Re-running the CLI in one process must not duplicate output
    package_logger.handlers.clear()
    package_logger.addHandler(handler)
