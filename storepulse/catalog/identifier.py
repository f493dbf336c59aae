"""
Store identifier normalization.

Turns whatever the user typed ("https://Store.Example.com/", "www.store.in")
into the bare hostname used to build catalog URLs.
"""

from typing import Optional
from urllib.parse import urlsplit

from ..common.constants import PLATFORM_DOMAIN
from ..models import AnalysisError, ErrorKind

_SCHEMES = ("http://", "https://")


def normalize_store_identifier(value: str) -> str:
    """
    Canonicalize a store reference into a lowercase hostname.

    Args:
        value: Store URL or domain in any common format

    Returns:
        Hostname without scheme, trailing slash or "www." prefix

    Raises:
        AnalysisError: INVALID_IDENTIFIER if nothing usable remains
    """
    normalized = (value or "").strip().lower()
    if not normalized:
        raise AnalysisError(
            ErrorKind.INVALID_IDENTIFIER,
            "Store identifier is empty.",
            hint="Provide a store domain such as example.com.",
        )

    if normalized.startswith(_SCHEMES):
        try:
            hostname = urlsplit(normalized).hostname
        except ValueError:
            hostname = None
        if not hostname:
            raise AnalysisError(
                ErrorKind.INVALID_IDENTIFIER,
                f"Could not read a hostname from {value.strip()!r}.",
                hint="Provide a store domain such as example.com.",
            )
        normalized = hostname

    normalized = normalized.rstrip("/")

    if normalized.startswith("www."):
        normalized = normalized[4:]

    if not normalized:
        raise AnalysisError(
            ErrorKind.INVALID_IDENTIFIER,
            f"Store identifier {value.strip()!r} has no hostname.",
            hint="Provide a store domain such as example.com.",
        )

    return normalized


def suggest_alternate_hostname(hostname: str) -> Optional[str]:
    """Platform subdomain to try when a custom domain has no catalog."""
    if PLATFORM_DOMAIN in hostname:
        return None
    return f"{hostname}{PLATFORM_DOMAIN}"
