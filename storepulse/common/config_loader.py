"""
Configuration Loader

Loads YAML configuration for catalog fetching and classification thresholds.
Built-in defaults are used for anything the config file does not set.
"""

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .constants import (
    DEFAULT_MAX_PRODUCTS,
    DEFAULT_TIMEOUT,
    DEFAULT_USER_AGENT,
    PAGE_SIZE,
)

CONFIG_FILENAME = "analysis.yaml"


@dataclass(frozen=True)
class FetchSettings:
    """Request-scoped settings for talking to a storefront catalog."""
    page_size: int = PAGE_SIZE
    timeout: float = DEFAULT_TIMEOUT
    max_retries: int = 3
    page_delay: float = 0.5        # seconds between pages
    page_delay_step: float = 0.2   # added every 5 pages
    max_products: int = DEFAULT_MAX_PRODUCTS
    user_agent: str = DEFAULT_USER_AGENT
    collections_timeout: float = DEFAULT_TIMEOUT


@dataclass(frozen=True)
class ClassificationThresholds:
    """Fixed boundaries for the strategy labels (prices in INR)."""
    luxury_mean_price: float = 16000
    premium_mean_price: float = 12000
    penetration_mean_price: float = 2400

    budget_band_max: float = 4000
    mid_range_band_max: float = 12000
    premium_band_max: float = 40000

    high_customization_variants: float = 10
    moderate_options_variants: float = 5

    niche_catalog_max: int = 100
    broad_catalog_min: int = 200

    consistent_spread_max: float = 2
    moderate_spread_max: float = 5

    aggressive_sale_pct: float = 20
    selective_sale_pct: float = 5

    wide_diversity_ratio: float = 10
    good_navigation_collections: int = 8


def _find_config_file(filename: str) -> Optional[Path]:
    """
    Locate an analyzer config file.

    Looks in the repository's config/ directory, then in ./config. A
    directory that lacks the file is skipped, so an unrelated config/
    folder in the working directory falls through to built-in defaults.
    """
    candidates = (
        Path(__file__).resolve().parent.parent.parent / 'config',
        Path.cwd() / 'config',
    )
    for directory in candidates:
        path = directory / filename
        if path.is_file():
            return path
    return None


def load_config(filename: str = CONFIG_FILENAME, config_dir: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load a YAML configuration file.

    Args:
        filename: Name of the config file (e.g., 'analysis.yaml')
        config_dir: Directory to read from. When omitted, the file is
            searched for and an empty dict is returned if none is found.

    Returns:
        Parsed YAML content as dictionary

    Raises:
        FileNotFoundError: If an explicit config_dir doesn't hold the file
    """
    if config_dir is None:
        config_path = _find_config_file(filename)
        if config_path is None:
            return {}
    else:
        config_path = Path(config_dir) / filename
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f) or {}


def _apply_overrides(defaults, section: Dict[str, Any]):
    """Return defaults updated with the known keys of a config section."""
    known = {f.name for f in fields(defaults)}
    unknown = set(section) - known
    if unknown:
        raise ValueError(f"Unknown config keys: {', '.join(sorted(unknown))}")
    return replace(defaults, **section)


def load_fetch_settings(config: Optional[Dict[str, Any]] = None, **overrides) -> FetchSettings:
    """
    Load catalog fetch settings.

    Args:
        config: Parsed config (if None, loads from analysis.yaml)
        **overrides: Values that take precedence over the config file

    Returns:
        FetchSettings instance

    Example:
        load_fetch_settings(max_products=500, page_delay=0)
    """
    if config is None:
        config = load_config()
    settings = _apply_overrides(FetchSettings(), config.get('fetch') or {})
    overrides = {k: v for k, v in overrides.items() if v is not None}
    return replace(settings, **overrides) if overrides else settings


def load_thresholds(config: Optional[Dict[str, Any]] = None) -> ClassificationThresholds:
    """
    Load classification thresholds.

    Args:
        config: Parsed config (if None, loads from analysis.yaml)

    Returns:
        ClassificationThresholds instance
    """
    if config is None:
        config = load_config()
    return _apply_overrides(ClassificationThresholds(), config.get('thresholds') or {})
