# Common utilities
from .config_loader import (
    ClassificationThresholds,
    FetchSettings,
    load_config,
    load_fetch_settings,
    load_thresholds,
)
from .log_config import setup_logging
