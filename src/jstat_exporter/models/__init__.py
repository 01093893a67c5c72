"""
Data models for the exporter.

Configuration Models:
- Exporter settings (web, sampling, logging)

Statistic Models:
- jstat statistic categories and their jstat options
- The fixed gauge field table per category
"""

from .config import (
    DEFAULT_INTERVAL_MS,
    DEFAULT_JPS_PATH,
    DEFAULT_JSTAT_PATH,
    DEFAULT_LISTEN_ADDRESS,
    DEFAULT_LOG_LEVEL,
    DEFAULT_METRICS_PATH,
    DEFAULT_RETRY_DELAY_SECONDS,
    METRICS_NAMESPACE,
    ExporterConfig,
)
from .stats import GAUGE_FIELDS, GaugeField, StatCategory, min_token_count

__all__ = [
    # Configuration
    "DEFAULT_INTERVAL_MS",
    "DEFAULT_JPS_PATH",
    "DEFAULT_JSTAT_PATH",
    "DEFAULT_LISTEN_ADDRESS",
    "DEFAULT_LOG_LEVEL",
    "DEFAULT_METRICS_PATH",
    "DEFAULT_RETRY_DELAY_SECONDS",
    "METRICS_NAMESPACE",
    "ExporterConfig",
    # Statistics
    "GAUGE_FIELDS",
    "GaugeField",
    "StatCategory",
    "min_token_count",
]
