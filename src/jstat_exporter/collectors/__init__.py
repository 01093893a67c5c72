"""
jstat sampling and metric collection.

- SampleStore: latest raw jstat row per statistic category
- SamplePoller: background thread keeping one category's row fresh
- JstatCollector: prometheus_client collector turning rows into gauges
"""

from .jstat_collector import JstatCollector, parse_sample
from .poller import SamplePoller
from .store import SampleStore

__all__ = [
    "JstatCollector",
    "SamplePoller",
    "SampleStore",
    "parse_sample",
]
