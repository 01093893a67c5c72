"""
jstat_exporter: Prometheus exporter for JVM memory and GC statistics.

The exporter runs ``jstat`` against one JVM (found through ``jps``) for four
statistic views, keeps the latest row of each view, and serves selected
columns as gauges on an HTTP metrics endpoint.

The package is organized into specialized modules:
- config: Configuration file loading and validation
- models: Configuration model, statistic categories and gauge field table
- validation: Input validation, exception types and error handling
- system: Command execution and JVM discovery
- collectors: Sample store, jstat pollers and the Prometheus collector
- server: HTTP surface
- cli: Command-line interface and the exporter runner

Usage:
    From command line:
        jstat_exporter --target MyApp --interval 1000

    Programmatically:
        from jstat_exporter import ExporterRunner, build_config
        runner = ExporterRunner(build_config(overrides={"target": "MyApp"}))
        runner.run()
"""

from .cli import ExporterRunner, main_cli
from .collectors import JstatCollector, SamplePoller, SampleStore, parse_sample
from .config import build_config
from .models import GAUGE_FIELDS, ExporterConfig, GaugeField, StatCategory
from .system import locate_target
from .validation import (
    ExporterError,
    MalformedSampleError,
    SubprocessSpawnError,
    TargetNotFoundError,
    ValidationError,
)

__version__ = "1.0.0"

__all__ = [
    # Main interfaces
    "ExporterRunner",
    "build_config",
    "main_cli",
    # Sampling and collection
    "JstatCollector",
    "SamplePoller",
    "SampleStore",
    "locate_target",
    "parse_sample",
    # Models
    "ExporterConfig",
    "GAUGE_FIELDS",
    "GaugeField",
    "StatCategory",
    # Errors
    "ExporterError",
    "MalformedSampleError",
    "SubprocessSpawnError",
    "TargetNotFoundError",
    "ValidationError",
]
