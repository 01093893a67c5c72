"""
Configuration data models.
"""

from dataclasses import dataclass
from typing import Optional

DEFAULT_LISTEN_ADDRESS = ":9010"
DEFAULT_METRICS_PATH = "/metrics"
DEFAULT_JSTAT_PATH = "/usr/bin/jstat"
DEFAULT_JPS_PATH = "jps"
DEFAULT_INTERVAL_MS = 1000
DEFAULT_RETRY_DELAY_SECONDS = 60.0
DEFAULT_LOG_LEVEL = "INFO"
METRICS_NAMESPACE = "jstat"


@dataclass
class ExporterConfig:
    """
    Settings for one exporter instance, built from defaults, the optional
    TOML file and the command line.
    """

    # [exporter] web settings
    listen_host: str = ""
    listen_port: int = 9010
    metrics_path: str = DEFAULT_METRICS_PATH

    # [exporter] sampling settings
    jstat_path: str = DEFAULT_JSTAT_PATH
    jps_path: str = DEFAULT_JPS_PATH
    # None means the first JVM reported by jps.
    target: Optional[str] = None
    interval_ms: int = DEFAULT_INTERVAL_MS
    retry_delay_seconds: float = DEFAULT_RETRY_DELAY_SECONDS

    log_level: str = DEFAULT_LOG_LEVEL

    @property
    def listen_address(self) -> str:
        host = f"[{self.listen_host}]" if ":" in self.listen_host else self.listen_host
        return f"{host}:{self.listen_port}"
