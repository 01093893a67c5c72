"""
Exporter runner.

This module wires the sample store, the four category pollers, the
Prometheus collector and the HTTP server together and owns their
lifecycle, including signal-driven shutdown and the fail-fast policy for
unparseable jstat output.
"""

import functools
import logging
import signal
import threading
from typing import Any, Callable, Dict, List, Optional

from prometheus_client import CollectorRegistry, GCCollector, PlatformCollector, ProcessCollector

from ..collectors import JstatCollector, SamplePoller, SampleStore
from ..models.config import ExporterConfig
from ..models.stats import StatCategory
from ..server import create_app, create_server
from ..system.locator import locate_target
from ..validation import ErrorSeverity, MalformedSampleError, handle_error

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FATAL = 1

POLLER_STOP_TIMEOUT = 5.0


class ExporterRunner:
    """
    Runs the exporter until a signal or a fatal error stops it.

    The store is created here and handed to every poller and to the
    collector; nothing else shares it.
    """

    def __init__(
        self,
        config: ExporterConfig,
        store: Optional[SampleStore] = None,
        registry: Optional[CollectorRegistry] = None,
        server_factory: Callable[..., Any] = create_server,
        poller_factory: Callable[..., SamplePoller] = SamplePoller,
    ):
        """
        Args:
            config: Validated exporter configuration
            store: Sample store; a new one is created when omitted
            registry: Registry to expose; a new one carrying the process,
                      platform and GC collectors is created when omitted
            server_factory: Called as (host, port, app) and returns a server
                            with serve_forever(), shutdown() and server_close()
            poller_factory: Called with SamplePoller's arguments
        """
        self.config = config
        self.store = store or SampleStore()
        self.registry = registry or self._default_registry()
        self._server_factory = server_factory
        self._poller_factory = poller_factory

        self.collector = JstatCollector(self.store, on_fatal=self.handle_fatal)
        self.registry.register(self.collector)

        self.pollers: List[SamplePoller] = []
        self.server: Optional[Any] = None
        self.fatal_error: Optional[Exception] = None
        self.shutdown_requested = threading.Event()
        self._original_handlers: Dict[int, Any] = {}

    @staticmethod
    def _default_registry() -> CollectorRegistry:
        registry = CollectorRegistry()
        ProcessCollector(registry=registry)
        PlatformCollector(registry=registry)
        GCCollector(registry=registry)
        return registry

    def create_pollers(self) -> List[SamplePoller]:
        """One poller per statistic category, all sharing this runner's store."""
        locator = functools.partial(locate_target, jps_path=self.config.jps_path)
        return [
            self._poller_factory(
                category=category,
                store=self.store,
                jstat_path=self.config.jstat_path,
                interval_ms=self.config.interval_ms,
                target=self.config.target,
                retry_delay=self.config.retry_delay_seconds,
                locator=locator,
            )
            for category in StatCategory
        ]

    def run(self) -> int:
        """
        Bind the HTTP server, start polling and serve until shut down.

        Returns:
            EXIT_OK after a requested shutdown, EXIT_FATAL after a fatal error

        Raises:
            OSError: If the listen address cannot be bound
        """
        app = create_app(self.registry, self.config.metrics_path)
        self.server = self._server_factory(
            self.config.listen_host, self.config.listen_port, app
        )

        self.pollers = self.create_pollers()
        for poller in self.pollers:
            poller.start()

        logger.info(
            f"Serving metrics on {self.config.listen_address}{self.config.metrics_path}"
        )
        try:
            # A shutdown requested before this point would be lost by serve_forever.
            if not self.shutdown_requested.is_set():
                self.server.serve_forever()
        finally:
            self._stop_pollers()
            self.server.server_close()

        if self.fatal_error is not None:
            logger.critical(f"Exporter stopped after fatal error: {self.fatal_error}")
            return EXIT_FATAL
        logger.info("Exporter stopped")
        return EXIT_OK

    def request_shutdown(self) -> None:
        """
        Ask the running server to stop. Safe to call from any thread,
        including signal handlers running on the serving thread.
        """
        if self.shutdown_requested.is_set():
            return
        self.shutdown_requested.set()
        if self.server is not None:
            # shutdown() blocks until serve_forever() returns, so it must not
            # run on the serving thread itself.
            threading.Thread(
                target=self.server.shutdown, name="shutdown", daemon=True
            ).start()

    def handle_fatal(self, error: MalformedSampleError) -> None:
        """Record a fatal sample error and stop the whole exporter."""
        if self.fatal_error is None:
            self.fatal_error = error
        handle_error(
            error,
            "metric collection",
            severity=ErrorSeverity.CRITICAL,
            reraise=False,
            logger=logger,
        )
        self.request_shutdown()

    def setup_signal_handlers(self) -> None:
        """Turn SIGINT and SIGTERM into a graceful shutdown."""
        for signum in (signal.SIGINT, signal.SIGTERM):
            self._original_handlers[signum] = signal.signal(signum, self._signal_handler)

    def cleanup_signal_handlers(self) -> None:
        for signum, handler in self._original_handlers.items():
            signal.signal(signum, handler)
        self._original_handlers.clear()

    def _signal_handler(self, signum: int, frame: Any) -> None:
        logger.info(f"Signal {signal.strsignal(signum)} received. Shutting down...")
        self.request_shutdown()

    def _stop_pollers(self) -> None:
        for poller in self.pollers:
            poller.stop(timeout=POLLER_STOP_TIMEOUT)
