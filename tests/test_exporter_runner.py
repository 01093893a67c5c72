"""
Tests for the exporter runner: wiring, shutdown and the fatal parse policy.
"""

import threading
from unittest.mock import Mock

import pytest
from prometheus_client import CollectorRegistry
from wsgiref.util import setup_testing_defaults

from jstat_exporter.cli.orchestrator import EXIT_FATAL, EXIT_OK, ExporterRunner
from jstat_exporter.collectors import SampleStore
from jstat_exporter.models import StatCategory
from jstat_exporter.validation import MalformedSampleError


class FakeServer:
    """Server double whose serve_forever blocks until shutdown()."""

    def __init__(self, host, port, app, on_serve=None):
        self.host = host
        self.port = port
        self.app = app
        self.on_serve = on_serve
        self.stopped = threading.Event()
        self.closed = False

    def serve_forever(self):
        if self.on_serve is not None:
            self.on_serve(self)
        assert self.stopped.wait(5), "shutdown() was never called"

    def shutdown(self):
        self.stopped.set()

    def server_close(self):
        self.closed = True


def scrape(app, path="/metrics"):
    environ = {"PATH_INFO": path}
    setup_testing_defaults(environ)
    return b"".join(app(environ, lambda status, headers, exc_info=None: None))


def make_runner(config, on_serve=None, **kwargs):
    servers = []

    def server_factory(host, port, app):
        server = FakeServer(host, port, app, on_serve)
        servers.append(server)
        return server

    runner = ExporterRunner(
        config,
        registry=CollectorRegistry(),
        server_factory=server_factory,
        poller_factory=kwargs.pop("poller_factory", Mock(side_effect=lambda **_: Mock())),
        **kwargs,
    )
    return runner, servers


class TestWiring:

    def test_one_poller_per_category_sharing_the_store(self, exporter_config):
        factory = Mock()
        runner, _ = make_runner(exporter_config, poller_factory=factory)

        runner.create_pollers()

        categories = [c.kwargs["category"] for c in factory.call_args_list]
        assert categories == list(StatCategory)
        for call in factory.call_args_list:
            assert call.kwargs["store"] is runner.store
            assert call.kwargs["jstat_path"] == exporter_config.jstat_path
            assert call.kwargs["interval_ms"] == 1000
            assert call.kwargs["target"] == "MyApp"
            assert call.kwargs["retry_delay"] == 0.01

    def test_locator_uses_configured_jps(self, exporter_config):
        exporter_config.jps_path = "/opt/jdk/bin/jps"
        factory = Mock()
        runner, _ = make_runner(exporter_config, poller_factory=factory)

        runner.create_pollers()

        locator = factory.call_args.kwargs["locator"]
        assert locator.keywords == {"jps_path": "/opt/jdk/bin/jps"}

    def test_injected_store_is_used(self, exporter_config):
        store = SampleStore()
        runner, _ = make_runner(exporter_config, store=store)
        assert runner.store is store
        assert runner.collector.store is store

    def test_default_registry_has_process_metrics(self, exporter_config):
        runner = ExporterRunner(exporter_config, poller_factory=Mock())
        names = {metric.name for metric in runner.registry.collect()}
        assert "python_info" in names


class TestLifecycle:

    def test_clean_shutdown_returns_ok(self, exporter_config):
        runner, servers = make_runner(
            exporter_config, on_serve=lambda server: runner.request_shutdown()
        )

        assert runner.run() == EXIT_OK

        server = servers[0]
        assert (server.host, server.port) == ("127.0.0.1", 0)
        assert server.closed
        assert len(runner.pollers) == 4
        for poller in runner.pollers:
            poller.start.assert_called_once_with()
            poller.stop.assert_called_once()

    def test_scrapes_are_served_while_running(self, exporter_config):
        bodies = []

        def on_serve(server):
            runner.store.put(StatCategory.FULL_GC, " ".join(f"{i}.0" for i in range(16)))
            bodies.append(scrape(server.app))
            runner.request_shutdown()

        runner, _ = make_runner(exporter_config, on_serve=on_serve)

        assert runner.run() == EXIT_OK
        assert b"jstat_fgcTimes 14.0" in bodies[0]
        assert b"jstat_fgcSec 15.0" in bodies[0]

    def test_shutdown_requested_before_serving(self, exporter_config):
        runner, servers = make_runner(exporter_config)
        runner.request_shutdown()

        assert runner.run() == EXIT_OK
        assert not servers[0].stopped.is_set()

    def test_request_shutdown_is_idempotent(self, exporter_config):
        runner, _ = make_runner(
            exporter_config,
            on_serve=lambda server: (runner.request_shutdown(), runner.request_shutdown()),
        )
        assert runner.run() == EXIT_OK


class TestFatalParse:

    def test_malformed_sample_stops_exporter_with_error(self, exporter_config):
        errors = []

        def on_serve(server):
            runner.store.put(StatCategory.OLD_GEN, "1 2 3")
            try:
                scrape(server.app)
            except MalformedSampleError as e:
                errors.append(e)

        runner, servers = make_runner(exporter_config, on_serve=on_serve)

        assert runner.run() == EXIT_FATAL
        assert len(errors) == 1
        assert runner.fatal_error is errors[0]
        assert servers[0].closed

    def test_first_fatal_error_is_kept(self, exporter_config):
        runner, _ = make_runner(exporter_config)
        first = MalformedSampleError("old-gen", 5, "1 2 3", "only 3 tokens")
        second = MalformedSampleError("full-gc", 14, "x", "only 1 tokens")

        runner.handle_fatal(first)
        runner.handle_fatal(second)

        assert runner.fatal_error is first
        assert runner.shutdown_requested.is_set()


def test_bind_failure_propagates(exporter_config):
    def server_factory(host, port, app):
        raise OSError("Address already in use")

    runner = ExporterRunner(
        exporter_config,
        registry=CollectorRegistry(),
        server_factory=server_factory,
        poller_factory=Mock(),
    )
    with pytest.raises(OSError):
        runner.run()
    assert runner.pollers == []
