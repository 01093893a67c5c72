"""
HTTP surface of the exporter.

``GET <metrics_path>`` is handed to prometheus_client's WSGI app; every
other path returns a small landing page linking to the metrics.
"""

import html
import logging
import socket
from socketserver import ThreadingMixIn
from typing import Any, Callable, Iterable, List
from wsgiref.simple_server import WSGIRequestHandler, WSGIServer, make_server

from prometheus_client import CollectorRegistry, make_wsgi_app

logger = logging.getLogger(__name__)

LANDING_PAGE_TEMPLATE = """<html>
<head><title>jstat Exporter</title></head>
<body>
<h1>jstat Exporter</h1>
<p><a href="{metrics_path}">Metrics</a></p>
</body>
</html>
"""

WSGIApp = Callable[[dict, Callable[..., Any]], Iterable[bytes]]


class ThreadingWSGIServer(ThreadingMixIn, WSGIServer):
    """WSGI server handling each request in its own thread."""

    daemon_threads = True


class ThreadingWSGIServerV6(ThreadingWSGIServer):
    address_family = socket.AF_INET6


class _LoggingRequestHandler(WSGIRequestHandler):
    """Sends access log lines to the module logger instead of stderr."""

    def log_message(self, format: str, *args: Any) -> None:
        logger.debug(f"{self.address_string()} {format % args}")


def render_landing_page(metrics_path: str) -> bytes:
    return LANDING_PAGE_TEMPLATE.format(
        metrics_path=html.escape(metrics_path, quote=True)
    ).encode("utf-8")


def create_app(registry: CollectorRegistry, metrics_path: str) -> WSGIApp:
    """
    Build the exporter's WSGI application.

    Args:
        registry: Registry rendered on the metrics path
        metrics_path: Path serving the metrics, e.g. "/metrics"

    Returns:
        A WSGI callable
    """
    metrics_app = make_wsgi_app(registry)
    landing_page = render_landing_page(metrics_path)

    def app(environ: dict, start_response: Callable[..., Any]) -> List[bytes]:
        if environ.get("PATH_INFO", "/") == metrics_path:
            return metrics_app(environ, start_response)

        start_response("200 OK", [
            ("Content-Type", "text/html; charset=utf-8"),
            ("Content-Length", str(len(landing_page))),
        ])
        return [landing_page]

    return app


def create_server(host: str, port: int, app: WSGIApp) -> ThreadingWSGIServer:
    """
    Bind the HTTP server.

    Raises:
        OSError: If the address cannot be bound
    """
    server = make_server(
        host, port, app,
        server_class=ThreadingWSGIServerV6 if ":" in host else ThreadingWSGIServer,
        handler_class=_LoggingRequestHandler,
    )
    logger.info(f"Listening on {host or '0.0.0.0'}:{server.server_port}")
    return server
