"""
HTTP server and WSGI application for the metrics endpoint.
"""

from .http import ThreadingWSGIServer, create_app, create_server, render_landing_page

__all__ = [
    "ThreadingWSGIServer",
    "create_app",
    "create_server",
    "render_landing_page",
]
