"""Flask application, request logging and the background HTTP server."""

from __future__ import annotations

import logging
import threading
import time

from flask import Flask, Response, g, request
from werkzeug.serving import BaseWSGIServer, WSGIRequestHandler, make_server

from inventory_control.handlers import Handlers

_LISTEN_HOST = "0.0.0.0"


class _QuietRequestHandler(WSGIRequestHandler):
    def log_request(self, *args: object, **kwargs: object) -> None:
        pass


def _real_ip() -> str:
    forwarded = request.headers.get("X-Forwarded-For", "")
    if forwarded:
        first = forwarded.split(",", 1)[0].strip()
        return first.removeprefix("[").removesuffix("]")
    real = request.headers.get("X-Real-IP", "")
    if real:
        return real.removeprefix("[").removesuffix("]")
    return request.remote_addr or ""


def install_logging_middleware(app: Flask, logger: logging.Logger) -> None:
    """Log method, path, status, latency and client address of every request."""

    @app.before_request
    def _start_timer() -> None:
        g.request_started = time.monotonic()

    @app.after_request
    def _log_request(response: Response) -> Response:
        started = g.get("request_started", time.monotonic())
        latency_ms = int((time.monotonic() - started) * 1000)
        logger.info(
            "completed request",
            extra={
                "method": request.method,
                "path": request.path,
                "status": response.status_code,
                "latency_ms": latency_ms,
                "ip": _real_ip(),
            },
        )
        return response


class Server:
    """HTTP server for the inventory API."""

    def __init__(self, port: str | int, logger: logging.Logger) -> None:
        self.port = str(port)
        self.logger = logger
        self.app = Flask(__name__)
        install_logging_middleware(self.app, logger)
        self._httpd: BaseWSGIServer | None = None
        self._thread: threading.Thread | None = None

    @property
    def bound_port(self) -> int | None:
        """The port actually listened on while running, otherwise None."""
        return self._httpd.server_port if self._httpd is not None else None

    def register_routes(self, handlers: Handlers) -> None:
        """Attach the category and product endpoints."""
        for prefix, handler in (
            ("categories", handlers.categories),
            ("products", handlers.products),
        ):
            self.app.add_url_rule(
                f"/{prefix}/<id>", f"{prefix}.read", handler.read, methods=["GET"]
            )
            self.app.add_url_rule(
                f"/{prefix}/create",
                f"{prefix}.create",
                handler.create,
                methods=["POST"],
            )
            self.app.add_url_rule(
                f"/{prefix}/update",
                f"{prefix}.update",
                handler.update,
                methods=["PUT"],
            )
            self.app.add_url_rule(
                f"/{prefix}/<id>",
                f"{prefix}.delete",
                handler.delete,
                methods=["DELETE"],
            )

    def run(self) -> None:
        """Start serving in a background thread and return at once."""
        try:
            httpd = make_server(
                _LISTEN_HOST,
                int(self.port),
                self.app,
                threaded=True,
                request_handler=_QuietRequestHandler,
            )
        except OSError as exc:
            self.logger.error(
                "server.Run: ", extra={"error": str(exc), "port": self.port}
            )
            raise
        self._httpd = httpd
        self._thread = threading.Thread(
            target=httpd.serve_forever, name="inventory-http", daemon=True
        )
        self._thread.start()

    def stop(self) -> None:
        """Stop serving and release the listening socket."""
        httpd, thread = self._httpd, self._thread
        self._httpd = None
        self._thread = None
        if httpd is not None:
            httpd.shutdown()
            httpd.server_close()
        if thread is not None:
            thread.join()
        self.logger.debug("Server stopped successfully")