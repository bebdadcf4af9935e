"""Application wiring, lifecycle and the command entry point."""

from __future__ import annotations

import argparse
import logging
import signal
import sys
import threading
from os import PathLike

from inventory_control.handlers import Handlers
from inventory_control.logs import new_logger
from inventory_control.server import Server
from inventory_control.services import CategoryService, ProductService
from inventory_control.storage import (
    CategoryStorage,
    Database,
    ProductStorage,
    StorageError,
)

SHUTDOWN_TIMEOUT_SECONDS = 5

_SHUTDOWN_SIGNALS = (signal.SIGINT, signal.SIGTERM)
_SIGNAL_POLL_SECONDS = 0.2


class App:
    """A running inventory service: HTTP server plus database."""

    def __init__(self, server: Server, db: Database, logger: logging.Logger) -> None:
        self.server = server
        self.db = db
        self.logger = logger

    def run(self) -> None:
        """Start the HTTP server in the background."""
        try:
            self.server.run()
        except OSError as exc:
            self.logger.error("app.Run", extra={"error": str(exc)})
            raise

    def stop(self, timeout: float = SHUTDOWN_TIMEOUT_SECONDS) -> None:
        """Stop the server, then close the database within ``timeout`` seconds."""
        self.logger.debug("Server stopping...")
        self.server.stop()
        self.logger.debug("DB pool closing...")
        closer = threading.Thread(target=self.db.close, name="db-close", daemon=True)
        closer.start()
        closer.join(timeout)
        if closer.is_alive():
            self.logger.warning("DB close interrupted by context timeout")
            raise TimeoutError("closing the database timed out")
        self.logger.debug("DB closed successfully")


def create_app(
    db_path: str | PathLike[str], port: str | int, logger: logging.Logger
) -> App:
    """Open the database and wire services, handlers and routes."""
    try:
        db = Database(db_path)
    except StorageError as exc:
        logger.error("Error connecting to DB", extra={"error": str(exc)})
        raise StorageError("DB connection failed") from exc

    logger.debug("Connected to DB", extra={"conn_string": db.path})

    handlers = Handlers(
        CategoryService(CategoryStorage(db)),
        ProductService(ProductStorage(db)),
        logger,
    )
    server = Server(port, logger)
    logger.debug("Starting server", extra={"port": server.port})
    server.register_routes(handlers)
    return App(server, db, logger)


def _wait_for_signal() -> None:
    received = threading.Event()

    def _on_signal(signum: int, frame: object) -> None:
        received.set()

    previous = {sig: signal.signal(sig, _on_signal) for sig in _SHUTDOWN_SIGNALS}
    try:
        while not received.wait(_SIGNAL_POLL_SECONDS):
            continue
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)


def shutdown(app: App) -> None:
    """Block until SIGINT or SIGTERM, then stop the app gracefully."""
    _wait_for_signal()
    app.logger.debug("Shutting down app...")
    try:
        app.stop(SHUTDOWN_TIMEOUT_SECONDS)
    except TimeoutError:
        app.logger.warning(
            "Shutdown timed out - some resources may not be fully released"
        )
    except Exception as exc:
        app.logger.error("Shutdown failed:", extra={"error": str(exc)})
    else:
        app.logger.debug("Graceful shutdown completed")


def main(argv: list[str] | None = None) -> int:
    """Run the inventory service until it receives a termination signal."""
    parser = argparse.ArgumentParser(
        prog="inventory-control", description="Inventory control HTTP service."
    )
    parser.add_argument("--db", default="inventory.db", help="SQLite database file")
    parser.add_argument("--port", default="8080", help="port to listen on")
    parser.add_argument(
        "--log-level", default="info", help="debug, info, warn or error"
    )
    args = parser.parse_args(argv)

    logger = new_logger(args.log_level)
    try:
        app = create_app(args.db, args.port, logger)
    except StorageError as exc:
        print(f"error creating app {exc}", file=sys.stderr)
        return 1
    try:
        app.run()
    except OSError as exc:
        print(f"error starting server: {exc}", file=sys.stderr)
        app.db.close()
        return 1
    shutdown(app)
    return 0