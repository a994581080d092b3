"""Logging setup and process-level hooks for uncaught errors."""

from __future__ import annotations

import logging
import sys
import threading

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

logger = logging.getLogger("jsonboard")


def setup_logging(level: str = "INFO") -> None:
    """Attach a console handler to the root logger once; later calls only adjust the level."""
    root = logging.getLogger()
    if not any(getattr(h, "_jsonboard", False) for h in root.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._jsonboard = True  # type: ignore[attr-defined]
        root.addHandler(handler)
    root.setLevel(getattr(logging, (level or "INFO").upper(), logging.INFO))


def _log_uncaught(exc_type, exc_value, exc_tb) -> None:
    if issubclass(exc_type, KeyboardInterrupt):
        sys.__excepthook__(exc_type, exc_value, exc_tb)
        return
    logger.critical("Unhandled exception", exc_info=(exc_type, exc_value, exc_tb))


def _log_thread_uncaught(args: threading.ExceptHookArgs) -> None:
    if args.exc_type is SystemExit:
        return
    thread_name = args.thread.name if args.thread else "?"
    logger.critical(
        "Unhandled exception in thread %s",
        thread_name,
        exc_info=(args.exc_type, args.exc_value, args.exc_traceback),
    )


def install_excepthooks() -> None:
    """Log exceptions that escape the main thread or worker threads."""
    sys.excepthook = _log_uncaught
    threading.excepthook = _log_thread_uncaught
