#!/usr/bin/env python3
"""
Start the jsonboard HTTP server.

Usage:
  python scripts/serve.py [--host 127.0.0.1] [--port 3000] [--db path/db.json]
"""
from __future__ import annotations

import argparse
import errno
import logging
import os
import socket
import sys

import uvicorn

from jsonboard.core.config import get_settings
from jsonboard.core.logging_config import install_excepthooks, setup_logging

logger = logging.getLogger("jsonboard.serve")


def bind_socket(host: str, port: int) -> socket.socket:
    """Bind the listening socket up front so listen errors surface before uvicorn starts."""
    family = socket.AF_INET6 if ":" in host else socket.AF_INET
    sock = socket.socket(family, socket.SOCK_STREAM)
    sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    try:
        sock.bind((host, port))
    except OSError:
        sock.close()
        raise
    sock.set_inheritable(True)
    return sock


def main() -> None:
    ap = argparse.ArgumentParser(description="Serve posts/comments from a JSON document")
    ap.add_argument("--host", help="Interface to listen on (default: JSONBOARD_HOST)")
    ap.add_argument("--port", type=int, help="TCP port (default: JSONBOARD_PORT)")
    ap.add_argument("--db", help="Path to the JSON document (default: JSONBOARD_DB_FILE)")
    args = ap.parse_args()

    if args.db:
        os.environ["JSONBOARD_DB_FILE"] = args.db
        get_settings.cache_clear()
    settings = get_settings()
    setup_logging(settings.log_level)
    install_excepthooks()

    host = args.host or settings.host
    port = args.port or settings.port
    try:
        sock = bind_socket(host, port)
    except OSError as exc:
        logger.error("Server error: %s", exc)
        if exc.errno == errno.EADDRINUSE:
            logger.error("Port %s is already in use", port)
        raise SystemExit(1)

    logger.info("JSON Server is running on http://%s:%s", host, port)
    config = uvicorn.Config(
        "jsonboard.app:app",
        log_level=settings.log_level.lower(),
    )
    uvicorn.Server(config).run(sockets=[sock])


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:  # pragma: no cover - CLI usage
        sys.exit(0)
