"""
Process-level behaviour: listen failures and uncaught exceptions end up in the log.
"""
from __future__ import annotations

import logging
import socket
import sys
import threading
from pathlib import Path
from types import SimpleNamespace

import pytest

# make the jsonboard package and the scripts importable from a plain checkout
ROOT = Path(__file__).resolve().parents[1]
for extra in (ROOT, ROOT / "scripts"):
    if str(extra) not in sys.path:
        sys.path.insert(0, str(extra))

import serve  # noqa: E402
from jsonboard.core import config as core_config  # noqa: E402
from jsonboard.core import logging_config  # noqa: E402


@pytest.fixture()
def busy_port():
    """A TCP port on 127.0.0.1 already held by a listening socket."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    sock.listen(1)
    yield sock.getsockname()[1]
    sock.close()


@pytest.fixture()
def restore_hooks(monkeypatch):
    monkeypatch.setattr(sys, "excepthook", sys.excepthook)
    monkeypatch.setattr(threading, "excepthook", threading.excepthook)


def test_bind_socket_on_busy_port_raises(busy_port):
    with pytest.raises(OSError):
        serve.bind_socket("127.0.0.1", busy_port)


def test_main_logs_and_exits_when_port_in_use(busy_port, tmp_path, monkeypatch, caplog, restore_hooks):
    monkeypatch.setenv("JSONBOARD_DB_FILE", str(tmp_path / "db.json"))
    monkeypatch.setattr(sys, "argv", ["serve.py", "--host", "127.0.0.1", "--port", str(busy_port)])
    core_config.get_settings.cache_clear()
    try:
        with caplog.at_level(logging.ERROR, logger="jsonboard.serve"):
            with pytest.raises(SystemExit) as excinfo:
                serve.main()
    finally:
        core_config.get_settings.cache_clear()

    assert excinfo.value.code == 1
    messages = [r.getMessage() for r in caplog.records if r.name == "jsonboard.serve"]
    assert any(f"Port {busy_port} is already in use" in m for m in messages)


def test_install_excepthooks_replaces_hooks(restore_hooks):
    logging_config.install_excepthooks()
    assert sys.excepthook is logging_config._log_uncaught
    assert threading.excepthook is logging_config._log_thread_uncaught


def test_uncaught_exception_is_logged(caplog):
    try:
        raise ValueError("kaboom")
    except ValueError as exc:
        error = exc
    with caplog.at_level(logging.CRITICAL, logger="jsonboard"):
        logging_config._log_uncaught(ValueError, error, error.__traceback__)
    record = caplog.records[-1]
    assert record.levelno == logging.CRITICAL
    assert record.exc_info[1] is error


def test_uncaught_thread_exception_is_logged(caplog):
    error = RuntimeError("worker died")
    args = SimpleNamespace(
        exc_type=RuntimeError,
        exc_value=error,
        exc_traceback=None,
        thread=SimpleNamespace(name="worker-1"),
    )
    with caplog.at_level(logging.CRITICAL, logger="jsonboard"):
        logging_config._log_thread_uncaught(args)
    record = caplog.records[-1]
    assert "worker-1" in record.getMessage()
    assert record.exc_info[1] is error


def test_thread_system_exit_is_not_logged(caplog):
    args = SimpleNamespace(exc_type=SystemExit, exc_value=SystemExit(0), exc_traceback=None, thread=None)
    with caplog.at_level(logging.CRITICAL, logger="jsonboard"):
        logging_config._log_thread_uncaught(args)
    assert not caplog.records


def test_main_serves_module_level_app(tmp_path, monkeypatch, restore_hooks):
    captured = {}

    class RecordingServer:
        def __init__(self, config):
            captured["config"] = config

        def run(self, sockets=None):
            captured["sockets"] = sockets

    monkeypatch.setenv("JSONBOARD_DB_FILE", str(tmp_path / "db.json"))
    monkeypatch.delenv("JSONBOARD_HOST", raising=False)
    monkeypatch.setattr(sys, "argv", ["serve.py", "--port", "3999"])
    monkeypatch.setattr(serve, "bind_socket", lambda host, port: ("bound", host, port))
    monkeypatch.setattr(serve.uvicorn, "Server", RecordingServer)
    core_config.get_settings.cache_clear()
    try:
        serve.main()
    finally:
        core_config.get_settings.cache_clear()

    assert captured["config"].app == "jsonboard.app:app"
    assert captured["config"].factory is False
    assert captured["sockets"] == [("bound", "127.0.0.1", 3999)]
