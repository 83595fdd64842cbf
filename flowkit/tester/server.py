"""A threaded WSGI server that can stop and wait for its requests to finish."""

from __future__ import annotations

import hashlib
import logging
import socket
import threading
import time
from socketserver import ThreadingMixIn
from typing import Any, Callable, Iterable
from wsgiref.simple_server import WSGIRequestHandler, WSGIServer, make_server

INSTANCE_ID_HEADER = "X-Server-Instance-Id"

_CLIENT_CAPACITY = 50000
_POLL_INTERVAL = 0.1

_logger = logging.getLogger(__name__)

WSGIApp = Callable[[dict, Callable[..., Any]], Iterable[bytes]]


class ServerError(Exception):
    """Raised when the server is misused or fails to start or stop cleanly."""


class _ThreadingWSGIServer(ThreadingMixIn, WSGIServer):
    daemon_threads = True
    block_on_close = False


class _LoggingHandler(WSGIRequestHandler):
    """Request handler that sends access lines to the module logger."""

    def log_message(self, format: str, *args: Any) -> None:
        _logger.debug("%s - %s", self.address_string(), format % args)


def _parse_addr(addr: str) -> tuple[str, int]:
    host, sep, port = addr.rpartition(":")
    if not sep:
        raise ServerError(f"missing port in address {addr}")
    host = host.strip("[]")
    if port.isdigit():
        return host, int(port)
    try:
        return host, socket.getservbyname(port, "tcp")
    except OSError as err:
        raise ServerError(f"unknown port {port!r} in address {addr}") from err


class _ClientResponse:
    """Response iterable that signals when the request is finished."""

    def __init__(self, result: Iterable[bytes], on_close: Callable[[], None]) -> None:
        self._result = result
        self._on_close = on_close
        self._closed = False

    def __iter__(self):
        return iter(self._result)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            close = getattr(self._result, "close", None)
            if close is not None:
                close()
        finally:
            self._on_close()


class Server:
    """Serves a WSGI application on ``addr`` (``"host:port"``, ``":port"``).

    Each response carries an ``X-Server-Instance-Id`` header. An empty address
    means port 80 on all interfaces.
    """

    def __init__(self, addr: str, handler: WSGIApp | None) -> None:
        self.addr = addr
        self.handler = handler
        self._instance_id = ""
        self._httpd: _ThreadingWSGIServer | None = None
        self._thread: threading.Thread | None = None
        self._last_error: BaseException | None = None
        self._stopped = False
        self._clients = threading.Condition()
        self._active = 0

    @property
    def instance_id(self) -> str:
        return self._instance_id

    @property
    def address(self) -> tuple[str, int]:
        """Return the host and port the server is bound to."""
        if self._httpd is None:
            raise ServerError("server not started")
        host, port = self._httpd.server_address[:2]
        return host, port

    def start(self) -> None:
        """Start serving in a background thread and return at once."""
        if self.handler is None:
            raise ServerError("no server handler set")
        if self._httpd is not None:
            raise ServerError("server already started")

        addr = self.addr or ":http"
        host, port = _parse_addr(addr)
        self._instance_id = hashlib.md5((socket.gethostname() + addr).encode()).hexdigest()

        try:
            httpd = make_server(
                host,
                port,
                self._wrap(self.handler),
                server_class=_ThreadingWSGIServer,
                handler_class=_LoggingHandler,
            )
        except OSError as err:
            raise ServerError(str(err)) from err

        self._httpd = httpd
        self._thread = threading.Thread(target=self._serve, name="flow-tester-server", daemon=True)
        self._thread.start()

    def _serve(self) -> None:
        try:
            self._httpd.serve_forever(poll_interval=0.05)
        except Exception as err:  # kept for stop() and wait_stop()
            self._last_error = err

    def _enter(self) -> None:
        with self._clients:
            while self._active >= _CLIENT_CAPACITY:
                self._clients.wait()
            self._active += 1

    def _leave(self) -> None:
        with self._clients:
            self._active -= 1
            self._clients.notify_all()

    def _wrap(self, app: WSGIApp) -> WSGIApp:
        instance_id = self._instance_id

        def wrapped(environ: dict, start_response: Callable[..., Any]) -> Iterable[bytes]:
            self._enter()

            def tagged_start_response(status, headers, exc_info=None):
                return start_response(status, [*headers, (INSTANCE_ID_HEADER, instance_id)], exc_info)

            try:
                result = app(environ, tagged_start_response)
            except BaseException:
                self._leave()
                raise
            return _ClientResponse(result, self._leave)

        return wrapped

    def _raise_last_error(self) -> None:
        if self._last_error is not None:
            raise ServerError(str(self._last_error)) from self._last_error

    def stop(self) -> None:
        """Stop accepting connections; requests in progress run to the end."""
        if self._httpd is None:
            raise ServerError("server not started")
        if not self._stopped:
            self._stopped = True
            self._httpd.shutdown()
            self._httpd.server_close()
        self._raise_last_error()

    def is_started(self) -> bool:
        """Return whether the server runs or still has requests to finish."""
        if self._httpd is not None and not self._stopped:
            return True
        with self._clients:
            return self._active > 0

    def wait_stop(self, timeout: float) -> None:
        """Wait until the server has stopped and every request has finished.

        ``timeout`` is the number of seconds to wait for the requests once
        the server has stopped.
        """
        if self._httpd is None:
            raise ServerError("server not started")
        self._thread.join()

        deadline = time.monotonic() + timeout
        with self._clients:
            while self._active > 0:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    raise ServerError(
                        f"WaitStop error, timeout after {timeout}s waiting for "
                        f"{self._active} client(s) to finish"
                    )
                self._clients.wait(min(remaining, _POLL_INTERVAL))
        self._raise_last_error()