"""Loading flow definitions from local files or over HTTP, with caching."""

from __future__ import annotations

import base64
import binascii
import gzip
import json
import logging
import threading
import zlib
from typing import Any, Callable, Protocol
from urllib.error import HTTPError, URLError
from urllib.parse import unquote, urlparse
from urllib.request import Request, url2pathname, urlopen

URI_SCHEME_FILE = "file://"
URI_SCHEME_HTTP = "http://"
COMPRESSED_HEADER = "flow-compressed"

_GZIP_MAGIC = b"\x1f\x8b"


class FlowProviderError(Exception):
    """Raised when a flow definition cannot be fetched, decoded or parsed."""


class FlowProvider(Protocol):
    """Anything that returns the definition found at a flow URI."""

    def get_flow(self, flow_uri: str) -> Any: ...


def unzip(compressed: bytes) -> bytes:
    """Return the gzip-decompressed content of ``compressed``."""
    try:
        return gzip.decompress(compressed)
    except (OSError, EOFError, zlib.error) as err:
        raise FlowProviderError(str(err) or "invalid gzip data") from err


def decode_and_unzip(encoded: str | bytes) -> bytes:
    """Return the content of base64-encoded gzip data."""
    try:
        decoded = base64.b64decode(encoded)
    except (binascii.Error, ValueError):
        decoded = b""
    return unzip(decoded)


def _file_uri_to_path(flow_uri: str) -> str:
    parsed = urlparse(flow_uri)
    path = parsed.path
    if parsed.netloc and parsed.netloc != "localhost":
        path = f"//{parsed.netloc}{path}"
    return url2pathname(unquote(path))


class BasicRemoteFlowProvider:
    """Reads flow definitions from ``file://`` and ``http://`` URIs.

    Local files may be gzip-compressed. HTTP responses carrying the header
    ``flow-compressed: true`` hold base64-encoded gzip data.
    """

    def __init__(self, logger: logging.Logger | None = None, timeout: float | None = None) -> None:
        self.logger = logger or logging.getLogger(__name__)
        self.timeout = timeout

    def get_flow(self, flow_uri: str) -> Any:
        """Return the parsed JSON definition found at ``flow_uri``."""
        if flow_uri.startswith(URI_SCHEME_FILE):
            content = self._read_file(flow_uri)
        elif flow_uri.startswith(URI_SCHEME_HTTP):
            content = self._fetch(flow_uri)
        else:
            raise FlowProviderError(f"unsupported uri {flow_uri}")

        try:
            return json.loads(content)
        except ValueError as err:
            self.logger.error("%s", err)
            raise FlowProviderError(
                f"error unmarshalling flow with uri '{flow_uri}', {err}"
            ) from err

    def _fail(self, message: str, cause: BaseException | None = None) -> FlowProviderError:
        self.logger.error("%s", message)
        error = FlowProviderError(message)
        error.__cause__ = cause
        return error

    def _read_file(self, flow_uri: str) -> bytes:
        self.logger.info("Loading Local Flow: %s", flow_uri)
        path = _file_uri_to_path(flow_uri)
        try:
            with open(path, "rb") as fh:
                content = fh.read()
        except OSError as err:
            raise self._fail(f"error reading flow with uri '{flow_uri}', {err}", err) from err

        if content[:2] == _GZIP_MAGIC:
            try:
                return unzip(content)
            except FlowProviderError as err:
                raise self._fail(
                    f"error uncompressing flow with uri '{flow_uri}', {err}", err
                ) from err
        return content

    def _fetch(self, flow_uri: str) -> bytes:
        request = Request(flow_uri, method="GET")
        try:
            response = urlopen(request, timeout=self.timeout)
        except HTTPError as err:
            err.close()
            raise self._fail(
                f"error getting flow with uri '{flow_uri}', status code {err.code}", err
            ) from err
        except (URLError, OSError) as err:
            raise self._fail(f"error getting flow with uri '{flow_uri}', {err}", err) from err

        with response:
            self.logger.info("response Status: %s", response.status)
            if response.status >= 300:
                raise self._fail(
                    f"error getting flow with uri '{flow_uri}', status code {response.status}"
                )
            try:
                body = response.read()
            except OSError as err:
                raise self._fail(
                    f"error reading flow response body with uri '{flow_uri}', {err}", err
                ) from err
            compressed = (response.headers.get(COMPRESSED_HEADER) or "").lower() == "true"

        if not compressed:
            return body
        try:
            return decode_and_unzip(body)
        except FlowProviderError as err:
            raise self._fail(
                f"error decoding compressed flow with uri '{flow_uri}', {err}", err
            ) from err


class FlowManager:
    """Fetches flows through a provider and keeps them by URI.

    Without ``materialize`` the provider's result is kept as it is.
    """

    def __init__(
        self,
        flow_provider: FlowProvider | None = None,
        materialize: Callable[[Any], Any] | None = None,
    ) -> None:
        self.flow_provider: FlowProvider = flow_provider or BasicRemoteFlowProvider()
        self._materialize = materialize
        self._lock = threading.Lock()
        self._flows: dict[str, Any] = {}

    def get_flow(self, uri: str) -> Any:
        """Return the flow at ``uri``, fetching and building it on first use."""
        with self._lock:
            if uri in self._flows:
                return self._flows[uri]
            rep = self.flow_provider.get_flow(uri)
            flow = rep if self._materialize is None else self._materialize(rep)
            self._flows[uri] = flow
            return flow