from __future__ import annotations

import logging
import time
from typing import Any, Iterable, Optional

import httpx

from corenlp_client.codec import decode_delimited
from corenlp_client.config import DEFAULT_TIMEOUT_SEC, ClientSettings, load_settings
from corenlp_client.errors import (
    AddressError,
    DecodeError,
    FramingError,
    IncompleteMessageError,
    MalformedMessageError,
    ServerError,
    TransportError,
)
from corenlp_client.executor import HttpLoggingExecutor, RequestExecutor
from corenlp_client.request import TimeoutTypes, build_request
from corenlp_client.schema import Document

logger = logging.getLogger("corenlp_client.client")

# Per-call marker for "use the client default"; `None` means no timeout at all.
_CLIENT_DEFAULT: Any = object()


def _parse_address(address: str) -> httpx.URL:
    try:
        url = httpx.URL(address)
    except (httpx.InvalidURL, TypeError) as e:
        raise AddressError(str(address), str(e)) from e
    if not url.scheme:
        raise AddressError(address, "missing scheme")
    if not url.host:
        raise AddressError(address, "missing host")
    return url


class CoreNLPClient:
    """
    Client for a CoreNLP-compatible annotation server.

    The address is validated once here. Each `annotate` call performs exactly
    one exchange through `executor` and holds no state between calls, so one
    instance can be shared across threads whenever the executor can.

    When no executor is given an `httpx.Client` is created and owned by this
    instance (closed by `close()` / the context manager). Caller-supplied
    executors are never closed.

    `timeout` is attached to every request unless overridden per call. With
    `timeout=None` the client attaches nothing and leaves timeouts entirely
    to the executor. A per-call `timeout=None` disables the timeout.
    """

    def __init__(
        self,
        address: str,
        executor: Optional[RequestExecutor] = None,
        *,
        timeout: Optional[TimeoutTypes] = DEFAULT_TIMEOUT_SEC,
        strict_framing: bool = False,
    ) -> None:
        self._url = _parse_address(address)
        self._owned: Optional[httpx.Client] = None
        if executor is None:
            self._owned = httpx.Client()
            executor = self._owned
        self._executor = executor
        self.timeout = timeout
        self.strict_framing = strict_framing

    @classmethod
    def from_settings(cls, settings: ClientSettings) -> "CoreNLPClient":
        http = httpx.Client(timeout=settings.timeout_sec)
        executor: RequestExecutor = http
        if settings.http_log:
            executor = HttpLoggingExecutor(
                http,
                log_headers=settings.http_log_headers,
                max_body_bytes=settings.http_log_body_max_bytes,
            )
        try:
            client = cls(
                settings.url,
                executor,
                timeout=settings.timeout_sec,
                strict_framing=settings.strict_framing,
            )
        except AddressError:
            http.close()
            raise
        client._owned = http
        return client

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "CoreNLPClient":
        return cls.from_settings(load_settings(dotenv_path))

    @property
    def address(self) -> str:
        return str(self._url)

    def annotate(
        self,
        text: str,
        annotators: Iterable[str],
        *,
        timeout: Optional[TimeoutTypes] = _CLIENT_DEFAULT,
    ) -> Any:
        """
        Annotate `text` with the given annotator pipeline and return the `Document`.

        `timeout` overrides the client default for this call only; `None`
        disables the timeout for this call.

        Raises:
          TransportError: the exchange or the body read failed (timeouts included)
          ServerError: HTTP status >= 400; carries status code and raw body
          DecodeError: the response body is not a valid delimited document
        """
        annotators = list(annotators)
        request = build_request(
            self._url,
            text,
            annotators,
            timeout=self.timeout if timeout is _CLIENT_DEFAULT else httpx.Timeout(timeout),
        )

        started_at = time.perf_counter()
        try:
            response = self._executor.send(request)
        except (httpx.HTTPError, OSError) as e:
            raise TransportError(f"failed to execute request: {e}") from e

        try:
            content = response.read()
        except (httpx.HTTPError, httpx.StreamError, OSError) as e:
            raise TransportError(f"failed to read response body: {e}") from e
        finally:
            response.close()

        logger.debug(
            "annotate annotators=%s request_bytes=%s status=%s response_bytes=%s dur_ms=%s",
            ",".join(annotators),
            len(request.content),
            response.status_code,
            len(content),
            int((time.perf_counter() - started_at) * 1000),
        )

        if response.status_code >= 400:
            raise ServerError(
                response.status_code,
                content.decode("utf-8", errors="replace"),
                content,
            )

        try:
            return decode_delimited(content, Document, strict=self.strict_framing)
        except (FramingError, MalformedMessageError, IncompleteMessageError) as e:
            raise DecodeError(e) from e

    def close(self) -> None:
        if self._owned is not None:
            self._owned.close()

    def __enter__(self) -> "CoreNLPClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
