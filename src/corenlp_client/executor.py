from __future__ import annotations

import json
import logging
import time
import uuid
from typing import Any, Dict, Optional, Protocol, runtime_checkable

import httpx

logger = logging.getLogger("corenlp_client.http")


@runtime_checkable
class RequestExecutor(Protocol):
    """
    Anything able to perform one request/response exchange.

    `httpx.Client` satisfies this as-is (as does FastAPI's `TestClient`).
    Timeouts, retries and instrumentation belong at this layer.
    """

    def send(self, request: httpx.Request) -> httpx.Response:
        ...


_SENSITIVE_KEYS = {
    "authorization",
    "proxy-authorization",
    "cookie",
    "set-cookie",
    "x-api-key",
}


def _decode_headers(headers: httpx.Headers) -> Dict[str, str]:
    out: Dict[str, str] = {}
    for k, v in headers.items():
        ks = k.lower()
        out[ks] = "***" if ks in _SENSITIVE_KEYS else v
    return out


def _parse_body(content_type: str, body: bytes, max_bytes: int) -> Any:
    ct = (content_type or "").lower()
    if not body:
        return ""
    if "application/json" in ct or ct.startswith("text/"):
        return body[:max_bytes].decode("utf-8", errors="replace")
    return "<binary>"


class HttpLoggingExecutor:
    """
    Wrap an executor and log one JSON line per exchange on `corenlp_client.http`.

    Protobuf bodies are logged as `<binary>`; text bodies (server error
    messages, mostly) are captured up to `max_body_bytes`.
    """

    def __init__(
        self,
        inner: RequestExecutor,
        *,
        log_headers: bool = False,
        max_body_bytes: int = 4096,
    ) -> None:
        self.inner = inner
        self.log_headers = log_headers
        self.max_body_bytes = max(0, max_body_bytes)

    def send(self, request: httpx.Request) -> httpx.Response:
        started_at = time.perf_counter()
        request_id = request.headers.get("x-request-id") or uuid.uuid4().hex[:12]

        response: Optional[httpx.Response] = None
        err: Optional[BaseException] = None
        try:
            response = self.inner.send(request)
            # Body is needed for the record; the caller reads the cached copy.
            response.read()
            return response
        except BaseException as e:  # noqa: BLE001 - we want to log then re-raise
            err = e
            if response is not None:
                response.close()
            raise
        finally:
            dur_ms = int((time.perf_counter() - started_at) * 1000)
            req_ct = request.headers.get("content-type", "")
            record: Dict[str, Any] = {
                "id": request_id,
                "method": request.method,
                "path": request.url.path,
                "query": request.url.query.decode("latin-1", errors="ignore"),
                "status": response.status_code if response is not None else None,
                "dur_ms": dur_ms,
                "request": {
                    "content_type": req_ct,
                    "headers": _decode_headers(request.headers) if self.log_headers else {},
                    "bytes": len(request.content),
                },
            }
            if response is not None:
                res_ct = response.headers.get("content-type", "")
                body = response.content if self.max_body_bytes and err is None else b""
                record["response"] = {
                    "content_type": res_ct,
                    "headers": _decode_headers(response.headers) if self.log_headers else {},
                    "body": _parse_body(res_ct, body, self.max_body_bytes),
                    "body_truncated": len(body) > self.max_body_bytes,
                }
            if err is not None:
                record["error"] = {"type": type(err).__name__, "message": str(err)}

            # One-line JSON for easy grepping.
            try:
                logger.info(json.dumps(record, ensure_ascii=False, separators=(",", ":")))
            except Exception:
                logger.info(
                    "%s %s %s status=%s dur_ms=%s",
                    request_id,
                    request.method,
                    request.url.path,
                    record["status"],
                    dur_ms,
                )
