from __future__ import annotations

import json
import logging

import httpx
import pytest

from corenlp_client.executor import HttpLoggingExecutor, RequestExecutor
from corenlp_client.request import build_request


def _records(caplog):
    return [json.loads(r.getMessage()) for r in caplog.records if r.name == "corenlp_client.http"]


def test_httpx_client_is_an_executor():
    with httpx.Client() as c:
        assert isinstance(c, RequestExecutor)


def test_logs_one_line_per_exchange(mock_executor, caplog):
    caplog.set_level(logging.INFO, logger="corenlp_client.http")
    inner = mock_executor(
        lambda r: httpx.Response(200, content=b"\x00", headers={"content-type": "application/x-protobuf"})
    )
    executor = HttpLoggingExecutor(inner)

    res = executor.send(build_request("http://127.0.0.1:9000", "hi", ["tokenize"]))
    assert res.content == b"\x00"

    (rec,) = _records(caplog)
    assert rec["method"] == "POST"
    assert rec["status"] == 200
    assert rec["response"]["body"] == "<binary>"
    assert rec["request"]["content_type"] == "application/x-protobuf"
    assert "properties=" in rec["query"]


def test_text_body_is_captured_and_capped(mock_executor, caplog):
    caplog.set_level(logging.INFO, logger="corenlp_client.http")
    inner = mock_executor(lambda r: httpx.Response(500, text="something failed"))
    executor = HttpLoggingExecutor(inner, max_body_bytes=9)

    executor.send(build_request("http://127.0.0.1:9000", "hi", ["tokenize"]))

    (rec,) = _records(caplog)
    assert rec["status"] == 500
    assert rec["response"]["body"] == "something"
    assert rec["response"]["body_truncated"] is True


def test_headers_are_redacted(mock_executor, caplog):
    caplog.set_level(logging.INFO, logger="corenlp_client.http")
    inner = mock_executor(lambda r: httpx.Response(200, content=b"\x00"))
    executor = HttpLoggingExecutor(inner, log_headers=True)

    req = build_request("http://127.0.0.1:9000", "hi", ["tokenize"])
    req.headers["Authorization"] = "Bearer secret"
    executor.send(req)

    (rec,) = _records(caplog)
    assert rec["request"]["headers"]["authorization"] == "***"
    assert rec["request"]["headers"]["content-type"] == "application/x-protobuf"


def test_errors_are_logged_and_reraised(mock_executor, caplog):
    caplog.set_level(logging.INFO, logger="corenlp_client.http")

    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    executor = HttpLoggingExecutor(mock_executor(handler))
    with pytest.raises(httpx.ConnectError):
        executor.send(build_request("http://127.0.0.1:9000", "hi", ["tokenize"]))

    (rec,) = _records(caplog)
    assert rec["status"] is None
    assert rec["error"]["type"] == "ConnectError"
