from __future__ import annotations

import os
from pathlib import Path
from typing import Optional, Union

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ConfigDict

DEFAULT_URL = "http://127.0.0.1:9000"
DEFAULT_TIMEOUT_SEC = 60.0
DEFAULT_LOG_BODY_MAX_BYTES = 4096


def _env_bool(name: str, default: bool = False) -> bool:
    v = (os.getenv(name) or "").strip().lower()
    if not v:
        return default
    return v in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


class ClientSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: str = DEFAULT_URL
    timeout_sec: Optional[float] = DEFAULT_TIMEOUT_SEC
    strict_framing: bool = False
    http_log: bool = False
    http_log_headers: bool = False
    http_log_body_max_bytes: int = DEFAULT_LOG_BODY_MAX_BYTES


def load_settings(dotenv_path: Optional[Union[str, Path]] = None) -> ClientSettings:
    """
    Read client settings from the environment.

    `.env` (nearest to the working directory, or `dotenv_path`) is loaded
    first without overriding variables that are already set.

    - `CORENLP_URL` server address (default `http://127.0.0.1:9000`)
    - `CORENLP_TIMEOUT_SEC` per-request timeout; `0` disables it
    - `CORENLP_STRICT_FRAMING=1` rejects responses whose size prefix disagrees with the body
    - `CORENLP_HTTP_LOG=1` logs every exchange on `corenlp_client.http`
    - `CORENLP_HTTP_LOG_HEADERS=1` includes (redacted) headers in those records
    - `CORENLP_HTTP_LOG_BODY_MAX_BYTES=4096` caps captured text bodies
    """
    load_dotenv(dotenv_path or find_dotenv(usecwd=True), override=False)

    timeout = _env_float("CORENLP_TIMEOUT_SEC", DEFAULT_TIMEOUT_SEC)
    return ClientSettings(
        url=(os.getenv("CORENLP_URL") or "").strip() or DEFAULT_URL,
        timeout_sec=timeout if timeout > 0 else None,
        strict_framing=_env_bool("CORENLP_STRICT_FRAMING", default=False),
        http_log=_env_bool("CORENLP_HTTP_LOG", default=False),
        http_log_headers=_env_bool("CORENLP_HTTP_LOG_HEADERS", default=False),
        http_log_body_max_bytes=_env_int("CORENLP_HTTP_LOG_BODY_MAX_BYTES", DEFAULT_LOG_BODY_MAX_BYTES),
    )
