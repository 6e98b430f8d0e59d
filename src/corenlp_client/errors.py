from __future__ import annotations

from typing import List, Optional, Sequence


class CoreNLPError(Exception):
    """Base error for everything raised by the client."""


class AddressError(CoreNLPError):
    """Raised when the configured server address is not an absolute URL."""

    def __init__(self, address: str, reason: str) -> None:
        self.address = address
        self.reason = reason
        super().__init__(address, reason)

    def __str__(self) -> str:
        return f"failed to parse address '{self.address}': {self.reason}"


class EncodingError(CoreNLPError):
    """Raised when an outbound message cannot be serialized."""


class FramingError(CoreNLPError):
    """Raised when a size prefix is missing, truncated, overlong or disagrees with the payload."""

    def __init__(self, reason: str, offset: int = 0) -> None:
        self.reason = reason
        self.offset = offset
        super().__init__(reason, offset)

    def __str__(self) -> str:
        return f"failed to read message size varint at offset {self.offset}: {self.reason}"


class MalformedMessageError(CoreNLPError):
    """Raised when the bytes after the size prefix are not a valid protobuf message."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)

    def __str__(self) -> str:
        return f"failed to unmarshal message: {self.reason}"


class IncompleteMessageError(CoreNLPError):
    """Raised when required fields are still unset after a successful structural parse."""

    def __init__(self, missing: Sequence[str]) -> None:
        self.missing: List[str] = list(missing)
        super().__init__(self.missing)

    def __str__(self) -> str:
        return "failed to verify all fields are initialized: missing " + ", ".join(self.missing)


class TransportError(CoreNLPError):
    """
    Raised when the request could not be exchanged with the server.

    Covers connection failures, timeouts and failures while reading the body.
    The underlying exception (httpx or OS level) is chained as `__cause__`.
    """


class ServerError(CoreNLPError):
    """
    The server answered with an HTTP status >= 400.

    The body is kept verbatim (both decoded as `body` and raw as `content`);
    it is never parsed as an annotation document.
    """

    def __init__(self, status_code: int, body: str, content: Optional[bytes] = None) -> None:
        self.status_code = int(status_code)
        self.body = body
        self.content = content if content is not None else body.encode("utf-8")
        super().__init__(self.status_code, self.body, self.content)

    def __str__(self) -> str:
        return (
            "The server failed to process the request.\n"
            f"Returned HTTP status code: {self.status_code}\n"
            "Response body:\n"
            f"{self.body}"
        )


class DecodeError(CoreNLPError):
    """Wraps a codec error raised while decoding a response body."""

    def __init__(self, cause: CoreNLPError) -> None:
        self.cause = cause
        super().__init__(cause)

    def __str__(self) -> str:
        return f"failed to unmarshal response into document: {self.cause}"
