"""
Length-delimited protobuf framing.

Envelope layout:
  [varint: payload byte length][payload: serialized message]

This is the `writeDelimitedTo` / `parseDelimitedFrom` framing the annotation
server speaks on both request and response bodies.
"""

from __future__ import annotations

from typing import Iterator, Tuple, Type, TypeVar, Union

from google.protobuf import message as _message
# Private protobuf helpers (no public varint API); see the overflow check in read_varint.
from google.protobuf.internal.decoder import _DecodeVarint
from google.protobuf.internal.encoder import _VarintBytes

from corenlp_client.errors import EncodingError, FramingError, IncompleteMessageError, MalformedMessageError

M = TypeVar("M", bound=_message.Message)

Buffer = Union[bytes, bytearray, memoryview]


def encode_delimited(message: _message.Message) -> bytes:
    """Serialize `message` prefixed with its byte size as an unsigned varint."""
    try:
        payload = message.SerializeToString()
    except _message.EncodeError as e:
        raise EncodingError(f"failed to marshal message to wire format: {e}") from e
    return _VarintBytes(len(payload)) + payload


def read_varint(buf: Buffer, pos: int = 0) -> Tuple[int, int]:
    """
    Read one unsigned varint starting at `pos`.

    Returns `(value, next_pos)`. Empty/truncated input and varints longer than
    64 bits raise `FramingError`.
    """
    view = memoryview(buf)
    if pos >= len(view):
        raise FramingError("buffer is empty", offset=pos)
    try:
        value, next_pos = _DecodeVarint(view, pos)
    except IndexError:
        raise FramingError("unexpected end of buffer", offset=pos) from None
    except _message.DecodeError as e:
        raise FramingError(str(e), offset=pos) from e
    # _DecodeVarint masks to 64 bits; a 10th byte may only carry the top bit.
    if next_pos - pos == 10 and view[pos + 9] > 1:
        raise FramingError("varint overflows 64 bits", offset=pos)
    return int(value), next_pos


def _parse_payload(payload: Buffer, message_type: Type[M]) -> M:
    msg = message_type()
    try:
        # Partial parse: required fields are validated separately below.
        msg.MergeFromString(bytes(payload))
    except _message.DecodeError as e:
        raise MalformedMessageError(str(e)) from e

    if msg.IsInitialized():
        return msg

    missing = msg.FindInitializationErrors()
    if missing:
        raise IncompleteMessageError(missing)
    return msg


def decode_delimited(buf: Buffer, message_type: Type[M], *, strict: bool = False) -> M:
    """
    Decode one envelope from the start of `buf` into a fresh `message_type`.

    By default the declared size is advisory: everything after the varint is
    handed to the parser. With `strict=True` the declared size must match the
    number of bytes that follow it exactly.
    """
    declared, start = read_varint(buf)
    payload = memoryview(buf)[start:]
    if strict and declared != len(payload):
        raise FramingError(
            f"declared size {declared} does not match payload size {len(payload)}",
            offset=0,
        )
    return _parse_payload(payload, message_type)


def iter_delimited(buf: Buffer, message_type: Type[M]) -> Iterator[M]:
    """Yield every envelope of a concatenated stream, delimited by their size prefixes."""
    view = memoryview(buf)
    pos = 0
    while pos < len(view):
        size, start = read_varint(view, pos)
        end = start + size
        if end > len(view):
            raise FramingError(
                f"declared size {size} runs past end of buffer ({len(view) - start} bytes left)",
                offset=pos,
            )
        yield _parse_payload(view[start:end], message_type)
        pos = end
