"""
Client library for CoreNLP-compatible annotation servers.

Text goes out as a length-delimited protobuf `Document`; the annotated
`Document` comes back in the same framing.

- `corenlp_client.client`: `CoreNLPClient`
- `corenlp_client.codec`: delimited encode/decode
- `corenlp_client.schema`: `Document`, `Sentence`, `Token` message classes
"""

from corenlp_client.client import CoreNLPClient
from corenlp_client.codec import decode_delimited, encode_delimited, iter_delimited, read_varint
from corenlp_client.config import ClientSettings, load_settings
from corenlp_client.errors import (
    AddressError,
    CoreNLPError,
    DecodeError,
    EncodingError,
    FramingError,
    IncompleteMessageError,
    MalformedMessageError,
    ServerError,
    TransportError,
)
from corenlp_client.executor import HttpLoggingExecutor, RequestExecutor
from corenlp_client.properties import RequestProperties
from corenlp_client.request import build_request
from corenlp_client.schema import Document, Sentence, Token

__all__ = [
    "AddressError",
    "ClientSettings",
    "CoreNLPClient",
    "CoreNLPError",
    "DecodeError",
    "Document",
    "EncodingError",
    "FramingError",
    "HttpLoggingExecutor",
    "IncompleteMessageError",
    "MalformedMessageError",
    "RequestExecutor",
    "RequestProperties",
    "Sentence",
    "ServerError",
    "Token",
    "TransportError",
    "build_request",
    "decode_delimited",
    "encode_delimited",
    "iter_delimited",
    "load_settings",
    "read_varint",
]
