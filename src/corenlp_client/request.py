from __future__ import annotations

from typing import Dict, Iterable, Optional, Union

import httpx

from corenlp_client.codec import encode_delimited
from corenlp_client.properties import RequestProperties
from corenlp_client.schema import Document

CONTENT_TYPE_PROTOBUF = "application/x-protobuf"

TimeoutTypes = Union[float, httpx.Timeout]


def build_request(
    address: Union[str, httpx.URL],
    text: str,
    annotators: Iterable[str],
    *,
    timeout: Optional[TimeoutTypes] = None,
) -> httpx.Request:
    """
    Build the POST for one annotation call.

    - `properties` query param: compact JSON of `RequestProperties`
    - body: length-delimited `Document` carrying only `text`
    - `timeout` (optional) travels as the httpx `timeout` request extension,
      which the transport enforces for this request only
    """
    properties = RequestProperties.for_annotators(annotators)
    url = httpx.URL(address).copy_set_param("properties", properties.to_query_value())

    body = encode_delimited(Document(text=text))

    extensions: Dict[str, object] = {}
    if timeout is not None:
        extensions["timeout"] = httpx.Timeout(timeout).as_dict()

    return httpx.Request(
        "POST",
        url,
        headers={"content-type": CONTENT_TYPE_PROTOBUF},
        content=body,
        extensions=extensions,
    )
