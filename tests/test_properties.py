from __future__ import annotations

import json

from corenlp_client.properties import DATA_SERIALIZER_PROTOBUF, RequestProperties


def test_properties_serialize_compactly_in_fixed_key_order():
    value = RequestProperties.for_annotators(["tokenize", "ssplit", "pos"]).to_query_value()
    assert value == (
        '{"outputFormat":"serialized",'
        '"serializer":"edu.stanford.nlp.pipeline.ProtobufAnnotationSerializer",'
        '"annotators":"tokenize,ssplit,pos",'
        '"inputFormat":"serialized",'
        '"inputSerializer":"edu.stanford.nlp.pipeline.ProtobufAnnotationSerializer"}'
    )


def test_annotators_keep_order_and_duplicates():
    props = RequestProperties.for_annotators(["pos", "tokenize", "tokenize"])
    assert props.annotators == "pos,tokenize,tokenize"


def test_empty_annotator_list_still_sends_key():
    data = json.loads(RequestProperties.for_annotators([]).to_query_value())
    assert data["annotators"] == ""
    assert sorted(data) == sorted(
        ["outputFormat", "serializer", "annotators", "inputFormat", "inputSerializer"]
    )


def test_formats_are_fixed():
    props = RequestProperties.for_annotators(["tokenize"])
    assert props.output_format == props.input_format == "serialized"
    assert props.serializer == props.input_serializer == DATA_SERIALIZER_PROTOBUF
