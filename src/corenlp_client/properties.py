from __future__ import annotations

from typing import Iterable

from pydantic import BaseModel, ConfigDict, Field

DATA_FORMAT_SERIALIZED = "serialized"
DATA_SERIALIZER_PROTOBUF = "edu.stanford.nlp.pipeline.ProtobufAnnotationSerializer"


class RequestProperties(BaseModel):
    """
    Server-side pipeline configuration sent as the `properties` query parameter.

    Input and output are always the protobuf-serialized document; only the
    annotator list changes per call.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    output_format: str = Field(default=DATA_FORMAT_SERIALIZED, alias="outputFormat")
    serializer: str = Field(default=DATA_SERIALIZER_PROTOBUF, alias="serializer")
    annotators: str = Field(default="", alias="annotators")
    input_format: str = Field(default=DATA_FORMAT_SERIALIZED, alias="inputFormat")
    input_serializer: str = Field(default=DATA_SERIALIZER_PROTOBUF, alias="inputSerializer")

    @classmethod
    def for_annotators(cls, annotators: Iterable[str]) -> "RequestProperties":
        # Order and duplicates are the server's business.
        return cls(annotators=",".join(annotators))

    def to_query_value(self) -> str:
        return self.model_dump_json(by_alias=True)
