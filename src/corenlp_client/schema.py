"""
Annotation document schema (subset of CoreNLP's `CoreNLP.proto`).

The message classes are built at import time from the field table below, so
the package ships without generated `_pb2` modules. Only the fields the client
reads are declared; anything else the server sends is kept by protobuf as
unknown fields and survives a re-serialization untouched.

Wire numbers follow the server's proto2 definitions:
- Document.text is optional here (the client relies on decoding documents
  that only carry optional data)
- Sentence.tokenOffsetBegin / tokenOffsetEnd are required, like upstream
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory

PROTO_PACKAGE = "edu.stanford.nlp.pipeline"

_F = descriptor_pb2.FieldDescriptorProto
_OPT = _F.LABEL_OPTIONAL
_REQ = _F.LABEL_REQUIRED
_REP = _F.LABEL_REPEATED

# (name, number, type, label, message type name)
_FieldDef = Tuple[str, int, int, int, Optional[str]]

_MESSAGES: Dict[str, List[_FieldDef]] = {
    "Token": [
        ("word", 1, _F.TYPE_STRING, _OPT, None),
        ("pos", 2, _F.TYPE_STRING, _OPT, None),
        ("value", 3, _F.TYPE_STRING, _OPT, None),
        ("category", 4, _F.TYPE_STRING, _OPT, None),
        ("before", 5, _F.TYPE_STRING, _OPT, None),
        ("after", 6, _F.TYPE_STRING, _OPT, None),
        ("originalText", 7, _F.TYPE_STRING, _OPT, None),
        ("ner", 8, _F.TYPE_STRING, _OPT, None),
        ("normalizedNER", 9, _F.TYPE_STRING, _OPT, None),
        ("lemma", 10, _F.TYPE_STRING, _OPT, None),
        ("beginChar", 11, _F.TYPE_UINT32, _OPT, None),
        ("endChar", 12, _F.TYPE_UINT32, _OPT, None),
    ],
    "Sentence": [
        ("token", 1, _F.TYPE_MESSAGE, _REP, "Token"),
        ("tokenOffsetBegin", 2, _F.TYPE_UINT32, _REQ, None),
        ("tokenOffsetEnd", 3, _F.TYPE_UINT32, _REQ, None),
        ("sentenceIndex", 4, _F.TYPE_UINT32, _OPT, None),
        ("characterOffsetBegin", 5, _F.TYPE_UINT32, _OPT, None),
        ("characterOffsetEnd", 6, _F.TYPE_UINT32, _OPT, None),
    ],
    "Document": [
        ("text", 1, _F.TYPE_STRING, _OPT, None),
        ("sentence", 2, _F.TYPE_MESSAGE, _REP, "Sentence"),
        ("docID", 4, _F.TYPE_STRING, _OPT, None),
        ("sentencelessToken", 5, _F.TYPE_MESSAGE, _REP, "Token"),
        ("docDate", 7, _F.TYPE_STRING, _OPT, None),
        ("calendar", 8, _F.TYPE_UINT64, _OPT, None),
    ],
}


def _file_descriptor_proto() -> descriptor_pb2.FileDescriptorProto:
    fdp = descriptor_pb2.FileDescriptorProto(
        name="corenlp_client/CoreNLP.proto",
        package=PROTO_PACKAGE,
        syntax="proto2",
    )
    for msg_name, fields in _MESSAGES.items():
        msg = fdp.message_type.add(name=msg_name)
        for name, number, ftype, label, type_name in fields:
            field = msg.field.add(name=name, number=number, type=ftype, label=label)
            if type_name:
                field.type_name = f".{PROTO_PACKAGE}.{type_name}"
    return fdp


# Private pool: never clashes with generated CoreNLP modules in the default pool.
_pool = descriptor_pool.DescriptorPool()
_pool.AddSerializedFile(_file_descriptor_proto().SerializeToString())


def _message_class(name: str):
    return message_factory.GetMessageClass(_pool.FindMessageTypeByName(f"{PROTO_PACKAGE}.{name}"))


Token = _message_class("Token")
Sentence = _message_class("Sentence")
Document = _message_class("Document")

__all__ = ["Document", "PROTO_PACKAGE", "Sentence", "Token"]
