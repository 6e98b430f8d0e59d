from __future__ import annotations

import json

import pytest
from fastapi import FastAPI, Request, Response
from fastapi.responses import PlainTextResponse
from fastapi.testclient import TestClient

from corenlp_client import CoreNLPClient, ServerError
from corenlp_client.codec import decode_delimited, encode_delimited
from corenlp_client.schema import Document


def _create_app() -> FastAPI:
    """Tiny stand-in for the annotation server: whitespace tokenizer, one sentence."""
    app = FastAPI(title="fake-corenlp")

    @app.post("/")
    async def annotate(request: Request) -> Response:
        props = json.loads(request.query_params["properties"])
        if props.get("inputSerializer") != "edu.stanford.nlp.pipeline.ProtobufAnnotationSerializer":
            return PlainTextResponse("unsupported input serializer", status_code=400)

        doc = decode_delimited(await request.body(), Document)
        if doc.text == "fail":
            return PlainTextResponse("something failed", status_code=500)

        out = Document(text=doc.text)
        words = doc.text.split()
        if "tokenize" in props["annotators"].split(",") and words:
            sent = out.sentence.add(tokenOffsetBegin=0, tokenOffsetEnd=len(words), sentenceIndex=0)
            offset = 0
            for w in words:
                begin = doc.text.index(w, offset)
                offset = begin + len(w)
                sent.token.add(word=w, originalText=w, beginChar=begin, endChar=offset)
        return Response(content=encode_delimited(out), media_type="application/x-protobuf")

    return app


@pytest.fixture
def server():
    with TestClient(_create_app()) as tc:
        yield tc


def test_annotate_against_app(server):
    client = CoreNLPClient("http://testserver", server)
    doc = client.annotate("the quick brown fox", ["tokenize", "ssplit"])
    assert doc.text == "the quick brown fox"
    tokens = doc.sentence[0].token
    assert [t.word for t in tokens] == ["the", "quick", "brown", "fox"]
    assert (tokens[1].beginChar, tokens[1].endChar) == (4, 9)


def test_annotate_without_tokenize(server):
    client = CoreNLPClient("http://testserver", server)
    doc = client.annotate("no tokens please", [])
    assert doc.text == "no tokens please"
    assert len(doc.sentence) == 0


def test_server_failure_through_app(server):
    client = CoreNLPClient("http://testserver", server)
    with pytest.raises(ServerError) as exc:
        client.annotate("fail", ["tokenize"])
    assert exc.value.status_code == 500
    assert exc.value.body == "something failed"
