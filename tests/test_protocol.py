"""Tests for resourcekit.protocol models and JSON codec.

Tests cover:
- Strict request models (unknown fields rejected, immutability)
- Generic parametrization with plugin shapes
- Single-document decoding
- Compact, deterministic encoding
"""

from __future__ import annotations

import io
import json

import pytest
from pydantic import BaseModel, ConfigDict, ValidationError

from resourcekit.errors import RequestDecodeError, ResponseEncodeError
from resourcekit.protocol import (
    CheckRequest,
    GetRequest,
    MetadataField,
    PutRequest,
    Response,
    decode_request,
    encode_document,
    write_document,
)


class GitSource(BaseModel):
    model_config = ConfigDict(extra="forbid")

    uri: str
    branch: str = "main"


class GitVersion(BaseModel):
    ref: str


# ===========================================================================
# Models
# ===========================================================================


class TestModels:
    """Tests for the wire models."""

    def test_check_request_version_optional(self):
        """version may be absent, meaning latest only."""
        req = CheckRequest.model_validate({"source": {"x": 1}})
        assert req.source == {"x": 1}
        assert req.version is None

    def test_check_request_explicit_null(self):
        req = CheckRequest.model_validate({"source": {}, "version": None})
        assert req.version is None

    def test_check_request_rejects_unknown_field(self):
        with pytest.raises(ValidationError):
            CheckRequest.model_validate({"source": {}, "version": None, "extra": 1})

    def test_get_request_requires_version(self):
        with pytest.raises(ValidationError):
            GetRequest.model_validate({"source": {}})

    def test_get_request_params_default_none(self):
        req = GetRequest.model_validate({"source": {}, "version": {"ref": "a"}})
        assert req.params is None

    def test_put_request_has_no_version(self):
        with pytest.raises(ValidationError):
            PutRequest.model_validate({"source": {}, "params": {}, "version": {"ref": "a"}})

    def test_response_metadata_defaults_empty(self):
        resp = Response(version={"ref": "a"})
        assert resp.metadata == []

    def test_metadata_field_rejects_unknown(self):
        with pytest.raises(ValidationError):
            MetadataField.model_validate({"name": "a", "value": "b", "url": "c"})

    def test_models_are_frozen(self):
        req = CheckRequest.model_validate({"source": {}})
        with pytest.raises(ValidationError):
            req.source = {"changed": True}

    def test_parametrized_request_validates_plugin_shapes(self):
        model = CheckRequest[GitSource, GitVersion]
        req = model.model_validate(
            {"source": {"uri": "https://example.com/repo.git"}, "version": {"ref": "abc"}}
        )
        assert isinstance(req.source, GitSource)
        assert req.source.branch == "main"
        assert req.version == GitVersion(ref="abc")

    def test_parametrized_request_rejects_bad_source(self):
        model = CheckRequest[GitSource, GitVersion]
        with pytest.raises(ValidationError):
            model.model_validate({"source": {"uri": "x", "depth": 1}})


# ===========================================================================
# Decoding
# ===========================================================================


class TestDecodeRequest:
    """Tests for decode_request."""

    def test_decodes_single_document(self):
        req = decode_request(io.StringIO('{"source": {"x": 1}, "version": null}'), CheckRequest)
        assert req.source == {"x": 1}

    def test_only_first_value_is_read(self):
        stream = io.StringIO('{"source": {}}\n{"source": {"ignored": true}}')
        req = decode_request(stream, CheckRequest)
        assert req.source == {}

    def test_leading_whitespace_allowed(self):
        req = decode_request(io.StringIO('\n  {"source": 1}'), CheckRequest)
        assert req.source == 1

    def test_empty_input_fails(self):
        with pytest.raises(RequestDecodeError, match="could not decode source"):
            decode_request(io.StringIO(""), CheckRequest)

    def test_malformed_json_fails(self):
        with pytest.raises(RequestDecodeError):
            decode_request(io.StringIO('{"source": '), CheckRequest)

    def test_unknown_field_fails_with_location(self):
        with pytest.raises(RequestDecodeError) as exc_info:
            decode_request(io.StringIO('{"source": {}, "bogus": 1}'), CheckRequest)
        assert "bogus" in str(exc_info.value)
        assert exc_info.value.phase == "decode"

    def test_non_object_fails(self):
        with pytest.raises(RequestDecodeError):
            decode_request(io.StringIO("[1, 2]"), CheckRequest)

    def test_invalid_utf8_text_stream_fails(self):
        stream = io.TextIOWrapper(io.BytesIO(b'{"source": "\xff"}'), encoding="utf-8")
        with pytest.raises(RequestDecodeError, match="could not decode source"):
            decode_request(stream, CheckRequest)

    def test_invalid_utf8_binary_stream_fails(self):
        with pytest.raises(RequestDecodeError):
            decode_request(io.BytesIO(b"\xff"), CheckRequest)

    def test_binary_stream_decoded(self):
        req = decode_request(io.BytesIO(b'{"source": {"x": 1}}'), CheckRequest)
        assert req.source == {"x": 1}


# ===========================================================================
# Encoding
# ===========================================================================


class TestEncodeDocument:
    """Tests for encode_document and write_document."""

    def test_compact_list(self):
        doc = encode_document([{"y": 1}, {"y": 2}], "versions")
        assert doc == '[{"y":1},{"y":2}]\n'

    def test_empty_list(self):
        assert encode_document([], "versions") == "[]\n"

    def test_response_model(self):
        resp = Response(
            version={"ref": "abc"},
            metadata=[MetadataField(name="author", value="dev")],
        )
        doc = encode_document(resp, "get response")
        assert json.loads(doc) == {
            "version": {"ref": "abc"},
            "metadata": [{"name": "author", "value": "dev"}],
        }

    def test_plugin_models_are_serialized(self):
        doc = encode_document([GitVersion(ref="a")], "versions")
        assert json.loads(doc) == [{"ref": "a"}]

    def test_non_ascii_kept(self):
        doc = encode_document([{"name": "café"}], "versions")
        assert "café" in doc

    def test_unserializable_value_fails(self):
        with pytest.raises(ResponseEncodeError, match="could not output versions"):
            encode_document([object()], "versions")

    def test_nan_fails(self):
        with pytest.raises(ResponseEncodeError):
            encode_document([{"n": float("nan")}], "versions")

    def test_round_trip(self):
        resp = Response[GitVersion](
            version=GitVersion(ref="abc"),
            metadata=[MetadataField(name="k", value="v")],
        )
        decoded = Response[GitVersion].model_validate_json(encode_document(resp, "get response"))
        assert decoded == resp

    def test_write_document_flushes(self):
        out = io.StringIO()
        write_document(out, "[]\n", "versions")
        assert out.getvalue() == "[]\n"

    def test_write_failure_wrapped(self):
        class ClosedPipe(io.StringIO):
            def write(self, s):
                raise BrokenPipeError(32, "Broken pipe")

        with pytest.raises(ResponseEncodeError) as exc_info:
            write_document(ClosedPipe(), "[]\n", "versions")
        assert str(exc_info.value) == "could not output versions: Broken pipe"
        assert exc_info.value.phase == "encode"
