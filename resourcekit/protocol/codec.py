"""Single-document JSON codec for the resource wire protocol.

Decoding reads the input stream up to EOF, so the writer must close it,
then takes the first JSON value and validates it against a request model
(unknown fields are an error).
Encoding renders the complete document to a string before anything is
written, so a failure never leaves partial JSON on stdout.
"""

from __future__ import annotations

import json
import logging
from typing import Any, TextIO, TypeVar

from pydantic import BaseModel, ValidationError
from pydantic_core import PydanticSerializationError, to_jsonable_python

from resourcekit.errors import RequestDecodeError, ResponseEncodeError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

_decoder = json.JSONDecoder()


def decode_request(stream: TextIO, model: type[ModelT]) -> ModelT:
    """Decode one request document from *stream*.

    Raises:
        RequestDecodeError: If the stream cannot be read as UTF-8, holds no
            JSON value, or the value does not match *model*.
    """
    try:
        text = stream.read()
        if isinstance(text, bytes):
            text = text.decode("utf-8")
    except (UnicodeDecodeError, OSError) as exc:
        raise RequestDecodeError(str(exc)) from exc

    try:
        raw, _ = _decoder.raw_decode(text.lstrip())
    except json.JSONDecodeError as exc:
        raise RequestDecodeError(str(exc)) from exc

    try:
        return model.model_validate(raw)
    except ValidationError as exc:
        raise RequestDecodeError(_summarize(exc)) from exc


def encode_document(value: Any, what: str) -> str:
    """Render *value* as one compact JSON document plus a trailing newline.

    Args:
        value: Models, lists and plain JSON-compatible values.
        what: Label used in the error message ("versions", "get response").

    Raises:
        ResponseEncodeError: If the value cannot be represented as JSON.
    """
    try:
        data = to_jsonable_python(value)
        return json.dumps(data, separators=(",", ":"), ensure_ascii=False, allow_nan=False) + "\n"
    except (PydanticSerializationError, TypeError, ValueError) as exc:
        raise ResponseEncodeError(what, str(exc)) from exc


def write_document(stream: TextIO, document: str, what: str) -> None:
    """Write an already-encoded document in one call and flush.

    Raises:
        ResponseEncodeError: If the stream rejects the write, e.g. a broken pipe.
    """
    try:
        stream.write(document)
        stream.flush()
    except OSError as exc:
        raise ResponseEncodeError(what, exc.strerror or str(exc)) from exc
    logger.debug("Wrote %d bytes of response", len(document))


def _summarize(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err["loc"]) or "<root>"
        parts.append(f"{loc}: {err['msg']}")
    return "; ".join(parts)
