"""Wire protocol for resource plugins: request/response models and JSON codec."""

from resourcekit.protocol.models import (
    CheckRequest,
    GetRequest,
    MetadataField,
    PutRequest,
    Response,
    WireModel,
)
from resourcekit.protocol.codec import (
    decode_request,
    encode_document,
    write_document,
)

__all__ = [
    # Models
    "CheckRequest",
    "GetRequest",
    "MetadataField",
    "PutRequest",
    "Response",
    "WireModel",
    # Codec
    "decode_request",
    "encode_document",
    "write_document",
]
