"""Pydantic models for the check/in/out wire documents.

Each verb reads exactly one JSON document from stdin and writes exactly one
JSON document to stdout. The request models are generic over the plugin's
own Source, Version and Params shapes; parametrize them
(``CheckRequest[MySource, MyVersion]``) to have the plugin shapes validated
as part of decoding.

All wire models forbid unknown fields and are frozen once built.
"""

from __future__ import annotations

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

SourceT = TypeVar("SourceT")
VersionT = TypeVar("VersionT")
ParamsT = TypeVar("ParamsT")


class WireModel(BaseModel):
    """Strict, immutable base for every document on the wire."""

    model_config = ConfigDict(extra="forbid", frozen=True)


class MetadataField(WireModel):
    """A name/value annotation attached to a produced version."""

    name: str
    value: str


class CheckRequest(WireModel, Generic[SourceT, VersionT]):
    """Input to ``check``.

    ``version`` is the last version the orchestrator knows about. When it is
    absent the checker should report only the latest version; when present,
    every version at or after it.
    """

    source: SourceT
    version: Optional[VersionT] = None


class GetRequest(WireModel, Generic[SourceT, VersionT, ParamsT]):
    """Input to ``in``: the exact version to fetch into the target directory."""

    source: SourceT
    version: VersionT
    params: Optional[ParamsT] = None


class PutRequest(WireModel, Generic[SourceT, ParamsT]):
    """Input to ``out``. There is no version: ``out`` produces one."""

    source: SourceT
    params: Optional[ParamsT] = None


class Response(WireModel, Generic[VersionT]):
    """Output of ``in`` and ``out``."""

    version: VersionT
    metadata: list[MetadataField] = Field(default_factory=list)
