"""
Capability SDK for resource plugins.

This module defines the three capability interfaces a plugin can
implement, one per verb of the resource protocol.

Capability Interfaces:
    1. Checker: discover versions of the external resource (``check``)
    2. Getter: materialize one version into a directory (``in``)
    3. Putter: publish a new version from a directory (``out``)

Each interface uses Python's Protocol for structural subtyping, so a
plugin class never needs to inherit from anything: defining a ``check``
method is what makes it a Checker. A plugin may implement any subset.

Example - A resource that only fetches:
    from resourcekit.plugins.sdk import Getter
    from resourcekit.protocol import GetRequest, MetadataField, Response

    class TarballResource:
        def get(self, base_dir: str, request: GetRequest) -> Response:
            path = download(request.source["url"], request.version["ref"], base_dir)
            return Response(
                version=request.version,
                metadata=[MetadataField(name="path", value=path)],
            )

    assert isinstance(TarballResource(), Getter)
"""

from __future__ import annotations

from enum import Enum, Flag
from typing import Protocol, TypeVar, runtime_checkable

from resourcekit.protocol.models import CheckRequest, GetRequest, PutRequest, Response

SourceT = TypeVar("SourceT")
VersionT = TypeVar("VersionT")
ParamsT = TypeVar("ParamsT")


class Verb(str, Enum):
    """The three protocol verbs, valued by their entry-point file names."""

    CHECK = "check"
    IN = "in"
    OUT = "out"

    @property
    def capability(self) -> str:
        """Name of the capability implementing this verb."""
        return _CAPABILITY_NAMES[self]

    @property
    def flag(self) -> "ImplementedScripts":
        return ImplementedScripts[self.name]


_CAPABILITY_NAMES = {
    Verb.CHECK: "check",
    Verb.IN: "get",
    Verb.OUT: "put",
}


class ImplementedScripts(Flag):
    """Set of entry points a resource provides.

    Attributes:
        NONE: No capability implemented.
        CHECK: ``check`` is implemented.
        IN: ``in`` is implemented.
        OUT: ``out`` is implemented.
    """

    NONE = 0
    CHECK = 1
    IN = 2
    OUT = 4


@runtime_checkable
class Checker(Protocol[SourceT, VersionT]):
    """Interface 1: version discovery.

    Required Methods:
        check: Return the versions at or after ``request.version``
            (oldest first), or only the latest one when it is None.
    """

    def check(self, request: CheckRequest[SourceT, VersionT]) -> list[VersionT]:
        """Discover versions of the resource.

        Args:
            request: Source configuration and the last known version.

        Returns:
            Ordered list of versions, possibly empty.

        Raises:
            Exception: Any failure; reported as ``check failed``.
        """
        ...


@runtime_checkable
class Getter(Protocol[SourceT, VersionT, ParamsT]):
    """Interface 2: fetch a version.

    Required Methods:
        get: Write the requested version into ``base_dir``.
    """

    def get(
        self,
        base_dir: str,
        request: GetRequest[SourceT, VersionT, ParamsT],
    ) -> Response[VersionT]:
        """Materialize ``request.version`` into ``base_dir``.

        Args:
            base_dir: Directory the orchestrator prepared for the resource.
            request: Source, version and get params.

        Returns:
            The fetched version and its metadata.
        """
        ...


@runtime_checkable
class Putter(Protocol[SourceT, VersionT, ParamsT]):
    """Interface 3: publish a version.

    Required Methods:
        put: Create a new version from the contents of ``base_dir``.
    """

    def put(
        self,
        base_dir: str,
        request: PutRequest[SourceT, ParamsT],
    ) -> Response[VersionT]:
        """Publish a new version.

        Args:
            base_dir: Directory holding the build's inputs.
            request: Source and put params.

        Returns:
            The produced version and its metadata.
        """
        ...
