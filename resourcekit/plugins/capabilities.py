"""
Capability Set construction.

A ResourceType bundles whichever of the three capabilities a plugin
object provides together with the streams the protocol runs over. It is
built once at process start and not changed afterwards; options are only
applied during construction.

Example:
    from resourcekit.plugins import ResourceType, with_stdin

    resource = ResourceType(
        MyResource(),
        with_stdin(io.StringIO('{"source": {}}')),
        source_type=MySource,
        version_type=MyVersion,
    )
    resource.implemented  # ImplementedScripts.CHECK | ImplementedScripts.IN
"""

from __future__ import annotations

import logging
import sys
from typing import Any, Callable, Generic, Optional, TextIO, TypeVar

from resourcekit.plugins.sdk import Checker, Getter, ImplementedScripts, Putter, Verb
from resourcekit.protocol.models import CheckRequest, GetRequest, PutRequest, Response

logger = logging.getLogger(__name__)

S = TypeVar("S")
V = TypeVar("V")
G = TypeVar("G")
P = TypeVar("P")

ResourceTypeOption = Callable[["ResourceType[Any, Any, Any, Any]"], None]


def with_stdout(stdout: TextIO) -> ResourceTypeOption:
    """Write responses to *stdout* instead of ``sys.stdout``."""

    def apply(resource: ResourceType[Any, Any, Any, Any]) -> None:
        resource._stdout = stdout

    return apply


def with_stdin(stdin: TextIO) -> ResourceTypeOption:
    """Read requests from *stdin* instead of ``sys.stdin``."""

    def apply(resource: ResourceType[Any, Any, Any, Any]) -> None:
        resource._stdin = stdin

    return apply


class ResourceType(Generic[S, V, G, P]):
    """The capabilities of one plugin plus its I/O streams.

    Attributes:
        source_type: Type the ``source`` field is validated against.
        version_type: Type of versions, both consumed and produced.
        get_params_type: Type of ``params`` for ``in``.
        put_params_type: Type of ``params`` for ``out``.
    """

    def __init__(
        self,
        impl: Any,
        *options: ResourceTypeOption,
        source_type: Any = Any,
        version_type: Any = Any,
        get_params_type: Any = Any,
        put_params_type: Any = Any,
    ) -> None:
        self._stdout: TextIO = sys.stdout
        self._stdin: TextIO = sys.stdin
        self._checker: Optional[Checker[S, V]] = None
        self._getter: Optional[Getter[S, V, G]] = None
        self._putter: Optional[Putter[S, V, P]] = None

        self.source_type = source_type
        self.version_type = version_type
        self.get_params_type = get_params_type
        self.put_params_type = put_params_type

        if isinstance(impl, Checker):
            self._checker = impl
        if isinstance(impl, Getter):
            self._getter = impl
        if isinstance(impl, Putter):
            self._putter = impl

        for option in options:
            option(self)

        logger.debug(
            "Built resource type for %s implementing %s",
            type(impl).__name__,
            [verb.value for verb in self.verbs],
        )

    @property
    def stdin(self) -> TextIO:
        return self._stdin

    @property
    def stdout(self) -> TextIO:
        return self._stdout

    @property
    def checker(self) -> Optional[Checker[S, V]]:
        return self._checker

    @property
    def getter(self) -> Optional[Getter[S, V, G]]:
        return self._getter

    @property
    def putter(self) -> Optional[Putter[S, V, P]]:
        return self._putter

    def implements(self, verb: Verb) -> bool:
        """Check whether the capability for *verb* is present."""
        return verb.flag in self.implemented

    @property
    def implemented(self) -> ImplementedScripts:
        """Flags for every capability present."""
        flags = ImplementedScripts.NONE
        if self._checker is not None:
            flags |= ImplementedScripts.CHECK
        if self._getter is not None:
            flags |= ImplementedScripts.IN
        if self._putter is not None:
            flags |= ImplementedScripts.OUT
        return flags

    @property
    def verbs(self) -> list[Verb]:
        """Implemented verbs in protocol order."""
        return [verb for verb in Verb if self.implements(verb)]

    # -- request/response shapes --

    def check_request_model(self) -> type[CheckRequest[S, V]]:
        return CheckRequest[self.source_type, self.version_type]

    def get_request_model(self) -> type[GetRequest[S, V, G]]:
        return GetRequest[self.source_type, self.version_type, self.get_params_type]

    def put_request_model(self) -> type[PutRequest[S, P]]:
        return PutRequest[self.source_type, self.put_params_type]

    def response_model(self) -> type[Response[V]]:
        return Response[self.version_type]

    def __repr__(self) -> str:
        verbs = ",".join(verb.value for verb in self.verbs) or "none"
        return f"<ResourceType implements={verbs}>"


def new_resource_type(impl: Any, *options: ResourceTypeOption, **types: Any) -> ResourceType[Any, Any, Any, Any]:
    """Functional spelling of ``ResourceType(impl, *options, **types)``."""
    return ResourceType(impl, *options, **types)
