"""
Invocation dispatch for resource plugins.

One executable answers to three well-known paths. At start-up the
absolute path of argument zero decides what runs:

    <install-root>/check  ->  check  (stdin: CheckRequest, stdout: [Version])
    <install-root>/in     ->  get    (argv[1]: target dir, stdout: Response)
    <install-root>/out    ->  put    (argv[1]: source dir, stdout: Response)
    anything else         ->  install (argv[1] must be "install")

Each verb is a single request/response cycle: one JSON document in, one
JSON document out, nothing written when any step fails.

Example:
    from resourcekit.dispatch import Dispatcher
    from resourcekit.plugins import ResourceType

    Dispatcher(ResourceType(MyResource())).run()
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any, Optional, Sequence

from pydantic import ValidationError

from resourcekit.config.settings import settings
from resourcekit.dispatch.install import Installer
from resourcekit.errors import (
    CapabilityError,
    InvocationResolutionError,
    MissingTargetDirectoryError,
    NotImplementedVerbError,
    ResponseEncodeError,
)
from resourcekit.plugins.capabilities import ResourceType
from resourcekit.plugins.sdk import Verb
from resourcekit.protocol.codec import decode_request, encode_document, write_document
from resourcekit.protocol.models import Response

logger = logging.getLogger(__name__)


class Dispatcher:
    """Routes one process invocation to a verb or to installation.

    Attributes:
        resource: The plugin's capability set.
        install_root: Absolute directory of the well-known entry points.
        installer: Install flow bound to the same root.
    """

    def __init__(
        self,
        resource: ResourceType[Any, Any, Any, Any],
        install_root: Optional[str] = None,
    ) -> None:
        self.resource = resource
        self.install_root = os.path.abspath(
            install_root if install_root is not None else settings.RESOURCEKIT_INSTALL_ROOT
        )
        self.installer = Installer(resource, self.install_root)

    def entry_point(self, verb: Verb) -> str:
        """Absolute path of the entry point for *verb*."""
        return self.installer.entry_point(verb)

    def classify(self, binary_path: str) -> Optional[Verb]:
        """Map an absolute invocation path to a verb, or None for install."""
        for verb in Verb:
            if binary_path == self.entry_point(verb):
                return verb
        return None

    def run(self, *args: str) -> None:
        """Handle one invocation.

        Args:
            args: Invocation arguments, argument zero first. Defaults to
                ``sys.argv`` when empty.

        Raises:
            ResourceError: Any failure, tagged with the failing phase.
        """
        if not args:
            args = tuple(sys.argv)

        binary_path = self.resolve_binary(args[0])
        verb = self.classify(binary_path)
        logger.debug("Invoked as %s (%s)", binary_path, verb.value if verb else "install")

        if verb is Verb.CHECK:
            self.run_check()
        elif verb is Verb.IN:
            self.run_get(self._target_dir(args))
        elif verb is Verb.OUT:
            self.run_put(self._target_dir(args))
        else:
            self.installer.install(binary_path, args)

    def resolve_binary(self, arg0: str) -> str:
        try:
            return os.path.abspath(arg0)
        except OSError as exc:
            raise InvocationResolutionError(exc.strerror or str(exc)) from exc

    # -- verbs --

    def run_check(self) -> None:
        checker = self.resource.checker
        if checker is None:
            raise NotImplementedVerbError(self.entry_point(Verb.CHECK))

        request = decode_request(self.resource.stdin, self.resource.check_request_model())

        try:
            versions = checker.check(request)
        except Exception as exc:
            raise CapabilityError("check", exc) from exc

        document = encode_document(_as_list(versions), "versions")
        write_document(self.resource.stdout, document, "versions")

    def run_get(self, base_dir: str) -> None:
        getter = self.resource.getter
        if getter is None:
            raise NotImplementedVerbError(self.entry_point(Verb.IN))

        request = decode_request(self.resource.stdin, self.resource.get_request_model())
        if not base_dir:
            raise MissingTargetDirectoryError(self.entry_point(Verb.IN))

        try:
            response = getter.get(base_dir, request)
        except Exception as exc:
            raise CapabilityError("get", exc) from exc

        document = encode_document(self._as_response(response, "get response"), "get response")
        write_document(self.resource.stdout, document, "get response")

    def run_put(self, base_dir: str) -> None:
        putter = self.resource.putter
        if putter is None:
            raise NotImplementedVerbError(self.entry_point(Verb.OUT))

        request = decode_request(self.resource.stdin, self.resource.put_request_model())
        if not base_dir:
            raise MissingTargetDirectoryError(self.entry_point(Verb.OUT))

        try:
            response = putter.put(base_dir, request)
        except Exception as exc:
            raise CapabilityError("put", exc) from exc

        document = encode_document(self._as_response(response, "put response"), "put response")
        write_document(self.resource.stdout, document, "put response")

    # -- helpers --

    def _target_dir(self, args: Sequence[str]) -> str:
        return args[1] if len(args) > 1 else ""

    def _as_response(self, value: Any, what: str) -> Any:
        if isinstance(value, Response):
            return value
        try:
            return self.resource.response_model().model_validate(value)
        except ValidationError as exc:
            raise ResponseEncodeError(what, str(exc)) from exc


def _as_list(versions: Any) -> list[Any]:
    if isinstance(versions, (list, tuple)):
        return list(versions)
    raise ResponseEncodeError(
        "versions", f"expected a list of versions, got {type(versions).__name__}"
    )
