"""
resourcekit - runtime for check/in/out resource plugins.

A resource plugin implements up to three capabilities (``check``, ``get``,
``put``). resourcekit decides which one to run from the path the
executable was invoked under, decodes the JSON request from stdin, calls
the capability, and writes the JSON response to stdout. Run under any
other name with the argument ``install``, it links the well-known entry
points back to itself.

Example:
    from resourcekit import run

    class EchoResource:
        def check(self, request):
            return [request.version or {"v": "1"}]

    if __name__ == "__main__":
        run(EchoResource())
"""

__version__ = "0.1.0"

from typing import Any, Optional, Sequence

from resourcekit.errors import ResourceError
from resourcekit.plugins import (
    Checker,
    Getter,
    ImplementedScripts,
    Putter,
    ResourceType,
    Verb,
    new_resource_type,
    with_stdin,
    with_stdout,
)
from resourcekit.protocol import (
    CheckRequest,
    GetRequest,
    MetadataField,
    PutRequest,
    Response,
)
from resourcekit.dispatch import Dispatcher


def run(
    impl: Any,
    argv: Optional[Sequence[str]] = None,
    *,
    install_root: Optional[str] = None,
) -> None:
    """Dispatch one invocation of a resource plugin; see :func:`resourcekit.cli.run`."""
    from resourcekit.cli import run as _run

    _run(impl, argv, install_root=install_root)


__all__ = [
    "__version__",
    # Capabilities
    "Checker",
    "Getter",
    "Putter",
    "Verb",
    "ImplementedScripts",
    "ResourceType",
    "new_resource_type",
    "with_stdin",
    "with_stdout",
    # Wire models
    "CheckRequest",
    "GetRequest",
    "PutRequest",
    "Response",
    "MetadataField",
    # Dispatch
    "Dispatcher",
    "ResourceError",
    "run",
]
