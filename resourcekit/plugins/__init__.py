"""
Plugin side of resourcekit.

A resource plugin is any object providing one or more of the capability
methods ``check``, ``get`` and ``put``. The capability contracts are
runtime-checkable Protocols (``Checker``, ``Getter``, ``Putter``), and a
``ResourceType`` gathers whichever of them an object satisfies.

Example:
    from resourcekit.plugins import ResourceType

    class GitResource:
        def check(self, request):
            return [{"ref": sha} for sha in list_commits(request.source, request.version)]

        def get(self, base_dir, request):
            clone(request.source, request.version, base_dir)
            return Response(version=request.version)

    resource = ResourceType(GitResource())
    resource.verbs  # [Verb.CHECK, Verb.IN]
"""

from resourcekit.plugins.sdk import (
    Checker,
    Getter,
    ImplementedScripts,
    Putter,
    Verb,
)
from resourcekit.plugins.capabilities import (
    ResourceType,
    ResourceTypeOption,
    new_resource_type,
    with_stdin,
    with_stdout,
)

__all__ = [
    # SDK interfaces
    "Checker",
    "Getter",
    "Putter",
    "Verb",
    "ImplementedScripts",
    # Capability set
    "ResourceType",
    "ResourceTypeOption",
    "new_resource_type",
    "with_stdin",
    "with_stdout",
]
