"""
Self-installation of a resource plugin.

Running the plugin executable under any name other than the three entry
points, with the single argument ``install``, links each implemented
entry point under the install root back to the executable:

    /opt/resource/check -> /usr/local/bin/my-resource
    /opt/resource/in    -> /usr/local/bin/my-resource
    /opt/resource/out   -> /usr/local/bin/my-resource

The executable itself must be a real file. Installing from a symlink
would create a link-to-a-link that breaks once the original moves, and
usually means the binary is being re-run from an installed entry point.
"""

from __future__ import annotations

import logging
import os
import stat
from typing import Any, Sequence

from resourcekit.errors import (
    InstallDirectoryError,
    LinkCreationError,
    SymlinkInstallError,
    UnrecognizedArgumentsError,
)
from resourcekit.plugins.capabilities import ResourceType
from resourcekit.plugins.sdk import Verb

logger = logging.getLogger(__name__)

INSTALL_COMMAND = "install"


class Installer:
    """Creates the entry-point links for a resource.

    Attributes:
        resource: The capability set deciding which links exist.
        install_root: Absolute directory holding the entry points.
    """

    def __init__(self, resource: ResourceType[Any, Any, Any, Any], install_root: str):
        self.resource = resource
        self.install_root = install_root

    def entry_point(self, verb: Verb) -> str:
        return os.path.join(self.install_root, verb.value)

    def install(self, binary_path: str, args: Sequence[str]) -> list[str]:
        """Run the install flow.

        Args:
            binary_path: Absolute path of the running executable.
            args: Full invocation arguments, argument zero included.

        Returns:
            Entry points that link to *binary_path* afterwards.

        Raises:
            SymlinkInstallError: *binary_path* is missing or a symlink.
            UnrecognizedArgumentsError: *args* is not ``[<binary>, "install"]``.
            InstallDirectoryError: The install root cannot be created.
            LinkCreationError: An entry point could not be linked.
        """
        self.verify_binary(binary_path)

        if len(args) != 2 or args[1] != INSTALL_COMMAND:
            raise UnrecognizedArgumentsError(list(args))

        try:
            os.makedirs(self.install_root, exist_ok=True)
        except OSError as exc:
            raise InstallDirectoryError(self.install_root, exc.strerror or str(exc)) from exc

        linked = []
        for verb in self.resource.verbs:
            entry = self.entry_point(verb)
            self._link(binary_path, entry)
            linked.append(entry)

        logger.info("Installed %d entry point(s) under %s", len(linked), self.install_root)
        return linked

    def verify_binary(self, binary_path: str) -> None:
        """Refuse a binary that does not exist or is a symbolic link."""
        try:
            mode = os.lstat(binary_path).st_mode
        except OSError as exc:
            raise SymlinkInstallError(binary_path) from exc
        if stat.S_ISLNK(mode):
            raise SymlinkInstallError(binary_path)

    def _link(self, binary_path: str, entry: str) -> None:
        # An identical link from a previous install is kept as is
        if os.path.islink(entry) and os.readlink(entry) == binary_path:
            logger.debug("%s already links to %s", entry, binary_path)
            return

        try:
            os.symlink(binary_path, entry)
        except OSError as exc:
            raise LinkCreationError(entry, exc.strerror or str(exc)) from exc
        logger.debug("Linked %s -> %s", entry, binary_path)
