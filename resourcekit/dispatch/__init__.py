"""Invocation dispatch: path classification, verb execution and self-installation."""

from resourcekit.dispatch.install import INSTALL_COMMAND, Installer
from resourcekit.dispatch.runner import Dispatcher

__all__ = [
    "Dispatcher",
    "INSTALL_COMMAND",
    "Installer",
]
