"""resourcekit configuration -- environment-driven settings."""

from .settings import DEFAULT_INSTALL_ROOT, Settings, settings

__all__ = [
    "DEFAULT_INSTALL_ROOT",
    "Settings",
    "settings",
]
