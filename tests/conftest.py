"""Shared fixtures and stub plugins for resourcekit tests."""

from __future__ import annotations

import io
from pathlib import Path
from typing import Any

import pytest

from resourcekit.plugins import ResourceType, with_stdin, with_stdout
from resourcekit.protocol import MetadataField, Response


# ===========================================================================
# Stub capabilities
# ===========================================================================


class CheckOnly:
    """Checker returning canned versions and recording its requests."""

    def __init__(self, versions: Any = None, error: Exception | None = None):
        self.versions = [] if versions is None else versions
        self.error = error
        self.check_calls: list[Any] = []

    def check(self, request):
        self.check_calls.append(request)
        if self.error is not None:
            raise self.error
        return self.versions


class GetOnly:
    """Getter echoing the requested version back."""

    def __init__(self, error: Exception | None = None, response: Any = None):
        self.error = error
        self.response = response
        self.get_calls: list[tuple[str, Any]] = []

    def get(self, base_dir, request):
        self.get_calls.append((base_dir, request))
        if self.error is not None:
            raise self.error
        if self.response is not None:
            return self.response
        return Response(
            version=request.version,
            metadata=[MetadataField(name="dir", value=base_dir)],
        )


class PutOnly:
    """Putter producing a fixed new version."""

    def __init__(self, error: Exception | None = None):
        self.error = error
        self.put_calls: list[tuple[str, Any]] = []

    def put(self, base_dir, request):
        self.put_calls.append((base_dir, request))
        if self.error is not None:
            raise self.error
        return Response(
            version={"ref": "new"},
            metadata=[MetadataField(name="from", value=base_dir)],
        )


class FullResource(CheckOnly, GetOnly, PutOnly):
    """Implements all three capabilities."""

    def __init__(self, versions: Any = None, error: Exception | None = None):
        CheckOnly.__init__(self, versions=versions, error=error)
        GetOnly.__init__(self, error=error)
        PutOnly.__init__(self, error=error)


class GetPut(GetOnly, PutOnly):
    """Implements in and out but not check."""

    def __init__(self):
        GetOnly.__init__(self)
        PutOnly.__init__(self)


# ===========================================================================
# Fixtures
# ===========================================================================


@pytest.fixture
def install_root(tmp_path: Path) -> Path:
    """Install root under tmp_path; not created until install runs."""
    return tmp_path / "opt" / "resource"


@pytest.fixture
def binary(tmp_path: Path) -> Path:
    """A real, non-symlinked executable file."""
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    path = bin_dir / "my-resource"
    path.write_text("#!/bin/sh\n")
    path.chmod(0o755)
    return path


@pytest.fixture
def make_resource():
    """Build a ResourceType over in-memory streams.

    Returns a factory ``(impl, stdin_text="", **types) -> (resource, stdout)``.
    """

    def factory(impl: Any, stdin_text: str = "", **types: Any):
        stdout = io.StringIO()
        resource = ResourceType(
            impl,
            with_stdin(io.StringIO(stdin_text)),
            with_stdout(stdout),
            **types,
        )
        return resource, stdout

    return factory
