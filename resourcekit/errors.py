"""
Error taxonomy for the resourcekit runtime.

Every failure raised by the dispatcher is a ResourceError carrying the
phase it happened in, so a single line on stderr is enough for an
orchestrator log to tell a decode problem from a broken capability.

Categories:
    configuration          - verb invoked but never implemented
    protocol               - request decode, response encode, missing target dir
    capability             - the plugin's own check/get/put raised
    installation-safety    - symlinked binary, bad arguments, mkdir/link failures
    invocation-resolution  - argument zero cannot be made absolute
"""

from __future__ import annotations


class ResourceError(Exception):
    """Base class for all runtime failures.

    Attributes:
        phase: Short identifier of the failing step.
    """

    phase: str = "runtime"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class NotImplementedVerbError(ResourceError):
    """Raised when an entry point is invoked without a matching capability."""

    phase = "configuration"

    def __init__(self, entry_point: str):
        self.entry_point = entry_point
        super().__init__(f"{entry_point} not implemented")


class RequestDecodeError(ResourceError):
    """Raised when stdin does not hold a valid request document."""

    phase = "decode"

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"could not decode source: {reason}")


class ResponseEncodeError(ResourceError):
    """Raised when a capability result cannot be serialized."""

    phase = "encode"

    def __init__(self, what: str, reason: str):
        self.reason = reason
        super().__init__(f"could not output {what}: {reason}")


class MissingTargetDirectoryError(ResourceError):
    """Raised when in/out is invoked without the target directory argument."""

    phase = "argument-validation"

    def __init__(self, entry_point: str):
        self.entry_point = entry_point
        super().__init__(f"missing target directory argument for {entry_point}")


class CapabilityError(ResourceError):
    """Wraps an exception raised by a plugin capability.

    Attributes:
        verb: Name of the verb whose capability failed.
        original: The exception raised by the capability.
    """

    phase = "capability-invocation"

    def __init__(self, verb: str, original: BaseException):
        self.verb = verb
        self.original = original
        super().__init__(f"{verb} failed: {original}")


class InvocationResolutionError(ResourceError):
    """Raised when argument zero cannot be resolved to an absolute path."""

    phase = "path-resolution"

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"could not determine path to binary: {reason}")


class SymlinkInstallError(ResourceError):
    """Raised when installing from a missing or symlinked binary."""

    phase = "symlink-safety"

    def __init__(self, binary_path: str):
        self.binary_path = binary_path
        super().__init__(f"{binary_path} must not be a symbolic link")


class UnrecognizedArgumentsError(ResourceError):
    """Raised when a non-verb invocation is anything but `<binary> install`."""

    phase = "argument-validation"

    def __init__(self, args: list[str]):
        self.args_seen = list(args)
        super().__init__(
            f"unrecognized arguments {self.args_seen}, only 'install' is allowed"
        )


class InstallDirectoryError(ResourceError):
    """Raised when the install root cannot be created."""

    phase = "directory-creation"

    def __init__(self, install_root: str, reason: str):
        self.install_root = install_root
        super().__init__(f"could not ensure {install_root} exists: {reason}")


class LinkCreationError(ResourceError):
    """Raised when an entry-point link cannot be created.

    Attributes:
        entry_point: The entry point path that failed.
    """

    phase = "link-creation"

    def __init__(self, entry_point: str, reason: str):
        self.entry_point = entry_point
        self.reason = reason
        super().__init__(f"could not create {entry_point} link: {reason}")
