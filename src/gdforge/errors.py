"""
Custom exceptions for gdforge.

Every failure surfaced by a build, export, clean or run operation is a
GdforgeError subclass whose str() is a one-line diagnostic.
"""

from pathlib import Path
from typing import Optional, Sequence


class GdforgeError(Exception):
    """Base exception for gdforge errors."""

    pass


class UnsupportedTargetError(GdforgeError):
    """A platform identifier does not name any known target."""

    def __init__(self, identifier: str, reason: Optional[str] = None):
        self.identifier = identifier
        message = reason or f"Unsupported target: '{identifier}'"
        super().__init__(message)


class ConfigurationError(GdforgeError):
    """The project configuration file exists but cannot be parsed."""

    pass


class ManifestError(GdforgeError):
    """The Cargo manifest could not be read or parsed."""

    pass


class MissingPackageNameError(ManifestError):
    """The Cargo manifest has no [package].name entry."""

    def __init__(self, manifest_path: Path):
        self.manifest_path = manifest_path
        super().__init__(f"Missing package name in {manifest_path}")


class ProcessFailureError(GdforgeError):
    """An external process exited with a non-zero status."""

    def __init__(self, executable: str, returncode: int, args: Sequence[str] = ()):
        self.executable = executable
        self.returncode = returncode
        self.args_list = list(args)
        super().__init__(f"'{executable}' exited with status {returncode}")


class SpawnFailureError(GdforgeError):
    """An external process could not be started at all."""

    def __init__(self, executable: str, cause: OSError):
        self.executable = executable
        self.cause = cause
        super().__init__(f"Failed to start '{executable}': {cause.strerror or cause}")


class FilesystemError(GdforgeError):
    """I/O failure while staging artifacts."""

    def __init__(self, path: Path, cause: OSError):
        self.path = path
        self.cause = cause
        super().__init__(f"Filesystem error at {path}: {cause.strerror or cause}")


class InvalidProjectError(GdforgeError):
    """The current directory is not a valid gdforge project."""

    def __init__(self, missing: Sequence[str]):
        self.missing = list(missing)
        shown = ", ".join(self.missing[:3])
        more = f" (+{len(self.missing) - 3} more)" if len(self.missing) > 3 else ""
        super().__init__(f"Invalid project, missing: {shown}{more}")


class TargetOperationError(GdforgeError):
    """A failure attributed to one target of a (possibly multi-target) request."""

    def __init__(self, target: str, operation: str, cause: GdforgeError):
        self.target = target
        self.operation = operation
        self.cause = cause
        super().__init__(f"{operation} failed for {target}: {cause}")
