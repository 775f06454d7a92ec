"""Error taxonomy for reference resolution and template expansion.

Every failure raised by the engine derives from TextconError so that callers can
catch the whole family at once. Lower-level exceptions (OSError, UnicodeError,
pattern compilation errors) are wrapped and chained rather than leaked.
"""

from pathlib import Path
from typing import Optional

from textcon.types import PathType


class TextconError(Exception):
    """Base class for all errors raised while expanding references."""

    pass


class ReferenceFileNotFoundError(TextconError):
    """
    Exception raised when a reference names a file that does not exist.

    Attributes:
        path (Path): The resolved path that could not be found.

    Example:
        >>> str(ReferenceFileNotFoundError("/test/file.txt"))
        'File not found: /test/file.txt'
    """

    def __init__(self, path: PathType) -> None:
        self.path = Path(path)
        super().__init__(f"File not found: {self.path}")


class DirectoryNotFoundError(TextconError):
    """
    Exception raised when a reference names a directory that does not exist.

    The distinction from ReferenceFileNotFoundError is made from the shape of the
    reference (a trailing slash, ``.``, ``/`` or an empty path), not only from the
    filesystem.

    Example:
        >>> str(DirectoryNotFoundError("/test/dir"))
        'Directory not found: /test/dir'
    """

    def __init__(self, path: PathType) -> None:
        self.path = Path(path)
        super().__init__(f"Directory not found: {self.path}")


class InvalidReferenceError(TextconError):
    """
    Exception raised when a reference does not start with ``@``.

    Example:
        >>> str(InvalidReferenceError("bad_ref"))
        'Invalid reference format: bad_ref'
    """

    def __init__(self, reference: str) -> None:
        self.reference = reference
        super().__init__(f"Invalid reference format: {reference}")


class TemplateParseError(TextconError):
    """
    Exception raised when the reference scanner itself cannot be built.

    Malformed tokens in a template never raise this; only a broken matching
    pattern does.

    Example:
        >>> str(TemplateParseError(42, "unexpected token"))
        'Template parsing error at position 42: unexpected token'
    """

    def __init__(self, position: int, message: str) -> None:
        self.position = position
        self.message = message
        super().__init__(f"Template parsing error at position {position}: {message}")


class PathTraversalError(TextconError):
    """
    Exception raised when a reference resolves outside of the base directory.

    This is never recoverable: the offending reference must be changed.

    Attributes:
        path (Path): The canonical path the reference resolved to.
    """

    def __init__(self, path: PathType) -> None:
        self.path = Path(path)
        super().__init__(f"Path traversal detected (trying to access files outside working directory): {self.path}")


class FileSizeExceededError(TextconError):
    """
    Exception raised when a file is larger than the configured limit and the
    reference did not carry the force marker.

    Attributes:
        path (Path): Path of the oversized file.
        size (int): Actual file size in bytes.
        max_size (int): Configured limit in bytes.

    Example:
        >>> error = FileSizeExceededError("large.txt", 100000, 65536)
        >>> "@!large.txt" in str(error)
        True
    """

    def __init__(self, path: PathType, size: int, max_size: int) -> None:
        self.path = Path(path)
        self.size = size
        self.max_size = max_size
        name = self.path.name or "file"
        super().__init__(
            f"File size exceeds limit of {max_size} bytes: {self.path} ({size} bytes). "
            f"Use @!{name} to force inclusion."
        )


class TextconIOError(TextconError):
    """
    Exception raised when reading a file or directory fails.

    The original OSError or UnicodeError is available as ``__cause__``.
    """

    def __init__(self, path: PathType, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"IO error: {self.path}: {reason}")


class PatternError(TextconError):
    """Exception raised when an exclusion pattern cannot be compiled."""

    def __init__(self, pattern: str, reason: Optional[str] = None) -> None:
        self.pattern = pattern
        message = f"Invalid exclude pattern '{pattern}'"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class WalkError(TextconError):
    """Exception raised when a recursive directory walk cannot proceed."""

    def __init__(self, path: PathType, reason: str) -> None:
        self.path = Path(path)
        super().__init__(f"Directory traversal error: {self.path}: {reason}")
