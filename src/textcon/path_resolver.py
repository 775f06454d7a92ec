"""Sandboxed resolution of reference strings to filesystem paths.

A reference such as ``@!/src/../README.md`` is reduced to a path relative to the
base directory, joined onto it and canonicalized. The canonical result must stay
inside the canonical base directory; anything else is a traversal attempt.
"""

import logging
import os
from pathlib import Path

from textcon.exceptions import (
    DirectoryNotFoundError,
    PathTraversalError,
    ReferenceFileNotFoundError,
    TextconIOError,
)
from textcon.types import PathType

logger = logging.getLogger(__name__)

_SEPARATORS = "/\\"


def strip_reference_markers(reference: str) -> str:
    """Remove the ``@`` prefix, an optional ``!`` and any leading separators.

    Example:
        >>> strip_reference_markers("@!///src/main.py")
        'src/main.py'
        >>> strip_reference_markers("@\\\\docs/")
        'docs/'
        >>> strip_reference_markers("@")
        ''
    """
    cleaned = reference[1:] if reference.startswith("@") else reference
    if cleaned.startswith("!"):
        cleaned = cleaned[1:]
    return cleaned.lstrip(_SEPARATORS)


def names_directory(cleaned: str) -> bool:
    """Tell whether a cleaned reference was written as a directory.

    A trailing separator, ``.`` or an empty remainder all denote a directory.

    Example:
        >>> names_directory("src/"), names_directory("."), names_directory("main.py")
        (True, True, False)
    """
    return cleaned in ("", ".") or cleaned.endswith(tuple(_SEPARATORS))


def is_within(path: Path, base_dir: Path) -> bool:
    """Return True if ``path`` is ``base_dir`` itself or one of its descendants."""
    try:
        path.relative_to(base_dir)
    except ValueError:
        return False
    return True


def resolve_reference_path(reference: str, base_dir: PathType) -> Path:
    """Resolve a reference string to a canonical path inside ``base_dir``.

    Symlinks and ``.``/``..`` segments are resolved for the part of the path that
    exists; a missing final component is appended to its canonical parent so that
    missing files can still be reported precisely.

    Args:
        reference: The reference, with or without the ``@``/``@!`` markers.
        base_dir: The sandbox root.

    Returns:
        The canonical path of the referenced entry. It may not exist when only its
        last component is missing.

    Raises:
        PathTraversalError: If the canonical path escapes ``base_dir``.
        ReferenceFileNotFoundError: If an intermediate directory is missing and
            the reference names a file.
        DirectoryNotFoundError: If an intermediate directory is missing and the
            reference names a directory.
        TextconIOError: If the path cannot be inspected, for example because
            a component is too long or the reference contains a null byte.
    """
    cleaned = strip_reference_markers(reference)
    relative = "." if cleaned in ("", ".") else cleaned
    base_canonical = Path(base_dir).resolve()

    # realpath resolves symlinks in the existing prefix and normalizes the rest lexically
    try:
        canonical = Path(os.path.realpath(base_canonical / relative))
    except (OSError, ValueError) as e:
        raise TextconIOError(base_canonical / relative, str(e)) from e

    if not is_within(canonical, base_canonical):
        logger.debug("Rejected %r: resolves to %s outside %s", reference, canonical, base_canonical)
        raise PathTraversalError(canonical)

    try:
        canonical.stat()
    except (FileNotFoundError, NotADirectoryError):
        if not canonical.parent.is_dir():
            if names_directory(cleaned):
                raise DirectoryNotFoundError(canonical)
            raise ReferenceFileNotFoundError(canonical)
    except (OSError, ValueError) as e:
        raise TextconIOError(canonical, getattr(e, "strerror", None) or str(e)) from e

    logger.debug("Resolved %r to %s", reference, canonical)
    return canonical


def relative_display_path(path: PathType, base_dir: PathType) -> str:
    """Render ``path`` relative to ``base_dir`` with ``/`` separators.

    The base directory itself is rendered as ``.``; paths outside it are
    rendered unchanged.

    Example:
        >>> relative_display_path("/work/src/main.py", "/work")
        'src/main.py'
        >>> relative_display_path("/work", "/work")
        '.'
    """
    try:
        relative = Path(path).relative_to(base_dir)
    except ValueError:
        return str(path)
    return relative.as_posix()
