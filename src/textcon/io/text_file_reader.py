"""Tools for reading referenced files as text."""

from pathlib import Path

from textcon.exceptions import ReferenceFileNotFoundError, TextconIOError
from textcon.types import PathType

ENCODING = "utf-8"


def file_size(path: PathType) -> int:
    """Return the size of ``path`` in bytes, following symlinks.

    Raises:
        ReferenceFileNotFoundError: If the file does not exist.
        TextconIOError: If the file cannot be stat'ed.
    """
    try:
        return Path(path).stat().st_size
    except FileNotFoundError as e:
        raise ReferenceFileNotFoundError(path) from e
    except OSError as e:
        raise TextconIOError(path, e.strerror or str(e)) from e


def read_text_file(path: PathType) -> str:
    """Read the whole of ``path`` as UTF-8 text.

    Line endings are returned exactly as stored, so expanded contents are
    byte-for-byte faithful to the file.

    Args:
        path: The file to read.

    Returns:
        The file contents.

    Raises:
        ReferenceFileNotFoundError: If ``path`` is not an existing file.
        TextconIOError: If the file cannot be opened or is not valid UTF-8. The
            original exception is chained as ``__cause__``.

    Example:
        >>> read_text_file("README.md")  # doctest: +SKIP
        '# textcon\\n...'
    """
    path = Path(path)
    if not path.is_file():
        raise ReferenceFileNotFoundError(path)

    try:
        with open(path, "r", encoding=ENCODING, newline="") as f:
            return f.read()
    except UnicodeDecodeError as e:
        raise TextconIOError(path, f"not valid {ENCODING} text ({e.reason} at byte {e.start})") from e
    except OSError as e:
        raise TextconIOError(path, e.strerror or str(e)) from e
