"""Output writing for the textcon CLI that stops cleanly on interruption."""

import errno
import os
import types
from pathlib import Path
from typing import BinaryIO, Optional, TextIO, Type, Union

from textcon.cli.signal_handler import signal_handler

ENCODING = "utf-8"


class SafeWriter:
    """Write UTF-8 text to a file, file descriptor or text stream, aware of SIGINT and SIGPIPE.

    Once an interruption has been recorded, or the reading end of a pipe has gone
    away, every write raises BrokenPipeError so the caller can stop producing
    output.

    Args:
        file: A file descriptor, an open text stream such as ``sys.stdout``, or a path
            to create.

    Attributes:
        fd (int): The descriptor being written to, or -1 for a text stream.

    Example:
        >>> with SafeWriter(Path("context.txt")) as writer:  # doctest: +SKIP
        ...     writer.write("expanded text")
    """

    def __init__(self, file: Union[int, str, "os.PathLike[str]", TextIO]):
        self._file_obj: Optional[BinaryIO] = None
        self._stream: Optional[TextIO] = None
        self._closed = False
        self.fd = -1

        if isinstance(file, int):
            self.fd = file
        elif hasattr(file, "write"):
            self._stream = file  # type: ignore[assignment]
        elif isinstance(file, (str, os.PathLike)):
            self._file_obj = Path(file).open("wb")
            self.fd = self._file_obj.fileno()
        else:
            raise TypeError(f"Expected int, str, or PathLike, got {type(file).__name__}")

    def write(self, data: str) -> None:
        """Write ``data`` in full.

        Raises:
            BrokenPipeError: If an interruption was received or the pipe is closed.
            OSError: If another I/O error occurs.
            ValueError: If the writer has been closed.
        """
        if self._closed:
            raise ValueError("Cannot write to closed SafeWriter")

        if self._stream is not None:
            self._write_stream(data)
            return

        view = memoryview(data.encode(ENCODING))
        while view:
            if signal_handler.interrupted:
                raise BrokenPipeError()
            try:
                written = os.write(self.fd, view)
            except OSError as e:
                if e.errno == errno.EPIPE:
                    raise BrokenPipeError() from e
                raise
            view = view[written:]

    def _write_stream(self, data: str) -> None:
        if signal_handler.interrupted:
            raise BrokenPipeError()
        try:
            self._stream.write(data)  # type: ignore[union-attr]
            self._stream.flush()  # type: ignore[union-attr]
        except OSError as e:
            if e.errno == errno.EPIPE:
                raise BrokenPipeError() from e
            raise

    def close(self) -> None:
        """Close the file if this writer opened it; a broken pipe on close is ignored."""
        if self._closed:
            return
        self._closed = True

        if self._file_obj is not None:
            try:
                self._file_obj.close()
            except OSError as e:
                if e.errno != errno.EPIPE:
                    raise

    def __enter__(self) -> "SafeWriter":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[types.TracebackType],
    ) -> None:
        """Close the writer, letting an exception from the ``with`` block take precedence."""
        try:
            self.close()
        except OSError:
            if exc_type is None:
                raise
