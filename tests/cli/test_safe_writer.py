"""Unit tests for the SafeWriter class in the textcon CLI."""

import errno
import io
import os
from unittest.mock import MagicMock, patch

import pytest

from textcon.cli.safe_writer import SafeWriter


@pytest.fixture
def mock_signals():
    """Replace the signal handler with one that has seen no signal."""
    with patch("textcon.cli.safe_writer.signal_handler") as mock:
        mock.interrupted = False
        yield mock


def test_init_with_fd():
    writer = SafeWriter(3)
    assert writer.fd == 3
    assert writer._file_obj is None
    assert writer._stream is None
    assert not writer._closed


def test_init_with_stream():
    stream = io.StringIO()
    writer = SafeWriter(stream)
    assert writer.fd == -1
    assert writer._stream is stream


def test_init_with_invalid_type():
    with pytest.raises(TypeError):
        SafeWriter(1.5)  # type: ignore[arg-type]


def test_write_to_path(tmp_path, mock_signals):
    target = tmp_path / "out.txt"
    with SafeWriter(target) as writer:
        writer.write("héllo\n")
        writer.write("world\n")
    assert target.read_bytes() == "héllo\nworld\n".encode("utf-8")


def test_write_to_string_path(tmp_path, mock_signals):
    target = tmp_path / "out.txt"
    with SafeWriter(str(target)) as writer:
        writer.write("text")
    assert target.read_text() == "text"


def test_write_to_stream(mock_signals):
    stream = io.StringIO()
    with SafeWriter(stream) as writer:
        writer.write("text")
    assert stream.getvalue() == "text"
    assert not stream.closed


def test_write_to_fd_handles_partial_writes(mock_signals):
    chunks = []

    def partial_write(fd, data):
        chunks.append(bytes(data[:2]))
        return min(2, len(data))

    with patch("os.write", side_effect=partial_write):
        SafeWriter(7).write("abcde")
    assert b"".join(chunks) == b"abcde"


def test_write_to_pipe(mock_signals):
    read_fd, write_fd = os.pipe()
    try:
        SafeWriter(write_fd).write("piped")
        assert os.read(read_fd, 100) == b"piped"
    finally:
        os.close(read_fd)
        os.close(write_fd)


def test_write_after_close(tmp_path, mock_signals):
    writer = SafeWriter(tmp_path / "out.txt")
    writer.close()
    with pytest.raises(ValueError):
        writer.write("late")


def test_close_twice(tmp_path, mock_signals):
    writer = SafeWriter(tmp_path / "out.txt")
    writer.close()
    writer.close()
    assert writer._closed


def test_write_when_interrupted(mock_signals):
    mock_signals.interrupted = True
    with pytest.raises(BrokenPipeError):
        SafeWriter(7).write("data")
    with pytest.raises(BrokenPipeError):
        SafeWriter(io.StringIO()).write("data")


def test_epipe_on_fd_becomes_broken_pipe(mock_signals):
    with patch("os.write", side_effect=OSError(errno.EPIPE, "Broken pipe")):
        with pytest.raises(BrokenPipeError):
            SafeWriter(7).write("data")


def test_other_os_errors_propagate(mock_signals):
    with patch("os.write", side_effect=OSError(errno.ENOSPC, "No space left on device")):
        with pytest.raises(OSError) as exc_info:
            SafeWriter(7).write("data")
    assert exc_info.value.errno == errno.ENOSPC


def test_epipe_on_stream_becomes_broken_pipe(mock_signals):
    stream = MagicMock()
    stream.write.side_effect = OSError(errno.EPIPE, "Broken pipe")
    with pytest.raises(BrokenPipeError):
        SafeWriter(stream).write("data")


def test_close_ignores_epipe(mock_signals):
    writer = SafeWriter(7)
    writer._file_obj = MagicMock()
    writer._file_obj.close.side_effect = OSError(errno.EPIPE, "Broken pipe")
    writer.close()
    assert writer._closed


def test_close_raises_other_errors(mock_signals):
    writer = SafeWriter(7)
    writer._file_obj = MagicMock()
    writer._file_obj.close.side_effect = OSError(errno.EIO, "I/O error")
    with pytest.raises(OSError):
        writer.close()


def test_exit_prefers_exception_from_block(mock_signals):
    writer = SafeWriter(7)
    writer._file_obj = MagicMock()
    writer._file_obj.close.side_effect = OSError(errno.EIO, "I/O error")
    with pytest.raises(RuntimeError):
        with writer:
            raise RuntimeError("original")
