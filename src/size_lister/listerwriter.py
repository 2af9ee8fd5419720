from __future__ import annotations

import logging
import os
from typing import BinaryIO

DEFAULT_BUFFER_SIZE = 512
MAX_SIZE = 2**64 - 1

logger = logging.getLogger(__name__)


class LineTooLongError(ValueError):
    """Raised when a formatted line does not fit in the line buffer."""

    def __init__(self, name: str, length: int, buffer_size: int) -> None:
        super().__init__(
            f"Line for '{name}' needs {length + 1} bytes, buffer holds {buffer_size}"
        )
        self.name = name
        self.length = length
        self.buffer_size = buffer_size


def prepare_directory(path: str) -> bool:
    """
    Ensure the given directory exists.

    Args:
        path: The directory to create.

    Returns:
        True if the directory was created, False if it already existed.

    Raises:
        OSError: If the directory cannot be created for any reason other than
            already existing as a directory.
    """
    if os.path.isdir(path):
        logger.debug("Directory '%s' already exists", path)
        return False

    os.makedirs(path, exist_ok=True)
    logger.debug("Created directory '%s'", path)
    return True


def open_output(path: str) -> BinaryIO:
    """
    Open the output file for writing, discarding any previous content.

    The file is unbuffered so every write reports the bytes the OS accepted.

    Raises:
        OSError: If the file cannot be created or truncated.
    """
    sink = open(path, "wb", buffering=0)
    logger.debug("Opened '%s' for writing", path)
    return sink


def format_line(name: str, size: int, buffer_size: int = DEFAULT_BUFFER_SIZE) -> bytes:
    """
    Format one output line as `<name>\\t<size>\\r\\n`.

    The line must fit in a buffer of `buffer_size` bytes with room left for a
    terminating NUL, so at most `buffer_size - 1` bytes are allowed.

    Args:
        name: The entry name. Encoded with the filesystem encoding.
        size: The size in bytes, an unsigned 64-bit value.
        buffer_size: The size of the line buffer. Defaults to 512.

    Raises:
        LineTooLongError: If the line does not fit in the buffer.
        ValueError: If the size is not an unsigned 64-bit value.
    """
    if size < 0 or size > MAX_SIZE:
        raise ValueError(f"Size out of range for '{name}': {size}")

    line = os.fsencode(name) + b"\t" + str(size).encode("ascii") + b"\r\n"

    if len(line) >= buffer_size:
        raise LineTooLongError(name, len(line), buffer_size)

    return line


class LineWriter:
    """Append formatted lines to an open output file."""

    def __init__(self, sink: BinaryIO) -> None:
        """Initialize the writer around an open, unbuffered binary file."""
        self._sink = sink

    def write(self, line: bytes) -> int:
        """
        Write the line and return the number of bytes actually written.

        A return value smaller than len(line) is a short write; callers decide
        how to treat it.

        Raises:
            OSError: If the OS rejects the write.
        """
        written = self._sink.write(line)
        # Raw files return None when a non-blocking write would block
        return written or 0
