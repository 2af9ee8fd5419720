from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING
from typing import Iterator

from .listermodel import DirectoryEntry

if TYPE_CHECKING:
    from types import TracebackType

PSEUDO_ENTRIES = (".", "..")


class EntryScanner:
    """Lazy, single pass listing of the entries in one directory."""

    logger = logging.getLogger(__name__)

    def __init__(self, directory: str = ".") -> None:
        """
        Initialize a scanner for the given directory. Nothing is opened yet.

        It is expected to be used with the `with` statement so the underlying
        directory handle is released on every path:

            with EntryScanner(".") as scanner:
                for entry in scanner:
                    ...

        Args:
            directory: The directory to list. Defaults to the current working
                directory.
        """
        self._directory = directory
        self._iterator: Iterator[os.DirEntry[str]] | None = None
        self._closed = False
        self.vanished = 0

    @property
    def directory(self) -> str:
        """Return the directory being listed."""
        return self._directory

    def open(self) -> None:
        """
        Open the directory listing. Does nothing if already opened.

        Raises:
            OSError: If the directory cannot be listed.
        """
        if self._iterator is not None:
            return

        self._iterator = os.scandir(self._directory)
        self.logger.debug("Opened listing of '%s'", self._directory)

    def __enter__(self) -> EntryScanner:
        """Enter a context manager, opening the listing if needed."""
        self.open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        """Exit a context manager."""
        self.close()

    def __iter__(self) -> Iterator[DirectoryEntry]:
        """
        Yield the entries of the directory in the order the OS returns them.

        Raises:
            OSError: If advancing the listing fails for any reason other than
                reaching the end of the entries.
        """
        if self._iterator is None or self._closed:
            return

        for dir_entry in self._iterator:
            entry = self._build_entry(dir_entry)
            if entry is not None:
                yield entry

        self.close()

    def close(self) -> None:
        """Release the directory handle. Safe to call more than once."""
        if self._closed:
            return

        self._closed = True
        if self._iterator is not None:
            self._iterator.close()
            self.logger.debug("Closed listing of '%s'", self._directory)

    def _build_entry(self, dir_entry: os.DirEntry[str]) -> DirectoryEntry | None:
        """Convert an os.DirEntry, returning None if the file vanished."""
        name = dir_entry.name
        if name in PSEUDO_ENTRIES:
            return DirectoryEntry(name=name, is_directory=True)

        try:
            if dir_entry.is_dir(follow_symlinks=False):
                return DirectoryEntry(name=name, is_directory=True)

            size = dir_entry.stat(follow_symlinks=False).st_size

        except FileNotFoundError:
            # Removed between the listing and the stat call
            self.logger.debug("'%s' removed during listing.", name)
            self.vanished += 1
            return None

        return DirectoryEntry(name=name, is_directory=False, size=size)
