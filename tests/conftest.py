from __future__ import annotations

import os
from pathlib import Path
from typing import Any
from typing import Iterator

import pytest


class FakeListing:
    """Stands in for an os.scandir iterator, optionally failing after its entries."""

    def __init__(self, entries: list[Any], errno: int | None = None) -> None:
        self._entries = iter(entries)
        self._errno = errno
        self.closed = False

    def __iter__(self) -> Iterator[Any]:
        return self

    def __next__(self) -> Any:
        try:
            return next(self._entries)
        except StopIteration:
            if self._errno is None:
                raise
            raise OSError(self._errno, "Input/output error") from None

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def listing_dir(tmp_path: Path) -> Path:
    """A directory holding a.txt (5 bytes), b.bin (0 bytes) and sub/."""
    directory = tmp_path / "listing"
    directory.mkdir()
    (directory / "a.txt").write_bytes(b"hello")
    (directory / "b.bin").write_bytes(b"")
    (directory / "sub").mkdir()
    (directory / "sub" / "nested.txt").write_bytes(b"never listed")
    return directory


def real_entries(directory: Path) -> list[os.DirEntry[str]]:
    """Return the real os.DirEntry objects of a directory."""
    with os.scandir(directory) as listing:
        return list(listing)
