from __future__ import annotations

import dataclasses


@dataclasses.dataclass(frozen=True)
class DirectoryEntry:
    """A single entry produced while listing a directory."""

    name: str
    is_directory: bool
    size: int = 0


@dataclasses.dataclass
class ListResult:
    """The outcome of a single listing run."""

    output_path: str
    success: bool = True
    lines_written: int = 0
    files_skipped: int = 0
    short_writes: int = 0
    directories_skipped: int = 0

    def __str__(self) -> str:
        """Return a one line summary of the run."""
        status = "success" if self.success else "failed"
        return (
            f"{self.output_path} ({status}, {self.lines_written} lines written,"
            f" {self.files_skipped} files skipped,"
            f" {self.directories_skipped} directories skipped,"
            f" {self.short_writes} short writes)"
        )
