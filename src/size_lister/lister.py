from __future__ import annotations

import logging
import os
import tempfile
import time
from typing import TYPE_CHECKING
from typing import BinaryIO

from .listerconfig import DEFAULT_DIRECTORY
from .listerconfig import DEFAULT_OUTPUT_FILENAME
from .listermodel import ListResult
from .listerscanner import EntryScanner
from .listerwriter import DEFAULT_BUFFER_SIZE
from .listerwriter import LineWriter
from .listerwriter import format_line
from .listerwriter import open_output
from .listerwriter import prepare_directory

if TYPE_CHECKING:
    from typing import Protocol

    class _ListerConfig(Protocol):
        @property
        def directory(self) -> str:
            ...

        @property
        def output_path(self) -> str:
            ...

        @property
        def buffer_size(self) -> int:
            ...


class Lister:
    """Write the name and size of every file in a directory to an output file."""

    logger = logging.getLogger(__name__)

    def __init__(
        self,
        directory: str = DEFAULT_DIRECTORY,
        output_path: str | None = None,
        *,
        buffer_size: int = DEFAULT_BUFFER_SIZE,
    ) -> None:
        """
        Initialize a new Lister.

        Args:
            directory: The directory to list. Defaults to the current working
                directory. Subdirectories are skipped, never entered.
            output_path: The file to write. Replaced on every run. Defaults to
                `lista_sz` in the system temporary directory.

        Keyword Args:
            buffer_size: The size of the line buffer in bytes. Entries whose
                line does not fit are skipped. Defaults to 512.

        Raises:
            ValueError: If buffer_size is not positive.
        """
        if buffer_size < 1:
            raise ValueError(f"buffer_size must be positive, got {buffer_size}")

        self._directory = directory
        self._output_path = output_path or os.path.join(
            tempfile.gettempdir(), DEFAULT_OUTPUT_FILENAME
        )
        self._buffer_size = buffer_size

    @classmethod
    def from_config(cls, config: _ListerConfig) -> Lister:
        """Build a Lister from the given configuration."""
        return cls(
            config.directory,
            config.output_path,
            buffer_size=config.buffer_size,
        )

    @property
    def output_path(self) -> str:
        """Return the path of the output file."""
        return self._output_path

    def run(self) -> ListResult:
        """
        List the directory once and write the output file.

        Errors are logged, never raised. A fatal error marks the result as
        failed; lines written before it stay in the output file.
        """
        self.logger.info("Listing '%s' into '%s'", self._directory, self._output_path)
        tic = time.perf_counter()

        result = ListResult(self._output_path)
        output_directory = os.path.dirname(self._output_path) or "."

        try:
            prepare_directory(output_directory)

        except OSError as error:
            self.logger.error(
                "Error creating directory %s: %s", output_directory, error
            )
            result.success = False
            return result

        try:
            sink = open_output(self._output_path)

        except OSError as error:
            self.logger.error("Error creating file %s: %s", self._output_path, error)
            result.success = False
            return result

        with sink:
            scanner = EntryScanner(self._directory)

            try:
                scanner.open()

            except OSError as error:
                self.logger.error(
                    "Error listing files in directory %s: %s", scanner.directory, error
                )
                result.success = False
                return result

            with scanner:
                self._write_entries(scanner, sink, result)

            result.files_skipped += scanner.vanished

        toc = time.perf_counter()
        self.logger.info("Lister finished in %s seconds", toc - tic)
        self.logger.info("Wrote %s", result)

        return result

    def _write_entries(
        self,
        scanner: EntryScanner,
        sink: BinaryIO,
        result: ListResult,
    ) -> None:
        """Format and write one line per file, updating the result in place."""
        writer = LineWriter(sink)

        try:
            for entry in scanner:
                if entry.is_directory:
                    self.logger.debug("Skipping directory '%s'", entry.name)
                    result.directories_skipped += 1
                    continue

                try:
                    line = format_line(entry.name, entry.size, self._buffer_size)

                except ValueError as error:
                    self.logger.error(
                        "Error formatting output for file %s: %s", entry.name, error
                    )
                    result.files_skipped += 1
                    continue

                try:
                    written = writer.write(line)

                except OSError as error:
                    self.logger.error(
                        "Error writing to output file %s: %s", self._output_path, error
                    )
                    result.success = False
                    return

                if written != len(line):
                    # Accepted as a warning, the run continues
                    self.logger.warning(
                        "Not all bytes were written for %s (%d of %d)",
                        entry.name,
                        written,
                        len(line),
                    )
                    result.short_writes += 1

                result.lines_written += 1

        except OSError as error:
            self.logger.error(
                "Error while listing files in %s: %s", scanner.directory, error
            )
            result.success = False
