from __future__ import annotations

import logging
import os
import tempfile
from configparser import ConfigParser
from configparser import Error as ConfigParserError

from .listerwriter import DEFAULT_BUFFER_SIZE

DEFAULT_DIRECTORY = "."
DEFAULT_OUTPUT_FILENAME = "lista_sz"

NEW_CONFIG = """\
[lister]
# Directory to list. Only the top level is read, subdirectories are skipped.
directory = .

# The output directory is created if missing. The output file is replaced
# on every run.
output_directory = {output_directory}
output_filename = lista_sz

# Lines longer than buffer_size - 1 bytes are skipped with an error.
buffer_size = 512
"""


class ListerConfig:
    """Configuration for the Lister."""

    logger = logging.getLogger("size_lister.ListerConfig")

    def __init__(self, filepath: str | None = None) -> None:
        """
        Load the configuration from the given file.

        Without a filepath every setting uses its default.

        Raises:
            ValueError: If a filepath is given and cannot be read or parsed.
        """
        # Values are literal paths, "%" is not an interpolation marker
        self._config = ConfigParser(interpolation=None)

        if filepath is None:
            self.logger.debug("No config file given, using defaults")
            return

        try:
            success = self._config.read(filepath)

        except ConfigParserError as error:
            raise ValueError(
                f"Could not parse config file at {filepath}: {error}"
            ) from error

        if not success:
            raise ValueError(f"Could not read config file at {filepath}")

        self.logger.debug("Loaded config from %s", filepath)

    @property
    def directory(self) -> str:
        """Return the directory to list."""
        return self._config.get("lister", "directory", fallback=DEFAULT_DIRECTORY)

    @property
    def output_directory(self) -> str:
        """Return the directory holding the output file."""
        return self._config.get(
            "lister",
            "output_directory",
            fallback=tempfile.gettempdir(),
        )

    @property
    def output_filename(self) -> str:
        """Return the name of the output file."""
        return self._config.get(
            "lister",
            "output_filename",
            fallback=DEFAULT_OUTPUT_FILENAME,
        )

    @property
    def output_path(self) -> str:
        """Return the full path of the output file."""
        return os.path.join(self.output_directory, self.output_filename)

    @property
    def buffer_size(self) -> int:
        """Return the size of the line buffer in bytes. Must be positive."""
        buffer_size = self._config.getint(
            "lister",
            "buffer_size",
            fallback=DEFAULT_BUFFER_SIZE,
        )
        if buffer_size < 1:
            raise ValueError(f"buffer_size must be positive, got {buffer_size}")

        return buffer_size


def write_new_config(filename: str) -> None:
    """Write a new config file if one does not exist."""
    if os.path.exists(filename):
        return

    config = NEW_CONFIG.format(output_directory=tempfile.gettempdir())

    with open(filename, "w") as config_file:
        config_file.write(config)
