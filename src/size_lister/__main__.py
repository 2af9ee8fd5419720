from __future__ import annotations

import argparse
import configparser
import logging
from pathlib import Path

from size_lister.lister import Lister
from size_lister.listerconfig import ListerConfig
from size_lister.listerconfig import write_new_config
from size_lister.listerwriter import prepare_directory

LOG_FORMAT = "%(asctime)s %(levelname)s %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FILENAME = "size_lister.log"

logger = logging.getLogger(__name__)

BANNER = """\
========================================
SIZE LISTER
File name and size listing
========================================
"""


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Write the name and size of every file in a directory to a file.",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="The path to a configuration file. Default: built-in defaults.",
    )
    parser.add_argument(
        "--directory",
        type=str,
        default=None,
        help="The directory to list. Overrides the config. Default: current directory.",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="The output file path. Overrides the config.",
    )
    parser.add_argument(
        "--buffer-size",
        type=int,
        default=None,
        help="The line buffer size in bytes. Overrides the config.",
    )
    parser.add_argument(
        "--debug",
        help="Enable debug logging.",
        default=False,
        action="store_true",
    )
    parser.add_argument(
        "--log-file",
        help="Enable logging to size_lister.log next to the output file.",
        default=False,
        action="store_true",
    )
    parser.add_argument(
        "--make-config",
        help="Create a default configuration file at the --config path.",
        default=False,
        action="store_true",
    )
    return parser.parse_args(args)


def add_file_handler_to_logging(output_filepath: str) -> None:
    """
    Add a file handler to the root logger next to the output file provided.

    Raises:
        OSError: If the output directory cannot be created.
    """
    log_directory = Path(output_filepath).absolute().parent
    prepare_directory(str(log_directory))
    file_handler = logging.FileHandler(log_directory / LOG_FILENAME)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logging.getLogger().addHandler(file_handler)


def build_lister(args: argparse.Namespace) -> Lister:
    """Build the Lister from the config file, then apply command line overrides."""
    config = ListerConfig(args.config)
    lister = Lister.from_config(config)

    if args.directory is None and args.output is None and args.buffer_size is None:
        return lister

    return Lister(
        args.directory or config.directory,
        args.output or config.output_path,
        buffer_size=(
            config.buffer_size if args.buffer_size is None else args.buffer_size
        ),
    )


def main(*, cli_args: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(cli_args)

    if args.make_config:
        if not args.config:
            print("--make-config requires --config")
            return 1

        write_new_config(args.config)
        return 0

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
    )

    print(BANNER)

    try:
        lister = build_lister(args)

    except (ValueError, configparser.Error) as error:
        logger.error("Invalid configuration: %s", error)
        return 1

    if args.log_file:
        try:
            add_file_handler_to_logging(lister.output_path)

        except OSError as error:
            logger.error(
                "Error creating log file next to %s: %s", lister.output_path, error
            )

    result = lister.run()

    if not result.success:
        return 1

    print(f"File list written to {result.output_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
