from __future__ import annotations

import os
import tempfile
from pathlib import Path

import pytest

from size_lister.listerconfig import NEW_CONFIG
from size_lister.listerconfig import ListerConfig
from size_lister.listerconfig import write_new_config

CONFIG_PATH = str(Path(__file__).parent / "test_config.ini")


def test_listerconfig_raises_on_invalid_config_path() -> None:
    with pytest.raises(ValueError):
        ListerConfig("foo/bar")


def test_listerconfig_loads_test_fixture_completely() -> None:
    config = ListerConfig(CONFIG_PATH)

    assert config.directory == "tests/fixture"
    assert config.output_directory == "tests/output"
    assert config.output_filename == "test_lista_sz"
    assert config.output_path == os.path.join("tests/output", "test_lista_sz")
    assert config.buffer_size == 64


def test_listerconfig_defaults_without_file() -> None:
    config = ListerConfig()

    assert config.directory == "."
    assert config.output_directory == tempfile.gettempdir()
    assert config.output_filename == "lista_sz"
    assert config.output_path == os.path.join(tempfile.gettempdir(), "lista_sz")
    assert config.buffer_size == 512


def test_listerconfig_defaults_with_no_section(tmp_path: Path) -> None:
    config_file = tmp_path / "empty.ini"
    config_file.write_text("[other]\nkey = value\n")

    config = ListerConfig(str(config_file))

    assert config.directory == "."
    assert config.buffer_size == 512


def test_listerconfig_raises_on_non_positive_buffer_size(tmp_path: Path) -> None:
    config_file = tmp_path / "bad.ini"
    config_file.write_text("[lister]\nbuffer_size = 0\n")

    config = ListerConfig(str(config_file))

    with pytest.raises(ValueError):
        config.buffer_size


def test_write_new_config(tmp_path: Path) -> None:
    filename = str(tmp_path / "lister.ini")
    expected = NEW_CONFIG.format(output_directory=tempfile.gettempdir())

    write_new_config(filename)

    with open(filename) as f:
        content = f.read()

    assert content == expected

    config = ListerConfig(filename)
    assert config.output_path == os.path.join(tempfile.gettempdir(), "lista_sz")
    assert config.buffer_size == 512


def test_write_new_config_early_exit_when_exists() -> None:
    try:
        fd, filename = tempfile.mkstemp(suffix=".ini")
        os.close(fd)

        write_new_config(filename)

        with open(filename) as f:
            content = f.read()

        assert content == ""

    finally:
        os.remove(filename)


def test_listerconfig_raises_on_missing_section_header(tmp_path: Path) -> None:
    config_file = tmp_path / "headless.ini"
    config_file.write_text("directory = .\n")

    with pytest.raises(ValueError):
        ListerConfig(str(config_file))


def test_listerconfig_reads_percent_literally(tmp_path: Path) -> None:
    output_directory = str(tmp_path / "100%")
    config_file = tmp_path / "percent.ini"
    config_file.write_text(f"[lister]\noutput_directory = {output_directory}\n")

    config = ListerConfig(str(config_file))

    assert config.output_directory == output_directory
    assert config.output_path == os.path.join(output_directory, "lista_sz")
