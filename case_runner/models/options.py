"""Run options handed to every options-aware test driver."""

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field

from case_runner.models.base import Model

log = logging.getLogger(__name__)

DATA_DIR_NAME = "case-runner-data"


class RunOptions(Model):
    """Options constructed once per process and shared read-only by all tests."""

    prog_name: str = Field(..., description="Program name, used to build unique names")
    fs_type: str | None = Field(default=None, description="Storage backend selector")
    config_file: Path | None = Field(default=None, description="Config file path")
    srcdir: Path | None = Field(default=None, description="Source directory")
    repos_dir: Path | None = Field(
        default=None, description="Directory to create temporary repositories in"
    )
    repos_url: str | None = Field(
        default=None, description="URL under which repos_dir is reachable"
    )
    repos_template: Path | None = Field(
        default=None, description="Pre-created repository to copy for each test"
    )
    server_minor_version: int = Field(
        default=0, ge=0, description="Server/backend minor version, 0 means latest"
    )
    verbose: bool = False


class OptionsFileError(Exception):
    """Raised when an options file cannot be used."""


def load_options_file(path: Path) -> Mapping[str, Any]:
    """Load option defaults from a YAML mapping file."""
    try:
        data = yaml.safe_load(path.read_text())
    except OSError as e:
        raise OptionsFileError(f"Cannot read options file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise OptionsFileError(f"Invalid YAML in options file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise OptionsFileError(f"Options file {path} must contain a mapping")
    return data


def build_run_options(
    file_values: Mapping[str, Any], overrides: Mapping[str, Any]
) -> RunOptions:
    """Merge file values with explicit overrides and validate the result.

    Overrides whose value is None are ignored, so unset CLI flags never mask
    values coming from the options file.
    """
    merged = dict(file_values)
    merged.update({key: value for key, value in overrides.items() if value is not None})
    return RunOptions.model_validate(merged)


def get_srcdir(options: RunOptions) -> Path:
    """Return the source directory, falling back to the current directory."""
    if options.srcdir is not None:
        return options.srcdir

    log.warning(
        "No --srcdir given, assuming the current directory is the source directory"
    )
    return Path.cwd()


def data_path(options: RunOptions, basename: str) -> Path:
    """Return a path for ``basename`` inside this program's transient data area."""
    base = options.repos_dir if options.repos_dir is not None else Path.cwd()
    return base / DATA_DIR_NAME / options.prog_name / basename
