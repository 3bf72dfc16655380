#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file discovery and loading for the markupdiff CLI.

A configuration file holds diff settings (``ignore_whitespace``,
``contextLines``...). Values found in it override the persisted settings for
one CLI invocation; they are never written back to the state file.
"""

import argparse
import json
import logging
import os
import sys
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
from typing import Any, Dict, Optional

import yaml

from markupdiff.constants import CONFIG_ENV_VAR

logger = logging.getLogger(__name__)

DEDICATED_CONFIG_FILENAMES = [".markupdiff.toml", ".markupdiff.yaml", ".markupdiff.yml", ".markupdiff.json"]


def _load_pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Load the [tool.markupdiff] table of a pyproject.toml file.

    Returns an empty dict when the table is absent.

    Raises
    ------
    argparse.ArgumentTypeError
        If pyproject.toml cannot be parsed or the section is not a table

    """
    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise argparse.ArgumentTypeError(f"Invalid TOML in pyproject.toml {pyproject_path}: {e}") from e
    except OSError as e:
        raise argparse.ArgumentTypeError(f"Error reading pyproject.toml {pyproject_path}: {e}") from e

    section = data.get("tool", {}).get("markupdiff")
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise argparse.ArgumentTypeError(
            f"[tool.markupdiff] section in {pyproject_path} must be a table, got {type(section).__name__}"
        )
    return section


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find a configuration file in ``start_dir`` or one of its parents.

    Each directory is checked for the dedicated files first
    (``.markupdiff.toml``, ``.markupdiff.yaml``, ``.markupdiff.yml``,
    ``.markupdiff.json``), then for a ``pyproject.toml`` that has a
    ``[tool.markupdiff]`` table.

    Parameters
    ----------
    start_dir : Path, optional
        Starting directory for search, defaults to current working directory

    Returns
    -------
    Path or None
        First config file found

    """
    current = (start_dir or Path.cwd()).resolve()

    while True:
        for filename in DEDICATED_CONFIG_FILENAMES:
            config_path = current / filename
            if config_path.is_file():
                return config_path

        pyproject_path = current / "pyproject.toml"
        if pyproject_path.is_file():
            try:
                if _load_pyproject_section(pyproject_path):
                    return pyproject_path
            except argparse.ArgumentTypeError as e:
                logger.debug("Skipping unreadable %s: %s", pyproject_path, e)

        parent = current.parent
        if parent == current:
            return None
        current = parent


def discover_config_file(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Discover a configuration file in the standard locations.

    Search order:

    1. ``$MARKUPDIFF_CONFIG`` when set
    2. ``start_dir`` (default: cwd) and its parents, see :func:`find_config_in_parents`
    3. The dedicated file names in the user's home directory

    Returns
    -------
    Path or None
        Path to the discovered config file

    """
    env_config = os.environ.get(CONFIG_ENV_VAR)
    if env_config:
        return Path(env_config)

    found = find_config_in_parents(start_dir)
    if found:
        return found

    home = Path.home()
    for filename in DEDICATED_CONFIG_FILENAMES:
        config_path = home / filename
        if config_path.is_file():
            return config_path

    return None


def _load_toml_config(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise argparse.ArgumentTypeError(f"Invalid TOML in config file {config_path}: {e}") from e


def _load_json_config(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = json.load(f)
    except json.JSONDecodeError as e:
        raise argparse.ArgumentTypeError(f"Invalid JSON in config file {config_path}: {e}") from e

    if not isinstance(config, dict):
        raise argparse.ArgumentTypeError(f"JSON config file must contain an object, got {type(config).__name__}")
    return config


def _load_yaml_config(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise argparse.ArgumentTypeError(f"Invalid YAML in config file {config_path}: {e}") from e

    # An empty YAML document loads as None
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise argparse.ArgumentTypeError(f"YAML config file must contain a mapping, got {type(config).__name__}")
    return config


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load configuration from a JSON, TOML, YAML or pyproject.toml file.

    The format is picked from the file name: ``pyproject.toml`` yields its
    ``[tool.markupdiff]`` table, other files go by extension.

    Parameters
    ----------
    config_path : Path or str
        Path to the configuration file

    Returns
    -------
    dict
        Configuration dictionary loaded from file

    Raises
    ------
    argparse.ArgumentTypeError
        If the file cannot be read, parsed, or has an unsupported format

    Examples
    --------
    >>> config = load_config_file(".markupdiff.toml")
    >>> config.get("context_lines")
    5

    """
    config_path = Path(config_path)

    if not config_path.is_file():
        raise argparse.ArgumentTypeError(f"Configuration file does not exist: {config_path}")

    ext = config_path.suffix.lower()
    try:
        if config_path.name.lower() == "pyproject.toml":
            return _load_pyproject_section(config_path)
        if ext == ".toml":
            return _load_toml_config(config_path)
        if ext in (".yaml", ".yml"):
            return _load_yaml_config(config_path)
        if ext == ".json":
            return _load_json_config(config_path)
    except OSError as e:
        raise argparse.ArgumentTypeError(f"Error reading config file {config_path}: {e}") from e

    raise argparse.ArgumentTypeError(f"Unsupported config file format: {ext}. Use .json, .toml, or .yaml")


def load_cli_config(explicit_path: Optional[str] = None, use_config: bool = True) -> Dict[str, Any]:
    """Return the configuration that applies to this CLI invocation.

    Parameters
    ----------
    explicit_path : str, optional
        File given with ``--config``; takes precedence over discovery
    use_config : bool, default True
        When False (``--no-config``) nothing is loaded

    Returns
    -------
    dict
        Raw configuration values, empty when no file applies

    """
    if not use_config:
        return {}

    config_path = Path(explicit_path) if explicit_path else discover_config_file()
    if config_path is None:
        return {}

    logger.debug("Loading configuration from %s", config_path)
    return load_config_file(config_path)
