#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Shared utilities for markupdiff CLI commands.

Covers opening the state store, applying configuration file values on top
of the persisted settings and reading input files.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Callable, Optional

from markupdiff.cli.config import load_cli_config
from markupdiff.session import DiffSession
from markupdiff.settings import DiffSettings
from markupdiff.storage import JsonFileStore

logger = logging.getLogger(__name__)


def open_store(parsed_args: argparse.Namespace) -> JsonFileStore:
    """Return the state store selected by ``--state-file`` (or the default one)."""
    store = JsonFileStore(parsed_args.state_file)
    logger.debug("Using state file %s", store.path)
    return store


def apply_config(settings: DiffSettings, parsed_args: argparse.Namespace) -> DiffSettings:
    """Overlay configuration file values on ``settings``.

    Raises
    ------
    argparse.ArgumentTypeError
        If the configuration file cannot be loaded
    ValidationError
        If a configured value is invalid

    """
    config = load_cli_config(parsed_args.config, use_config=not parsed_args.no_config)
    if not config:
        return settings
    return settings.create_updated(**DiffSettings.normalize_keys(config))


def open_session(
    parsed_args: argparse.Namespace,
    *,
    with_config: bool = True,
    confirm: Optional[Callable[[str], bool]] = None,
    **overrides: Any,
) -> DiffSession:
    """Create a session on the selected store.

    Parameters
    ----------
    parsed_args : argparse.Namespace
        Parsed arguments including the common options
    with_config : bool, default True
        Overlay configuration file values on the persisted settings. The
        overlay only lives in this session; it is never persisted.
    confirm : callable, optional
        Confirmation callback forwarded to the session
    **overrides
        Extra settings for this invocation only (e.g. from command flags)

    """
    store = open_store(parsed_args)
    session = DiffSession(store, confirm=confirm, before_code="", after_code="")
    if not with_config and not overrides:
        return session

    settings = session.settings
    if with_config:
        settings = apply_config(settings, parsed_args)
    if overrides:
        settings = settings.create_updated(**overrides)
    return DiffSession(store, confirm=confirm, before_code="", after_code="", settings=settings)


def read_input(path_arg: str, stdin_state: dict[str, bool]) -> tuple[str, str]:
    """Read one input, ``-`` meaning stdin.

    Returns
    -------
    tuple of (str, str)
        Text content and a display label

    Raises
    ------
    FileNotFoundError
        If the path does not exist
    ValueError
        If stdin is requested twice

    """
    if path_arg == "-":
        if stdin_state.get("used"):
            raise ValueError("Cannot read both original and modified from stdin")
        stdin_state["used"] = True
        return sys.stdin.read(), "stdin"

    path = Path(path_arg)
    if not path.is_file():
        raise FileNotFoundError(f"Source file not found: {path_arg}")
    return path.read_text(encoding="utf-8"), str(path)
