#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markupdiff/settings.py
"""Diff settings.

:class:`DiffSettings` is a frozen dataclass; changes are made by creating an
updated copy with :meth:`DiffSettings.create_updated`, which validates the
merged result. The persisted form uses camelCase keys
(``ignoreWhitespace``, ``contextLines``...), and :meth:`DiffSettings.from_dict`
accepts either camelCase or snake_case names.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field, fields, replace
from typing import Any

from markupdiff.constants import (
    DEFAULT_CONTEXT_LINES,
    DEFAULT_HIGHLIGHT_SYNTAX,
    DEFAULT_IGNORE_CASE,
    DEFAULT_IGNORE_WHITESPACE,
    DEFAULT_SHOW_LINE_NUMBERS,
)
from markupdiff.exceptions import ValidationError

logger = logging.getLogger(__name__)


def _snake_to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


@dataclass(frozen=True)
class DiffSettings:
    """Options controlling line diff computation and display.

    Parameters
    ----------
    ignore_whitespace : bool, default False
        Collapse whitespace runs and trim lines before comparing
    ignore_case : bool, default False
        Compare lines case-insensitively
    context_lines : int, default 3
        Unchanged lines kept next to each change region
    show_line_numbers : bool, default True
        Populate line numbers on line changes
    highlight_syntax : bool, default True
        Display-only flag handed through to renderers; never affects diffs

    """

    ignore_whitespace: bool = field(
        default=DEFAULT_IGNORE_WHITESPACE,
        metadata={"help": "Ignore whitespace differences"},
    )
    ignore_case: bool = field(
        default=DEFAULT_IGNORE_CASE,
        metadata={"help": "Ignore case differences"},
    )
    context_lines: int = field(
        default=DEFAULT_CONTEXT_LINES,
        metadata={"help": "Number of unchanged context lines around changes"},
    )
    show_line_numbers: bool = field(
        default=DEFAULT_SHOW_LINE_NUMBERS,
        metadata={"help": "Show line numbers"},
    )
    highlight_syntax: bool = field(
        default=DEFAULT_HIGHLIGHT_SYNTAX,
        metadata={"help": "Highlight syntax when rendering"},
    )

    def __post_init__(self) -> None:
        """Validate field types and ranges."""
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name == "context_lines":
                # bool is an int subclass; reject it explicitly
                if isinstance(value, bool) or not isinstance(value, int):
                    raise ValidationError(
                        f"context_lines must be an integer, got {value!r}",
                        parameter_name="context_lines",
                        parameter_value=value,
                    )
                if value < 0:
                    raise ValidationError(
                        f"context_lines must be non-negative, got {value}",
                        parameter_name="context_lines",
                        parameter_value=value,
                    )
            elif not isinstance(value, bool):
                raise ValidationError(
                    f"{f.name} must be a boolean, got {value!r}",
                    parameter_name=f.name,
                    parameter_value=value,
                )

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    def create_updated(self, **kwargs: Any) -> DiffSettings:
        """Return a copy with the given fields replaced.

        Raises
        ------
        ValidationError
            If a name is not a settings field or a value is invalid

        """
        unknown = sorted(set(kwargs) - set(self.field_names()))
        if unknown:
            raise ValidationError(
                f"Unknown setting(s): {', '.join(unknown)}",
                parameter_name=unknown[0],
                parameter_value=kwargs[unknown[0]],
            )
        return replace(self, **kwargs)

    def to_dict(self) -> dict[str, Any]:
        """Serialize with camelCase keys."""
        return {_snake_to_camel(name): value for name, value in asdict(self).items()}

    @classmethod
    def resolve_field_name(cls, key: str) -> str | None:
        """Map a camelCase, snake_case or kebab-case key to a field name."""
        names = cls.field_names()
        snake = key.replace("-", "_")
        if snake in names:
            return snake
        by_camel = {_snake_to_camel(name): name for name in names}
        return by_camel.get(key)

    @classmethod
    def normalize_keys(cls, data: dict[str, Any]) -> dict[str, Any]:
        """Rename the keys of ``data`` to field names, dropping unknown keys with a warning."""
        values: dict[str, Any] = {}
        for key, value in data.items():
            name = cls.resolve_field_name(str(key))
            if name is None:
                logger.warning("Ignoring unknown setting: %s", key)
                continue
            values[name] = value
        return values

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DiffSettings:
        """Build settings from a camelCase or snake_case mapping.

        Missing fields take their defaults and unknown keys are ignored with
        a warning.
        """
        return cls(**cls.normalize_keys(data))
