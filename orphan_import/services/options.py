from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..models.config_models import ColumnSpec, OptionEntry

"""Option resolution for controlled-vocabulary columns.

Option rules come from the import configuration: a rule key (e.g.
``gender`` or ``province``) maps to an ordered list of OptionEntry. A raw
cell resolves to the ``db`` value of the first entry whose ``cell`` has the
same text.
"""

__all__ = [
    "OptionError",
    "UndefinedOptionError",
    "UnmatchedOptionError",
    "OptionResolver",
    "cell_text",
]


class OptionError(Exception):
    """Base class for option resolution failures."""


class UndefinedOptionError(OptionError):
    """The column references a rule key missing from configuration."""


class UnmatchedOptionError(OptionError):
    """The rule exists but no entry matches the raw value."""


def cell_text(value: Any) -> str:
    """Text form of a cell value; integral floats drop their ".0"."""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip()


class OptionResolver:
    def __init__(self, options: Mapping[str, tuple[OptionEntry, ...]]) -> None:
        self._options = options

    def option_defined(self, key: str | None) -> bool:
        return key is not None and key in self._options

    def resolve(self, column: ColumnSpec, raw: Any) -> Any:
        if not self.option_defined(column.option):
            raise UndefinedOptionError(
                f"Field: {column.field}, option '{column.option}' is not defined in the import configuration"
            )
        wanted = cell_text(raw)
        for entry in self._options[column.option]:
            if cell_text(entry.cell) == wanted:
                return entry.db
        raise UnmatchedOptionError(
            f"Field: {column.field}, Value: {raw}. Is not a valid {column.option} option"
        )
