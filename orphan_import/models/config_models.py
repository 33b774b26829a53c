from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

"""Config dataclasses for the orphan spreadsheet importer.

The import configuration describes every expected spreadsheet column
(ColumnSpec) and the option rules used to resolve controlled-vocabulary
cells (OptionEntry). Instances are built once by config.loader and passed
explicitly to the importer; nothing here is global.
"""

__all__ = [
    "ColumnType",
    "ColumnSpec",
    "OptionEntry",
    "ImportConfig",
]


class ColumnType(Enum):
    """Declared value type of a spreadsheet column."""
    INTEGER = "Integer"
    STRING = "String"
    DATE = "Date"
    OPTION = "Option"

    @classmethod
    def parse(cls, name: str | None) -> ColumnType | None:
        """Return the member named ``name`` (case-insensitive) or None."""
        if not isinstance(name, str):
            return None
        wanted = name.strip().lower()
        for member in cls:
            if member.value.lower() == wanted:
                return member
        return None


@dataclass(frozen=True)
class ColumnSpec:
    """One expected spreadsheet column.

    ``type_name`` keeps the configured spelling so that an unrecognised type
    can be reported per row instead of failing the whole configuration.
    """
    column: str  # spreadsheet column letter, e.g. "A"
    field: str  # destination field name
    type_name: str
    mandatory: bool = False
    option: str | None = None  # option rule key (Option columns only)

    @property
    def column_type(self) -> ColumnType | None:
        return ColumnType.parse(self.type_name)


@dataclass(frozen=True)
class OptionEntry:
    """Raw cell text -> canonical value."""
    cell: Any
    db: Any


@dataclass(frozen=True)
class ImportConfig:
    """Root configuration object for an import run."""
    columns: tuple[ColumnSpec, ...]
    options: dict[str, tuple[OptionEntry, ...]] = field(default_factory=dict)
    first_row: int = 2  # 1-based spreadsheet row of the first record
    sheet: str | int = 0  # sheet name or 0-based position
    dayfirst: bool = False  # date text convention, e.g. 17/10/2026
    source_directory: str = "."

    @property
    def fields(self) -> list[str]:
        return [c.field for c in self.columns]
