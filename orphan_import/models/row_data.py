from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

"""RowData model for the orphan spreadsheet importer.

RowData is the outcome of extracting one spreadsheet row: the FieldMap of
successfully coerced values plus enough context to tell a field that was
never present apart from one that was present and failed.
"""

__all__ = [
    "RowData",
]


@dataclass(frozen=True)
class RowData:
    """Logical representation of a single extracted row.

    ``values`` only holds fields that were coerced successfully. A field in
    ``failed_fields`` was either mandatory and empty or present and invalid;
    an optional empty field appears in neither.
    """
    row_number: int  # 1-based spreadsheet row
    values: dict[str, Any]  # field -> typed value (the FieldMap)
    raw_values: dict[str, Any] = field(default_factory=dict)  # field -> raw cell
    failed_fields: frozenset[str] = frozenset()

    @property
    def invalid(self) -> bool:
        return bool(self.failed_fields)
