from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from ..excel.reader import RawRow
from ..models.config_models import ColumnSpec, ImportConfig
from ..models.row_data import RowData
from .coercion import FieldCoercionError, coerce_value
from .options import OptionError, OptionResolver

logger = logging.getLogger(__name__)

"""Row extraction: one RawRow -> one RowData (FieldMap plus context).

Columns are processed in configuration order and a failing column never
stops the row; each failure is reported through ``record_error`` and the
field is left out of the FieldMap.
"""

__all__ = [
    "ErrorSink",
    "RowExtractor",
    "record_ref",
]

ErrorSink = Callable[[str, str], Any]


def record_ref(row_number: int, column: ColumnSpec | None = None) -> str:
    if column is None:
        return f"Record: {row_number}"
    return f"Record: {row_number}, Column: {column.column}"


class RowExtractor:
    def __init__(self, config: ImportConfig, resolver: OptionResolver, record_error: ErrorSink) -> None:
        self.config = config
        self.resolver = resolver
        self.record_error = record_error

    def extract(self, row: RawRow) -> RowData:
        values: dict[str, Any] = {}
        raw_values: dict[str, Any] = {}
        failed: set[str] = set()

        for column in self.config.columns:
            raw = row.cell(column.column)
            if raw is None:
                if self.add_error_if_mandatory(row.row_number, column):
                    failed.add(column.field)
                continue
            raw_values[column.field] = raw
            try:
                values[column.field] = coerce_value(
                    column, raw, self.resolver, dayfirst=self.config.dayfirst
                )
            except (FieldCoercionError, OptionError) as e:
                logger.debug("row=%d field=%s rejected: %s", row.row_number, column.field, e)
                self.record_error(record_ref(row.row_number, column), str(e))
                failed.add(column.field)

        return RowData(
            row_number=row.row_number,
            values=values,
            raw_values=raw_values,
            failed_fields=frozenset(failed),
        )

    def add_error_if_mandatory(self, row_number: int, column: ColumnSpec) -> bool:
        """Record a missing mandatory value; return True if one was recorded."""
        if not column.mandatory:
            return False
        self.record_error(
            record_ref(row_number),
            f"Field: {column.field} (column {column.column}) is mandatory but has no value",
        )
        return True
