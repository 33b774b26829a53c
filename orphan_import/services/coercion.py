from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any

import pandas as pd

from ..models.config_models import ColumnSpec, ColumnType
from .options import OptionResolver, cell_text

"""Field coercion: raw cell value -> typed value for a declared column type.

Failures raise FieldCoercionError (or an OptionError from the resolver);
the row extractor turns them into ledger entries and moves on to the next
column.
"""

__all__ = [
    "FieldCoercionError",
    "UnknownColumnTypeError",
    "coerce_value",
]

INTEGER_TEXT = re.compile(r"[+-]?\d+")


class FieldCoercionError(Exception):
    """Raised when a raw value cannot be converted to the declared type."""


class UnknownColumnTypeError(FieldCoercionError):
    """Raised when a column declares a type the importer does not know."""


def _to_integer(column: ColumnSpec, raw: Any) -> int:
    if isinstance(raw, bool):
        raise FieldCoercionError(f"Field: {column.field}, Value: {raw}. Is not a valid integer")
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float) and raw.is_integer():
        return int(raw)
    if isinstance(raw, str):
        text = raw.strip()
        if INTEGER_TEXT.fullmatch(text):
            return int(text, 10)
    raise FieldCoercionError(f"Field: {column.field}, Value: {raw}. Is not a valid integer")


def _to_string(raw: Any) -> str:
    if isinstance(raw, str):
        return raw
    return cell_text(raw)


def _to_date(column: ColumnSpec, raw: Any, dayfirst: bool) -> date:
    if isinstance(raw, datetime):  # includes pandas.Timestamp
        return raw.date()
    if isinstance(raw, date):
        return raw
    # pandas reads keywords such as "now" and "today" as dates
    if isinstance(raw, str) and any(ch.isdigit() for ch in raw):
        try:
            parsed = pd.to_datetime(raw.strip(), dayfirst=dayfirst)
        except (ValueError, TypeError, OverflowError):
            parsed = None
        if parsed is not None and not pd.isna(parsed):
            return parsed.date()
    raise FieldCoercionError(f"Field: {column.field}, Value: {raw}. Is not a valid date")


def coerce_value(
    column: ColumnSpec, raw: Any, resolver: OptionResolver, *, dayfirst: bool = False
) -> Any:
    """Convert ``raw`` according to ``column``'s declared type.

    Raises:
        FieldCoercionError: unparsable value or unknown column type
        OptionError: option rule undefined or value not matched
    """
    match column.column_type:
        case ColumnType.INTEGER:
            return _to_integer(column, raw)
        case ColumnType.STRING:
            return _to_string(raw)
        case ColumnType.DATE:
            return _to_date(column, raw, dayfirst)
        case ColumnType.OPTION:
            return resolver.resolve(column, raw)
        case _:
            raise UnknownColumnTypeError(
                f"Field: {column.field}, Value: {raw}. Unrecognised column type '{column.type_name}'"
            )
