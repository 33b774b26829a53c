from __future__ import annotations

from datetime import date, datetime
from unittest.mock import MagicMock

import pandas as pd
import pytest

from orphan_import.models.config_models import ColumnSpec, OptionEntry
from orphan_import.services.coercion import FieldCoercionError, UnknownColumnTypeError, coerce_value
from orphan_import.services.options import OptionResolver, UnmatchedOptionError


def _column(type_name: str, option: str | None = None) -> ColumnSpec:
    return ColumnSpec(column="C", field="field", type_name=type_name, option=option)


@pytest.fixture()
def resolver() -> OptionResolver:
    return OptionResolver({"boolean": (OptionEntry("Y", True), OptionEntry("N", False))})


def test_integer_from_text(resolver):
    assert coerce_value(_column("Integer"), "8", resolver) == 8
    assert coerce_value(_column("Integer"), " 12 ", resolver) == 12


def test_integer_from_spreadsheet_numbers(resolver):
    assert coerce_value(_column("Integer"), 8, resolver) == 8
    assert coerce_value(_column("Integer"), 8.0, resolver) == 8


@pytest.mark.parametrize("raw", ["eight", "8.5", 8.5, True, "8a", "1_000", "0x10", ""])
def test_integer_rejects_non_numeric(resolver, raw):
    with pytest.raises(FieldCoercionError, match="Field: field"):
        coerce_value(_column("Integer"), raw, resolver)


def test_string_passes_through(resolver):
    assert coerce_value(_column("String"), "String Value", resolver) == "String Value"
    assert coerce_value(_column("String"), 963933123456.0, resolver) == "963933123456"


def test_date_from_canonical_text(resolver):
    today = date.today()
    assert coerce_value(_column("Date"), f"{today}", resolver) == today


def test_date_from_date_cells(resolver):
    assert coerce_value(_column("Date"), datetime(2010, 5, 1, 0, 0), resolver) == date(2010, 5, 1)
    assert coerce_value(_column("Date"), pd.Timestamp("2011-02-03"), resolver) == date(2011, 2, 3)
    assert coerce_value(_column("Date"), date(2012, 3, 4), resolver) == date(2012, 3, 4)


def test_date_dayfirst(resolver):
    col = _column("Date")
    assert coerce_value(col, "03/04/2012", resolver, dayfirst=True) == date(2012, 4, 3)
    assert coerce_value(col, "03/04/2012", resolver) == date(2012, 3, 4)


@pytest.mark.parametrize("raw", ["Not a Date", 42, "now", "today", "Today "])
def test_date_rejects_unparsable(resolver, raw):
    with pytest.raises(FieldCoercionError, match="Is not a valid date"):
        coerce_value(_column("Date"), raw, resolver)


def test_option_is_delegated_to_resolver():
    resolver = MagicMock(spec=OptionResolver)
    resolver.resolve.return_value = "Custom"
    col = _column("Option", option="custom")
    assert coerce_value(col, "Custom Value", resolver) == "Custom"
    resolver.resolve.assert_called_once_with(col, "Custom Value")


def test_option_errors_propagate(resolver):
    with pytest.raises(UnmatchedOptionError):
        coerce_value(_column("Option", option="boolean"), "Maybe", resolver)


def test_unknown_type_is_an_error(resolver):
    with pytest.raises(UnknownColumnTypeError, match="Unrecognised column type 'Unknown'"):
        coerce_value(_column("Unknown"), "unknown", resolver)
