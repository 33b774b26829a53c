from __future__ import annotations

import pytest

from orphan_import.models.config_models import ColumnSpec, OptionEntry
from orphan_import.services.options import (
    OptionResolver,
    UndefinedOptionError,
    UnmatchedOptionError,
    cell_text,
)

OPTIONS = {
    "boolean": (OptionEntry("Y", True), OptionEntry("N", False)),
    "province": (OptionEntry("Damascus", 11), OptionEntry("Aleppo", 12)),
    "code": (OptionEntry(1, "one"), OptionEntry("2", "two")),
}


def _column(option: str | None) -> ColumnSpec:
    return ColumnSpec(column="D", field="province_field", type_name="Option", option=option)


@pytest.fixture()
def resolver() -> OptionResolver:
    return OptionResolver(OPTIONS)


def test_option_defined(resolver):
    assert resolver.option_defined("boolean")
    assert not resolver.option_defined("gender")
    assert not resolver.option_defined(None)


def test_resolve_returns_canonical_value(resolver):
    assert resolver.resolve(_column("province"), "Aleppo") == 12
    assert resolver.resolve(_column("boolean"), "N") is False
    assert resolver.resolve(_column("province"), " Damascus ") == 11


def test_resolve_compares_text_forms(resolver):
    assert resolver.resolve(_column("code"), 1.0) == "one"
    assert resolver.resolve(_column("code"), 2) == "two"


def test_resolve_undefined_rule(resolver):
    with pytest.raises(UndefinedOptionError, match="option 'gender' is not defined"):
        resolver.resolve(_column("gender"), "Male")


def test_resolve_missing_rule_key(resolver):
    with pytest.raises(UndefinedOptionError):
        resolver.resolve(_column(None), "Male")


def test_resolve_unmatched_value(resolver):
    with pytest.raises(UnmatchedOptionError) as e:
        resolver.resolve(_column("province"), "Homs")
    assert "Field: province_field" in str(e.value)
    assert "Homs" in str(e.value)


def test_resolve_is_case_sensitive(resolver):
    with pytest.raises(UnmatchedOptionError):
        resolver.resolve(_column("boolean"), "y")


def test_cell_text():
    assert cell_text(3.0) == "3"
    assert cell_text(3.5) == "3.5"
    assert cell_text(" Male ") == "Male"
