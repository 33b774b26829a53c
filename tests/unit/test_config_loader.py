from __future__ import annotations

from pathlib import Path

import pytest

from orphan_import.config.loader import ConfigError, load_config, parse_config
from orphan_import.models.config_models import ColumnType, OptionEntry


def test_load_config_success(write_config: Path):
    cfg = load_config(write_config)
    assert cfg.source_directory == "./data"
    assert cfg.first_row == 2
    assert cfg.sheet == 0
    assert cfg.dayfirst is False
    assert cfg.fields == [
        "name", "date_of_birth", "gender", "original_address_province",
        "minor_siblings_count", "comments",
    ]
    gender = cfg.columns[2]
    assert gender.column_type is ColumnType.OPTION
    assert gender.option == "gender"
    assert gender.mandatory is True
    assert cfg.columns[4].mandatory is False
    assert cfg.options["province"] == (OptionEntry("Damascus", 11), OptionEntry("Aleppo", 12))


def test_load_config_missing_file(temp_workdir: Path):
    with pytest.raises(ConfigError, match="config file not found"):
        load_config(temp_workdir / "config" / "not_exists.yml")


def test_load_config_invalid_yaml(temp_workdir: Path):
    cfg = temp_workdir / "config" / "import.yml"
    cfg.write_text("columns: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="invalid yaml"):
        load_config(cfg)


def test_load_config_missing_required(write_config: Path):
    text = write_config.read_text(encoding="utf-8")
    write_config.write_text(text.split("options:")[0], encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(write_config)
    assert "config validation failed" in str(e.value) and "required property" in str(e.value)


def test_load_config_column_without_field(write_config: Path):
    text = write_config.read_text(encoding="utf-8").replace(
        "{column: F, field: comments, type: String}", "{column: F, type: String}"
    )
    write_config.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError, match="config validation failed"):
        load_config(write_config)


def test_load_config_extra_field(write_config: Path):
    text = write_config.read_text(encoding="utf-8") + "\nextra_field: not_allowed\n"
    write_config.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError, match="config validation failed"):
        load_config(write_config)


def test_parse_config_keeps_unknown_column_type():
    cfg = parse_config({
        "columns": [{"column": "a", "field": "name", "type": "Currency"}],
        "options": {},
    })
    # reported per row by the coercer, not at load time
    assert cfg.columns[0].type_name == "Currency"
    assert cfg.columns[0].column_type is None
    assert cfg.columns[0].column == "A"


def test_parse_config_rejects_non_mapping():
    with pytest.raises(ConfigError):
        parse_config(["not", "a", "mapping"])  # type: ignore[arg-type]


def test_column_type_parse_is_case_insensitive():
    assert ColumnType.parse("integer") is ColumnType.INTEGER
    assert ColumnType.parse(" DATE ") is ColumnType.DATE
    assert ColumnType.parse("custom options") is None
    assert ColumnType.parse(None) is None
