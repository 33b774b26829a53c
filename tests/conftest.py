# Shared pytest fixtures
from __future__ import annotations

from collections.abc import Callable
from datetime import date
from pathlib import Path

import pandas as pd
import pytest
import xlwt

from orphan_import.config.loader import load_config
from orphan_import.logging.init import reset_logging
from orphan_import.models.config_models import ImportConfig

HEADER = ["Name", "Date of birth", "Gender", "Province", "Minor siblings", "Comments"]


@pytest.fixture()
def temp_workdir(monkeypatch, tmp_path: Path) -> Path:
    (tmp_path / "config").mkdir()
    (tmp_path / "data").mkdir()
    (tmp_path / "logs").mkdir()
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("ORPHAN_IMPORT_CONFIG", raising=False)
    reset_logging()
    return tmp_path


@pytest.fixture()
def sample_config_yaml() -> str:
    return """source_directory: ./data
first_row: 2
columns:
  - {column: A, field: name, type: String, mandatory: true}
  - {column: B, field: date_of_birth, type: Date, mandatory: true}
  - {column: C, field: gender, type: Option, option: gender, mandatory: true}
  - {column: D, field: original_address_province, type: Option, option: province, mandatory: true}
  - {column: E, field: minor_siblings_count, type: Integer}
  - {column: F, field: comments, type: String}
options:
  gender:
    - {cell: Male, db: Male}
    - {cell: Female, db: Female}
  province:
    - {cell: Damascus, db: 11}
    - {cell: Aleppo, db: 12}
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "import.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def import_config(write_config: Path) -> ImportConfig:
    return load_config(write_config)


@pytest.fixture()
def make_excel(temp_workdir: Path) -> Callable[..., Path]:
    """Write a one-sheet workbook; the header row is prepended."""
    def _make(name: str, rows: list[list[object]], directory: Path | None = None) -> Path:
        p = (directory or temp_workdir / "data") / name
        df = pd.DataFrame([HEADER, *rows])
        with pd.ExcelWriter(p, engine="openpyxl") as writer:
            df.to_excel(writer, sheet_name="Orphans", header=False, index=False)
        return p
    return _make


@pytest.fixture()
def make_xls(temp_workdir: Path) -> Callable[..., Path]:
    """Write a legacy BIFF workbook; date cells get a date number format."""
    date_style = xlwt.easyxf(num_format_str="YYYY-MM-DD")

    def _make(name: str, rows: list[list[object]]) -> Path:
        p = temp_workdir / "data" / name
        book = xlwt.Workbook()
        sheet = book.add_sheet("Orphans")
        for r, row in enumerate([HEADER, *rows]):
            for c, value in enumerate(row):
                if value is None:
                    continue
                if isinstance(value, date):
                    sheet.write(r, c, value, date_style)
                else:
                    sheet.write(r, c, value)
        book.save(str(p))
        return p
    return _make


@pytest.fixture()
def valid_rows() -> list[list[object]]:
    return [
        ["Ahmad", "2010-05-01", "Male", "Damascus", 2, "First"],
        ["Fatima", "2012-11-23", "Female", "Aleppo", 0, None],
        ["Omar", "2009-02-14", "Male", "Aleppo", None, "Twin"],
    ]


@pytest.fixture()
def invalid_rows() -> list[list[object]]:
    return [
        [None, "2010-05-01", "Male", "Damascus", 2, None],  # missing mandatory name
        ["Huda", "Not a date", "Female", "Aleppo", 1, None],  # bad date
        ["Sami", "2011-01-01", "Unknown", "Homs", "many", None],  # bad options + integer
    ]
