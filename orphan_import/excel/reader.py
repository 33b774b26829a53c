from __future__ import annotations

import zipfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pandas as pd

"""Spreadsheet document loader.

The file is accepted on its content, not its extension: legacy .xls files
are OLE2 compound documents and .xlsx files are ZIP archives containing
xl/workbook.xml. Everything else is rejected before pandas is asked to
parse it.

Rows are read without a header (header=None) so that row_number is the
1-based spreadsheet row; rows before ``first_row`` are template headings.
"""

__all__ = [
    "DocumentError",
    "NotAnExcelFileError",
    "SheetNotFoundError",
    "EmptyDocumentError",
    "RawRow",
    "WorkbookDocument",
    "column_index",
    "detect_format",
    "open_workbook",
]

OLE2_SIGNATURE = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"
ZIP_SIGNATURE = b"PK\x03\x04"
XLSX_WORKBOOK_PART = "xl/workbook.xml"

ENGINES = {
    "xls": "xlrd",
    "xlsx": "openpyxl",
}


class DocumentError(Exception):
    """Base class for document-level (structural) errors."""


class NotAnExcelFileError(DocumentError):
    """Raised when the file content is not a spreadsheet."""


class SheetNotFoundError(DocumentError):
    """Raised when the configured sheet is missing from the workbook."""


class EmptyDocumentError(DocumentError):
    """Raised when the sheet has no data rows after the header rows."""


def column_index(letter: str) -> int:
    """Convert a column letter to a 0-based index ("A" -> 0, "AA" -> 26)."""
    letters = letter.strip().upper()
    if not letters or not letters.isalpha() or not letters.isascii():
        raise ValueError(f"invalid column reference: {letter!r}")
    index = 0
    for ch in letters:
        index = index * 26 + (ord(ch) - ord("A") + 1)
    return index - 1


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if pd.api.types.is_scalar(value):
        return bool(pd.isna(value))
    return False


@dataclass(frozen=True)
class RawRow:
    """One spreadsheet row with cell lookup by column letter."""
    row_number: int  # 1-based spreadsheet row
    values: tuple[Any, ...]

    def cell(self, column: str) -> Any:
        """Return the raw cell value, or None when absent/empty."""
        idx = column_index(column)
        if idx >= len(self.values):
            return None
        value = self.values[idx]
        return None if _is_blank(value) else value

    def is_blank(self) -> bool:
        return all(_is_blank(v) for v in self.values)


@dataclass(frozen=True)
class WorkbookDocument:
    path: Path
    format: str  # "xls" | "xlsx"
    sheet_name: str
    rows: list[RawRow]


def detect_format(path: Path) -> str | None:
    """Sniff the file content and return "xls", "xlsx" or None."""
    try:
        with path.open("rb") as f:
            head = f.read(len(OLE2_SIGNATURE))
    except OSError:
        return None
    if head == OLE2_SIGNATURE:
        return "xls"
    if head.startswith(ZIP_SIGNATURE):
        try:
            with zipfile.ZipFile(path) as zf:
                if XLSX_WORKBOOK_PART in zf.namelist():
                    return "xlsx"
        except zipfile.BadZipFile:
            return None
    return None


def open_workbook(path: Path, *, sheet: str | int = 0, first_row: int = 2) -> WorkbookDocument:
    """Open a spreadsheet and return its data rows.

    Parameters
    ----------
    path: spreadsheet file
    sheet: sheet name or 0-based position
    first_row: 1-based row number of the first data row

    Raises
    ------
    NotAnExcelFileError, SheetNotFoundError, EmptyDocumentError
    """
    fmt = detect_format(path)
    if fmt is None:
        raise NotAnExcelFileError(f"{path.name}: content is not an Excel workbook")

    try:
        with pd.ExcelFile(path, engine=ENGINES[fmt]) as xls:
            sheet_names = [str(n) for n in xls.sheet_names]
            if isinstance(sheet, int):
                if sheet >= len(sheet_names):
                    raise SheetNotFoundError(f"Sheet {sheet} not found.")
                sheet_name = sheet_names[sheet]
            else:
                if sheet not in sheet_names:
                    raise SheetNotFoundError(f"Sheet '{sheet}' not found.")
                sheet_name = sheet
            # dtype=object keeps cell values as read (int / float / datetime / str)
            df = xls.parse(sheet_name, header=None, dtype=object, keep_default_na=False)
    except DocumentError:
        raise
    except Exception as e:
        # signature matched but the engine could not read the workbook
        raise NotAnExcelFileError(f"{path.name}: {e}") from e

    rows: list[RawRow] = []
    for idx in range(max(first_row - 1, 0), df.shape[0]):
        row = RawRow(row_number=idx + 1, values=tuple(df.iloc[idx].tolist()))
        if row.is_blank():
            continue
        rows.append(row)

    if not rows:
        raise EmptyDocumentError(f"{path.name}: no data rows from row {first_row}")

    return WorkbookDocument(path=path, format=fmt, sheet_name=sheet_name, rows=rows)
