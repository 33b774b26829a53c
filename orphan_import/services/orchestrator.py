from __future__ import annotations

import logging
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from ..excel.reader import (
    EmptyDocumentError,
    NotAnExcelFileError,
    SheetNotFoundError,
    WorkbookDocument,
    open_workbook,
)
from ..logging.error_log import ErrorLogBuffer
from ..models.config_models import ImportConfig
from ..models.error_record import DOCUMENT_REF, ErrorRecord
from ..models.excel_file import DocumentStatus, ImportedFile
from ..models.pending_orphan import PendingOrphan
from ..models.processing_result import FileStat, ImportSummary
from ..models.row_data import RowData
from .extractor import RowExtractor
from .options import OptionResolver
from .progress import ProgressTracker
from .record_builder import to_orphan

logger = logging.getLogger(__name__)

"""Import orchestration.

OrphanImporter drives one spreadsheet through the pipeline: the loader runs
once, then every data row goes through the RowExtractor. All problems land
in the error ledger; none are raised to the caller, who checks ``valid``
and ``import_errors`` instead.

import_files() runs a fresh OrphanImporter per file for the CLI and
aggregates the outcomes into an ImportSummary.
"""

SPREADSHEET_SUFFIXES = {".xls", ".xlsx"}

# user facing messages for structural errors
NOT_EXCEL_MESSAGE = "Is not a valid Excel file."
EMPTY_MESSAGE = "Does not contain any orphan records."


class ProcessingError(Exception):
    """Fatal error that prevents a multi-file run."""


class OrphanImporter:
    """Import orphan records from one spreadsheet.

    A fresh instance is needed per document; the ledger and extracted rows
    belong to that single run.
    """

    def __init__(self, path: Path | str, config: ImportConfig) -> None:
        self.path = Path(path)
        self.config = config
        self.status = DocumentStatus.PENDING
        self._doc: WorkbookDocument | None = None
        self._import_errors: list[ErrorRecord] = []
        self._rows: list[RowData] | None = None
        self._extractor = RowExtractor(
            config, OptionResolver(config.options), self.add_validation_error
        )

    @property
    def valid(self) -> bool:
        return not self._import_errors

    @property
    def import_errors(self) -> list[ErrorRecord]:
        return list(self._import_errors)

    @property
    def rows(self) -> list[RowData]:
        return list(self._rows or [])

    def add_validation_error(self, ref: str, error: str) -> bool:
        """Append one ledger entry. Always returns False."""
        self._import_errors.append(ErrorRecord(ref=ref, error=error))
        return False

    def open_doc(self) -> bool:
        """Run the document loader once; later calls return the same answer."""
        if self.status is not DocumentStatus.PENDING:
            return self.status is DocumentStatus.OPENED

        try:
            self._doc = open_workbook(
                self.path, sheet=self.config.sheet, first_row=self.config.first_row
            )
        except NotAnExcelFileError as e:
            logger.debug("rejecting %s: %s", self.path, e)
            return self._reject(NOT_EXCEL_MESSAGE)
        except EmptyDocumentError as e:
            logger.debug("rejecting %s: %s", self.path, e)
            return self._reject(EMPTY_MESSAGE)
        except SheetNotFoundError as e:
            return self._reject(str(e))

        self.status = DocumentStatus.OPENED
        logger.debug(
            "opened %s format=%s sheet=%s rows=%d",
            self.path.name,
            self._doc.format,
            self._doc.sheet_name,
            len(self._doc.rows),
        )
        return True

    def _reject(self, message: str) -> bool:
        self.status = DocumentStatus.REJECTED
        return self.add_validation_error(DOCUMENT_REF, message)

    def extract_records(self) -> list[dict[str, Any]]:
        """Return one FieldMap per data row, in document order.

        Empty when the document was rejected. Rows are extracted on the first
        call only; repeated calls return equal lists and add no errors.
        """
        if self._rows is None:
            if not self.open_doc() or self._doc is None:
                return []
            self._rows = [self._extractor.extract(row) for row in self._doc.rows]
        return [dict(row.values) for row in self._rows]

    def extract_orphans(self) -> list[PendingOrphan]:
        return [to_orphan(fields) for fields in self.extract_records()]


def scan_spreadsheets(directory: Path) -> list[Path]:
    """List .xls/.xlsx files in ``directory`` (non-recursive, sorted).

    Raises:
        ProcessingError: If directory doesn't exist or can't be read
    """
    if not directory.exists():
        raise ProcessingError(f"Directory not found: {directory}")

    if not directory.is_dir():
        raise ProcessingError(f"Path is not a directory: {directory}")

    try:
        return sorted(
            p for p in directory.iterdir() if p.is_file() and p.suffix.lower() in SPREADSHEET_SUFFIXES
        )
    except OSError as e:
        raise ProcessingError(f"Error reading directory {directory}: {e}") from e


def import_file(path: Path, config: ImportConfig) -> tuple[ImportedFile, list[PendingOrphan]]:
    """Import one file with a fresh OrphanImporter."""
    start_time = datetime.now(UTC)
    importer = OrphanImporter(path, config)
    orphans = importer.extract_orphans()
    end_time = datetime.now(UTC)
    return (
        ImportedFile(
            path=path,
            name=path.name,
            status=importer.status,
            records=len(orphans),
            errors=importer.import_errors,
            start_time=start_time,
            end_time=end_time,
        ),
        orphans,
    )


def import_files(
    paths: list[Path], config: ImportConfig, error_log: ErrorLogBuffer | None = None
) -> ImportSummary:
    """Import every file and aggregate the outcomes.

    Each file's ledger entries are logged at ERROR and buffered into
    ``error_log`` (flushed once at the end).
    """
    start_time = datetime.now(UTC)
    file_stats: list[FileStat] = []
    total_errors = 0

    with ProgressTracker(len(paths), description="Importing files") as progress:
        for path in paths:
            progress.start_file(path)
            imported, _ = import_file(path, config)

            for record in imported.errors:
                logger.error("%s %s: %s", imported.name, record.ref, record.error)
                if error_log is not None:
                    error_log.append(imported.name, record)

            total_errors += len(imported.errors)

            logger.info(
                "file=%s status=%s records=%d errors=%d",
                imported.name,
                imported.status.value,
                imported.records,
                len(imported.errors),
            )
            progress.finish_file(valid=imported.valid, records=imported.records)

            file_stats.append(
                FileStat(
                    file_name=imported.name,
                    status="valid" if imported.valid else "invalid",
                    records=imported.records,
                    errors=len(imported.errors),
                    elapsed_seconds=imported.elapsed_seconds,
                )
            )

    valid_count = progress.valid_files
    invalid_count = progress.invalid_files
    total_records = progress.records

    if error_log is not None and len(error_log):
        try:
            error_log.flush()
        except OSError as e:
            logger.warning("failed to write error log: %s", e)

    end_time = datetime.now(UTC)
    elapsed_seconds = (end_time - start_time).total_seconds()
    throughput_rps = total_records / elapsed_seconds if elapsed_seconds > 0 else 0.0

    return ImportSummary(
        valid_files=valid_count,
        invalid_files=invalid_count,
        total_records=total_records,
        total_errors=total_errors,
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=elapsed_seconds,
        throughput_rows_per_sec=throughput_rps,
        file_stats=file_stats,
    )
