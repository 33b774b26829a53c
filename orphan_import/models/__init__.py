"""Domain models for the orphan spreadsheet importer.

This package contains the configuration, ledger, row and record types used
throughout the import pipeline.
"""

from .config_models import ColumnSpec, ColumnType, ImportConfig, OptionEntry
from .error_record import DOCUMENT_REF, ErrorRecord
from .excel_file import DocumentStatus, ImportedFile
from .pending_orphan import PendingOrphan
from .processing_result import FileStat, ImportSummary
from .row_data import RowData

__all__ = [
    # Configuration models
    "ColumnSpec",
    "ColumnType",
    "ImportConfig",
    "OptionEntry",
    # Ledger
    "DOCUMENT_REF",
    "ErrorRecord",
    # Processing models
    "DocumentStatus",
    "ImportedFile",
    "RowData",
    "PendingOrphan",
    # Results
    "FileStat",
    "ImportSummary",
]
