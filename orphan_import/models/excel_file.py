from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path

from .error_record import ErrorRecord

"""Document status and per-file outcome models.

DocumentStatus is the importer's state machine: a document starts PENDING
and moves exactly once to OPENED or REJECTED when the loader runs.
ImportedFile records how one file fared in a multi-file run.
"""


class DocumentStatus(Enum):
    """Importer lifecycle.

    State transitions: pending → (opened | rejected), both terminal.

    - PENDING: Loader has not run yet
    - OPENED: Genuine spreadsheet with at least one data row
    - REJECTED: Structural error recorded, no rows will be extracted
    """
    PENDING = "pending"
    OPENED = "opened"
    REJECTED = "rejected"


@dataclass(frozen=True)
class ImportedFile:
    """Outcome of importing a single spreadsheet file."""
    path: Path
    name: str
    status: DocumentStatus
    records: int = 0  # extracted field maps
    errors: list[ErrorRecord] = field(default_factory=list)
    start_time: datetime | None = None
    end_time: datetime | None = None

    @property
    def valid(self) -> bool:
        return not self.errors

    @property
    def elapsed_seconds(self) -> float:
        if self.start_time is None or self.end_time is None:
            return 0.0
        return (self.end_time - self.start_time).total_seconds()
