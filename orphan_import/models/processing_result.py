from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

"""Aggregated results of a multi-file import run.

ImportSummary carries everything the SUMMARY output line needs; FileStat is
the per-file breakdown kept alongside it.
"""


@dataclass(frozen=True)
class FileStat:
    """Per-file import statistics."""
    file_name: str
    status: str  # valid/invalid
    records: int  # extracted field maps
    errors: int  # ledger entries
    elapsed_seconds: float


@dataclass(frozen=True)
class ImportSummary:
    """Aggregated results for one CLI run."""
    valid_files: int  # files with an empty error ledger
    invalid_files: int
    total_records: int  # field maps extracted across all files
    total_errors: int
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    throughput_rows_per_sec: float  # total_records / elapsed
    file_stats: list[FileStat] | None = None

    @property
    def total_files(self) -> int:
        return self.valid_files + self.invalid_files
