from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

from tqdm import tqdm
from tqdm.std import tqdm as TqdmType

"""Import run progress: one tick per spreadsheet, running valid/invalid tally.

The bar is only drawn on a TTY; the counters are kept either way so the
caller can read them back after the run.
"""

__all__ = [
    "ProgressTracker",
    "is_tty_enabled",
]


def is_tty_enabled() -> bool:
    return sys.stdout.isatty()


class ProgressTracker:
    """Counts imported files and mirrors the tally on a tqdm bar."""

    def __init__(self, total_files: int, *, description: str = "Importing files") -> None:
        self.total_files = total_files
        self.description = description
        self.valid_files = 0
        self.invalid_files = 0
        self.records = 0
        self.pbar: TqdmType[Any] | None = None
        if is_tty_enabled():
            self.pbar = tqdm(total=total_files, desc=description, unit="file", ascii=True)

    @property
    def done(self) -> int:
        return self.valid_files + self.invalid_files

    def start_file(self, file_path: Path) -> None:
        if self.pbar is not None:
            self.pbar.set_description(f"{self.description} ({file_path.name})")

    def finish_file(self, *, valid: bool, records: int = 0) -> None:
        if valid:
            self.valid_files += 1
        else:
            self.invalid_files += 1
        self.records += records
        if self.pbar is not None:
            self.pbar.set_description(self.description)
            self.pbar.set_postfix(
                valid=self.valid_files, invalid=self.invalid_files, records=self.records
            )
            self.pbar.update(1)

    def close(self) -> None:
        if self.pbar is not None:
            self.pbar.close()
            self.pbar = None

    def __enter__(self) -> ProgressTracker:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
