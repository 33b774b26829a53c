from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path

from ..models.error_record import ErrorRecord

"""Error log buffering.

Import errors of a CLI run are buffered and written once as JSON Lines to
``logs/errors-YYYYMMDD-HHMMSS.log`` (UTC). Each line has exactly the keys
timestamp, file, ref and error.
"""

__all__ = [
    "ErrorLogBuffer",
    "LOGS_DIR",
]

LOGS_DIR = Path("./logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"


class ErrorLogBuffer:
    """In-memory buffer of (file, ErrorRecord) pairs; flush writes JSON Lines.

    - File path is decided on first access and reused by later flushes
    - No thread safety (serial execution)
    """
    def __init__(self, logs_dir: Path = LOGS_DIR) -> None:
        self._entries: list[dict[str, str]] = []
        self._logs_dir = logs_dir
        self._file_path: Path | None = None

    @property
    def file_path(self) -> Path:
        if self._file_path is None:
            self._logs_dir.mkdir(parents=True, exist_ok=True)
            stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
            self._file_path = self._logs_dir / f"errors-{stamp}.log"
        return self._file_path

    def append(self, file: str, record: ErrorRecord) -> None:
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        self._entries.append({"timestamp": ts, "file": file, **record.to_dict()})

    def __len__(self) -> int:
        return len(self._entries)

    def flush(self) -> Path:
        fp = self.file_path
        if not self._entries:
            return fp
        with fp.open("a", encoding="utf-8") as f:
            for entry in self._entries:
                f.write(json.dumps(entry, ensure_ascii=False) + "\n")
        self._entries.clear()
        return fp
