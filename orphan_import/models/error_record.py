from __future__ import annotations

import json
from dataclasses import asdict, dataclass

"""ErrorRecord model for the import error ledger.

Every problem found while importing a spreadsheet becomes one ErrorRecord:
``ref`` identifies where (the document itself, a record, or a record and
column) and ``error`` is the human readable message shown to whoever
corrects the spreadsheet.
"""

__all__ = [
    "ErrorRecord",
    "DOCUMENT_REF",
]

# ref used for document-level (structural) errors
DOCUMENT_REF = "Import file"


@dataclass(frozen=True)
class ErrorRecord:
    """One entry of the import error ledger.

    Attributes:
        ref: "Import file", "Record: 5" or "Record: 5, Column: C"
        error: Message naming the failing field and value where there is one
    """
    ref: str
    error: str

    def to_dict(self) -> dict[str, str]:
        return asdict(self)

    def to_json_line(self) -> str:
        """Serialize to a single JSON line (keys: ref, error)."""
        return json.dumps(self.to_dict(), ensure_ascii=False)
