"""Orphan spreadsheet importer.

Turns registration spreadsheets into PendingOrphan candidate records while
collecting every structural and per-field problem in an error ledger.
"""

from orphan_import.config.loader import ConfigError, load_config, parse_config
from orphan_import.services.orchestrator import OrphanImporter
from orphan_import.services.record_builder import to_orphan

__version__ = "0.1.0"

__all__ = [
    "ConfigError",
    "OrphanImporter",
    "load_config",
    "parse_config",
    "to_orphan",
]
