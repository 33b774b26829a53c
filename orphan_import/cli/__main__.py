from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from orphan_import.config.loader import ConfigError, load_config
from orphan_import.excel.reader import DocumentError, open_workbook
from orphan_import.logging.error_log import ErrorLogBuffer
from orphan_import.logging.init import enable_debug, log_summary, setup_logging
from orphan_import.models.config_models import ImportConfig
from orphan_import.services.orchestrator import ProcessingError, import_files, scan_spreadsheets
from orphan_import.services.summary import render_summary_line

"""CLI entrypoint.

Flow:
- Load .env, then the YAML import config
- Collect spreadsheet files (arguments, or source_directory from config)
- Import each file with its own importer, log every error, print SUMMARY
"""

EXIT_SUCCESS_ALL = 0
EXIT_PARTIAL_FAILURE = 2
EXIT_FATAL = 1

DEFAULT_CONFIG_PATH = Path("config/import.yml")
CONFIG_ENV_VAR = "ORPHAN_IMPORT_CONFIG"


def _load_env_file(path: Path, override: bool = False) -> None:
    """Load .env using python-dotenv; a broken file only warns."""
    if not path.exists():
        return
    try:
        load_dotenv(dotenv_path=path, override=override)
    except OSError as e:  # pragma: no cover
        print(f"WARNING: failed to load .env via python-dotenv: {e}")


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Import orphan records from Excel spreadsheets")
    p.add_argument("files", nargs="*", type=Path, help="Spreadsheets to import (default: source_directory)")
    p.add_argument("--config", type=Path, default=None, help="Import config YAML (default: config/import.yml)")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect-data", action="store_true", help="Print the first rows of each file then exit")
    return p.parse_args(argv)


def _inspect_data(paths: list[Path], cfg: ImportConfig) -> int:
    for f in paths:
        print(f"FILE: {f.name}")
        try:
            doc = open_workbook(f, sheet=cfg.sheet, first_row=cfg.first_row)
        except DocumentError as e:
            print(f"  read_error: {e}")
            continue
        print(f"  format={doc.format} sheet={doc.sheet_name} rows={len(doc.rows)}")
        for row in doc.rows[:3]:
            cells = {c.field: row.cell(c.column) for c in cfg.columns}
            safe = {k: (v.isoformat() if hasattr(v, "isoformat") else v) for k, v in cells.items()}
            print(f"    row {row.row_number}: {safe}")
    return 0


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None のときのみシステム引数を読む (tests call main([]))
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"))

    config_path = args.config or Path(os.getenv(CONFIG_ENV_VAR) or DEFAULT_CONFIG_PATH)
    try:
        cfg = load_config(config_path)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.debug:
        enable_debug()

    if args.files:
        paths = list(args.files)
    else:
        directory = Path(cfg.source_directory)
        try:
            paths = scan_spreadsheets(directory)
        except ProcessingError as e:
            logger.error(f"source: {e}")
            return EXIT_FATAL
        logger.info(f"Importing files from: {directory}")

    if args.inspect_data:
        return _inspect_data(paths, cfg)

    summary = import_files(paths, cfg, error_log=ErrorLogBuffer())

    # log_summary adds the "SUMMARY " prefix itself
    log_summary(render_summary_line(summary).removeprefix("SUMMARY "))

    if summary.invalid_files > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
