from __future__ import annotations

from ..models.processing_result import ImportSummary

"""SUMMARY line rendering for the import CLI."""


def _format_number(value: float) -> str:
    # integers without decimals, tiny values without scientific notation
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return str(round(value, 3))


def render_summary_line(summary: ImportSummary) -> str:
    """Render the SUMMARY line.

    Format:
    SUMMARY files={total}/{total} valid={valid} invalid={invalid} records={records}
    errors={errors} elapsed_sec={elapsed} throughput_rps={throughput}

    Examples:
        >>> from datetime import datetime, timezone
        >>> start = datetime(2026, 1, 1, 10, 0, 0, tzinfo=timezone.utc)
        >>> end = datetime(2026, 1, 1, 10, 0, 2, tzinfo=timezone.utc)
        >>> summary = ImportSummary(
        ...     valid_files=1, invalid_files=0, total_records=30, total_errors=0,
        ...     start_time=start, end_time=end, elapsed_seconds=2.0,
        ...     throughput_rows_per_sec=15.0,
        ... )
        >>> render_summary_line(summary)
        'SUMMARY files=1/1 valid=1 invalid=0 records=30 errors=0 elapsed_sec=2 throughput_rps=15'
    """
    total = summary.total_files
    return (
        f"SUMMARY files={total}/{total} "
        f"valid={summary.valid_files} "
        f"invalid={summary.invalid_files} "
        f"records={summary.total_records} "
        f"errors={summary.total_errors} "
        f"elapsed_sec={_format_number(summary.elapsed_seconds)} "
        f"throughput_rps={_format_number(summary.throughput_rows_per_sec)}"
    )
