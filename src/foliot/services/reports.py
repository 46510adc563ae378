"""
Monthly summaries and Excel export.
"""

import calendar
from collections import defaultdict
from datetime import date
from pathlib import Path

from openpyxl import Workbook
from openpyxl.styles import Font

from foliot.core.config import ENTRY_HEADERS, MONTH_KEY_FORMAT, SUMMARY_HEADERS
from foliot.core.logger import log
from foliot.models.duration import Duration
from foliot.models.entries import Entry, EntryRow, MonthlySummary
from foliot.services.entries import EntryPredicate, filter_entries, sort_by_start, take_tail


def month_key(entry: Entry) -> str:
    """Month an entry is counted in, e.g. '2024/01 January'."""
    return entry.start_time.strftime(MONTH_KEY_FORMAT)


def days_in_month(d: date) -> int:
    """Number of days of the calendar month containing ``d``."""
    return calendar.monthrange(d.year, d.month)[1]


def hours_per_week(total: Duration, weeks: float) -> float:
    """
    Average hours per week for a month.

    Note: the minutes term is ``60 / minutes``, not ``minutes / 60``, so this
    is an approximation (40:30h counts as 42 hours).
    """
    rem_minutes = 0.0 if total.minutes == 0 else 60.0 / total.minutes
    return (total.hours + rem_minutes) / weeks


def summarize_month(month: str, entries: list[Entry]) -> MonthlySummary:
    """Roll up the (non-empty) entries of one month."""
    total = Duration.zero()
    for entry in entries:
        total = total + entry.duration

    days = len({e.start_time.date() for e in entries})
    weeks = days_in_month(entries[0].start_time.date()) / 7.0

    return MonthlySummary(
        month=month,
        total_duration=total,
        hours_per_week=hours_per_week(total, weeks),
        days=days,
        entries=len(entries),
    )


def aggregate_monthly(entries: list[Entry]) -> list[MonthlySummary]:
    """
    Group entries by calendar month of their start time.

    Returns:
        One summary per month, sorted by month key
    """
    by_month: dict[str, list[Entry]] = defaultdict(list)
    for entry in sort_by_start(entries):
        by_month[month_key(entry)].append(entry)

    return [summarize_month(month, by_month[month]) for month in sorted(by_month)]


def summarize(
    entries: list[Entry],
    predicate: EntryPredicate | None = None,
    tail: int = 0,
) -> list[MonthlySummary]:
    """Filter, aggregate by month and keep the last ``tail`` months."""
    selected = filter_entries(sort_by_start(entries), predicate)
    return take_tail(aggregate_monthly(selected), tail)


# =============================================================================
# EXCEL EXPORT
# =============================================================================


def write_excel_header(ws, headers: list[str]):
    for col_idx, header in enumerate(headers, start=1):
        cell = ws.cell(row=1, column=col_idx, value=header)
        cell.font = Font(bold=True)


def write_excel_entries_sheet(ws, rows: list[EntryRow]):
    """
    Write the Entries sheet.

    Columns: date, from, to, duration, comment. The date is written as a real
    date cell, the rest as text.
    """
    write_excel_header(ws, ENTRY_HEADERS)

    for row_idx, row in enumerate(rows, start=2):
        ws.cell(row=row_idx, column=1, value=row.date).number_format = "yyyy-mm-dd"
        ws.cell(row=row_idx, column=2, value=row.start)
        ws.cell(row=row_idx, column=3, value=row.end)
        ws.cell(row=row_idx, column=4, value=str(row.duration))
        ws.cell(row=row_idx, column=5, value=row.comment)


def write_excel_summary_sheet(ws, summaries: list[MonthlySummary]):
    """Write the Monthly Summary sheet, hours per week as a number."""
    write_excel_header(ws, SUMMARY_HEADERS)

    for row_idx, summary in enumerate(summaries, start=2):
        ws.cell(row=row_idx, column=1, value=summary.month)
        ws.cell(row=row_idx, column=2, value=str(summary.total_duration))
        cell = ws.cell(row=row_idx, column=3, value=round(summary.hours_per_week, 2))
        cell.number_format = "0.00"
        ws.cell(row=row_idx, column=4, value=summary.days)
        ws.cell(row=row_idx, column=5, value=summary.entries)


def create_excel_report(
    entries: list[Entry],
    output_path: Path,
    predicate: EntryPredicate | None = None,
) -> Path:
    """
    Create an Excel workbook with two sheets.

    Sheet 1: "Entries" - every selected entry in chronological order
    Sheet 2: "Monthly Summary" - one row per month
    """
    wb = Workbook()

    ws_entries = wb.active
    ws_entries.title = "Entries"
    selected = filter_entries(sort_by_start(entries), predicate)
    write_excel_entries_sheet(ws_entries, [EntryRow.from_entry(e) for e in selected])

    ws_summary = wb.create_sheet(title="Monthly Summary")
    write_excel_summary_sheet(ws_summary, aggregate_monthly(selected))

    output_path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(str(output_path))
    log.info(f"Saved Excel report to: {output_path}")
    return output_path
