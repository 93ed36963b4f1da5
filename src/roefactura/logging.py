"""Excel reports of validation violations.

Every report is a fresh workbook: a frozen header row with a filter, then one
row per violation in evaluation order. Batch reports prefix each violation
with the file it came from (see :class:`ReportRow`).
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Protocol, Sequence

from .results import Violation

VIOLATION_COLUMNS = ("code", "scope", "line", "message")


class RowLike(Protocol):
    """Anything that serialises itself as one spreadsheet row."""

    def as_cells(self) -> Iterable[str]:
        """Return the ordered cell values for the row."""


@dataclass(frozen=True)
class ReportRow:
    """A violation found in ``source`` (usually the invoice file name)."""

    source: str
    violation: Violation

    def as_cells(self) -> list[str]:
        return [self.source, *self.violation.as_cells()]


@dataclass(slots=True)
class ExcelLoggerConfig:
    """Configuration used by :class:`ExcelLogger`."""

    columns: Sequence[str] = VIOLATION_COLUMNS
    filename: str = "roefactura-report.xlsx"
    sheet_title: str = "Violations"


class ExcelLogger:
    """Write violation rows to an Excel workbook using :mod:`openpyxl`."""

    def __init__(self, config: ExcelLoggerConfig) -> None:
        self.config = config

    def write_rows(self, rows: Iterable[RowLike]) -> Path:
        """Persist ``rows`` to the configured workbook and return its path."""

        from openpyxl import Workbook

        destination = Path(self.config.filename)
        destination.parent.mkdir(parents=True, exist_ok=True)

        workbook = Workbook()
        worksheet = workbook.active
        worksheet.title = self.config.sheet_title
        worksheet.append(list(self.config.columns))
        worksheet.freeze_panes = "A2"

        for row in rows:
            worksheet.append(list(row.as_cells()))

        worksheet.auto_filter.ref = worksheet.dimensions
        workbook.save(destination)
        return destination


__all__ = [
    "ExcelLogger",
    "ExcelLoggerConfig",
    "ReportRow",
    "RowLike",
    "VIOLATION_COLUMNS",
]
