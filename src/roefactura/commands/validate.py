"""Validate UBL invoices against the RO_CIUS rules."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from ..logging import VIOLATION_COLUMNS, ExcelLogger, ExcelLoggerConfig, ReportRow
from ..settings import SettingsLoaderError, load_settings
from ..stats import ValidationCounters
from ..ubl import UblParseError, load_invoice
from ..validator import validate_invoice

LOGGER = logging.getLogger("roefactura.commands.validate")

REPORT_COLUMNS = ("file", *VIOLATION_COLUMNS)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="roefactura validate",
        description="Validate UBL invoices against the EN16931 and RO_CIUS rules.",
    )
    parser.add_argument("files", nargs="+", type=Path, help="UBL invoice or credit note XML")
    parser.add_argument(
        "--report",
        type=Path,
        help="Write the violations of every file to this Excel workbook",
    )
    parser.add_argument(
        "--settings",
        type=Path,
        help="JSON file overriding the validation settings",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    from ..cli import configure_logging

    configure_logging(verbose=args.verbose)

    try:
        settings = load_settings(args.settings)
    except SettingsLoaderError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    counters = ValidationCounters()
    rows: list[ReportRow] = []
    unreadable = False
    for path in args.files:
        try:
            document = load_invoice(path)
        except UblParseError as exc:
            LOGGER.error("%s", exc)
            print(f"error: {exc}", file=sys.stderr)
            unreadable = True
            continue

        result = validate_invoice(document, settings)
        counters.record(result)
        rows.extend(ReportRow(path.name, item) for item in result)
        if result.is_valid:
            print(f"{path}: valid")
            continue
        print(f"{path}: {len(result)} violation(s)")
        for item in result:
            print(f"  {item}")

    LOGGER.info(
        "Validated %d file(s): %d valid, %d invalid",
        counters.processed,
        counters.valid,
        counters.invalid,
    )

    if args.report is not None:
        logger = ExcelLogger(
            ExcelLoggerConfig(columns=REPORT_COLUMNS, filename=str(args.report))
        )
        destination = logger.write_rows(rows)
        print(f"Report saved to: {destination}")

    if unreadable:
        return 2
    return 0 if counters.invalid == 0 else 1


if __name__ == "__main__":  # pragma: no cover - direct execution
    raise SystemExit(main())
