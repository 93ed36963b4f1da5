"""Print the processing summary of UBL invoices."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

from ..stats import summarise_invoice
from ..ubl import UblParseError, load_invoice

_HEADER = ("number", "romanian", "type", "currency", "payable", "lines", "vat breakdowns")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="roefactura summary",
        description="Show number, type, currency, amount due and counts for each invoice.",
    )
    parser.add_argument("files", nargs="+", type=Path, help="UBL invoice or credit note XML")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    status = 0
    print("\t".join(("file", *_HEADER)))
    for path in args.files:
        try:
            document = load_invoice(path)
        except UblParseError as exc:
            print(f"error: {exc}", file=sys.stderr)
            status = 2
            continue
        summary = summarise_invoice(document)
        print("\t".join((path.name, *summary.as_cells())))

    return status


if __name__ == "__main__":  # pragma: no cover - direct execution
    raise SystemExit(main())
