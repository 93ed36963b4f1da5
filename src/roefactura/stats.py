"""Processing summaries and validation counters."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from decimal import Decimal

from .models import InvoiceDocument, Party
from .results import ValidationResult
from .settings import ValidationSettings, resolve_settings


@dataclass(frozen=True)
class InvoiceSummary:
    """Key facts about an invoice, as shown by ``roefactura summary``."""

    number: str
    is_romanian: bool
    type_code: str
    currency: str
    payable_amount: Decimal
    line_count: int
    breakdown_count: int

    def as_cells(self) -> list[str]:
        return [
            self.number,
            "yes" if self.is_romanian else "no",
            self.type_code,
            self.currency,
            str(self.payable_amount),
            str(self.line_count),
            str(self.breakdown_count),
        ]


def _in_country(party: Party | None, country: str) -> bool:
    return (
        party is not None
        and party.address is not None
        and party.address.country_code == country
    )


def is_romanian_invoice(
    document: InvoiceDocument, settings: ValidationSettings | None = None
) -> bool:
    """Return ``True`` for RO_CIUS invoices or invoices with a Romanian seller/buyer."""

    settings = resolve_settings(settings)
    if document.customization_id == settings.customization_id:
        return True
    return _in_country(document.seller, settings.domestic_country) or _in_country(
        document.buyer, settings.domestic_country
    )


def summarise_invoice(
    document: InvoiceDocument, settings: ValidationSettings | None = None
) -> InvoiceSummary:
    payable = document.totals.payable_amount if document.totals is not None else None
    return InvoiceSummary(
        number=document.number or "",
        is_romanian=is_romanian_invoice(document, settings),
        type_code=document.type_code or "",
        currency=document.currency_code or "",
        payable_amount=payable if payable is not None else Decimal("0"),
        line_count=len(document.lines),
        breakdown_count=len(document.tax_breakdowns),
    )


@dataclass
class ValidationCounters:
    """Counts of validated documents and rule hits.

    Owned by the caller: create one per batch (or per worker) and pass it
    around; nothing in the library keeps counters of its own.
    """

    processed: int = 0
    valid: int = 0
    invalid: int = 0
    by_code: Counter[str] = field(default_factory=Counter)

    def record(self, result: ValidationResult) -> None:
        self.processed += 1
        if result.is_valid:
            self.valid += 1
        else:
            self.invalid += 1
        self.by_code.update(result.codes)

    def most_common(self, limit: int | None = None) -> list[tuple[str, int]]:
        return self.by_code.most_common(limit)


__all__ = [
    "InvoiceSummary",
    "ValidationCounters",
    "is_romanian_invoice",
    "summarise_invoice",
]
