"""In-memory representation of an electronic invoice.

The validators only ever read these objects. Every type is a frozen dataclass
and repeated elements are tuples, so a document built once can be validated
any number of times (and from several threads) with identical results.

Dates are normally :class:`~datetime.date` objects. Readers may keep the raw
text of a date they could not interpret; the rules treat such values as
"present but not comparable".
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

DateValue = date | str


@dataclass(frozen=True)
class Period:
    """Start and end of an invoicing period (document or line level)."""

    start: DateValue | None = None
    end: DateValue | None = None


@dataclass(frozen=True)
class Address:
    """Postal address of a party."""

    country_code: str | None = None
    country_subdivision: str | None = None
    city: str | None = None


@dataclass(frozen=True)
class Party:
    """Seller, buyer or payee of an invoice."""

    name: str | None = None
    legal_registration_id: str | None = None
    vat_identifier: str | None = None
    address: Address | None = None


@dataclass(frozen=True)
class InvoiceLine:
    """A single invoice line item."""

    id: str | None = None
    quantity: Decimal | None = None
    unit_code: str | None = None
    net_amount: Decimal | None = None
    unit_price: Decimal | None = None
    vat_category: str | None = None
    vat_rate: Decimal | None = None
    item_name: str | None = None
    item_description: str | None = None
    note: str | None = None
    period: Period | None = None


@dataclass(frozen=True)
class TaxBreakdown:
    """VAT breakdown entry for one category/rate pair."""

    category: str | None = None
    rate: Decimal | None = None
    taxable_amount: Decimal | None = None
    tax_amount: Decimal | None = None
    exemption_reason: str | None = None


@dataclass(frozen=True)
class MonetaryTotals:
    """Document level monetary totals."""

    tax_exclusive_amount: Decimal | None = None
    tax_inclusive_amount: Decimal | None = None
    payable_amount: Decimal | None = None
    vat_total: Decimal | None = None


@dataclass(frozen=True)
class InvoiceDocument:
    """Root of the invoice model handed to :func:`roefactura.validate_invoice`."""

    number: str | None = None
    issue_date: DateValue | None = None
    type_code: str | None = None
    currency_code: str | None = None
    customization_id: str | None = None
    due_date: DateValue | None = None
    tax_currency_code: str | None = None
    tax_point_date_code: str | None = None
    period: Period | None = None
    seller: Party | None = None
    buyer: Party | None = None
    payee: Party | None = None
    lines: tuple[InvoiceLine, ...] = ()
    tax_breakdowns: tuple[TaxBreakdown, ...] = ()
    totals: MonetaryTotals | None = None

    def __post_init__(self) -> None:
        # Absent repeated elements are empty; lists are frozen into tuples.
        object.__setattr__(self, "lines", tuple(self.lines or ()))
        object.__setattr__(self, "tax_breakdowns", tuple(self.tax_breakdowns or ()))

    def breakdown_tax_sum(self) -> Decimal:
        """Return the sum of the breakdown tax amounts (missing as zero)."""

        total = Decimal("0")
        for breakdown in self.tax_breakdowns:
            if breakdown.tax_amount is not None:
                total += breakdown.tax_amount
        return total

    def effective_vat_total(self) -> Decimal:
        """Return the caller's VAT total, or the breakdown sum when absent."""

        if self.totals is not None and self.totals.vat_total is not None:
            return self.totals.vat_total
        return self.breakdown_tax_sum()


__all__ = [
    "Address",
    "DateValue",
    "InvoiceDocument",
    "InvoiceLine",
    "MonetaryTotals",
    "Party",
    "Period",
    "TaxBreakdown",
]
