"""Cross-field monetary consistency rules (BR-12..15, BR-CO-10..13, BR-RO-Z2).

Sums are compared with an absolute tolerance (``0.01`` by default) so that
rounding noise on individual lines does not reject an invoice. The VAT
breakdown check recomputes the tax amount with ties rounded away from zero,
never to even.
"""

from __future__ import annotations

from decimal import Decimal, localcontext

from ..models import InvoiceDocument, MonetaryTotals
from ..results import ContractError, Scope, Violation
from ..rules import run_rules, violation
from ..settings import ValidationSettings, resolve_settings
from ..utils import (
    HUNDRED,
    decimal_sum,
    fractional_digits,
    parse_decimal,
    round_half_away,
    within_tolerance,
)

_MONETARY_FIELDS = (
    ("BR-12", "tax_exclusive_amount"),
    ("BR-14", "tax_inclusive_amount"),
    ("BR-15", "payable_amount"),
)


def _totals(document: InvoiceDocument) -> MonetaryTotals:
    return document.totals if document.totals is not None else MonetaryTotals()


def expected_tax_amount(taxable_amount: Decimal, rate: Decimal) -> Decimal:
    """Return ``taxable_amount * rate / 100`` rounded half away from zero to cents."""

    with localcontext() as context:
        context.prec = max(
            context.prec,
            len(taxable_amount.as_tuple().digits) + len(rate.as_tuple().digits) + 3,
        )
        return round_half_away(taxable_amount * rate / HUNDRED, 2)


def _check_required_amounts(document: InvoiceDocument, settings: ValidationSettings) -> list[Violation]:
    totals = _totals(document)
    return [
        violation(code, Scope.TOTALS, field=attribute)
        for code, attribute in _MONETARY_FIELDS
        if getattr(totals, attribute) is None
    ]


def _check_line_net_sum(document: InvoiceDocument, settings: ValidationSettings) -> list[Violation]:
    tax_exclusive = _totals(document).tax_exclusive_amount
    if not document.lines or tax_exclusive is None:
        return []

    line_sum = decimal_sum(line.net_amount for line in document.lines)
    if within_tolerance(line_sum, tax_exclusive, settings.tolerance):
        return []
    return [
        violation(
            "BR-CO-10",
            Scope.TOTALS,
            expected=str(line_sum),
            actual=str(tax_exclusive),
        )
    ]


def _check_inclusive_total(document: InvoiceDocument, settings: ValidationSettings) -> list[Violation]:
    totals = _totals(document)
    if totals.tax_exclusive_amount is None or totals.tax_inclusive_amount is None:
        return []

    expected = totals.tax_exclusive_amount + document.effective_vat_total()
    if within_tolerance(totals.tax_inclusive_amount, expected, settings.tolerance):
        return []
    return [
        violation(
            "BR-CO-11",
            Scope.TOTALS,
            expected=str(expected),
            actual=str(totals.tax_inclusive_amount),
        )
    ]


def _check_breakdown_arithmetic(
    document: InvoiceDocument, settings: ValidationSettings
) -> list[Violation]:
    violations: list[Violation] = []
    for index, breakdown in enumerate(document.tax_breakdowns, start=1):
        taxable = parse_decimal(breakdown.taxable_amount)
        rate = parse_decimal(breakdown.rate)
        actual = parse_decimal(breakdown.tax_amount)
        if taxable is None or rate is None or actual is None:
            continue
        expected = expected_tax_amount(taxable, rate)
        if within_tolerance(actual, expected, settings.tolerance):
            continue
        violations.append(
            violation(
                "BR-CO-12",
                Scope.TOTALS,
                message=(
                    f"VAT breakdown {index} ({breakdown.category or '?'} "
                    f"{breakdown.rate}%): tax amount {actual} "
                    f"should be {expected}."
                ),
                breakdown=index,
                expected=str(expected),
                actual=str(actual),
            )
        )
    return violations


def _check_vat_total(document: InvoiceDocument, settings: ValidationSettings) -> list[Violation]:
    vat_total = _totals(document).vat_total
    if vat_total is None or not document.tax_breakdowns:
        return []

    breakdown_sum = document.breakdown_tax_sum()
    if within_tolerance(vat_total, breakdown_sum, settings.tolerance):
        return []
    return [
        violation(
            "BR-CO-13",
            Scope.TOTALS,
            expected=str(breakdown_sum),
            actual=str(vat_total),
        )
    ]


def _check_amount_precision(document: InvoiceDocument, settings: ValidationSettings) -> list[Violation]:
    totals = _totals(document)
    violations: list[Violation] = []
    for _, attribute in _MONETARY_FIELDS:
        value = getattr(totals, attribute)
        if value is None:
            continue
        digits = fractional_digits(value)
        if digits <= settings.monetary_decimals:
            continue
        violations.append(
            violation(
                "BR-RO-Z2",
                Scope.TOTALS,
                message=(
                    f"Monetary amount {attribute} ({value}) must have maximum "
                    f"{settings.monetary_decimals} decimal places."
                ),
                field=attribute,
                decimals=digits,
            )
        )
    return violations


TOTALS_RULES = (
    _check_required_amounts,
    _check_line_net_sum,
    _check_inclusive_total,
    _check_breakdown_arithmetic,
    _check_vat_total,
    _check_amount_precision,
)


def validate_totals(
    document: InvoiceDocument, settings: ValidationSettings | None = None
) -> list[Violation]:
    """Validate the monetary totals of ``document``."""

    if not isinstance(document, InvoiceDocument):
        raise ContractError(f"Expected an InvoiceDocument, got {type(document).__name__}")
    return run_rules(TOTALS_RULES, document, resolve_settings(settings))


__all__ = ["TOTALS_RULES", "expected_tax_amount", "validate_totals"]
