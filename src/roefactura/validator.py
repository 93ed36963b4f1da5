"""Validator entry point for RO e-Factura invoices.

:func:`validate_invoice` runs the document level rules and delegates to the
seller, buyer, payee, line and totals validators. Every rule is evaluated on
every call; the result lists all violations in a fixed order (document rules,
seller, buyer, payee, lines in document order, totals).
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from .constants import EN16931_INVOICE_TYPE_CODES, ROMANIAN_INVOICE_TYPE_CODES
from .models import InvoiceDocument
from .results import ContractError, Scope, ValidationResult, Violation
from .rules import run_rules, violation
from .settings import ValidationSettings, resolve_settings
from .ubl import load_invoice
from .utils import has_text, has_visible_text
from .validation.line import period_is_ordered, validate_line
from .validation.parties import validate_buyer, validate_payee, validate_seller
from .validation.totals import validate_totals

LOGGER = logging.getLogger("roefactura.validator")

_DIGIT = re.compile(r"\d")


def _check_customization_id(document: InvoiceDocument, settings: ValidationSettings) -> list[Violation]:
    if document.customization_id == settings.customization_id:
        return []
    return [
        violation(
            "BR-RO-CIUS",
            Scope.DOCUMENT,
            message=f"CustomizationID must be: {settings.customization_id}",
            current_value=document.customization_id,
        )
    ]


def _check_number_required(document: InvoiceDocument, settings: ValidationSettings) -> list[Violation]:
    if has_text(document.number):
        return []
    return [violation("BR-1", Scope.DOCUMENT)]


def _check_number_has_digit(document: InvoiceDocument, settings: ValidationSettings) -> list[Violation]:
    number = document.number
    if has_visible_text(number) and _DIGIT.search(number or ""):
        return []
    return [violation("BR-RO-010", Scope.DOCUMENT, current_value=number)]


def _check_issue_date(document: InvoiceDocument, settings: ValidationSettings) -> list[Violation]:
    if document.issue_date is not None and document.issue_date != "":
        return []
    return [violation("BR-2", Scope.DOCUMENT)]


def _check_type_code_required(document: InvoiceDocument, settings: ValidationSettings) -> list[Violation]:
    if has_text(document.type_code):
        return []
    return [violation("BR-3", Scope.DOCUMENT)]


def _check_type_code_known(document: InvoiceDocument, settings: ValidationSettings) -> list[Violation]:
    if not has_text(document.type_code) or document.type_code in EN16931_INVOICE_TYPE_CODES:
        return []
    return [violation("BR-4", Scope.DOCUMENT, current_value=document.type_code)]


def _check_romanian_type_code(document: InvoiceDocument, settings: ValidationSettings) -> list[Violation]:
    if (document.type_code or "") in ROMANIAN_INVOICE_TYPE_CODES:
        return []
    return [
        violation(
            "BR-RO-020",
            Scope.DOCUMENT,
            message=(
                "Invalid invoice type code. Must be one of: "
                + ", ".join(ROMANIAN_INVOICE_TYPE_CODES)
            ),
            current_value=document.type_code,
        )
    ]


def _check_currency_required(document: InvoiceDocument, settings: ValidationSettings) -> list[Violation]:
    if has_text(document.currency_code):
        return []
    return [violation("BR-5", Scope.DOCUMENT)]


def _check_vat_currency(document: InvoiceDocument, settings: ValidationSettings) -> list[Violation]:
    if document.currency_code == settings.domestic_currency:
        return []
    if document.tax_currency_code == settings.domestic_currency:
        return []
    return [
        violation(
            "BR-RO-030",
            Scope.DOCUMENT,
            currency=document.currency_code,
            tax_currency=document.tax_currency_code,
        )
    ]


def _check_vat_point_date_code(document: InvoiceDocument, settings: ValidationSettings) -> list[Violation]:
    if not has_text(document.tax_point_date_code):
        return []
    # Not yet enforced: the accepted codes are listed in
    # constants.VAT_POINT_DATE_CODES but the rule always passes.
    return []


def _check_period(document: InvoiceDocument, settings: ValidationSettings) -> list[Violation]:
    if period_is_ordered(document.period):
        return []
    return [violation("BR-29", Scope.DOCUMENT)]


def _check_has_lines(document: InvoiceDocument, settings: ValidationSettings) -> list[Violation]:
    if document.lines:
        return []
    return [violation("BR-16", Scope.DOCUMENT)]


def _check_line_count(document: InvoiceDocument, settings: ValidationSettings) -> list[Violation]:
    count = len(document.lines)
    if count <= settings.max_lines:
        return []
    return [
        violation(
            "BR-RO-A999",
            Scope.DOCUMENT,
            message=f"Invoice cannot have more than {settings.max_lines} lines.",
            line_count=count,
        )
    ]


DOCUMENT_RULES = (
    _check_customization_id,
    _check_number_required,
    _check_number_has_digit,
    _check_issue_date,
    _check_type_code_required,
    _check_type_code_known,
    _check_romanian_type_code,
    _check_currency_required,
    _check_vat_currency,
    _check_vat_point_date_code,
    _check_period,
    _check_has_lines,
    _check_line_count,
)


def is_forced_execution(document: InvoiceDocument) -> bool:
    """Return whether the invoice is issued under forced execution.

    The status cannot be read from the invoice itself, so this is always
    ``False`` and BR-RO-130 only applies to direct
    :func:`~roefactura.validation.parties.validate_payee` calls.
    """

    return False


def validate_invoice(
    document: InvoiceDocument, settings: ValidationSettings | None = None
) -> ValidationResult:
    """Run every RO_CIUS rule against ``document`` and return all violations."""

    if not isinstance(document, InvoiceDocument):
        raise ContractError(
            f"validate_invoice expects an InvoiceDocument, got {type(document).__name__}"
        )

    settings = resolve_settings(settings)
    violations = run_rules(DOCUMENT_RULES, document, settings)

    if document.seller is not None:
        violations.extend(validate_seller(document.seller, settings))
    if document.buyer is not None:
        violations.extend(validate_buyer(document.buyer, settings))
    if document.payee is not None:
        violations.extend(
            validate_payee(
                document.payee,
                settings,
                forced_execution=is_forced_execution(document),
            )
        )
    for position, line in enumerate(document.lines, start=1):
        violations.extend(validate_line(line, settings, position=position))
    violations.extend(validate_totals(document, settings))

    LOGGER.debug(
        "Invoice %s: %d line(s), %d violation(s)",
        document.number or "(no number)",
        len(document.lines),
        len(violations),
    )
    return ValidationResult.from_violations(violations)


def validate_file(path: Path, settings: ValidationSettings | None = None) -> ValidationResult:
    """Read a UBL invoice from ``path`` and validate it."""

    document = load_invoice(path)
    return validate_invoice(document, settings)


def export_report(result: ValidationResult, *, destination: Path) -> Path:
    """Export the violations of ``result`` to an Excel report."""

    from .logging import ExcelLogger, ExcelLoggerConfig

    logger = ExcelLogger(ExcelLoggerConfig(filename=str(destination)))
    return logger.write_rows(result.violations)


__all__ = [
    "DOCUMENT_RULES",
    "export_report",
    "is_forced_execution",
    "validate_file",
    "validate_invoice",
]
