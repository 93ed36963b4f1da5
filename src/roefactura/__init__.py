"""RO e-Factura compliance validation.

Validates in-memory invoices against the EN16931 business rules and the
Romanian RO_CIUS profile::

    from roefactura import validate_invoice

    result = validate_invoice(document)
    if not result.is_valid:
        for violation in result.violations:
            print(violation.code, violation.message)
"""

from .models import (
    Address,
    InvoiceDocument,
    InvoiceLine,
    MonetaryTotals,
    Party,
    Period,
    TaxBreakdown,
)
from .results import ContractError, Scope, ValidationResult, Violation
from .settings import DEFAULT_SETTINGS, ValidationSettings, load_settings
from .validator import export_report, validate_file, validate_invoice

__all__ = [
    "Address",
    "ContractError",
    "DEFAULT_SETTINGS",
    "InvoiceDocument",
    "InvoiceLine",
    "MonetaryTotals",
    "Party",
    "Period",
    "Scope",
    "TaxBreakdown",
    "ValidationResult",
    "ValidationSettings",
    "Violation",
    "export_report",
    "load_settings",
    "validate_file",
    "validate_invoice",
]
