"""Catalogue of rule codes and their default messages.

The codes are part of the external contract: downstream systems compare them
with the ones returned by the tax authority's own validator, so a code is
never renamed or reused once published.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping

from .results import Scope, Violation


@dataclass(frozen=True)
class RuleDefinition:
    """Code, default message and profile of a business rule."""

    code: str
    message: str
    profile: str


_EN = "EN16931"
_RO = "RO_CIUS"

_DEFINITIONS: tuple[RuleDefinition, ...] = (
    # Document level
    RuleDefinition("BR-RO-CIUS", "CustomizationID must be the RO_CIUS profile identifier.", _RO),
    RuleDefinition("BR-1", "Invoice number is required.", _EN),
    RuleDefinition("BR-RO-010", "Invoice number must contain at least one digit.", _RO),
    RuleDefinition("BR-2", "Invoice issue date is required.", _EN),
    RuleDefinition("BR-3", "Invoice type code is required.", _EN),
    RuleDefinition("BR-4", "Invoice type code is not an EN16931 invoice type code.", _EN),
    RuleDefinition("BR-RO-020", "Invoice type code is not allowed by RO_CIUS.", _RO),
    RuleDefinition("BR-5", "Invoice currency code is required.", _EN),
    RuleDefinition(
        "BR-RO-030",
        "When document currency is not RON, VAT accounting currency must be RON.",
        _RO,
    ),
    RuleDefinition("BR-RO-040", "VAT point date code is not allowed.", _RO),
    RuleDefinition(
        "BR-29", "Invoice period end date must be greater than or equal to start date.", _EN
    ),
    RuleDefinition("BR-16", "Invoice must have at least one line.", _EN),
    RuleDefinition("BR-RO-A999", "Invoice cannot have more than 999 lines.", _RO),
    # Parties
    RuleDefinition("BR-6", "Seller name is required.", _EN),
    RuleDefinition("BR-7", "Buyer name is required.", _EN),
    RuleDefinition("BR-8", "Seller postal address is required.", _EN),
    RuleDefinition("BR-10", "Buyer postal address is required.", _EN),
    RuleDefinition("BR-17", "Payee name is required when a payee is specified.", _EN),
    RuleDefinition(
        "BR-RO-SELLER-ID",
        "Romanian seller must have a legal registration identifier (CUI/CIF).",
        _RO,
    ),
    RuleDefinition(
        "BR-RO-120",
        "Romanian buyer must have a legal registration identifier (CUI/CIF) or a VAT identifier.",
        _RO,
    ),
    RuleDefinition(
        "BR-RO-130",
        "In forced execution the payee must carry the enforcement authority's name and legal registration identifier.",
        _RO,
    ),
    # Addresses
    RuleDefinition(
        "BR-RO-COUNTY", "Invalid Romanian county code. Must be an ISO 3166-2:RO code.", _RO
    ),
    RuleDefinition(
        "BR-RO-BUCHAREST",
        "Bucharest addresses must use 'Sector 1' through 'Sector 6' as city name.",
        _RO,
    ),
    RuleDefinition("BR-RO-CITY-REQUIRED", "City name is required for Romanian addresses.", _RO),
    RuleDefinition("BR-RO-COUNTRY-CODE", "Country code must be 'RO' for Romanian addresses.", _RO),
    # Lines
    RuleDefinition("BR-21", "Invoice line identifier is required.", _EN),
    RuleDefinition("BR-22", "Invoice line quantity is required.", _EN),
    RuleDefinition("BR-23", "Invoice line unit of measure is required.", _EN),
    RuleDefinition("BR-24", "Invoice line net amount is required.", _EN),
    RuleDefinition("BR-25", "Invoice line net unit price is required.", _EN),
    RuleDefinition("BR-26", "Invoice line item name is required.", _EN),
    RuleDefinition("BR-27", "Invoice line net unit price must not be negative.", _EN),
    RuleDefinition("BR-28", "Invoice line gross unit price must not be negative.", _EN),
    RuleDefinition("BR-CO-4", "Invoice line VAT category code is required.", _EN),
    RuleDefinition(
        "BR-30",
        "Invoice line period end date must be greater than or equal to start date.",
        _EN,
    ),
    RuleDefinition("RO-LINE-NOTE-LENGTH", "Invoice line note cannot exceed 300 characters.", _RO),
    RuleDefinition("RO-ITEM-NAME-LENGTH", "Item name cannot exceed 200 characters.", _RO),
    RuleDefinition("RO-ITEM-DESC-LENGTH", "Item description cannot exceed 200 characters.", _RO),
    # Totals
    RuleDefinition("BR-12", "Invoice total amount without VAT is required.", _EN),
    RuleDefinition("BR-14", "Invoice total amount with VAT is required.", _EN),
    RuleDefinition("BR-15", "Amount due for payment is required.", _EN),
    RuleDefinition(
        "BR-CO-10",
        "Sum of invoice line net amounts must equal invoice total amount without VAT.",
        _EN,
    ),
    RuleDefinition(
        "BR-CO-11",
        "Invoice total amount with VAT must equal total without VAT plus VAT total amount.",
        _EN,
    ),
    RuleDefinition(
        "BR-CO-12",
        "VAT breakdown tax amount must equal taxable amount multiplied by the VAT rate.",
        _EN,
    ),
    RuleDefinition(
        "BR-CO-13", "Invoice total VAT amount must equal the sum of VAT breakdown amounts.", _EN
    ),
    RuleDefinition("BR-RO-Z2", "Monetary amounts must have maximum 2 decimal places.", _RO),
)

RULE_CATALOG: Mapping[str, RuleDefinition] = {rule.code: rule for rule in _DEFINITIONS}


def describe(code: str) -> RuleDefinition:
    """Return the catalogue entry for ``code``.

    Raises :class:`KeyError` for codes that were never published.
    """

    return RULE_CATALOG[code]


def violation(
    code: str,
    scope: Scope,
    *,
    line: int | None = None,
    message: str | None = None,
    **details: Any,
) -> Violation:
    """Build a :class:`Violation` using the catalogue message by default."""

    return Violation(
        code=code,
        message=message or describe(code).message,
        scope=scope,
        line=line,
        details=dict(details),
    )


RuleFunction = Callable[..., list[Violation]]


def run_rules(rules: Iterable[RuleFunction], subject: Any, *args: Any, **kwargs: Any) -> list[Violation]:
    """Evaluate every rule in ``rules`` against ``subject`` and collect all violations."""

    violations: list[Violation] = []
    for rule in rules:
        violations.extend(rule(subject, *args, **kwargs))
    return violations


__all__ = [
    "RULE_CATALOG",
    "RuleDefinition",
    "RuleFunction",
    "describe",
    "run_rules",
    "violation",
]
