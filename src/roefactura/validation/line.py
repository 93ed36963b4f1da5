"""Invoice line rules (BR-21 .. BR-30, BR-CO-4 and RO length limits)."""

from __future__ import annotations

from decimal import Decimal

from ..models import InvoiceLine, Period
from ..results import ContractError, Scope, Violation
from ..rules import run_rules, violation
from ..settings import ValidationSettings, resolve_settings
from ..utils import has_text, parse_date


def period_is_ordered(period: Period | None) -> bool:
    """Return ``False`` only when both ends are readable dates and end < start.

    Missing or unreadable ends make the ordering rule not applicable.
    """

    if period is None:
        return True
    start = parse_date(period.start)
    end = parse_date(period.end)
    if start is None or end is None:
        return True
    return end >= start


def _required(code: str, attribute: str, *, text: bool):
    def check(line: InvoiceLine, settings: ValidationSettings, position: int | None) -> list[Violation]:
        value = getattr(line, attribute)
        present = has_text(value) if text else value is not None
        if present:
            return []
        return [violation(code, Scope.LINE, line=position, field=attribute)]

    check.__name__ = f"_check_{attribute}_required"
    return check


def _check_price_not_negative(code: str):
    # BR-27 (net) and BR-28 (gross) both read the single unit price we carry.
    def check(line: InvoiceLine, settings: ValidationSettings, position: int | None) -> list[Violation]:
        if line.unit_price is None or line.unit_price >= Decimal("0"):
            return []
        return [
            violation(code, Scope.LINE, line=position, current_value=str(line.unit_price))
        ]

    check.__name__ = f"_check_price_not_negative_{code.replace('-', '_').lower()}"
    return check


def _check_period(line: InvoiceLine, settings: ValidationSettings, position: int | None) -> list[Violation]:
    if period_is_ordered(line.period):
        return []
    return [violation("BR-30", Scope.LINE, line=position)]


def _max_length(code: str, attribute: str, limit_name: str, label: str):
    def check(line: InvoiceLine, settings: ValidationSettings, position: int | None) -> list[Violation]:
        value = getattr(line, attribute)
        limit = getattr(settings, limit_name)
        if not value or len(value) <= limit:
            return []
        return [
            violation(
                code,
                Scope.LINE,
                line=position,
                message=f"{label} cannot exceed {limit} characters.",
                length=len(value),
                limit=limit,
            )
        ]

    check.__name__ = f"_check_{attribute}_length"
    return check


LINE_RULES = (
    _required("BR-21", "id", text=True),
    _required("BR-22", "quantity", text=False),
    _required("BR-23", "unit_code", text=True),
    _required("BR-24", "net_amount", text=False),
    _required("BR-25", "unit_price", text=False),
    _required("BR-26", "item_name", text=True),
    _check_price_not_negative("BR-27"),
    _check_price_not_negative("BR-28"),
    _required("BR-CO-4", "vat_category", text=True),
    _check_period,
    _max_length("RO-LINE-NOTE-LENGTH", "note", "max_line_note_length", "Invoice line note"),
    _max_length("RO-ITEM-NAME-LENGTH", "item_name", "max_item_name_length", "Item name"),
    _max_length(
        "RO-ITEM-DESC-LENGTH",
        "item_description",
        "max_item_description_length",
        "Item description",
    ),
)


def validate_line(
    line: InvoiceLine,
    settings: ValidationSettings | None = None,
    *,
    position: int | None = None,
) -> list[Violation]:
    """Validate one invoice line.

    ``position`` is the 1-based place of the line in the document and is
    copied onto every violation.
    """

    if not isinstance(line, InvoiceLine):
        raise ContractError(f"Expected an InvoiceLine, got {type(line).__name__}")
    return run_rules(LINE_RULES, line, resolve_settings(settings), position)


__all__ = ["LINE_RULES", "period_is_ordered", "validate_line"]
