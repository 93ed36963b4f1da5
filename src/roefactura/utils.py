"""Utility helpers shared across the RO e-Factura modules."""

from __future__ import annotations

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Any, Iterable

NS_DEFAULT = "urn:oasis:names:specification:ubl:schema:xsd:Invoice-2"

CENT = Decimal("0.01")
HUNDRED = Decimal("100")


def detect_namespace(root: Any) -> str:
    """Return the XML namespace detected for the document root."""

    tag = getattr(root, "tag", "")
    if isinstance(tag, str) and tag.startswith("{") and "}" in tag:
        return tag.split("}", 1)[0][1:]
    return NS_DEFAULT


def parse_decimal(
    value: str | int | float | Decimal | None, *, default: Decimal | None = None
) -> Decimal | None:
    """Convert the provided value to :class:`~decimal.Decimal`.

    Empty strings and values that cannot be read as a number return
    ``default``. Floats go through ``str`` so ``0.1`` stays ``Decimal("0.1")``.
    """

    if value is None:
        return default
    if isinstance(value, Decimal):
        return value if value.is_finite() else default
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return Decimal(value)

    text = str(value).strip()
    if not text:
        return default

    try:
        result = Decimal(text)
    except (InvalidOperation, ValueError):
        return default
    return result if result.is_finite() else default


def parse_date(value: date | str | None) -> date | None:
    """Return ``value`` as a :class:`~datetime.date` or ``None`` if unreadable."""

    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = str(value).strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


def round_half_away(value: Decimal, places: int = 2) -> Decimal:
    """Round ``value`` to ``places`` decimals, ties going away from zero."""

    exponent = Decimal(1).scaleb(-places)
    with localcontext() as context:
        context.prec = max(context.prec, value.adjusted() + places + 1)
        # ROUND_HALF_UP in :mod:`decimal` rounds ties away from zero for both signs.
        return value.quantize(exponent, rounding=ROUND_HALF_UP)


def within_tolerance(left: Decimal, right: Decimal, tolerance: Decimal = CENT) -> bool:
    """Return ``True`` when ``|left - right| <= tolerance``."""

    return abs(left - right) <= tolerance


def fractional_digits(value: Decimal) -> int:
    """Count the fractional digits of ``value`` as it was written.

    The scale is kept, so ``Decimal("1.50")`` reports two digits and
    ``Decimal("100.000")`` reports three.
    """

    if not value.is_finite():
        return 0
    exponent = value.as_tuple().exponent
    return -exponent if isinstance(exponent, int) and exponent < 0 else 0


def decimal_sum(values: Iterable[Decimal | None]) -> Decimal:
    """Sum ``values`` treating missing entries as zero."""

    total = Decimal("0")
    for value in values:
        if value is not None:
            total += value
    return total


def has_text(value: str | None) -> bool:
    """Return ``True`` when ``value`` is a non-empty string."""

    return bool(value)


def has_visible_text(value: str | None) -> bool:
    """Return ``True`` when ``value`` has at least one non-blank character."""

    return bool(value and value.strip())


__all__ = [
    "CENT",
    "HUNDRED",
    "NS_DEFAULT",
    "decimal_sum",
    "detect_namespace",
    "fractional_digits",
    "has_text",
    "has_visible_text",
    "parse_date",
    "parse_decimal",
    "round_half_away",
    "within_tolerance",
]
