"""Rule evaluators for the parts of an invoice."""

from .address import validate_address
from .line import validate_line
from .parties import validate_buyer, validate_payee, validate_seller
from .totals import validate_totals

__all__ = [
    "validate_address",
    "validate_buyer",
    "validate_line",
    "validate_payee",
    "validate_seller",
    "validate_totals",
]
