"""Command implementations exposed through :mod:`roefactura.cli`."""

from . import summary, validate

__all__ = ["summary", "validate"]
