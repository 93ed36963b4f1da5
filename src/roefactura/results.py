"""Violation records and the aggregated validation result."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Iterator


class ContractError(TypeError):
    """Raised when a validator is called without the object it must judge.

    Problems *inside* a document are never raised; they are reported as
    :class:`Violation` records.
    """


class Scope(str, Enum):
    """Part of the invoice a violation is attached to."""

    DOCUMENT = "document"
    SELLER = "seller"
    BUYER = "buyer"
    PAYEE = "payee"
    LINE = "line"
    TOTALS = "totals"


@dataclass(frozen=True)
class Violation:
    """A single broken business rule."""

    code: str
    message: str
    scope: Scope = Scope.DOCUMENT
    line: int | None = None
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def location(self) -> str:
        """Human readable location, e.g. ``"line 3"`` or ``"seller"``."""

        if self.scope is Scope.LINE and self.line is not None:
            return f"line {self.line}"
        return self.scope.value

    def as_cells(self) -> list[str]:
        """Serialise the violation for tabular export."""

        line = "" if self.line is None else str(self.line)
        return [self.code, self.scope.value, line, self.message]

    def __str__(self) -> str:
        return f"[{self.code}] {self.location}: {self.message}"


@dataclass(frozen=True)
class ValidationResult:
    """Every violation found for one document, in evaluation order."""

    violations: tuple[Violation, ...] = ()

    @classmethod
    def from_violations(cls, violations: Iterable[Violation]) -> "ValidationResult":
        return cls(tuple(violations))

    @property
    def is_valid(self) -> bool:
        return not self.violations

    @property
    def codes(self) -> list[str]:
        """Rule codes in evaluation order (duplicates kept)."""

        return [violation.code for violation in self.violations]

    def by_scope(self, scope: Scope) -> list[Violation]:
        return [violation for violation in self.violations if violation.scope is scope]

    def for_code(self, code: str) -> list[Violation]:
        return [violation for violation in self.violations if violation.code == code]

    def __iter__(self) -> Iterator[Violation]:
        return iter(self.violations)

    def __len__(self) -> int:
        return len(self.violations)


__all__ = ["ContractError", "Scope", "ValidationResult", "Violation"]
