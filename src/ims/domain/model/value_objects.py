"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from ims.domain.exceptions import ValidationError

BARCODE_LENGTH = 12

_BARCODE_RE = re.compile(rf"^\d{{{BARCODE_LENGTH}}}$")


@dataclass(frozen=True)
class Money:
    """Non-negative unit price or stock value.

    Uses Decimal so totals like ``quantity * price`` stay exact.
    """

    amount: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if self.amount < Decimal("0"):
            raise ValidationError(
                f"Price cannot be negative, got {self.amount}"
            )

    def __add__(self, other: Money) -> Money:
        return Money(self.amount + other.amount)

    def __mul__(self, factor: int) -> Money:
        if not isinstance(factor, int):
            raise TypeError(f"Can only multiply Money by int, got {type(factor).__name__}")
        return Money(self.amount * factor)

    def __str__(self) -> str:
        return f"Rs {self.amount:,.2f}"

    @staticmethod
    def zero() -> Money:
        return Money(Decimal("0"))

    @staticmethod
    def of(amount: str | float | int | Decimal) -> Money:
        """Convenient factory that coerces to Decimal safely."""
        try:
            return Money(Decimal(str(amount).strip()))
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid price: {amount!r}") from exc


@dataclass(frozen=True)
class Quantity:
    """A positive integer quantity.

    Enforces the invariant that you cannot deliver zero or negative items.
    """

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value <= 0:
            raise ValidationError("Quantity must be positive")

    def __str__(self) -> str:
        return str(self.value)

    @staticmethod
    def of(raw: int | str) -> Quantity:
        return Quantity(parse_count(raw))


def parse_count(raw: int | str | None, *, field: str = "Quantity") -> int:
    """Coerce form/CLI input to an int, rejecting anything non-numeric."""
    if isinstance(raw, bool):
        raise ValidationError(f"{field} must be a whole number, got {raw!r}")
    if isinstance(raw, int):
        return raw
    if raw is None or not str(raw).strip():
        raise ValidationError(f"{field} is required")
    try:
        return int(str(raw).strip())
    except ValueError as exc:
        raise ValidationError(f"{field} must be a whole number, got {raw!r}") from exc


def normalize_barcode(raw: str | None) -> str:
    """Strip scanner artifacts (CR/LF, surrounding whitespace)."""
    return re.sub(r"[\r\n]+", "", raw or "").strip()


def is_valid_barcode(value: str) -> bool:
    return bool(_BARCODE_RE.match(value))
