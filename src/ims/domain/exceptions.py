"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """Input was malformed or a business rule was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class DanglingReferenceError(DomainException):
    """A delivery references an inventory item that has since been deleted."""


class InsufficientStockError(DomainException):
    """The requested quantity exceeds what is currently in stock."""

    def __init__(
        self,
        message: str,
        *,
        item_name: str,
        available: int,
        requested: int,
    ) -> None:
        super().__init__(message)
        self.item_name = item_name
        self.available = available
        self.requested = requested


class DuplicateBarcodeError(DomainException):
    """The store already holds an item with this barcode."""

    def __init__(self, barcode: str) -> None:
        super().__init__(f"Barcode {barcode} is already in use")
        self.barcode = barcode


class AllocationExhaustedError(DomainException):
    """No unused barcode could be generated within the retry bound."""

    def __init__(self, attempts: int) -> None:
        super().__init__(
            f"Could not generate a unique barcode after {attempts} attempts."
        )
        self.attempts = attempts


class DuplicateSkuError(DomainException):
    """The store already holds an item with this name/category/size/color."""

    def __init__(self, item_name: str, size: str, color: str) -> None:
        super().__init__(
            f"{item_name} in size {size} ({color or 'no color'}) already exists"
        )
        self.item_name = item_name
        self.size = size
        self.color = color


class ConcurrentUpdateError(DomainException):
    """A record changed between being read and being written back."""
