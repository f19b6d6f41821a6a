from __future__ import annotations


class RequestSlotError(Exception):
    """Base class for request-slot failures."""


class SlotValidationError(RequestSlotError, TypeError):
    """Raised when a slot field is assigned a value of the wrong kind."""

    def __init__(self, field: str, value: object, expected: str) -> None:
        self.field = field
        self.value = value
        super().__init__(f"{field} must be {expected}, got {value!r}")


class InitializationError(RequestSlotError, ValueError):
    """Raised when a coordinator cannot be built from the supplied name."""
