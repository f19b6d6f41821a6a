from __future__ import annotations

import math
from typing import Any

from requestslot.errors import SlotValidationError

PAGE = "page"
LOCKED = "locked"
SUPPLEMENTARY_LOCKED = "supplementary_locked"


def coerce_page(value: object) -> int:
    """Turn a caller-supplied page into a positive int, falling back to 1."""
    if value is None or isinstance(value, bool):
        return 1
    if isinstance(value, int):
        return value if value > 0 else 1
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 1
    if not math.isfinite(number) or number < 1:
        return 1
    return int(number)


class SlotState:
    """Page cursor and lock flags for one coordinator.

    Writes go through the typed setters so that ``page`` stays a positive
    int and both lock flags stay booleans. A rejected write leaves the field
    untouched.
    """

    def __init__(
        self,
        name: str,
        page: int = 1,
        locked: bool = False,
        supplementary_locked: bool = False,
    ) -> None:
        self.name = name
        self._page = 1
        self._locked = False
        self._supplementary_locked = False
        self.extras: dict[str, Any] = {}
        self.set_page(page)
        self.set_locked(locked)
        self.set_supplementary_locked(supplementary_locked)

    @property
    def page(self) -> int:
        return self._page

    @property
    def locked(self) -> bool:
        return self._locked

    @property
    def supplementary_locked(self) -> bool:
        return self._supplementary_locked

    def set_page(self, value: object) -> None:
        if isinstance(value, bool) or not isinstance(value, int):
            raise SlotValidationError(PAGE, value, "an integer")
        if value < 1:
            raise SlotValidationError(PAGE, value, "a positive integer")
        self._page = value

    def set_locked(self, value: object) -> None:
        if not isinstance(value, bool):
            raise SlotValidationError(LOCKED, value, "a boolean")
        self._locked = value

    def set_supplementary_locked(self, value: object) -> None:
        if not isinstance(value, bool):
            raise SlotValidationError(SUPPLEMENTARY_LOCKED, value, "a boolean")
        self._supplementary_locked = value

    def get(self, field_name: str, default: Any = None) -> Any:
        if field_name == PAGE:
            return self._page
        if field_name == LOCKED:
            return self._locked
        if field_name == SUPPLEMENTARY_LOCKED:
            return self._supplementary_locked
        return self.extras.get(field_name, default)

    def set(self, field_name: str, value: Any) -> None:
        if field_name == PAGE:
            self.set_page(value)
        elif field_name == LOCKED:
            self.set_locked(value)
        elif field_name == SUPPLEMENTARY_LOCKED:
            self.set_supplementary_locked(value)
        else:
            self.extras[field_name] = value
