from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from enum import IntEnum
from functools import lru_cache
from typing import Any, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError, model_validator

logger = logging.getLogger(__name__)

ToastIcon = Literal["success", "none", "error"]
Callback = Callable[..., Any]


class LoadingMode(IntEnum):
    BLOCKING = 1
    NAV_BAR = 2
    PULL_REFRESH = 3


@lru_cache(maxsize=None)
def _adapter_for(annotation: Any) -> TypeAdapter:
    return TypeAdapter(annotation)


class FeedbackOptions(BaseModel):
    """Shared behaviour for the per-operation option models.

    Options are permissive: unknown keys are ignored and a value that does not
    validate for its field is dropped, so the operation falls back to the
    default for that field. Whether a field was supplied at all is tracked by
    ``model_fields_set``; an explicit ``None`` differs from an absent key.
    """

    model_config = ConfigDict(extra="ignore")

    success: Callback | None = None
    fail: Callback | None = None
    complete: Callback | None = None

    @model_validator(mode="before")
    @classmethod
    def _drop_unusable_values(cls, data: Any) -> Any:
        if isinstance(data, BaseModel):
            data = data.model_dump(exclude_unset=True)
        if not isinstance(data, Mapping):
            if data is not None:
                logger.debug("ignoring %s of type %s", cls.__name__, type(data).__name__)
            return {}

        cleaned: dict[str, Any] = {}
        for key, value in data.items():
            field = cls.model_fields.get(key)
            if field is None:
                continue
            try:
                _adapter_for(field.annotation).validate_python(value)
            except ValidationError:
                logger.debug("dropping %s.%s=%r", cls.__name__, key, value)
                continue
            cleaned[key] = value
        return cleaned

    def supplied(self, field_name: str) -> bool:
        return field_name in self.model_fields_set


class LoadingOptions(FeedbackOptions):
    mode: LoadingMode | None = None
    title: str | None = None
    mask: bool | None = None


class UnloadingOptions(FeedbackOptions):
    no_conflict: bool | None = None


class ToastOptions(FeedbackOptions):
    show: bool | None = None
    icon: ToastIcon | None = None
    image: str | None = None
    title: str | None = None
    duration: int | None = None
    mask: bool | None = None


OptionsT = TypeVar("OptionsT", bound=FeedbackOptions)


def coerce_options(model: type[OptionsT], value: OptionsT | Mapping[str, Any] | None) -> OptionsT:
    if isinstance(value, model):
        return value
    return model.model_validate(value if value is not None else {})
