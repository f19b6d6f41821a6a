from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Protocol, runtime_checkable

from requestslot.schemas import FeedbackOptions

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FeedbackCallbacks:
    on_success: Callable[..., Any] | None = None
    on_fail: Callable[..., Any] | None = None
    on_complete: Callable[..., Any] | None = None

    @classmethod
    def from_options(cls, options: FeedbackOptions) -> "FeedbackCallbacks":
        return cls(
            on_success=options.success,
            on_fail=options.fail,
            on_complete=options.complete,
        )

    def as_dict(self) -> dict[str, Callable[..., Any]]:
        bundle = {
            "on_success": self.on_success,
            "on_fail": self.on_fail,
            "on_complete": self.on_complete,
        }
        return {key: value for key, value in bundle.items() if value is not None}


@runtime_checkable
class FeedbackSurface(Protocol):
    """Host-side primitives that draw loading indicators and toasts."""

    def show_blocking(self, title: str, mask: bool, callbacks: FeedbackCallbacks) -> None:
        ...

    def hide_blocking(self, no_conflict: bool, callbacks: FeedbackCallbacks) -> None:
        ...

    def show_nav_bar(self, callbacks: FeedbackCallbacks) -> None:
        ...

    def hide_nav_bar(self, callbacks: FeedbackCallbacks) -> None:
        ...

    def start_pull_refresh(self, callbacks: FeedbackCallbacks) -> None:
        ...

    def stop_pull_refresh(self, callbacks: FeedbackCallbacks) -> None:
        ...

    def show_toast(
        self,
        icon: str,
        image: str,
        title: str,
        duration: int,
        mask: bool,
        callbacks: FeedbackCallbacks,
    ) -> None:
        ...


class LoggingFeedbackSurface:
    """Surface that only reports what it would display."""

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._log = log or logger

    def show_blocking(self, title: str, mask: bool, callbacks: FeedbackCallbacks) -> None:
        self._log.info("show blocking loading title=%r mask=%s", title, mask)

    def hide_blocking(self, no_conflict: bool, callbacks: FeedbackCallbacks) -> None:
        self._log.info("hide blocking loading no_conflict=%s", no_conflict)

    def show_nav_bar(self, callbacks: FeedbackCallbacks) -> None:
        self._log.info("show nav-bar loading")

    def hide_nav_bar(self, callbacks: FeedbackCallbacks) -> None:
        self._log.info("hide nav-bar loading")

    def start_pull_refresh(self, callbacks: FeedbackCallbacks) -> None:
        self._log.info("start pull-down refresh")

    def stop_pull_refresh(self, callbacks: FeedbackCallbacks) -> None:
        self._log.info("stop pull-down refresh")

    def show_toast(
        self,
        icon: str,
        image: str,
        title: str,
        duration: int,
        mask: bool,
        callbacks: FeedbackCallbacks,
    ) -> None:
        self._log.info(
            "show toast icon=%s image=%r title=%r duration=%dms mask=%s",
            icon,
            image,
            title,
            duration,
            mask,
        )


@dataclass(frozen=True)
class FeedbackEvent:
    action: str
    params: dict[str, Any] = field(default_factory=dict)
    callbacks: FeedbackCallbacks = field(default_factory=FeedbackCallbacks)


class RecordingFeedbackSurface:
    """Surface that keeps every call, in order, for later inspection."""

    def __init__(self) -> None:
        self.events: list[FeedbackEvent] = []

    @property
    def actions(self) -> list[str]:
        return [event.action for event in self.events]

    def last(self, action: str) -> FeedbackEvent | None:
        for event in reversed(self.events):
            if event.action == action:
                return event
        return None

    def clear(self) -> None:
        self.events.clear()

    def _record(self, action: str, callbacks: FeedbackCallbacks, **params: Any) -> None:
        self.events.append(FeedbackEvent(action=action, params=params, callbacks=callbacks))

    def show_blocking(self, title: str, mask: bool, callbacks: FeedbackCallbacks) -> None:
        self._record("show_blocking", callbacks, title=title, mask=mask)

    def hide_blocking(self, no_conflict: bool, callbacks: FeedbackCallbacks) -> None:
        self._record("hide_blocking", callbacks, no_conflict=no_conflict)

    def show_nav_bar(self, callbacks: FeedbackCallbacks) -> None:
        self._record("show_nav_bar", callbacks)

    def hide_nav_bar(self, callbacks: FeedbackCallbacks) -> None:
        self._record("hide_nav_bar", callbacks)

    def start_pull_refresh(self, callbacks: FeedbackCallbacks) -> None:
        self._record("start_pull_refresh", callbacks)

    def stop_pull_refresh(self, callbacks: FeedbackCallbacks) -> None:
        self._record("stop_pull_refresh", callbacks)

    def show_toast(
        self,
        icon: str,
        image: str,
        title: str,
        duration: int,
        mask: bool,
        callbacks: FeedbackCallbacks,
    ) -> None:
        self._record(
            "show_toast",
            callbacks,
            icon=icon,
            image=image,
            title=title,
            duration=duration,
            mask=mask,
        )
