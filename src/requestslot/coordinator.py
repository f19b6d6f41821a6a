from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Mapping
from typing import Any, Callable

from requestslot.config import CoordinatorConfig
from requestslot.feedback import FeedbackCallbacks, FeedbackSurface, LoggingFeedbackSurface
from requestslot.identity import TagAllocator
from requestslot.schemas import (
    LoadingMode,
    LoadingOptions,
    ToastOptions,
    UnloadingOptions,
    coerce_options,
)
from requestslot.state import SlotState, coerce_page
from requestslot.telemetry import Telemetry

logger = logging.getLogger(__name__)

LoadingConfig = LoadingOptions | Mapping[str, Any] | None
UnloadingConfig = UnloadingOptions | Mapping[str, Any] | None
ToastConfig = ToastOptions | Mapping[str, Any] | None


class RequestSlotCoordinator:
    """Guard one logical request slot and sequence its loading/toast feedback.

    ``lock`` drops re-entrant attempts while a request is in flight. Once the
    caller's request settles, ``success`` or ``fail`` hides the loading
    indicator, shows a toast and, after the toast duration, runs the caller's
    completion callback and releases the slot. The delay approximates the
    toast being dismissed; the surface is never asked whether it actually was.
    """

    def __init__(
        self,
        name: str,
        allocator: TagAllocator,
        surface: FeedbackSurface | None = None,
        config: CoordinatorConfig | None = None,
        telemetry: Telemetry | None = None,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self._raw_name = name
        self._tag = allocator.allocate()
        self._name = f"{name}_{self._tag}"
        self._state = SlotState(self._name)
        self._loading_mode = LoadingMode.BLOCKING

        self._surface = surface or LoggingFeedbackSurface()
        self._config = config or CoordinatorConfig()
        self._telemetry = telemetry or Telemetry()
        self._loop = loop
        self._acquired_at: float | None = None

    @property
    def raw_name(self) -> str:
        return self._raw_name

    @property
    def name(self) -> str:
        return self._name

    @property
    def tag(self) -> int:
        return self._tag

    @property
    def state(self) -> SlotState:
        return self._state

    @property
    def page(self) -> int:
        return self._state.page

    @property
    def locked(self) -> bool:
        return self._state.locked

    @property
    def supplementary_locked(self) -> bool:
        return self._state.supplementary_locked

    @property
    def loading_mode(self) -> LoadingMode:
        return self._loading_mode

    def add_lock(self, flag: object) -> None:
        self._state.set_supplementary_locked(bool(flag))

    def lock(
        self,
        on_acquire: Callable[[bool], Any] | None = None,
        page: object = None,
    ) -> bool:
        if self._state.locked or self._state.supplementary_locked:
            logger.debug(
                "lock attempt on %s dropped (locked=%s, supplementary_locked=%s)",
                self._name,
                self._state.locked,
                self._state.supplementary_locked,
            )
            self._telemetry.record_lock_attempt(self._name, acquired=False)
            return False

        self._state.set_locked(True)
        self._state.set_page(coerce_page(page))
        self._acquired_at = time.monotonic()
        self._telemetry.record_lock_attempt(self._name, acquired=True)

        if callable(on_acquire):
            on_acquire(self._state.locked)
        return True

    def unlock(self, on_release: Callable[[bool], Any] | None = None) -> None:
        self._state.set_locked(False)
        self._state.set_supplementary_locked(False)

        held_seconds = None
        if self._acquired_at is not None:
            held_seconds = time.monotonic() - self._acquired_at
            self._acquired_at = None
        self._telemetry.record_release(self._name, held_seconds=held_seconds)

        if callable(on_release):
            on_release(self._state.locked)

    def loading(self, options: LoadingConfig = None) -> None:
        resolved = coerce_options(LoadingOptions, options)
        mode = resolved.mode if resolved.mode is not None else LoadingMode.BLOCKING
        if resolved.supplied("title"):
            title = resolved.title or ""
        else:
            title = self._config.loading_title
        mask = bool(resolved.mask) if resolved.supplied("mask") else self._config.loading_mask
        callbacks = FeedbackCallbacks.from_options(resolved)

        self._loading_mode = mode

        if mode is LoadingMode.NAV_BAR:
            self._surface.show_nav_bar(callbacks)
        elif mode is LoadingMode.PULL_REFRESH:
            self._surface.start_pull_refresh(callbacks)
        else:
            self._surface.show_blocking(title, mask, callbacks)

    def unloading(self, options: UnloadingConfig = None) -> None:
        resolved = coerce_options(UnloadingOptions, options)
        callbacks = FeedbackCallbacks.from_options(resolved)

        if self._loading_mode is LoadingMode.NAV_BAR:
            self._surface.hide_nav_bar(callbacks)
        elif self._loading_mode is LoadingMode.PULL_REFRESH:
            self._surface.stop_pull_refresh(callbacks)
        else:
            self._surface.hide_blocking(bool(resolved.no_conflict), callbacks)

    def success(
        self,
        on_complete: Callable[[], Any] | None = None,
        options: ToastConfig = None,
    ) -> asyncio.Future[None]:
        return self._settle(on_complete, options, failed=False)

    def fail(
        self,
        on_complete: Callable[[], Any] | None = None,
        options: ToastConfig = None,
    ) -> asyncio.Future[None]:
        return self._settle(on_complete, options, failed=True)

    def _open_toast(self, options: ToastConfig, failed: bool) -> tuple[bool, int]:
        self.unloading()

        resolved = coerce_options(ToastOptions, options)
        show = bool(resolved.show) if resolved.supplied("show") else True
        icon = resolved.icon or ("error" if failed else "success")
        image = resolved.image or ""
        if resolved.supplied("title"):
            title = resolved.title or ""
        else:
            title = self._config.toast_title(failed)
        if resolved.supplied("duration"):
            duration = resolved.duration or 0
        else:
            duration = self._config.toast_duration_ms
        mask = bool(resolved.mask) if resolved.supplied("mask") else self._config.toast_mask
        callbacks = FeedbackCallbacks.from_options(resolved)

        if show:
            self._surface.show_toast(icon, image, title, duration, mask, callbacks)
        return show, duration

    def _settle(
        self,
        on_complete: Callable[[], Any] | None,
        options: ToastConfig,
        failed: bool,
    ) -> asyncio.Future[None]:
        loop = self._loop or asyncio.get_running_loop()
        show, duration = self._open_toast(options, failed=failed)
        self._telemetry.record_completion(self._name, failed=failed)

        delay_seconds = duration / 1000 if show and duration > 0 else 0.0
        settled: asyncio.Future[None] = loop.create_future()
        loop.call_later(delay_seconds, self._run_deferred, on_complete, settled)
        return settled

    def _run_deferred(
        self,
        on_complete: Callable[[], Any] | None,
        settled: asyncio.Future[None],
    ) -> None:
        try:
            if callable(on_complete):
                on_complete()
        except Exception as exc:
            self.unlock()
            if not settled.done():
                settled.set_exception(exc)
            return

        self.unlock()
        if not settled.done():
            settled.set_result(None)
