from __future__ import annotations

import logging

from requestslot.config import CoordinatorConfig
from requestslot.coordinator import RequestSlotCoordinator
from requestslot.errors import InitializationError
from requestslot.feedback import FeedbackSurface, LoggingFeedbackSurface
from requestslot.identity import TagAllocator
from requestslot.telemetry import Telemetry

logger = logging.getLogger(__name__)


class CoordinatorFactory:
    """Build coordinators that share one tag allocator and one feedback surface."""

    def __init__(
        self,
        allocator: TagAllocator | None = None,
        surface: FeedbackSurface | None = None,
        config: CoordinatorConfig | None = None,
        telemetry: Telemetry | None = None,
    ) -> None:
        self.allocator = allocator or TagAllocator()
        self.surface = surface or LoggingFeedbackSurface()
        self.config = config or CoordinatorConfig()
        self.telemetry = telemetry or Telemetry()

    def create(self, name: object) -> RequestSlotCoordinator:
        if not name:
            raise InitializationError("initialization failed: no name supplied")
        return self._build(name)

    def init(self, name: object, *extra_names: object) -> list[RequestSlotCoordinator]:
        if not name:
            raise InitializationError("initialization failed: no name supplied")
        return [self._build(each) for each in (name, *extra_names)]

    def _build(self, name: object) -> RequestSlotCoordinator:
        coordinator = RequestSlotCoordinator(
            str(name).strip(),
            allocator=self.allocator,
            surface=self.surface,
            config=self.config,
            telemetry=self.telemetry,
        )
        logger.info("created request slot %s", coordinator.name)
        return coordinator


_default_factory: CoordinatorFactory | None = None


def default_factory() -> CoordinatorFactory:
    global _default_factory
    if _default_factory is None:
        _default_factory = CoordinatorFactory()
    return _default_factory


def configure_default_factory(
    allocator: TagAllocator | None = None,
    surface: FeedbackSurface | None = None,
    config: CoordinatorConfig | None = None,
    telemetry: Telemetry | None = None,
) -> CoordinatorFactory:
    global _default_factory
    _default_factory = CoordinatorFactory(
        allocator=allocator,
        surface=surface,
        config=config,
        telemetry=telemetry,
    )
    return _default_factory


def reset_default_factory() -> None:
    global _default_factory
    _default_factory = None


def init(name: object, *extra_names: object) -> list[RequestSlotCoordinator]:
    return default_factory().init(name, *extra_names)
