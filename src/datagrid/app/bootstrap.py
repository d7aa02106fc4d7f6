"""Application bootstrap utilities for hosting the grid components.

Responsibilities:
 - Optional QApplication creation (skipped when headless)
 - Registering the shared services (event bus, logging service, error
   service) in the global service locator
 - Installing the error hooks so exceptions raised in Qt slots are captured
   instead of aborting the process
 - Returning a single context object with references

PyQt6 is imported lazily inside `create_app` so headless use (tests, engine
only callers) never touches Qt.
"""

from __future__ import annotations

import logging
import sys
import time
from dataclasses import dataclass, field
from typing import Any, Optional

from datagrid.services.error_handling_service import ErrorHandlingService
from datagrid.services.event_bus import EventBus
from datagrid.services.logging_service import LoggingService
from datagrid.services.service_locator import (
    ERROR_SERVICE,
    EVENT_BUS,
    LOGGING_SERVICE,
    ServiceLocator,
    services,
)

__all__ = ["AppContext", "create_app", "shutdown_app"]

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Container with references created during bootstrap.

    Attributes
    ----------
    qt_app: The QApplication instance (None if headless)
    headless: Whether headless bootstrap was used
    services: Global service locator (post-initialization state)
    event_bus: Shared EventBus
    logging_service: Ring buffer logging service attached to the datagrid logger
    error_service: Installed ErrorHandlingService
    duration_s: Total elapsed seconds for bootstrap
    """

    qt_app: Optional[Any]
    headless: bool
    services: ServiceLocator
    event_bus: EventBus
    logging_service: LoggingService
    error_service: ErrorHandlingService
    duration_s: float
    metadata: dict[str, Any] = field(default_factory=dict)


def create_app(
    *,
    headless: bool = False,
    install_hooks: bool = True,
    log_level: int = logging.INFO,
) -> AppContext:
    """Create and initialize the component host context.

    Each call provides a fresh EventBus, LoggingService and
    ErrorHandlingService (replacing previously registered ones) to keep
    repeated bootstraps in tests isolated.
    """
    started = time.perf_counter()
    qt_app = None
    if not headless:
        from PyQt6.QtWidgets import QApplication

        qt_app = QApplication.instance() or QApplication(sys.argv[:1])

    previous = services.try_get(LOGGING_SERVICE)
    if isinstance(previous, LoggingService):
        previous.detach()
    previous_errors = services.try_get(ERROR_SERVICE)
    if isinstance(previous_errors, ErrorHandlingService):
        previous_errors.uninstall()

    bus = EventBus()
    logging_service = LoggingService(event_bus=bus)
    logging_service.attach(level=log_level)
    error_service = ErrorHandlingService(event_bus=bus)
    if install_hooks:
        error_service.install()

    services.register(EVENT_BUS, bus, replace=True)
    services.register(LOGGING_SERVICE, logging_service, replace=True)
    services.register(ERROR_SERVICE, error_service, replace=True)

    duration = time.perf_counter() - started
    logger.info("datagrid bootstrap complete in %.3fs (headless=%s)", duration, headless)
    return AppContext(
        qt_app=qt_app,
        headless=headless,
        services=services,
        event_bus=bus,
        logging_service=logging_service,
        error_service=error_service,
        duration_s=duration,
        metadata={"log_level": logging.getLevelName(log_level)},
    )


def shutdown_app(ctx: AppContext) -> None:
    """Detach handlers and hooks installed by `create_app`."""
    ctx.error_service.uninstall()
    ctx.logging_service.detach()
    ctx.services.unregister(EVENT_BUS, ctx.event_bus)
    ctx.services.unregister(LOGGING_SERVICE, ctx.logging_service)
    ctx.services.unregister(ERROR_SERVICE, ctx.error_service)
