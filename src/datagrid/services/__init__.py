"""Service layer exports.

Responsibilities:
 - Sort engine and selection tracker (the table core, Qt free)
 - Dependency/service locator (`services`)
 - EventBus publish/subscribe core
"""

from .service_locator import services, ServiceLocator  # noqa: F401
from .event_bus import EventBus, GridEvent  # noqa: F401
from .sort_engine import SortEngine, compute_order, next_directive  # noqa: F401
from .selection_tracker import SelectionTracker  # noqa: F401

__all__ = [
    "services",
    "ServiceLocator",
    "EventBus",
    "GridEvent",
    "SortEngine",
    "compute_order",
    "next_directive",
    "SelectionTracker",
]
