"""datagrid public API.

Curated surface for callers embedding the table and input components:

- Models: `Column`, `SortDirective`, `SortDirection`, `AggregateState`
- Engines: `SortEngine` / `compute_order`, `SelectionTracker` (Qt free)
- View models: `DataTableViewModel`, `InputFieldViewModel`
- Infrastructure: `services`, `EventBus`, `GridEvent`

Qt widgets live in `datagrid.views` and `datagrid.components`; they are not
imported here so headless callers never load PyQt6.
"""

from __future__ import annotations

from .models import (  # noqa: F401
    AggregateState,
    Column,
    SelectionAggregate,
    SortDirection,
    SortDirective,
)
from .services.event_bus import Event, EventBus, GridEvent  # noqa: F401
from .services.selection_tracker import SelectionTracker  # noqa: F401
from .services.service_locator import ServiceLocator, services  # noqa: F401
from .services.sort_engine import SortEngine, compute_order, next_directive  # noqa: F401
from .viewmodels.data_table_viewmodel import DataTableViewModel, TableMode  # noqa: F401
from .viewmodels.input_field_viewmodel import InputFieldViewModel  # noqa: F401

__version__ = "0.1.0"

__all__ = [
    "AggregateState",
    "Column",
    "SelectionAggregate",
    "SortDirection",
    "SortDirective",
    "Event",
    "EventBus",
    "GridEvent",
    "SelectionTracker",
    "ServiceLocator",
    "services",
    "SortEngine",
    "compute_order",
    "next_directive",
    "DataTableViewModel",
    "TableMode",
    "InputFieldViewModel",
]
