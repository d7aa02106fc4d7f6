"""ViewModel for the data table.

Headless presentation adapter composing the `SortEngine` and the
`SelectionTracker`. Views forward user gestures here (header click, row
checkbox, select-all checkbox) and re-read the derived state afterwards:

 - `display_rows()` : records in display order (empty while loading)
 - `mode()`         : LOADING / EMPTY / ROWS
 - `aggregate()`    : all/some flags for the select-all checkbox
 - `cell_text()`    : display text of one cell

Selection changes are reported synchronously to `on_row_select` with the
full selection in the order rows were selected.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from datagrid.config import settings
from datagrid.models import (
    MISSING,
    AggregateState,
    Column,
    SelectionAggregate,
    SortDirection,
    SortDirective,
)
from datagrid.services.event_bus import EventBus, GridEvent, resolve_event_bus
from datagrid.services.selection_tracker import SelectionTracker
from datagrid.services.sort_engine import SortEngine

__all__ = [
    "DataGridError",
    "UnknownColumnError",
    "TableMode",
    "DataTableViewModel",
]

logger = logging.getLogger(__name__)


class DataGridError(Exception):
    """Base class for data grid errors."""


class UnknownColumnError(DataGridError, KeyError):
    """Raised by strict column lookups for a key no column carries."""


class TableMode(str, Enum):
    LOADING = "loading"
    EMPTY = "empty"
    ROWS = "rows"


RowSelectCallback = Callable[[List[Any]], None]


class DataTableViewModel:
    def __init__(
        self,
        columns: Sequence[Column],
        data: Sequence[Any] = (),
        *,
        loading: bool = False,
        selectable: bool = False,
        empty_message: str = settings.DEFAULT_EMPTY_MESSAGE,
        on_row_select: Optional[RowSelectCallback] = None,
        event_bus: EventBus | None = None,
    ):
        self._columns: List[Column] = []
        self._by_key: Dict[str, Column] = {}
        self.set_columns(columns)
        self._data: Sequence[Any] = data
        self._loading = loading
        self._selectable = selectable
        self.empty_message = empty_message
        self.on_row_select = on_row_select
        self._event_bus = event_bus
        self._sort = SortEngine()
        self._selection = SelectionTracker(data)
        self._selection.subscribe(self._on_selection_changed)
        self._order_cache: Optional[Tuple[Tuple[int, SortDirective], List[Any]]] = None

    # ------------------------------------------------------------------
    # Inputs
    # ------------------------------------------------------------------
    @property
    def columns(self) -> List[Column]:
        return list(self._columns)

    @property
    def data(self) -> Sequence[Any]:
        return self._data

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def selectable(self) -> bool:
        return self._selectable

    def set_columns(self, columns: Sequence[Column]) -> None:
        self._columns = list(columns)
        self._by_key = {}
        for col in self._columns:
            if col.key in self._by_key:
                logger.warning("duplicate column key %r; last definition wins", col.key)
            self._by_key[col.key] = col
        self._order_cache = None

    def set_data(self, data: Sequence[Any]) -> None:
        """Supply the collection to render.

        A new collection object starts a fresh selection scope; passing the
        same object again after changing it in place prunes selections of
        records that were removed.
        """
        replaced = data is not self._data
        self._data = data
        self._order_cache = None
        self._selection.bind(data)
        if replaced:
            self._publish(GridEvent.DATA_REPLACED, {"rows": len(data)})

    def set_loading(self, loading: bool) -> None:
        if loading == self._loading:
            return
        self._loading = loading
        self._publish(GridEvent.LOADING_CHANGED, {"loading": loading})

    def set_selectable(self, selectable: bool) -> None:
        self._selectable = selectable

    # ------------------------------------------------------------------
    # Columns
    # ------------------------------------------------------------------
    def column(self, key: str) -> Column:
        try:
            return self._by_key[key]
        except KeyError:
            raise UnknownColumnError(key) from None

    def column_by_key(self, key: str) -> Optional[Column]:
        return self._by_key.get(key)

    # ------------------------------------------------------------------
    # Sorting
    # ------------------------------------------------------------------
    @property
    def directive(self) -> SortDirective:
        return self._sort.directive

    def sort_by(self, column_key: str) -> SortDirective:
        """Header click gesture for ``column_key``.

        Unknown keys and non-sortable columns leave the directive unchanged.
        """
        col = self._by_key.get(column_key)
        if col is None:
            logger.debug("sort requested for unknown column %r", column_key)
            return self._sort.directive
        if self._sort.click(col):
            d = self._sort.directive
            self._publish(
                GridEvent.SORT_CHANGED, {"column": col.key, "field": d.field, "direction": d.direction.value}
            )
        return self._sort.directive

    def sort_indicator(self, column_key: str) -> Optional[SortDirection]:
        col = self._by_key.get(column_key)
        return self._sort.indicator(col) if col is not None else None

    def header_label(self, column: Column) -> str:
        if not column.sortable:
            return column.title
        indicator = self._sort.indicator(column)
        if indicator is SortDirection.ASCENDING:
            glyph = settings.SORT_ASC_GLYPH
        elif indicator is SortDirection.DESCENDING:
            glyph = settings.SORT_DESC_GLYPH
        else:
            glyph = settings.SORT_IDLE_GLYPH
        return f"{column.title} {glyph}"

    # ------------------------------------------------------------------
    # Derived display state
    # ------------------------------------------------------------------
    def mode(self) -> TableMode:
        if self._loading:
            return TableMode.LOADING
        if not self.display_rows():
            return TableMode.EMPTY
        return TableMode.ROWS

    def display_rows(self) -> List[Any]:
        if self._loading:
            return []
        key = (id(self._data), self._sort.directive)
        if self._order_cache is None or self._order_cache[0] != key:
            self._order_cache = (key, self._sort.order(self._data, self._columns))
        return list(self._order_cache[1])

    def cell_value(self, record: Any, column: Column) -> Any:
        value = column.value_of(record)
        if column.render is not None:
            return column.render(None if value is MISSING else value, record)
        return value

    def cell_text(self, record: Any, column: Column) -> str:
        value = self.cell_value(record, column)
        if value is MISSING or value is None or value == "":
            return settings.MISSING_CELL_TEXT
        return str(value)

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------
    def toggle_row(self, record: Any, checked: bool) -> List[Any]:
        if not self._selectable or self._loading:
            return self._selection.selected()
        return self._selection.toggle_row(record, checked)

    def toggle_all(self, checked: bool) -> List[Any]:
        if not self._selectable or self._loading:
            return self._selection.selected()
        return self._selection.toggle_all(self._data, checked)

    def is_selected(self, record: Any) -> bool:
        return self._selection.is_selected(record)

    def selected_rows(self) -> List[Any]:
        return self._selection.selected()

    def aggregate(self) -> SelectionAggregate:
        return self._selection.aggregate()

    def header_check_state(self) -> AggregateState:
        return self.aggregate().state

    def _on_selection_changed(self, selection: List[Any]) -> None:
        # Callback first: the caller sees the new selection before any repaint.
        if self.on_row_select is not None:
            self.on_row_select(selection)
        self._publish(GridEvent.SELECTION_CHANGED, {"count": len(selection)})

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------
    def _publish(self, name: GridEvent, payload: Any) -> None:
        bus = resolve_event_bus(self._event_bus)
        if bus is not None:
            bus.publish(name, payload)
