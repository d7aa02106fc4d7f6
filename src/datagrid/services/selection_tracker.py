"""Selection tracker for multi-row table selection.

Maintains the set of selected records for the collection currently shown by
one table and derives the aggregate state that drives a tri-state "select
all" checkbox.

Selection is keyed by record identity (``is``), never by value: two records
with identical fields are still two distinct rows. The tracker keeps a
reference to each selected record so the ``id()`` keys stay valid for as long
as the record is selected.

Lifecycle rules:
 - Binding a *different* collection object clears the selection (a dataset
   swap starts a fresh selection scope).
 - Re-binding the *same* collection after it changed in place prunes members
   whose records are no longer present.
 - Operations on records absent from the bound collection are ignored.

Observers receive the full selection (accumulation order) synchronously,
after the state update and before the mutating call returns.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence

from datagrid.models import SelectionAggregate

__all__ = ["SelectionObserver", "SelectionTracker"]

logger = logging.getLogger(__name__)

SelectionObserver = Callable[[List[Any]], None]


class SelectionTracker:
    def __init__(self, data: Optional[Sequence[Any]] = None) -> None:
        self._data: Optional[Sequence[Any]] = data
        # id(record) -> record, insertion ordered (accumulation order)
        self._selected: Dict[int, Any] = {}
        self._observers: List[SelectionObserver] = []

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------
    def subscribe(self, observer: SelectionObserver) -> SelectionObserver:
        self._observers.append(observer)
        return observer

    def unsubscribe(self, observer: SelectionObserver) -> None:
        try:
            self._observers.remove(observer)
        except ValueError:
            pass

    def _notify(self) -> None:
        snapshot = self.selected()
        logger.debug("selection changed: %d selected", len(snapshot))
        for observer in list(self._observers):
            observer(list(snapshot))

    # ------------------------------------------------------------------
    # Data binding
    # ------------------------------------------------------------------
    @property
    def data(self) -> Sequence[Any]:
        return self._data if self._data is not None else ()

    def _adopt(self, data: Sequence[Any]) -> bool:
        """Bind ``data`` without notifying; return True if membership changed."""
        if data is self._data:
            present = {id(r) for r in data}
            stale = [key for key in self._selected if key not in present]
            for key in stale:
                del self._selected[key]
            if stale:
                logger.debug("pruned %d stale selections", len(stale))
            return bool(stale)
        self._data = data
        if not self._selected:
            return False
        self._selected.clear()
        return True

    def bind(self, data: Sequence[Any]) -> bool:
        """Adopt the currently rendered collection.

        Returns True (and notifies observers) when selection membership
        changed as a consequence.
        """
        changed = self._adopt(data)
        if changed:
            self._notify()
        return changed

    def _contains(self, record: Any) -> bool:
        return any(r is record for r in self.data)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def toggle_row(self, record: Any, checked: bool) -> List[Any]:
        """Select (``checked=True``) or deselect one record.

        Idempotent with respect to membership. A record that is not part of
        the bound collection is ignored and no notification is sent.
        """
        if not self._contains(record):
            logger.debug("ignoring toggle for record outside the bound data")
            return self.selected()
        key = id(record)
        if checked:
            self._selected.setdefault(key, record)
        else:
            self._selected.pop(key, None)
        self._notify()
        return self.selected()

    def toggle_all(self, data: Sequence[Any], checked: bool) -> List[Any]:
        """Replace the selection with all of ``data`` or empty it.

        Overwrites rather than accumulates: selecting all of one collection
        and then all of another leaves only the second one selected.
        """
        self._adopt(data)
        if not checked:
            return self.clear()
        self._selected = {id(r): r for r in data}
        self._notify()
        return self.selected()

    def clear(self) -> List[Any]:
        """Empty the selection and notify observers."""
        self._selected.clear()
        self._notify()
        return []

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def is_selected(self, record: Any) -> bool:
        return self._selected.get(id(record)) is record

    def selected(self) -> List[Any]:
        return list(self._selected.values())

    def __len__(self) -> int:
        return len(self._selected)

    def aggregate(self) -> SelectionAggregate:
        return self.derive_aggregate(self.data, self.selected())

    @staticmethod
    def derive_aggregate(data: Iterable[Any], selection: Iterable[Any]) -> SelectionAggregate:
        """Compute the all/some flags for ``selection`` over ``data``.

        ``all_selected`` requires a non-empty collection whose every record is
        selected with nothing else selected. ``some_selected`` is any
        non-empty selection that is not "all". Records listed twice in
        ``data`` count once.
        """
        data_ids = {id(r) for r in data}
        selected_ids = {id(r) for r in selection}
        all_selected = bool(data_ids) and selected_ids == data_ids
        some_selected = bool(selected_ids) and not all_selected
        return SelectionAggregate(all_selected=all_selected, some_selected=some_selected)
