import logging

import pytest

from datagrid.models import AggregateState, Column, SortDirection, SortDirective
from datagrid.services.event_bus import EventBus, GridEvent
from datagrid.services.service_locator import services
from datagrid.viewmodels.data_table_viewmodel import (
    DataTableViewModel,
    TableMode,
    UnknownColumnError,
)


def _columns():
    return [
        Column("name", "Name", "name", sortable=True),
        Column("role", "Role", "role", sortable=True),
        Column("age", "Age", "age", sortable=True, render=lambda v, r: f"{v} yrs"),
        Column("note", "Note", "note"),
    ]


def _vm(users, **kwargs):
    kwargs.setdefault("selectable", True)
    return DataTableViewModel(_columns(), users, **kwargs)


def test_modes(users):
    vm = _vm(users)
    assert vm.mode() is TableMode.ROWS
    vm.set_loading(True)
    assert vm.mode() is TableMode.LOADING
    assert vm.display_rows() == []
    vm.set_loading(False)
    vm.set_data([])
    assert vm.mode() is TableMode.EMPTY
    assert vm.empty_message == "No data available"


def test_sort_gestures(users):
    vm = _vm(users)
    assert vm.sort_by("role") == SortDirective("role", SortDirection.ASCENDING)
    assert [u.name for u in vm.display_rows()] == ["Ann", "Eve", "Cid", "Bob", "Dee"]
    vm.sort_by("role")
    assert vm.sort_indicator("role") is SortDirection.DESCENDING
    vm.sort_by("name")
    assert vm.directive == SortDirective("name", SortDirection.ASCENDING)
    assert vm.sort_indicator("role") is None


def test_sort_by_non_sortable_or_unknown_is_noop(users):
    vm = _vm(users)
    vm.sort_by("name")
    before = vm.directive
    assert vm.sort_by("note") == before
    assert vm.sort_by("missing") == before


def test_header_labels(users):
    vm = _vm(users)
    cols = {c.key: c for c in vm.columns}
    assert vm.header_label(cols["note"]) == "Note"
    assert vm.header_label(cols["name"]).endswith("▴▾")
    vm.sort_by("name")
    assert vm.header_label(cols["name"]) == "Name ▲"
    vm.sort_by("name")
    assert vm.header_label(cols["name"]) == "Name ▼"


def test_cell_text(users):
    vm = _vm(users)
    cols = {c.key: c for c in vm.columns}
    assert vm.cell_text(users[0], cols["name"]) == "Ann"
    assert vm.cell_text(users[0], cols["age"]) == "34 yrs"
    assert vm.cell_text(users[0], cols["note"]) == "-"
    assert vm.cell_text({"name": ""}, cols["name"]) == "-"
    assert vm.cell_text({"name": 0}, cols["name"]) == "0"


def test_row_select_callback_receives_full_selection(users):
    received = []
    vm = _vm(users, on_row_select=received.append)
    vm.toggle_row(users[2], True)
    vm.toggle_row(users[0], True)
    assert received[-1] == [users[2], users[0]]
    vm.toggle_all(True)
    assert received[-1] == users
    assert vm.header_check_state() is AggregateState.ALL_SELECTED
    vm.toggle_row(users[0], False)
    assert vm.header_check_state() is AggregateState.SOME_SELECTED
    vm.toggle_all(False)
    assert received[-1] == []
    assert vm.header_check_state() is AggregateState.NONE_SELECTED


def test_selection_survives_sorting(users):
    vm = _vm(users)
    vm.toggle_row(users[1], True)
    vm.sort_by("age")
    vm.sort_by("age")
    assert vm.is_selected(users[1])
    assert vm.selected_rows() == [users[1]]


def test_selection_disabled_when_not_selectable(users):
    received = []
    vm = _vm(users, selectable=False, on_row_select=received.append)
    vm.toggle_row(users[0], True)
    vm.toggle_all(True)
    assert vm.selected_rows() == []
    assert received == []


def test_data_swap_resets_selection_and_notifies(users):
    received = []
    vm = _vm(users, on_row_select=received.append)
    vm.toggle_row(users[0], True)
    vm.set_data(list(users))
    assert vm.selected_rows() == []
    assert received[-1] == []


def test_in_place_change_prunes_selection(users):
    vm = _vm(users)
    vm.toggle_all(True)
    gone = users.pop(0)
    vm.set_data(users)
    assert not vm.is_selected(gone)
    assert vm.aggregate().all_selected
    assert [u.name for u in vm.display_rows()] == [u.name for u in users]


def test_duplicate_column_keys_warn(users, caplog):
    cols = [Column("name", "Name", "name"), Column("name", "Alias", "role")]
    with caplog.at_level(logging.WARNING):
        vm = DataTableViewModel(cols, users)
    assert "duplicate column key" in caplog.text
    assert vm.column("name").title == "Alias"


def test_strict_column_lookup(users):
    vm = _vm(users)
    with pytest.raises(UnknownColumnError):
        vm.column("nope")
    with pytest.raises(KeyError):
        vm.column("nope")
    assert vm.column_by_key("nope") is None


def test_events_published_on_explicit_bus(users):
    bus = EventBus()
    names = []
    for evt in (GridEvent.SORT_CHANGED, GridEvent.SELECTION_CHANGED, GridEvent.DATA_REPLACED):
        bus.subscribe(evt, lambda e: names.append((e.name, e.payload)))
    vm = _vm(users, event_bus=bus)
    vm.sort_by("name")
    vm.toggle_row(users[0], True)
    vm.set_data([])
    assert names[0] == (
        "sort_changed",
        {"column": "name", "field": "name", "direction": "asc"},
    )
    assert ("selection_changed", {"count": 1}) in names
    assert names[-1] == ("data_replaced", {"rows": 0})


def test_events_use_service_locator_bus(users):
    bus = EventBus()
    services.register("event_bus", bus)
    seen = []
    bus.subscribe(GridEvent.LOADING_CHANGED, lambda e: seen.append(e.payload))
    vm = _vm(users)
    vm.set_loading(True)
    vm.set_loading(True)
    assert seen == [{"loading": True}]


def test_callback_errors_propagate_after_state_update(users):
    def boom(_selection):
        raise RuntimeError("observer failed")

    vm = _vm(users, on_row_select=boom)
    with pytest.raises(RuntimeError):
        vm.toggle_row(users[0], True)
    assert vm.is_selected(users[0])
