import logging

import pytest

from datagrid.models import Column
from datagrid.services.event_bus import EventBus, GridEvent
from datagrid.services.logging_service import LoggingService, component_of
from datagrid.services.service_locator import EVENT_BUS, services
from datagrid.viewmodels.data_table_viewmodel import DataTableViewModel


@pytest.fixture()
def setup_logging():
    bus = EventBus()
    services.register(EVENT_BUS, bus, replace=True)
    svc = LoggingService(capacity=5)
    svc.attach()
    yield svc, bus
    svc.detach()


def test_component_of():
    assert component_of("datagrid.services.sort_engine") == "sort_engine"
    assert component_of("datagrid") == "datagrid"


def test_captures_package_records_only(setup_logging):
    svc, _ = setup_logging
    logging.getLogger("datagrid.services.selection_tracker").info("selected %d", 2)
    logging.getLogger("elsewhere").warning("not ours")
    entries = svc.recent()
    assert [e.message for e in entries] == ["selected 2"]
    assert entries[0].component == "selection_tracker"


def test_capacity_eviction(setup_logging):
    svc, _ = setup_logging
    for i in range(10):
        logging.getLogger("datagrid.cap").info("M%d", i)
    recents = svc.recent()
    assert len(recents) == 5
    assert recents[0].message == "M5"
    assert [e.message for e in svc.recent(limit=2)] == ["M8", "M9"]
    svc.clear()
    assert svc.recent() == []


def test_filter_by_level_and_component(setup_logging):
    svc, _ = setup_logging
    logging.getLogger("datagrid.services.sort_engine").debug("sort start")
    logging.getLogger("datagrid.viewmodels.data_table_viewmodel").warning("duplicate column key")
    logging.getLogger("datagrid.errors").error("Uncaught exception")
    warnings = svc.filter(min_level=logging.WARNING)
    assert [e.component for e in warnings] == ["data_table_viewmodel", "errors"]
    sort_logs = svc.filter(component="sort_engine")
    assert [e.message for e in sort_logs] == ["sort start"]


def test_record_announced_on_registered_bus(setup_logging):
    _, bus = setup_logging
    payloads = []
    bus.subscribe(GridEvent.LOG_RECORD_ADDED, lambda evt: payloads.append(evt.payload))
    logging.getLogger("datagrid.views").warning("Something happened")
    assert payloads == [{"level": "WARNING", "component": "views", "message": "Something happened"}]


def test_grid_activity_is_traced(users):
    services.register(EVENT_BUS, EventBus(), replace=True)
    svc = LoggingService()
    svc.attach()
    try:
        vm = DataTableViewModel(
            [Column("name", "Old", "role"), Column("name", "Name", "name", sortable=True)], users
        )
        vm.sort_by("name")
        assert svc.filter(min_level=logging.WARNING, component="data_table_viewmodel")
        traced = [e.message for e in svc.filter(component="event_bus")]
        assert "sort_changed: name asc" in traced
    finally:
        svc.detach()


def test_detach_restores_package_level():
    package = logging.getLogger("datagrid")
    before = package.level
    svc = LoggingService()
    svc.attach(level=logging.WARNING)
    assert svc.attached
    assert package.level == logging.WARNING
    svc.detach()
    assert not svc.attached
    assert package.level == before
