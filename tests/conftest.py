# Headless Qt for widget tests; pytest-qt provides the qapp/qtbot fixtures.
# Also resets the global service locator so event bus registrations made by
# one test never leak into another.

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from datagrid.services.service_locator import services


@pytest.fixture(autouse=True)
def _isolated_services():
    yield
    services.clear()


class User:
    """Plain record type; identity matters, value equality is irrelevant."""

    def __init__(self, name, role, age=None):
        self.name = name
        self.role = role
        if age is not None:
            self.age = age

    def __repr__(self):  # pragma: no cover - debugging aid
        return f"User({self.name!r}, {self.role!r})"


@pytest.fixture
def users():
    return [
        User("Ann", "Admin", 34),
        User("Bob", "User", 27),
        User("Cid", "Moderator", 41),
        User("Dee", "User", 27),
        User("Eve", "Admin", 19),
    ]
