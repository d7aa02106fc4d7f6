"""Table-facing lightweight models shared by the sort and selection engines."""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Mapping, Optional

__all__ = [
    "MISSING",
    "read_field",
    "Column",
    "SortDirection",
    "SortDirective",
    "AggregateState",
    "SelectionAggregate",
]


class _Missing:
    """Sentinel for a record field that could not be read."""

    _instance: Optional["_Missing"] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()


def read_field(record: Any, field: str) -> Any:
    """Return ``field`` of ``record`` or ``MISSING``.

    Mappings are read by key, everything else by attribute.
    """
    if isinstance(record, Mapping):
        return record.get(field, MISSING)
    return getattr(record, field, MISSING)


@dataclass(frozen=True)
class Column:
    """One displayable field projection of a record.

    Attributes
    ----------
    key: str
        Unique column identifier (header click target).
    title: str
        Header text.
    data_index: str
        Name of the record field this column reads.
    sortable: bool
        Whether header clicks change the sort directive.
    render: callable | None
        Optional ``(value, record) -> display`` transform.
    """

    key: str
    title: str
    data_index: str
    sortable: bool = False
    render: Optional[Callable[[Any, Any], Any]] = None

    def value_of(self, record: Any) -> Any:
        return read_field(record, self.data_index)


class SortDirection(str, Enum):
    ASCENDING = "asc"
    DESCENDING = "desc"

    def flipped(self) -> "SortDirection":
        if self is SortDirection.ASCENDING:
            return SortDirection.DESCENDING
        return SortDirection.ASCENDING


@dataclass(frozen=True)
class SortDirective:
    field: Optional[str] = None  # None -> natural input order
    direction: SortDirection = SortDirection.ASCENDING

    @property
    def is_natural(self) -> bool:
        return self.field is None

    @property
    def ascending(self) -> bool:
        return self.direction is SortDirection.ASCENDING


class AggregateState(str, Enum):
    ALL_SELECTED = "all"
    SOME_SELECTED = "some"
    NONE_SELECTED = "none"


@dataclass(frozen=True)
class SelectionAggregate:
    all_selected: bool = False
    some_selected: bool = False

    @property
    def state(self) -> AggregateState:
        if self.all_selected:
            return AggregateState.ALL_SELECTED
        if self.some_selected:
            return AggregateState.SOME_SELECTED
        return AggregateState.NONE_SELECTED
