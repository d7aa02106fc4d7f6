"""Single-column sort engine for tabular view models.

Produces an ordered copy of a record collection according to a
`SortDirective`. Sorting is stable in both directions: records whose key
values compare equal keep their relative input order, so repeatedly toggling
the direction on a column with duplicate values never shuffles ties.

Key ranking keeps the comparison total over heterogeneous data:

    missing / None / NaN  <  numbers  <  strings  <  anything else

Values of the last group compare by their ``str()`` form. Missing values rank
lowest, i.e. first when ascending and last when descending.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from numbers import Number
from typing import Any, Iterable, List, Optional, Sequence, Tuple, TypeVar

from datagrid.models import Column, MISSING, SortDirection, SortDirective, read_field

__all__ = ["SortEngine", "compute_order", "next_directive", "sort_indicator", "sort_key"]

logger = logging.getLogger(__name__)

T = TypeVar("T")

_RANK_MISSING = 0
_RANK_NUMBER = 1
_RANK_STRING = 2
_RANK_OTHER = 3


def _is_nan(value: Number) -> bool:
    if isinstance(value, Decimal):
        # covers signalling NaN, whose equality test would raise
        return value.is_nan()
    return value != value


def sort_key(value: Any) -> Tuple[int, Any]:
    """Map a field value onto a totally ordered ``(rank, value)`` tuple."""
    if value is MISSING or value is None:
        return (_RANK_MISSING, 0)
    if isinstance(value, Number) and not isinstance(value, complex):
        if _is_nan(value):
            return (_RANK_MISSING, 0)
        return (_RANK_NUMBER, value)
    if isinstance(value, str):
        return (_RANK_STRING, value)
    return (_RANK_OTHER, str(value))


def _field_is_known(field: str, columns: Iterable[Column]) -> bool:
    return any(c.data_index == field for c in columns)


def compute_order(
    data: Sequence[T],
    directive: SortDirective,
    columns: Optional[Sequence[Column]] = None,
) -> List[T]:
    """Return ``data`` ordered by ``directive`` as a new list.

    A natural directive (``field is None``) passes the input order through
    without sorting. When ``columns`` is supplied, a directive naming a field
    no column reads is treated as natural order as well.
    """
    rows = list(data)
    if directive.is_natural:
        return rows
    field = directive.field
    if columns is not None and not _field_is_known(field, columns):  # type: ignore[arg-type]
        logger.debug("sort field %r not present on any column; keeping input order", field)
        return rows
    # list.sort is stable and reverse=True keeps ties in input order
    rows.sort(
        key=lambda r: sort_key(read_field(r, field)),  # type: ignore[arg-type]
        reverse=not directive.ascending,
    )
    return rows


def next_directive(current: SortDirective, column: Column) -> SortDirective:
    """Apply a header click on ``column`` to ``current``.

    Same column flips the direction, a different sortable column starts
    ascending, a non-sortable column leaves the directive untouched.
    """
    if not column.sortable:
        return current
    if current.field == column.data_index:
        return SortDirective(column.data_index, current.direction.flipped())
    return SortDirective(column.data_index, SortDirection.ASCENDING)


def sort_indicator(directive: SortDirective, column: Column) -> Optional[SortDirection]:
    if not column.sortable or directive.field != column.data_index:
        return None
    return directive.direction


class SortEngine:
    """Stateful wrapper holding the active directive for one table.

    Usage:
        engine = SortEngine()
        engine.click(name_column)          # ascending by name
        rows = engine.order(records)
        engine.click(name_column)          # descending by name
    """

    def __init__(self, directive: SortDirective | None = None):
        self._directive = directive or SortDirective()

    @property
    def directive(self) -> SortDirective:
        return self._directive

    def click(self, column: Column) -> bool:
        """Apply a header click; return True if the directive changed."""
        new = next_directive(self._directive, column)
        if new == self._directive:
            return False
        logger.debug("sort directive %s -> %s", self._directive, new)
        self._directive = new
        return True

    def order(self, data: Sequence[T], columns: Optional[Sequence[Column]] = None) -> List[T]:
        return compute_order(data, self._directive, columns)

    def indicator(self, column: Column) -> Optional[SortDirection]:
        return sort_indicator(self._directive, column)
