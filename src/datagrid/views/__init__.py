"""Qt views for the grid components."""

from .data_table_view import DataTableView  # noqa: F401
from .input_field_view import InputFieldView  # noqa: F401

__all__ = ["DataTableView", "InputFieldView"]
