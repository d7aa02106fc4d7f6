"""View models (headless presentation state) for the grid components."""

from .data_table_viewmodel import (  # noqa: F401
    DataGridError,
    DataTableViewModel,
    TableMode,
    UnknownColumnError,
)
from .input_field_viewmodel import (  # noqa: F401
    InputFieldViewModel,
    InputSize,
    InputType,
    InputVariant,
)

__all__ = [
    "DataGridError",
    "DataTableViewModel",
    "TableMode",
    "UnknownColumnError",
    "InputFieldViewModel",
    "InputSize",
    "InputType",
    "InputVariant",
]
