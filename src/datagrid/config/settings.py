"""Global configuration and constants for the data grid components."""

from __future__ import annotations

from typing import Final

DEFAULT_EMPTY_MESSAGE: Final = "No data available"
LOADING_TEXT: Final = "Loading..."
MISSING_CELL_TEXT: Final = "-"

# Header sort arrows (appended to sortable column titles)
SORT_ASC_GLYPH: Final = "▲"
SORT_DESC_GLYPH: Final = "▼"
SORT_IDLE_GLYPH: Final = "▴▾"

# Ring buffer capacities for in-process diagnostics
LOG_CAPACITY: Final = 500
ERROR_CAPACITY: Final = 20

EMAIL_ERROR_MESSAGE: Final = "Enter a valid email address"
LOADING_SPINNER_INTERVAL_MS: Final = 120  # milliseconds
SELECTED_ROW_COLOR: Final = "#eff6ff"
