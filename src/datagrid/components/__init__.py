"""Reusable Qt widgets used by the table and input views."""

from __future__ import annotations

from .empty_state import EmptyStateWidget  # noqa: F401
from .loading_indicator import LoadingIndicatorWidget  # noqa: F401
from .tri_state_checkbox import TriStateCheckBox, check_state_for  # noqa: F401

__all__ = [
    "EmptyStateWidget",
    "LoadingIndicatorWidget",
    "TriStateCheckBox",
    "check_state_for",
]
