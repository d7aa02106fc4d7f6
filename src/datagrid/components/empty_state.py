"""Placeholder shown in place of the table body when there are no rows."""

from __future__ import annotations

from typing import Optional

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QLabel, QVBoxLayout, QWidget

from datagrid.config import settings

__all__ = ["EmptyStateWidget"]


class EmptyStateWidget(QWidget):
    """Centered, word-wrapped message standing in for an empty table.

    `DataTableView` pushes its ``empty_message`` here on every refresh.
    """

    def __init__(self, message: str = settings.DEFAULT_EMPTY_MESSAGE, parent: Optional[QWidget] = None):
        super().__init__(parent)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 8, 0, 8)
        self.message_label = QLabel(message)
        self.message_label.setObjectName("emptyStateMessage")
        self.message_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.message_label.setWordWrap(True)
        layout.addWidget(self.message_label)

    def message(self) -> str:
        return self.message_label.text()

    def set_message(self, message: str) -> None:
        self.message_label.setText(message)
