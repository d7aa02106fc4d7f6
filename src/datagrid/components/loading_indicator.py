"""Loading indicator widget.

Shown instead of the table body while the table is in loading mode. Renders
a spinner glyph cycled by a QTimer next to the "Loading..." caption.

API:
    indicator = LoadingIndicatorWidget()
    indicator.start() / indicator.stop()
    indicator.is_active()
"""

from __future__ import annotations
from typing import Optional
from PyQt6.QtCore import Qt, QTimer
from PyQt6.QtWidgets import QHBoxLayout, QLabel, QWidget

from datagrid.config import settings

__all__ = ["LoadingIndicatorWidget", "SPINNER_FRAMES"]

SPINNER_FRAMES = ("◐", "◓", "◑", "◒")


class LoadingIndicatorWidget(QWidget):
    def __init__(
        self,
        text: str = settings.LOADING_TEXT,
        parent: Optional[QWidget] = None,
        *,
        interval_ms: int = settings.LOADING_SPINNER_INTERVAL_MS,
    ):
        super().__init__(parent)
        self.setObjectName("loadingIndicator")
        self._frame = 0
        self._active = False
        self._timer = QTimer(self)
        self._timer.setInterval(max(30, interval_ms))
        self._timer.timeout.connect(self._on_tick)  # type: ignore[attr-defined]
        self._build_ui(text)

    def _build_ui(self, text: str):
        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 24, 0, 24)
        layout.addStretch(1)
        self.spinner_label = QLabel(SPINNER_FRAMES[0])
        self.spinner_label.setObjectName("loadingSpinner")
        layout.addWidget(self.spinner_label)
        self.text_label = QLabel(text)
        self.text_label.setObjectName("loadingText")
        self.text_label.setAlignment(Qt.AlignmentFlag.AlignVCenter)
        layout.addWidget(self.text_label)
        layout.addStretch(1)

    # Control -------------------------------------------------------------
    def start(self):
        self.show()
        if self._active:
            return
        self._active = True
        self._timer.start()

    def stop(self):
        if not self._active:
            self.hide()
            return
        self._active = False
        self._timer.stop()
        self.hide()

    # Accessors -----------------------------------------------------------
    def is_active(self) -> bool:
        return self._active

    def text(self) -> str:
        return self.text_label.text()

    def _on_tick(self):  # pragma: no cover - timing based
        self._frame = (self._frame + 1) % len(SPINNER_FRAMES)
        self.spinner_label.setText(SPINNER_FRAMES[self._frame])
