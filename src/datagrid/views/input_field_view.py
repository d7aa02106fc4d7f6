"""InputFieldView

Decorated QLineEdit: optional label, clear button, password reveal toggle,
loading marker and a helper/error message line. Variant, size and error
state are exposed as dynamic properties (``variant``, ``inputSize``,
``hasError``) so stylesheets can target them, e.g.::

    QLineEdit[variant="ghost"][hasError="true"] { border-bottom: 2px solid #fca5a5; }
"""

from __future__ import annotations
from typing import Optional
from PyQt6.QtCore import QEvent, QObject, pyqtSignal
from PyQt6.QtWidgets import QHBoxLayout, QLabel, QLineEdit, QToolButton, QVBoxLayout, QWidget

from datagrid.config import settings
from datagrid.viewmodels.input_field_viewmodel import InputFieldViewModel

__all__ = ["InputFieldView"]

_SIZE_HEIGHTS = {"sm": 32, "md": 40, "lg": 48}


class InputFieldView(QWidget):
    """Widget bound to an `InputFieldViewModel`.

    Signals:
        valueChanged(str): emitted after user edits or clear.
        cleared(): emitted when the clear button empties the field.
    """

    valueChanged = pyqtSignal(str)
    cleared = pyqtSignal()

    def __init__(self, viewmodel: InputFieldViewModel | None = None, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.viewmodel = viewmodel or InputFieldViewModel()
        self._build_ui()
        self.refresh()

    def _build_ui(self):
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)
        root.setSpacing(4)
        self.label = QLabel("")
        self.label.setObjectName("inputLabel")
        root.addWidget(self.label)
        row = QHBoxLayout()
        row.setSpacing(4)
        self.line_edit = QLineEdit()
        self.line_edit.setObjectName("inputField")
        self.line_edit.textEdited.connect(self._on_text_edited)  # type: ignore
        self.line_edit.installEventFilter(self)
        row.addWidget(self.line_edit, 1)
        self.loading_label = QLabel(settings.LOADING_TEXT)
        self.loading_label.setObjectName("inputLoading")
        row.addWidget(self.loading_label)
        self.clear_button = QToolButton()
        self.clear_button.setText("✕")
        self.clear_button.setObjectName("inputClearButton")
        self.clear_button.setAccessibleName("Clear input")
        self.clear_button.clicked.connect(self._on_clear_clicked)  # type: ignore
        row.addWidget(self.clear_button)
        self.reveal_button = QToolButton()
        self.reveal_button.setObjectName("inputRevealButton")
        self.reveal_button.clicked.connect(self._on_reveal_clicked)  # type: ignore
        row.addWidget(self.reveal_button)
        root.addLayout(row)
        self.message_label = QLabel("")
        self.message_label.setObjectName("inputMessage")
        self.message_label.setWordWrap(True)
        root.addWidget(self.message_label)

    # Rendering ----------------------------------------------------------
    def refresh(self):
        vm = self.viewmodel
        self.label.setText(vm.label or "")
        self.label.setVisible(bool(vm.label))
        if self.line_edit.text() != vm.value:
            self.line_edit.setText(vm.value)
        self.line_edit.setPlaceholderText(vm.placeholder or "")
        self.line_edit.setEnabled(vm.is_editable)
        self.line_edit.setEchoMode(
            QLineEdit.EchoMode.Password if vm.masked else QLineEdit.EchoMode.Normal
        )
        self.line_edit.setFixedHeight(_SIZE_HEIGHTS[vm.size.value])
        self.loading_label.setVisible(vm.loading)
        self.clear_button.setVisible(vm.show_clear_button)
        self.reveal_button.setVisible(vm.show_reveal_button)
        self.reveal_button.setText("Hide" if vm.password_visible else "Show")
        self.reveal_button.setAccessibleName(vm.reveal_button_label)
        self.message_label.setText(vm.message_text or "")
        self.message_label.setVisible(bool(vm.message_text))
        self.message_label.setProperty("role", vm.message_role or "")
        style = vm.style_state
        for widget in (self.line_edit, self.label, self.message_label):
            widget.setProperty("variant", style.variant.value)
            widget.setProperty("inputSize", style.size.value)
            widget.setProperty("hasError", style.has_error)
            widget.style().unpolish(widget)
            widget.style().polish(widget)

    # Gestures -----------------------------------------------------------
    def _on_text_edited(self, text: str):
        if self.viewmodel.set_value(text):
            self.valueChanged.emit(text)
        self.refresh()

    def _on_clear_clicked(self):
        if self.viewmodel.clear():
            self.valueChanged.emit("")
            self.cleared.emit()
        self.refresh()

    def _on_reveal_clicked(self):
        self.viewmodel.toggle_password_visibility()
        self.refresh()

    def eventFilter(self, obj: QObject, event: QEvent) -> bool:  # noqa: N802 - Qt override
        if obj is self.line_edit:
            if event.type() == QEvent.Type.FocusIn:
                self.viewmodel.set_focused(True)
            elif event.type() == QEvent.Type.FocusOut:
                self.viewmodel.set_focused(False)
                self.viewmodel.validate()
                self.refresh()
        return super().eventFilter(obj, event)

    # Testing helpers ----------------------------------------------------
    def is_masked(self) -> bool:
        return self.line_edit.echoMode() == QLineEdit.EchoMode.Password
