"""Select-all checkbox with a display-only indeterminate state.

Qt's tristate QCheckBox cycles Unchecked -> PartiallyChecked -> Checked on
click. A select-all control must never be *clicked into* the partial state:
partial is derived from the selection. A click therefore always goes to
Checked, except from Checked which goes to Unchecked.
"""

from __future__ import annotations
from typing import Optional
from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QCheckBox, QWidget

from datagrid.models import AggregateState

__all__ = ["TriStateCheckBox", "check_state_for"]


def check_state_for(state: AggregateState) -> Qt.CheckState:
    if state is AggregateState.ALL_SELECTED:
        return Qt.CheckState.Checked
    if state is AggregateState.SOME_SELECTED:
        return Qt.CheckState.PartiallyChecked
    return Qt.CheckState.Unchecked


class TriStateCheckBox(QCheckBox):
    def __init__(self, text: str = "", parent: Optional[QWidget] = None):
        super().__init__(text, parent)
        self.setTristate(True)

    def nextCheckState(self):  # noqa: N802 - Qt override
        if self.checkState() == Qt.CheckState.Checked:
            self.setCheckState(Qt.CheckState.Unchecked)
        else:
            self.setCheckState(Qt.CheckState.Checked)

    def set_aggregate(self, state: AggregateState) -> None:
        self.blockSignals(True)
        try:
            self.setCheckState(check_state_for(state))
        finally:
            self.blockSignals(False)
