"""DataTableView

QTableWidget-based view for arbitrary records with header-click sorting and
optional checkbox selection. All state lives in `DataTableViewModel`; this
widget only maps Qt gestures to view model calls and repaints from the
derived state afterwards.
"""

from __future__ import annotations
from typing import Any, Callable, List, Optional, Sequence
from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QBrush, QColor
from PyQt6.QtWidgets import (
    QHeaderView,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from datagrid.components.empty_state import EmptyStateWidget
from datagrid.components.loading_indicator import LoadingIndicatorWidget
from datagrid.components.tri_state_checkbox import TriStateCheckBox
from datagrid.config import settings
from datagrid.models import Column
from datagrid.viewmodels.data_table_viewmodel import DataTableViewModel, TableMode

__all__ = ["DataTableView"]


class DataTableView(QWidget):
    """Table widget bound to a `DataTableViewModel`.

    Signals:
        rowSelectionChanged(list): full selection after every change.
        sortChanged(str, str): (field, direction) after a header click changed the sort.
    """

    rowSelectionChanged = pyqtSignal(list)
    sortChanged = pyqtSignal(str, str)

    def __init__(
        self,
        columns: Sequence[Column],
        data: Sequence[Any] = (),
        parent: Optional[QWidget] = None,
        *,
        loading: bool = False,
        selectable: bool = False,
        empty_message: str = settings.DEFAULT_EMPTY_MESSAGE,
        on_row_select: Optional[Callable[[List[Any]], None]] = None,
        viewmodel: DataTableViewModel | None = None,
    ):
        super().__init__(parent)
        if on_row_select is None and viewmodel is not None:
            on_row_select = viewmodel.on_row_select
        self._user_on_row_select = on_row_select
        self.viewmodel = viewmodel or DataTableViewModel(
            columns,
            data,
            loading=loading,
            selectable=selectable,
            empty_message=empty_message,
        )
        self.viewmodel.on_row_select = self._on_selection_changed
        self._rows: List[Any] = []
        self._populating = False
        self._empty_state_active = False
        self._build_ui()
        self.refresh()

    def _build_ui(self):
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)
        self.select_all_checkbox = TriStateCheckBox("Select all rows")
        self.select_all_checkbox.setObjectName("selectAllCheckbox")
        self.select_all_checkbox.setAccessibleName("Select all rows")
        self.select_all_checkbox.clicked.connect(self._on_select_all_clicked)  # type: ignore
        root.addWidget(self.select_all_checkbox)
        self.table = QTableWidget(0, 0)
        self.table.setObjectName("dataTable")
        self.table.verticalHeader().setVisible(False)
        self.table.setEditTriggers(QTableWidget.EditTrigger.NoEditTriggers)
        self.table.setSelectionMode(QTableWidget.SelectionMode.NoSelection)
        header = self.table.horizontalHeader()
        header.setSectionResizeMode(QHeaderView.ResizeMode.ResizeToContents)
        header.setStretchLastSection(True)
        header.sectionClicked.connect(self._on_header_clicked)  # type: ignore
        self.table.itemChanged.connect(self._on_item_changed)  # type: ignore
        root.addWidget(self.table)
        self.loading_indicator = LoadingIndicatorWidget()
        root.addWidget(self.loading_indicator)
        self.empty_state = EmptyStateWidget(self.viewmodel.empty_message)
        self.empty_state.setObjectName("dataTableEmptyState")
        root.addWidget(self.empty_state)
        root.addStretch(1)

    # Inputs -------------------------------------------------------------
    def set_data(self, data: Sequence[Any]):
        self.viewmodel.set_data(data)
        self.refresh()

    def set_columns(self, columns: Sequence[Column]):
        self.viewmodel.set_columns(columns)
        self.refresh()

    def set_loading(self, loading: bool):
        self.viewmodel.set_loading(loading)
        self.refresh()

    def set_selectable(self, selectable: bool):
        self.viewmodel.set_selectable(selectable)
        self.refresh()

    def set_empty_message(self, message: str):
        self.viewmodel.empty_message = message
        self.refresh()

    # Rendering ----------------------------------------------------------
    def _column_offset(self) -> int:
        return 1 if self.viewmodel.selectable else 0

    def refresh(self):
        vm = self.viewmodel
        mode = vm.mode()
        if mode is TableMode.LOADING:
            self.table.hide()
            self.select_all_checkbox.hide()
            self.empty_state.hide()
            self._empty_state_active = False
            self._rows = []
            self.loading_indicator.start()
            return
        self.loading_indicator.stop()
        self.table.show()
        self.select_all_checkbox.setVisible(vm.selectable)
        self.select_all_checkbox.set_aggregate(vm.header_check_state())
        self._rows = vm.display_rows()
        self._populate_headers()
        self._populate_rows()
        self._empty_state_active = mode is TableMode.EMPTY
        self.empty_state.set_message(vm.empty_message)
        self.empty_state.setVisible(self._empty_state_active)

    def _populate_headers(self):
        vm = self.viewmodel
        headers = [""] if vm.selectable else []
        headers.extend(vm.header_label(c) for c in vm.columns)
        self.table.setColumnCount(len(headers))
        self.table.setHorizontalHeaderLabels(headers)

    def _populate_rows(self):
        vm = self.viewmodel
        offset = self._column_offset()
        highlight = QBrush(QColor(settings.SELECTED_ROW_COLOR))
        self._populating = True
        try:
            self.table.setRowCount(len(self._rows))
            for r, record in enumerate(self._rows):
                selected = vm.is_selected(record)
                if offset:
                    box = QTableWidgetItem("")
                    box.setFlags(Qt.ItemFlag.ItemIsEnabled | Qt.ItemFlag.ItemIsUserCheckable)
                    box.setCheckState(
                        Qt.CheckState.Checked if selected else Qt.CheckState.Unchecked
                    )
                    box.setData(Qt.ItemDataRole.AccessibleTextRole, f"Select row {r + 1}")
                    self.table.setItem(r, 0, box)
                for c, col in enumerate(vm.columns, start=offset):
                    item = QTableWidgetItem(vm.cell_text(record, col))
                    self.table.setItem(r, c, item)
                if selected:
                    for c in range(self.table.columnCount()):
                        item = self.table.item(r, c)
                        if item is not None:
                            item.setBackground(highlight)
        finally:
            self._populating = False

    # Gestures -----------------------------------------------------------
    def _on_header_clicked(self, logical_index: int):
        index = logical_index - self._column_offset()
        columns = self.viewmodel.columns
        if index < 0 or index >= len(columns):
            return
        before = self.viewmodel.directive
        after = self.viewmodel.sort_by(columns[index].key)
        if after != before:
            self.sortChanged.emit(after.field or "", after.direction.value)
            self.refresh()

    def _on_item_changed(self, item: QTableWidgetItem):
        if self._populating or not self.viewmodel.selectable or item.column() != 0:
            return
        row = item.row()
        if row >= len(self._rows):
            return
        checked = item.checkState() == Qt.CheckState.Checked
        self.viewmodel.toggle_row(self._rows[row], checked)
        # Items are updated in place: the emitting item must stay alive here.
        self._sync_selection_marks()

    def _on_select_all_clicked(self, _checked: bool = False):
        checked = self.select_all_checkbox.checkState() == Qt.CheckState.Checked
        self.viewmodel.toggle_all(checked)
        self._sync_selection_marks()

    def _sync_selection_marks(self):
        vm = self.viewmodel
        self.select_all_checkbox.set_aggregate(vm.header_check_state())
        if not vm.selectable:
            return
        highlight = QBrush(QColor(settings.SELECTED_ROW_COLOR))
        self._populating = True
        try:
            for r, record in enumerate(self._rows):
                selected = vm.is_selected(record)
                box = self.table.item(r, 0)
                if box is not None:
                    box.setCheckState(
                        Qt.CheckState.Checked if selected else Qt.CheckState.Unchecked
                    )
                for c in range(self.table.columnCount()):
                    item = self.table.item(r, c)
                    if item is not None:
                        item.setBackground(highlight if selected else QBrush())
        finally:
            self._populating = False

    def _on_selection_changed(self, selection: List[Any]):
        if self._user_on_row_select is not None:
            self._user_on_row_select(selection)
        self.rowSelectionChanged.emit(selection)

    # Testing helpers ----------------------------------------------------
    def row_records(self) -> List[Any]:
        return list(self._rows)

    def column_texts(self, column_key: str) -> List[str]:
        vm = self.viewmodel
        col = vm.column(column_key)
        c = vm.columns.index(col) + self._column_offset()
        return [self.table.item(r, c).text() for r in range(self.table.rowCount())]

    def is_empty_state_active(self) -> bool:
        return self._empty_state_active

    def is_loading_active(self) -> bool:
        return self.loading_indicator.is_active()
