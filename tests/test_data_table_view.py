from PyQt6.QtCore import Qt

from datagrid.models import Column
from datagrid.views.data_table_view import DataTableView


def _columns():
    return [
        Column("name", "Name", "name", sortable=True),
        Column("role", "Role", "role", sortable=True),
        Column("note", "Note", "note"),
    ]


def test_renders_rows_in_input_order(qtbot, users):
    view = DataTableView(_columns(), users)
    qtbot.addWidget(view)
    assert view.table.rowCount() == 5
    assert view.table.columnCount() == 3
    assert view.column_texts("name") == ["Ann", "Bob", "Cid", "Dee", "Eve"]
    assert view.column_texts("note") == ["-"] * 5
    assert not view.is_empty_state_active()


def test_header_click_sorts_and_toggles(qtbot, users):
    view = DataTableView(_columns(), users)
    qtbot.addWidget(view)
    with qtbot.waitSignal(view.sortChanged) as blocker:
        view.table.horizontalHeader().sectionClicked.emit(1)
    assert blocker.args == ["role", "asc"]
    assert view.column_texts("name") == ["Ann", "Eve", "Cid", "Bob", "Dee"]
    assert view.table.horizontalHeaderItem(1).text() == "Role ▲"
    view.table.horizontalHeader().sectionClicked.emit(1)
    assert view.column_texts("name") == ["Bob", "Dee", "Cid", "Ann", "Eve"]


def test_non_sortable_header_click_keeps_order(qtbot, users):
    view = DataTableView(_columns(), users)
    qtbot.addWidget(view)
    view.table.horizontalHeader().sectionClicked.emit(2)
    assert view.column_texts("name") == ["Ann", "Bob", "Cid", "Dee", "Eve"]


def test_row_checkbox_selection(qtbot, users):
    received = []
    view = DataTableView(_columns(), users, selectable=True, on_row_select=received.append)
    qtbot.addWidget(view)
    assert view.table.columnCount() == 4
    view.table.item(1, 0).setCheckState(Qt.CheckState.Checked)
    assert received[-1] == [users[1]]
    assert view.select_all_checkbox.checkState() == Qt.CheckState.PartiallyChecked
    assert view.table.item(1, 1).background().color().name() == "#eff6ff"


def test_select_all_checkbox(qtbot, users):
    received = []
    view = DataTableView(_columns(), users, selectable=True, on_row_select=received.append)
    qtbot.addWidget(view)
    view.select_all_checkbox.click()
    assert received[-1] == users
    assert view.select_all_checkbox.checkState() == Qt.CheckState.Checked
    assert all(
        view.table.item(r, 0).checkState() == Qt.CheckState.Checked for r in range(5)
    )
    view.table.item(0, 0).setCheckState(Qt.CheckState.Unchecked)
    assert view.select_all_checkbox.checkState() == Qt.CheckState.PartiallyChecked
    # clicking an indeterminate select-all selects everything
    view.select_all_checkbox.click()
    assert view.select_all_checkbox.checkState() == Qt.CheckState.Checked
    view.select_all_checkbox.click()
    assert received[-1] == []
    assert view.select_all_checkbox.checkState() == Qt.CheckState.Unchecked


def test_selection_follows_records_after_sort(qtbot, users):
    view = DataTableView(_columns(), users, selectable=True)
    qtbot.addWidget(view)
    view.table.item(0, 0).setCheckState(Qt.CheckState.Checked)  # Ann
    view.table.horizontalHeader().sectionClicked.emit(1)  # name column (offset by checkbox)
    view.table.horizontalHeader().sectionClicked.emit(1)  # name descending
    rows = view.row_records()
    ann_row = rows.index(users[0])
    assert ann_row == 4
    assert view.table.item(ann_row, 0).checkState() == Qt.CheckState.Checked


def test_empty_state(qtbot):
    view = DataTableView(_columns(), [], empty_message="Nothing here")
    qtbot.addWidget(view)
    assert view.is_empty_state_active()
    assert view.empty_state.message() == "Nothing here"
    view.set_data([{"name": "x", "role": "y"}])
    assert not view.is_empty_state_active()


def test_loading_bypasses_table(qtbot, users):
    view = DataTableView(_columns(), users, loading=True, selectable=True)
    qtbot.addWidget(view)
    assert view.is_loading_active()
    assert view.row_records() == []
    assert not view.is_empty_state_active()
    view.set_loading(False)
    assert not view.is_loading_active()
    assert len(view.row_records()) == 5
