from __future__ import annotations

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import QGroupBox, QLabel, QListWidget, QListWidgetItem, QVBoxLayout, QWidget

from aix_storage_gui.gui.pages.report_page import monospace_font
from aix_storage_gui.views.composer import SelectorRow
from aix_storage_gui.views.markup import strip_colors


class SelectorPage(QWidget):
    """List of disks or filesystems; activating a row asks for its mapping page."""

    selected = Signal(str)

    def __init__(self, title: str, hint: str) -> None:
        super().__init__()
        self._rows: list[SelectorRow] = []

        self._list = QListWidget()
        self._list.setFont(monospace_font())
        self._list.setStyleSheet("QListWidget { background: #101418; color: #e8e8e8; }")
        self._list.itemActivated.connect(self._on_activated)  # type: ignore[arg-type]

        self._hint = QLabel(hint)

        gb = QGroupBox(title)
        box_layout = QVBoxLayout(gb)
        box_layout.addWidget(self._list)
        box_layout.addWidget(self._hint)

        layout = QVBoxLayout(self)
        layout.addWidget(gb)

    @property
    def markup(self) -> str:
        return "\n".join(r.label for r in self._rows) + "\n"

    def set_rows(self, rows: list[SelectorRow]) -> None:
        current = self._list.currentRow()
        self._rows = rows
        self._list.clear()
        for r in rows:
            item = QListWidgetItem(strip_colors(r.label))
            item.setData(Qt.UserRole, r.key)
            self._list.addItem(item)
        if rows:
            self._list.setCurrentRow(min(max(current, 0), len(rows) - 1))

    def focus_list(self) -> None:
        self._list.setFocus()

    def _on_activated(self, item: QListWidgetItem) -> None:
        key = item.data(Qt.UserRole)
        if key:
            self.selected.emit(str(key))
