from __future__ import annotations

from PySide6.QtGui import QFont, QFontDatabase
from PySide6.QtWidgets import QGroupBox, QTextBrowser, QVBoxLayout, QWidget

from aix_storage_gui.views.markup import markup_to_html


def monospace_font() -> QFont:
    font = QFontDatabase.systemFont(QFontDatabase.FixedFont)
    font.setStyleHint(QFont.Monospace)
    return font


class ReportPage(QWidget):
    """Scrollable panel showing one composed page."""

    def __init__(self, title: str) -> None:
        super().__init__()
        self._markup = ""

        self._box = QGroupBox(title)
        self._view = QTextBrowser()
        self._view.setFont(monospace_font())
        self._view.setLineWrapMode(QTextBrowser.NoWrap)
        self._view.setOpenLinks(False)
        self._view.setStyleSheet("QTextBrowser { background: #101418; color: #e8e8e8; }")

        box_layout = QVBoxLayout(self._box)
        box_layout.addWidget(self._view)

        layout = QVBoxLayout(self)
        layout.addWidget(self._box)

    @property
    def markup(self) -> str:
        return self._markup

    def set_title(self, title: str) -> None:
        self._box.setTitle(title)

    def set_markup(self, markup: str) -> None:
        self._markup = markup
        bar = self._view.verticalScrollBar()
        pos = bar.value()
        self._view.setHtml(f"<pre style=\"margin:0\">{markup_to_html(markup)}</pre>")
        bar.setValue(pos)

    def scroll_lines(self, delta: int) -> None:
        bar = self._view.verticalScrollBar()
        bar.setValue(bar.value() + delta * bar.singleStep())

    def scroll_home(self) -> None:
        bar = self._view.verticalScrollBar()
        bar.setValue(bar.minimum())

    def scroll_end(self) -> None:
        bar = self._view.verticalScrollBar()
        bar.setValue(bar.maximum())
