from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from PySide6.QtCore import QThreadPool, QTimer
from PySide6.QtGui import QKeySequence, QShortcut
from PySide6.QtWidgets import (
    QInputDialog,
    QLabel,
    QMainWindow,
    QMessageBox,
    QSplitter,
    QStackedWidget,
    QTreeWidget,
    QTreeWidgetItem,
    QWidget,
)

from aix_storage_gui.collectors.aix_inventory import AixInventory
from aix_storage_gui.collectors.storage_collector import StorageCollector
from aix_storage_gui.gui.pages.report_page import ReportPage
from aix_storage_gui.gui.pages.selector_page import SelectorPage
from aix_storage_gui.gui.workers import Worker, WorkerJob
from aix_storage_gui.models.common import CollectorResult
from aix_storage_gui.models.snapshot import StorageSnapshot
from aix_storage_gui.services.config_service import AppConfig
from aix_storage_gui.services.export_service import ExportService
from aix_storage_gui.services.runner import SubprocessRunner
from aix_storage_gui.views import composer as pages
from aix_storage_gui.views.composer import SelectorRow, ViewComposer

PAGE_DISK_MAP = "disk_map"
PAGE_FS_MAP = "fs_map"
PAGE_IOSTAT = "iostat"
PAGE_DETAIL = "detail"

# (page id, nav title, shortcut key)
NAV_PAGES: tuple[tuple[str, str, str], ...] = (
    (pages.PAGE_DASHBOARD, "Dashboard [1]", "1"),
    (pages.PAGE_VG, "VG Details [2]", "2"),
    (pages.PAGE_HEALTH, "Health Check [3]", "3"),
    (pages.PAGE_LV, "LV Status [4]", "4"),
    (PAGE_DISK_MAP, "Disk → FS [5]", "5"),
    (PAGE_FS_MAP, "FS → Disk [6]", "6"),
    (PAGE_IOSTAT, "I/O Stats [7]", "7"),
    (pages.PAGE_MIRROR, "Mirror Status [8]", "8"),
    (pages.PAGE_PV, "Physical Volumes", ""),
    (pages.PAGE_FS, "Filesystems", ""),
)

HELP_TEXT = "1-8 Views  / Search  e Export  r Refresh  j/k Scroll  g/G Top/Bottom  Esc Back  q Quit"


@dataclass(frozen=True)
class RefreshOutcome:
    result: CollectorResult[StorageSnapshot]
    pages: dict[str, str]
    disk_rows: list[SelectorRow]
    fs_rows: list[SelectorRow]


class MainWindow(QMainWindow):
    def __init__(self, config: AppConfig) -> None:
        super().__init__()
        self.setWindowTitle("AIX Storage Explorer")
        self.resize(1100, 760)

        self._config = config
        self._runner = SubprocessRunner()
        self._inventory = AixInventory(self._runner)
        self._collector = StorageCollector(
            self._inventory,
            thresholds=config.thresholds,
            surface_errors=config.surface_command_errors,
        )
        self._composer = ViewComposer(self._inventory, config.thresholds)
        self._exporter = ExportService(config.export_dir)
        self._latest: CollectorResult[StorageSnapshot] | None = None

        self._thread_pool = QThreadPool.globalInstance()
        # one request counter per kind of job; older answers are dropped
        self._req_ids: dict[str, int] = {"refresh": 0, "iostat": 0, "detail": 0}
        self._active_workers: set[Worker] = set()

        self._nav = QTreeWidget()
        self._nav.setHeaderHidden(True)
        self._stack = QStackedWidget()

        self._reports: dict[str, ReportPage] = {}
        self._widgets: dict[str, QWidget] = {}
        for page_id, title, _key in NAV_PAGES:
            if page_id == PAGE_DISK_MAP:
                widget: QWidget = SelectorPage(title, "Enter: show filesystems on the selected disk")
            elif page_id == PAGE_FS_MAP:
                widget = SelectorPage(title, "Enter: show the storage behind the selected filesystem")
            else:
                widget = ReportPage(title)
                self._reports[page_id] = widget
            self._add_page(page_id, widget)
            self._nav.addTopLevelItem(QTreeWidgetItem([title]))

        self._detail = ReportPage("Detail")
        self._reports[PAGE_DETAIL] = self._detail
        self._add_page(PAGE_DETAIL, self._detail)

        self._disk_selector: SelectorPage = self._widgets[PAGE_DISK_MAP]  # type: ignore[assignment]
        self._fs_selector: SelectorPage = self._widgets[PAGE_FS_MAP]  # type: ignore[assignment]
        self._disk_selector.selected.connect(self._on_disk_selected)  # type: ignore[arg-type]
        self._fs_selector.selected.connect(self._on_fs_selected)  # type: ignore[arg-type]

        self._current = pages.PAGE_DASHBOARD
        self._last_page = pages.PAGE_DASHBOARD
        self._nav.setCurrentItem(self._nav.topLevelItem(0))
        self._nav.currentItemChanged.connect(self._on_nav_changed)  # type: ignore[arg-type]

        splitter = QSplitter()
        splitter.addWidget(self._nav)
        splitter.addWidget(self._stack)
        splitter.setStretchFactor(0, 0)
        splitter.setStretchFactor(1, 1)
        self.setCentralWidget(splitter)

        self.statusBar().showMessage("Ready")
        self.statusBar().addPermanentWidget(QLabel(HELP_TEXT))

        self._bind_keys()

        self._refresh_timer = QTimer(self)
        if config.refresh_interval_s > 0:
            self._refresh_timer.setInterval(config.refresh_interval_s * 1000)
            self._refresh_timer.timeout.connect(self.refresh)  # type: ignore[arg-type]
            self._refresh_timer.start()

        self.refresh()

    def _add_page(self, page_id: str, widget: QWidget) -> None:
        self._widgets[page_id] = widget
        self._stack.addWidget(widget)

    def _bind_keys(self) -> None:
        bindings: list[tuple[str, Callable[[], None]]] = [
            (key, lambda pid=page_id: self.show_page(pid)) for page_id, _title, key in NAV_PAGES if key
        ]
        bindings += [
            ("r", self.refresh),
            ("e", self.export_current),
            ("/", self.prompt_search),
            ("q", self.close),
            ("j", lambda: self._scroll(1)),
            ("k", lambda: self._scroll(-1)),
            ("g", lambda: self._scroll_edge(top=True)),
            ("Shift+G", lambda: self._scroll_edge(top=False)),
            ("Esc", self.go_back),
        ]
        for key, handler in bindings:
            sc = QShortcut(QKeySequence(key), self)
            sc.activated.connect(handler)  # type: ignore[arg-type]

    # navigation

    def show_page(self, page_id: str) -> None:
        if page_id != PAGE_DETAIL:
            self._last_page = page_id
            idx = next(i for i, (pid, _t, _k) in enumerate(NAV_PAGES) if pid == page_id)
            self._nav.blockSignals(True)
            self._nav.setCurrentItem(self._nav.topLevelItem(idx))
            self._nav.blockSignals(False)
        self._current = page_id
        widget = self._widgets[page_id]
        self._stack.setCurrentWidget(widget)
        if isinstance(widget, SelectorPage):
            widget.focus_list()
        if page_id == PAGE_IOSTAT:
            self.refresh_iostat()

    def go_back(self) -> None:
        if self._current == PAGE_DETAIL:
            self.show_page(self._last_page)

    def _on_nav_changed(self, current: QTreeWidgetItem | None, _prev: QTreeWidgetItem | None) -> None:
        if current is None:
            return
        idx = self._nav.indexOfTopLevelItem(current)
        if 0 <= idx < len(NAV_PAGES):
            self.show_page(NAV_PAGES[idx][0])

    def _scroll(self, delta: int) -> None:
        page = self._reports.get(self._current)
        if page is not None:
            page.scroll_lines(delta)

    def _scroll_edge(self, top: bool) -> None:
        page = self._reports.get(self._current)
        if page is None:
            return
        if top:
            page.scroll_home()
        else:
            page.scroll_end()

    # background jobs

    def _start(self, kind: str, fn: Callable[[], Any], on_result: Callable[[Any], None]) -> None:
        self._req_ids[kind] += 1
        w = Worker(WorkerJob(req_id=self._req_ids[kind], fn=fn))
        self._active_workers.add(w)
        w.signals.result.connect(lambda rid, r, _k=kind: self._on_job_result(_k, rid, r, on_result))  # type: ignore[arg-type]
        w.signals.error.connect(lambda m: self._on_worker_error(m))  # type: ignore[arg-type]
        w.signals.finished.connect(lambda _w=w: self._active_workers.discard(_w))  # type: ignore[arg-type]
        self._thread_pool.start(w)

    def _on_job_result(self, kind: str, req_id: int, res: Any, on_result: Callable[[Any], None]) -> None:
        if req_id != self._req_ids[kind]:
            return
        try:
            on_result(res)
        except Exception as e:  # noqa: BLE001
            self._on_worker_error(str(e))

    def refresh(self) -> None:
        self.statusBar().showMessage("Refreshing...")

        def job() -> RefreshOutcome:
            result = self._collector.collect()
            snap = result.data
            return RefreshOutcome(
                result=result,
                pages=self._composer.compose_all(snap),
                disk_rows=self._composer.disk_rows(snap),
                fs_rows=self._composer.filesystem_rows(snap),
            )

        self._start("refresh", job, self._on_refresh_result)

    def _on_refresh_result(self, outcome: RefreshOutcome) -> None:
        self._latest = outcome.result
        for page_id, markup in outcome.pages.items():
            self._reports[page_id].set_markup(markup)
        self._disk_selector.set_rows(outcome.disk_rows)
        self._fs_selector.set_rows(outcome.fs_rows)

        r = outcome.result
        msg = f"Updated: {r.ts:%F %T} | Status: {r.status} | Warnings: {r.warning_count}"
        if self._config.surface_command_errors and r.command_failures:
            msg += f" | {r.command_failures[0]}"
        self.statusBar().showMessage(msg)

    def refresh_iostat(self) -> None:
        self._start("iostat", self._composer.io_stats, self._reports[PAGE_IOSTAT].set_markup)

    def _show_detail(self, title: str, markup: str) -> None:
        self._detail.set_title(title)
        self._detail.set_markup(markup)
        self.show_page(PAGE_DETAIL)

    def _on_disk_selected(self, disk: str) -> None:
        self.statusBar().showMessage(f"Mapping {disk}...")
        self._start(
            "detail",
            lambda: self._composer.map_disk(disk),
            lambda text: self._show_detail(f"{disk} → Filesystems", text),
        )

    def _on_fs_selected(self, mount: str) -> None:
        if self._latest is None:
            return
        snap = self._latest.data
        self.statusBar().showMessage(f"Mapping {mount}...")
        self._start(
            "detail",
            lambda: self._composer.map_filesystem(snap, mount),
            lambda text: self._show_detail(f"{mount} → Storage", text),
        )

    # actions

    def prompt_search(self) -> None:
        if self._latest is None:
            self.statusBar().showMessage("No data yet, refresh first")
            return
        query, ok = QInputDialog.getText(self, "Search", "Search:")
        if not ok or not query.strip():
            return
        self._show_detail("Search Results", self._composer.search(self._latest.data, query))

    def export_current(self) -> None:
        widget = self._widgets[self._current]
        markup = getattr(widget, "markup", "")
        try:
            written = self._exporter.export(markup)
        except OSError as e:
            self._on_worker_error(f"export failed: {e}")
            return
        self.statusBar().showMessage(f"Report exported: {written}")
        QMessageBox.information(self, "Export", f"Exported to:\n{written}")

    def _on_worker_error(self, msg: str) -> None:
        # Avoid modal dialogs during periodic refresh.
        self.statusBar().showMessage(f"Error: {msg}")
