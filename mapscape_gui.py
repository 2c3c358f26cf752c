#!/usr/bin/env python3
"""Small Qt browser for Build engine map files.

Open a ``.map`` file to see its header, player start, the sector, wall and
sprite tables, the structural problems found by the validator and the
gameplay facts derived from the sprites.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import List

from PyQt5.QtCore import QSettings, QSize
from PyQt5.QtWidgets import (
    QAction,
    QApplication,
    QFileDialog,
    QMainWindow,
    QMessageBox,
    QToolBar,
)

from pybuild.logger import setup_logging
from pybuild.map.preview import MapViewWidget
from pybuild.map.report import MapReport, analyze_file

RECENT_LIMIT = 10
RECENT_KEY = "recent_maps"
MAP_SUFFIX = ".map"


class MapScapeWindow(QMainWindow):
    """Main window: a :class:`MapViewWidget` plus file handling."""

    settings = QSettings("pybuild", "mapscape")

    def __init__(self) -> None:
        super().__init__()

        self.setWindowTitle("MapScape")
        self.resize(1000, 700)

        self.report: MapReport | None = None
        self.current_path: Path | None = None

        self.view = MapViewWidget(self)
        self.setCentralWidget(self.view)
        self.statusBar()

        # ------------------------------------------------------------------
        # Actions
        # ------------------------------------------------------------------

        self.open_action = QAction("&Open…", self)
        self.open_action.triggered.connect(self._open_file)
        self.close_action = QAction("&Close", self)
        self.close_action.triggered.connect(self._close_file)
        self.exit_action = QAction("E&xit", self)
        self.exit_action.triggered.connect(self.close)

        self.validate_action = QAction("&Validate", self)
        self.validate_action.triggered.connect(self._validate)

        self.about_action = QAction("&About", self)
        self.about_action.triggered.connect(self._about)

        # ------------------------------------------------------------------
        # Menus
        # ------------------------------------------------------------------
        menubar = self.menuBar()

        file_menu = menubar.addMenu("&File")
        file_menu.addAction(self.open_action)
        file_menu.addAction(self.close_action)
        self.recent_menu = file_menu.addMenu("Open &Recent")
        self._rebuild_recent_menu()
        file_menu.addSeparator()
        file_menu.addAction(self.exit_action)

        tools_menu = menubar.addMenu("&Tools")
        tools_menu.addAction(self.validate_action)

        help_menu = menubar.addMenu("&Help")
        help_menu.addAction(self.about_action)

        toolbar = QToolBar("Main", self)
        toolbar.setIconSize(QSize(16, 16))
        self.addToolBar(toolbar)
        toolbar.addAction(self.open_action)
        toolbar.addAction(self.close_action)
        toolbar.addSeparator()
        toolbar.addAction(self.validate_action)

        self.setAcceptDrops(True)

    # ------------------------------------------------------------------
    # Drag and drop
    # ------------------------------------------------------------------

    @staticmethod
    def _dropped_maps(mime) -> List[Path]:
        paths = (Path(url.toLocalFile()) for url in mime.urls() if url.isLocalFile())
        return [p for p in paths if p.suffix.lower() == MAP_SUFFIX]

    def dragEnterEvent(self, event):  # type: ignore[override]
        if self._dropped_maps(event.mimeData()):
            event.acceptProposedAction()
        else:
            event.ignore()

    def dropEvent(self, event):  # type: ignore[override]
        maps = self._dropped_maps(event.mimeData())
        if maps:
            self.load_file(maps[0])
            event.acceptProposedAction()

    # ------------------------------------------------------------------
    # Recent maps
    # ------------------------------------------------------------------

    def _recent_maps(self) -> List[str]:
        """Stored recent maps, skipping files that have since disappeared."""
        recent = self.settings.value(RECENT_KEY, [], list)
        return [p for p in recent if Path(p).is_file()]

    def _rebuild_recent_menu(self) -> None:
        self.recent_menu.clear()
        recent = self._recent_maps()
        for number, path in enumerate(recent, 1):
            action = self.recent_menu.addAction(f"&{number % 10} {Path(path).name}")
            action.setStatusTip(path)
            action.triggered.connect(lambda checked=False, p=path: self.load_file(Path(p)))
        self.recent_menu.setEnabled(bool(recent))

    def _add_to_recent(self, path: Path) -> None:
        entry = str(path.resolve())
        recent = [p for p in self._recent_maps() if p != entry]
        self.settings.setValue(RECENT_KEY, [entry] + recent[:RECENT_LIMIT - 1])
        self._rebuild_recent_menu()

    # ------------------------------------------------------------------
    # File operations
    # ------------------------------------------------------------------

    def _open_file(self) -> None:
        path, _ = QFileDialog.getOpenFileName(
            self,
            "Open Build map",
            "",
            "Build Maps (*.map);;All Files (*)",
        )
        if path:
            self.load_file(Path(path))

    # ------------------------------------------------------------------
    def load_file(self, path: Path) -> None:
        report = analyze_file(path)
        self.view.load_report(report)
        if not report.ok:
            QMessageBox.critical(self, "Error", str(report.error))
            self.report = None
            self.current_path = None
            return

        self.report = report
        self.current_path = path
        self._add_to_recent(path)
        self.statusBar().showMessage(str(path))

    # ------------------------------------------------------------------
    def _close_file(self) -> None:
        self.report = None
        self.current_path = None
        self.view.clear()
        self.statusBar().clearMessage()

    # ------------------------------------------------------------------
    def _validate(self) -> None:
        if self.report is None:
            return

        problems = [str(v) for v in self.report.violations]
        if problems:
            text = "\n".join(problems[:20])
            QMessageBox.warning(
                self,
                "Validate",
                f"Problems were detected in the map:\n{text}",
            )
        else:
            QMessageBox.information(self, "Validate", "Map structure appears to be valid.")

    # ------------------------------------------------------------------
    def _about(self) -> None:
        QMessageBox.about(
            self,
            "About MapScape",
            "<b>MapScape</b><br>Inspect the records of Build engine map files.",
        )


def main(argv: List[str] | None = None) -> int:
    """Run the GUI application."""

    setup_logging()
    app = QApplication(argv or sys.argv)
    window = MapScapeWindow()
    window.show()
    paths = app.arguments()[1:]
    if paths:
        window.load_file(Path(paths[0]))
    return app.exec_()


if __name__ == "__main__":  # pragma: no cover - manual invocation
    raise SystemExit(main())
