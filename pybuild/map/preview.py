"""Qt widget listing the records of a decoded Build map.

The widget shows the report summary plus one table per record array.  It
does not draw any geometry.
"""

from __future__ import annotations

from typing import List, Sequence

from PyQt5.QtCore import Qt
from PyQt5.QtWidgets import (
    QAbstractItemView,
    QHeaderView,
    QListWidget,
    QTableWidget,
    QTableWidgetItem,
    QTabWidget,
    QTextEdit,
    QVBoxLayout,
    QWidget,
)

from .errors import MapError
from .mapfile import MapFile
from .report import MapReport, analyze_map, format_report

SECTOR_COLUMNS = [
    "Walls", "Count", "Ceiling Z", "Floor Z", "Ceiling Pic", "Floor Pic",
    "Visibility", "Lotag", "Hitag", "Extra",
]
WALL_COLUMNS = [
    "X", "Y", "Right", "Left", "Next Sector", "Stat", "Pic", "Over Pic",
    "Lotag", "Hitag", "Extra",
]
SPRITE_COLUMNS = [
    "X", "Y", "Z", "Pic", "Pal", "Sector", "Status", "Angle", "Owner",
    "Lotag", "Hitag", "Extra",
]


def _make_table(columns: Sequence[str]) -> QTableWidget:
    table = QTableWidget()
    table.setColumnCount(len(columns))
    table.setHorizontalHeaderLabels(list(columns))
    table.setEditTriggers(QAbstractItemView.NoEditTriggers)
    table.setSelectionBehavior(QAbstractItemView.SelectRows)
    table.horizontalHeader().setSectionResizeMode(QHeaderView.ResizeToContents)
    return table


def _fill_table(table: QTableWidget, rows: List[Sequence[int]]) -> None:
    table.setRowCount(len(rows))
    for row, values in enumerate(rows):
        for col, value in enumerate(values):
            item = QTableWidgetItem(str(value))
            item.setTextAlignment(Qt.AlignRight | Qt.AlignVCenter)
            table.setItem(row, col, item)


class MapViewWidget(QWidget):
    """Tabbed view of a map's summary, records and structural problems."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        self.tabs = QTabWidget()
        self.summary_view = QTextEdit()
        self.summary_view.setReadOnly(True)
        self.sector_table = _make_table(SECTOR_COLUMNS)
        self.wall_table = _make_table(WALL_COLUMNS)
        self.sprite_table = _make_table(SPRITE_COLUMNS)
        self.problem_list = QListWidget()
        self.tabs.addTab(self.summary_view, "Summary")
        self.tabs.addTab(self.sector_table, "Sectors")
        self.tabs.addTab(self.wall_table, "Walls")
        self.tabs.addTab(self.sprite_table, "Sprites")
        self.tabs.addTab(self.problem_list, "Problems")
        layout.addWidget(self.tabs)
        self.report: MapReport | None = None

    # ------------------------------------------------------------------
    def clear(self) -> None:
        self.report = None
        self.summary_view.clear()
        for table in (self.sector_table, self.wall_table, self.sprite_table):
            table.setRowCount(0)
        self.problem_list.clear()
        self.tabs.setTabText(4, "Problems")
        self.tabs.setCurrentWidget(self.summary_view)

    # ------------------------------------------------------------------
    def load_map(self, data: bytes, name: str = "<map>") -> None:
        """Decode ``data`` and display it, or show the decode error."""

        try:
            mapfile = MapFile.parse(data)
        except MapError as exc:
            self.load_report(MapReport(name, error=exc))
            return
        self.load_report(analyze_map(mapfile, name))

    # ------------------------------------------------------------------
    def load_report(self, report: MapReport) -> None:
        self.clear()
        self.report = report
        self.summary_view.setPlainText(format_report(report))
        if not report.ok:
            return

        m = report.mapfile
        _fill_table(self.sector_table, [
            (s.wall_start, s.wall_count, s.ceiling.height, s.floor.height,
             s.ceiling.picture, s.floor.picture, s.visibility, s.lotag, s.hitag, s.extra)
            for s in m.sectors
        ])
        _fill_table(self.wall_table, [
            (w.x, w.y, w.next_wall_right, w.next_wall_left, w.next_sector, f"{w.stat:#06x}",
             w.picture, w.over_picture, w.lotag, w.hitag, w.extra)
            for w in m.walls
        ])
        _fill_table(self.sprite_table, [
            (sp.x, sp.y, sp.z, sp.picture, sp.pal, sp.sector, sp.status, sp.angle, sp.owner,
             sp.lotag, sp.hitag, sp.extra)
            for sp in m.sprites
        ])
        self.problem_list.addItems([str(v) for v in report.violations])
        self.tabs.setTabText(4, f"Problems ({len(report.violations)})")
