from PyQt6.QtWidgets import QTreeView, QMenu, QAbstractItemView

from PyQt6.QtGui import QStandardItem, QFont, QBrush, QPainter, QPen
from PyQt6.QtCore import Qt, QTimer, QModelIndex, QPoint, pyqtSignal

from .style import UI_FONT_FAMILY, UI_BASE_FONT_SIZE, MUTED_TEXT_COLOR, LONG_PRESS_MS

EMPTY_LIST_TEXT = "No expenses yet. Add your first one!"


def make_item(text="", meta=None, bold=False, color=None, align_right=False):
    item = QStandardItem(str(text))
    item.setEditable(False)
    font = QFont(UI_FONT_FAMILY, UI_BASE_FONT_SIZE)
    if bold:
        font.setBold(True)
    item.setFont(font)
    if color:
        item.setForeground(QBrush(color))
    if align_right:
        item.setTextAlignment(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)
    else:
        item.setTextAlignment(Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignVCenter)
    if meta is not None:
        item.setData(meta, Qt.ItemDataRole.UserRole)
    return item


class ExpenseListView(QTreeView):
    """Flat list of expenses; a held press or the context menu asks to delete a row."""

    deleteRequested = pyqtSignal(QModelIndex)

    def __init__(self, parent=None, long_press_ms: int = LONG_PRESS_MS):
        super().__init__(parent)
        self.setRootIsDecorated(False)
        self.setItemsExpandable(False)
        self.setUniformRowHeights(True)
        self.setAlternatingRowColors(False)
        self.setSelectionMode(QAbstractItemView.SelectionMode.SingleSelection)
        self.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        self.setContextMenuPolicy(Qt.ContextMenuPolicy.CustomContextMenu)
        self.customContextMenuRequested.connect(self._show_context_menu)
        self._press_index = QModelIndex()
        self._press_timer = QTimer(self)
        self._press_timer.setSingleShot(True)
        self._press_timer.setInterval(long_press_ms)
        self._press_timer.timeout.connect(self._on_long_press)

    def mousePressEvent(self, event):
        super().mousePressEvent(event)
        if event.button() != Qt.MouseButton.LeftButton:
            return
        index = self.indexAt(event.position().toPoint())
        if index.isValid():
            self._press_index = index
            self._press_timer.start()

    def mouseMoveEvent(self, event):
        super().mouseMoveEvent(event)
        if self._press_timer.isActive():
            index = self.indexAt(event.position().toPoint())
            if not index.isValid() or index.row() != self._press_index.row():
                self._cancel_press()

    def mouseReleaseEvent(self, event):
        self._cancel_press()
        super().mouseReleaseEvent(event)

    def _cancel_press(self):
        self._press_timer.stop()
        self._press_index = QModelIndex()

    def _on_long_press(self):
        index = self._press_index
        self._press_index = QModelIndex()
        if index.isValid():
            self.deleteRequested.emit(index)

    def _show_context_menu(self, pos: QPoint):
        index = self.indexAt(pos)
        if not index.isValid():
            return
        menu = QMenu(self)
        delete_action = menu.addAction("Delete")
        chosen = menu.exec(self.viewport().mapToGlobal(pos))
        if chosen == delete_action:
            self.deleteRequested.emit(index)

    def paintEvent(self, event):
        super().paintEvent(event)
        model = self.model()
        if model is not None and model.rowCount() > 0:
            return
        painter = QPainter(self.viewport())
        painter.setPen(QPen(MUTED_TEXT_COLOR))
        painter.setFont(QFont(UI_FONT_FAMILY, UI_BASE_FONT_SIZE))
        painter.drawText(self.viewport().rect(), Qt.AlignmentFlag.AlignCenter, EMPTY_LIST_TEXT)
        painter.end()
