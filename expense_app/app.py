import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

from PyQt6.QtWidgets import (
    QApplication, QWidget, QVBoxLayout, QHBoxLayout, QLabel, QLineEdit,
    QPushButton, QHeaderView, QMessageBox, QSizePolicy, QFrame,
)
from PyQt6.QtGui import QStandardItemModel, QFont, QIcon
from PyQt6.QtCore import Qt, QModelIndex
from matplotlib.backends.backend_qtagg import FigureCanvasQTAgg
from matplotlib.figure import Figure

from . import config
from .errors import StoreError, StorageUnavailable
from .repository import Expense, ExpenseStore
from .summary import all_time_total, category_totals, format_amount, format_expense_date
from .ui import make_item, ExpenseListView
from .validation import InvalidExpenseInput, validate_expense_form
from .style import (
    CURRENCY_SYMBOL,
    WINDOW_WIDTH,
    WINDOW_HEIGHT,
    UI_FONT_FAMILY,
    UI_BASE_FONT_SIZE,
    HEADER_FONT_SIZE,
    SUMMARY_FONT_SIZE,
    WINDOW_BG_COLOR,
    CARD_BG_COLOR,
    BORDER_COLOR,
    TEXT_COLOR,
    MUTED_TEXT_COLOR,
    CATEGORY_TEXT_COLOR,
    TOTAL_AMOUNT_COLOR,
    MONTHLY_AMOUNT_COLOR,
    EXPENSE_AMOUNT_COLOR,
    CHART_HEIGHT,
)

logger = logging.getLogger(__name__)

LIST_HEADERS = ["Title", "Category", "Date", "Amount"]


def get_resource_path(name: str) -> Path:
    """Return resource path, compatible with PyInstaller one-file bundles."""
    if hasattr(sys, "_MEIPASS"):
        return Path(sys._MEIPASS) / name  # type: ignore[attr-defined]
    return Path(__file__).resolve().parent.parent / name


def bold_font(size: int) -> QFont:
    font = QFont(UI_FONT_FAMILY, size)
    font.setBold(True)
    return font


class ExpenseApp(QWidget):
    def __init__(self, store: ExpenseStore):
        super().__init__()
        self.store = store
        self.expenses: list[Expense] = []
        self.monthly_total = 0.0
        self.setWindowTitle("Undiyal")
        icon_path = get_resource_path("money.png")
        if icon_path.exists():
            self.setWindowIcon(QIcon(str(icon_path)))
        self.resize(WINDOW_WIDTH, WINDOW_HEIGHT)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(12)

        header = QLabel("Undiyal")
        header.setAlignment(Qt.AlignmentFlag.AlignCenter)
        header.setFont(bold_font(HEADER_FONT_SIZE))
        layout.addWidget(header)

        # Summary cards
        cards = QHBoxLayout()
        cards.setSpacing(12)
        total_card, self.total_label = self._make_summary_card("Total Spent", TOTAL_AMOUNT_COLOR.name())
        month_card, self.month_label = self._make_summary_card("This Month", MONTHLY_AMOUNT_COLOR.name())
        cards.addWidget(total_card, stretch=1)
        cards.addWidget(month_card, stretch=1)
        layout.addLayout(cards)

        self.figure = Figure(figsize=(4, CHART_HEIGHT / 100), dpi=100)
        self.canvas = FigureCanvasQTAgg(self.figure)
        self.canvas.setFixedHeight(CHART_HEIGHT)
        self.canvas.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Fixed)
        layout.addWidget(self.canvas)

        self.input_frame = QFrame()
        self.input_frame.setObjectName("inputCard")
        input_layout = QVBoxLayout(self.input_frame)
        input_layout.setContentsMargins(12, 12, 12, 12)
        input_layout.setSpacing(8)
        self.title_edit = QLineEdit()
        self.title_edit.setPlaceholderText("Title (e.g. Food)")
        self.amount_edit = QLineEdit()
        self.amount_edit.setPlaceholderText("Amount")
        self.category_edit = QLineEdit()
        self.category_edit.setPlaceholderText("Category (optional)")
        for edit in (self.title_edit, self.amount_edit, self.category_edit):
            edit.returnPressed.connect(self.add_expense)
            input_layout.addWidget(edit)
        self.add_btn = QPushButton("Add Expense")
        self.add_btn.setObjectName("addButton")
        self.add_btn.clicked.connect(self.add_expense)
        input_layout.addWidget(self.add_btn)
        layout.addWidget(self.input_frame)

        list_header = QLabel("Recent expenses")
        list_header.setFont(bold_font(UI_BASE_FONT_SIZE + 2))
        layout.addWidget(list_header)

        self.view = ExpenseListView()
        self.model = QStandardItemModel()
        self.model.setHorizontalHeaderLabels(LIST_HEADERS)
        self.view.setModel(self.model)
        header_view = self.view.header()
        header_view.setSectionResizeMode(0, QHeaderView.ResizeMode.Stretch)
        for col in range(1, len(LIST_HEADERS)):
            header_view.setSectionResizeMode(col, QHeaderView.ResizeMode.ResizeToContents)
        header_view.setStretchLastSection(False)
        self.view.deleteRequested.connect(self._on_delete_requested)
        layout.addWidget(self.view, stretch=1)

        self.apply_dark_theme()
        self.refresh()

    def _make_summary_card(self, caption: str, amount_color: str):
        card = QFrame()
        card.setObjectName("summaryCard")
        card_layout = QVBoxLayout(card)
        card_layout.setContentsMargins(16, 12, 16, 12)
        caption_label = QLabel(caption)
        caption_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        caption_label.setStyleSheet(f"color: {MUTED_TEXT_COLOR.name()};")
        amount_label = QLabel(format_amount(0.0, CURRENCY_SYMBOL))
        amount_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        amount_label.setFont(bold_font(SUMMARY_FONT_SIZE))
        amount_label.setStyleSheet(f"color: {amount_color};")
        card_layout.addWidget(caption_label)
        card_layout.addWidget(amount_label)
        return card, amount_label

    def apply_dark_theme(self):
        bg = WINDOW_BG_COLOR.name()
        card = CARD_BG_COLOR.name()
        border = BORDER_COLOR.name()
        text = TEXT_COLOR.name()
        self.setStyleSheet(
            f"QWidget {{ background-color: {bg}; color: {text}; }} "
            f"#summaryCard {{ background-color: {card}; border-radius: 12px; }} "
            f"#summaryCard QLabel {{ background-color: transparent; }} "
            f"#inputCard {{ border: 1px solid {border}; border-radius: 12px; }} "
            f"QLineEdit {{ border: 1px solid {border}; border-radius: 8px; padding: 8px; }} "
            f"#addButton {{ background-color: {TOTAL_AMOUNT_COLOR.name()}; color: #022C22; "
            f"font-weight: bold; border-radius: 8px; padding: 10px; }} "
            f"QTreeView {{ border: 1px solid {border}; border-radius: 8px; }} "
            f"QHeaderView::section {{ background-color: {card}; color: {text}; border: none; padding: 4px; }}"
        )
        self.figure.set_facecolor(bg)

    def refresh(self) -> bool:
        """Reload the list and monthly total; keeps the previous state on failure."""
        try:
            expenses = self.store.list_expenses()
            monthly = self.store.monthly_total()
        except StoreError as e:
            logger.warning("Loading expenses failed: %s", e)
            QMessageBox.critical(self, "Error", "Failed to load expenses")
            return False
        self.expenses = expenses
        self.monthly_total = monthly
        self._populate_list()
        self.total_label.setText(format_amount(all_time_total(self.expenses), CURRENCY_SYMBOL))
        self.month_label.setText(format_amount(self.monthly_total, CURRENCY_SYMBOL))
        self.update_summary_chart()
        return True

    def _populate_list(self):
        self.model.removeRows(0, self.model.rowCount())
        for expense in self.expenses:
            self.model.appendRow([
                make_item(expense.title, meta=expense.id, bold=True),
                make_item(expense.category, color=CATEGORY_TEXT_COLOR),
                make_item(format_expense_date(expense.date), color=MUTED_TEXT_COLOR),
                make_item(format_amount(expense.amount, CURRENCY_SYMBOL), color=EXPENSE_AMOUNT_COLOR, bold=True,
                          align_right=True),
            ])
        self.view.viewport().update()

    def update_summary_chart(self):
        now = datetime.now(timezone.utc)
        totals = category_totals(self.expenses, now.year, now.month)
        text = TEXT_COLOR.name()

        self.figure.clear()
        ax = self.figure.add_subplot(111)
        ax.set_facecolor(WINDOW_BG_COLOR.name())
        for spine in ax.spines.values():
            spine.set_visible(False)
        if totals.empty:
            ax.set_axis_off()
            ax.text(0.5, 0.5, "No spending this month", ha="center", va="center",
                    color=MUTED_TEXT_COLOR.name(), transform=ax.transAxes)
        else:
            labels = list(totals.index)[::-1]
            values = list(totals.values)[::-1]
            bars = ax.barh(range(len(labels)), values, color=MONTHLY_AMOUNT_COLOR.name(), height=0.6)
            ax.set_yticks(range(len(labels)))
            ax.set_yticklabels(labels, color=text, fontsize=8)
            ax.tick_params(axis="x", colors=text, labelsize=7)
            max_value = max(values) or 1.0
            ax.set_xlim(0, max_value * 1.25)
            for bar, value in zip(bars, values):
                ax.text(bar.get_width() + max_value * 0.02, bar.get_y() + bar.get_height() / 2,
                        format_amount(value, CURRENCY_SYMBOL), va="center", color=text, fontsize=7)
        self.figure.tight_layout()
        self.canvas.draw_idle()

    def add_expense(self):
        try:
            entry = validate_expense_form(
                self.title_edit.text(), self.amount_edit.text(), self.category_edit.text()
            )
        except InvalidExpenseInput as e:
            QMessageBox.warning(self, e.heading, e.message)
            return
        try:
            self.store.add_expense(entry.title, entry.amount, entry.category)
        except StoreError as e:
            logger.warning("Adding expense failed: %s", e)
            QMessageBox.critical(self, "Error", "Failed to add expense")
            return
        self.title_edit.clear()
        self.amount_edit.clear()
        self.category_edit.clear()
        self.title_edit.setFocus()
        self.refresh()

    def _on_delete_requested(self, index: QModelIndex):
        label_index = index.siblingAtColumn(0)
        expense_id = label_index.data(Qt.ItemDataRole.UserRole)
        if expense_id is None:
            return
        title = label_index.data(Qt.ItemDataRole.DisplayRole) or ""
        if not self.confirm_delete(title):
            return
        try:
            self.store.delete_expense(int(expense_id))
        except StoreError as e:
            logger.warning("Deleting expense %s failed: %s", expense_id, e)
            QMessageBox.critical(self, "Error", "Failed to delete expense")
            return
        self.refresh()

    def _delete_dialog(self, title: str):
        dialog = QMessageBox(self)
        dialog.setIcon(QMessageBox.Icon.Warning)
        dialog.setWindowTitle("Delete expense")
        dialog.setText(f'Delete "{title}"?')
        cancel_button = dialog.addButton("Cancel", QMessageBox.ButtonRole.RejectRole)
        delete_button = dialog.addButton("Delete", QMessageBox.ButtonRole.DestructiveRole)
        dialog.setDefaultButton(cancel_button)
        dialog.setEscapeButton(cancel_button)
        return dialog, delete_button

    def confirm_delete(self, title: str) -> bool:
        dialog, delete_button = self._delete_dialog(title)
        dialog.exec()
        return dialog.clickedButton() == delete_button

    def closeEvent(self, event):
        self.store.close()
        super().closeEvent(event)


def configure_logging() -> None:
    level = config.load_log_level()
    if not isinstance(logging.getLevelName(level), int):
        level = config.DEFAULT_LOG_LEVEL
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def main():
    configure_logging()
    app = QApplication(sys.argv)
    icon_path = get_resource_path("money.png")
    if icon_path.exists():
        app.setWindowIcon(QIcon(str(icon_path)))
    store = ExpenseStore(config.load_db_path())
    try:
        store.initialize()
    except StorageUnavailable as e:
        logger.critical("Expense store unavailable: %s", e)
        QMessageBox.critical(None, "Error", f"Cannot open the expense database.\n\n{e}")
        sys.exit(1)
    w = ExpenseApp(store)
    w.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
