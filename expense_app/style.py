from PyQt6.QtGui import QColor

from .config import load_style_settings

_STYLE = load_style_settings()

CURRENCY_SYMBOL = _STYLE["currency_symbol"]

# Window geometry
WINDOW_WIDTH = _STYLE["window_width"]
WINDOW_HEIGHT = _STYLE["window_height"]

UI_FONT_FAMILY = _STYLE["ui_font_family"]
UI_BASE_FONT_SIZE = _STYLE["ui_base_font_size"]
HEADER_FONT_SIZE = _STYLE["header_font_size"]
SUMMARY_FONT_SIZE = _STYLE["summary_font_size"]

# Palette
WINDOW_BG_COLOR = QColor(_STYLE["window_bg_color"])
CARD_BG_COLOR = QColor(_STYLE["card_bg_color"])
BORDER_COLOR = QColor(_STYLE["border_color"])
TEXT_COLOR = QColor(_STYLE["text_color"])
MUTED_TEXT_COLOR = QColor(_STYLE["muted_text_color"])
CATEGORY_TEXT_COLOR = QColor(_STYLE["category_text_color"])
TOTAL_AMOUNT_COLOR = QColor(_STYLE["total_amount_color"])
MONTHLY_AMOUNT_COLOR = QColor(_STYLE["monthly_amount_color"])
EXPENSE_AMOUNT_COLOR = QColor(_STYLE["expense_amount_color"])

# Chart settings
CHART_HEIGHT = _STYLE["chart_height"]

# List interaction
LONG_PRESS_MS = _STYLE["long_press_ms"]
