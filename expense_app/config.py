from pathlib import Path
import sys
import configparser
from typing import Any


def _resolve_config_file() -> Path:
    if getattr(sys, "frozen", False):
        return Path(sys.executable).resolve().parent / "undiyal.ini"
    module_dir = Path(__file__).resolve().parent
    candidate = module_dir / "undiyal.ini"
    if candidate.exists():
        return candidate
    return module_dir.with_name("undiyal.ini")


CONFIG_FILE = _resolve_config_file()
DEFAULT_DB_NAME = "undiyal.db"
DEFAULT_LOG_LEVEL = "INFO"

STYLE_DEFAULTS: dict[str, Any] = {
    "currency_symbol": "₹",
    "window_width": 480,
    "window_height": 760,
    "ui_font_family": "Segoe UI",
    "ui_base_font_size": 10,
    "header_font_size": 20,
    "summary_font_size": 18,
    "window_bg_color": "#020617",
    "card_bg_color": "#0F172A",
    "border_color": "#1F2937",
    "text_color": "#E5E7EB",
    "muted_text_color": "#6B7280",
    "category_text_color": "#A5B4FC",
    "total_amount_color": "#22C55E",
    "monthly_amount_color": "#3B82F6",
    "expense_amount_color": "#F97316",
    "chart_height": 140,
    "long_press_ms": 600,
}

_STYLE_INT_KEYS = {
    "window_width",
    "window_height",
    "ui_base_font_size",
    "header_font_size",
    "summary_font_size",
    "chart_height",
    "long_press_ms",
}


def _load_cfg() -> configparser.ConfigParser:
    cfg = configparser.ConfigParser()
    if CONFIG_FILE.exists():
        cfg.read(CONFIG_FILE, encoding="utf-8")
    return cfg


def _save_cfg(cfg: configparser.ConfigParser) -> None:
    with open(CONFIG_FILE, "w", encoding="utf-8") as f:
        cfg.write(f)


def load_db_path() -> Path:
    """Configured database file, or undiyal.db beside the INI file."""
    cfg = _load_cfg()
    db_path = cfg.get("app", "db_path", fallback=None)
    if db_path:
        return Path(db_path).expanduser()
    return CONFIG_FILE.with_name(DEFAULT_DB_NAME)


def load_log_level() -> str:
    cfg = _load_cfg()
    level = cfg.get("app", "log_level", fallback=DEFAULT_LOG_LEVEL).strip().upper()
    return level or DEFAULT_LOG_LEVEL


def _coerce_style_value(key: str, raw_value: str) -> Any:
    if key in _STYLE_INT_KEYS:
        return int(float(raw_value))
    return raw_value


def load_style_settings() -> dict[str, Any]:
    """Style values from the [style] section; missing or invalid ones are reset to defaults."""
    cfg = _load_cfg()
    if not cfg.has_section("style"):
        cfg.add_section("style")
    section = cfg["style"]
    settings: dict[str, Any] = {}
    repaired = []
    for key, default in STYLE_DEFAULTS.items():
        try:
            settings[key] = _coerce_style_value(key, section[key])
        except (KeyError, ValueError, OverflowError):
            settings[key] = default
            repaired.append(key)
    for key in repaired:
        section[key] = str(STYLE_DEFAULTS[key])
    if repaired:
        _save_cfg(cfg)
    return settings
