"""Undiyal expense tracker package.

Modules:
- config: INI configuration (database path, log level, style settings)
- db: connection helpers
- repository: expense store (schema, list, insert, delete, monthly total)
- summary: totals and formatting used by the window
- validation: form input checks
- ui: list view and item helpers
- app: main window and entry point
"""
