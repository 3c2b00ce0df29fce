"""PySide6 comparison viewer."""
