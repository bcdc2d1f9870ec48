"""Desktop front end (PySide6)."""
