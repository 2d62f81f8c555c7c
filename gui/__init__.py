"""
gui - PySide6 Interface for the Remove-Text Rename Tool
"""

from .gui_entry import main

__all__ = ["main"]
