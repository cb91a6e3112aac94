"""
GUI components for the To-Do List app

Popups are imported where they are opened, see todo_screen._show_dialog.
"""

from .todo_screen import TodoScreen, TaskCard

__all__ = [
    'TodoScreen',
    'TaskCard'
]
