"""
Data components for the To-Do List app
"""

from .models import Task
from .store import TaskStore
from .session import TodoSession

__all__ = [
    'Task',
    'TaskStore',
    'TodoSession'
]
