"""
To-Do List package
Single-screen Kivy to-do list with in-memory tasks
"""

__version__ = "1.0.0"
__description__ = "Single-screen to-do list"
