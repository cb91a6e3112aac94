"""
Application-wide settings for the To-Do List app
"""

APP_NAME = "TodoList"
APP_AUTHOR = "TodoList"
APP_TITLE = "Todo List"

WINDOW_SIZE = (420, 780)

# Display defaults (mirrored on the App instance, read by popups)
DEFAULT_FONT_FAMILY = 'Roboto'
DEFAULT_FONT_SIZE = 18

CATEGORIES = ("General", "Work", "Personal", "Shopping")
DEFAULT_CATEGORY = CATEGORIES[0]

# Pink, light blue, light green, light yellow
PALETTE = ("#F8BBD0", "#B3E5FC", "#C8E6C9", "#FFF9C4")
DEFAULT_COLOR = "#D3D3D3"  # light gray

LOG_FILE_NAME = "todolist.log"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
