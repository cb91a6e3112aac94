import logging
import os

import appdirs

from .config import (
    APP_NAME, APP_AUTHOR, APP_TITLE, WINDOW_SIZE,
    DEFAULT_FONT_FAMILY, DEFAULT_FONT_SIZE, LOG_FILE_NAME, LOG_FORMAT,
)
from .data.store import TaskStore
from .data.session import TodoSession

# Kivy imports
from kivy.app import App
from kivy.lang import Builder
from kivy.uix.screenmanager import ScreenManager, Screen
from kivy.uix.boxlayout import BoxLayout
from kivy.uix.label import Label


def configure_logging():
    """Log to a file in the per-user log directory and to the console."""
    log_dir = appdirs.user_log_dir(APP_NAME, APP_AUTHOR)
    os.makedirs(log_dir, exist_ok=True)
    log_path = os.path.join(log_dir, LOG_FILE_NAME)

    logging.basicConfig(
        level=logging.INFO,
        format=LOG_FORMAT,
        handlers=[
            logging.FileHandler(log_path),
            logging.StreamHandler()
        ]
    )
    return log_path


logger = logging.getLogger(__name__)


class TodoListApp(App):
    kv_file = None

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.title = APP_TITLE
        self.screen_manager = None
        self.store = None
        self.session = None

        # Global UI settings
        self.font_family = DEFAULT_FONT_FAMILY
        self.font_size = DEFAULT_FONT_SIZE

    def _initialize_components(self):
        """Create the in-memory task store and the UI session."""
        try:
            self.store = TaskStore()
            self.session = TodoSession()
            logging.info("All components initialized successfully")
            return True
        except Exception as e:
            logging.error("Failed to initialize components: %s", e)
            return False

    def _load_kv_files(self):
        current_dir = os.path.dirname(os.path.abspath(__file__))

        kv_files = [
            'gui/popups.kv',
            'gui/todo_screen.kv',
        ]

        for kv_file in kv_files:
            full_path = os.path.join(current_dir, kv_file)
            if os.path.exists(full_path):
                Builder.load_file(full_path)
                logger.info(f"Loaded: {kv_file}")
            else:
                logger.error(f"Missing KV file: {full_path}")

    def build(self):
        """Build the main application."""
        from kivy.core.window import Window

        Window.size = WINDOW_SIZE
        Window.clearcolor = (1, 1, 1, 1)

        self._load_kv_files()
        self.screen_manager = ScreenManager()

        if not self._initialize_components():
            error_screen = Screen(name='error')
            error_layout = BoxLayout(orientation='vertical', padding=20)
            error_layout.add_widget(Label(
                text="Setup Error\n\nPlease check console logs",
                font_size=20,
                text_size=(400, None)
            ))
            error_screen.add_widget(error_layout)
            self.screen_manager.add_widget(error_screen)
            return self.screen_manager

        from .gui.todo_screen import TodoScreen

        todo_screen = TodoScreen(name='todo')
        todo_screen.set_app_instance(self)
        self.screen_manager.add_widget(todo_screen)

        return self.screen_manager

    def on_stop(self):
        if self.store is not None:
            logging.info(f"Closing with {len(self.store)} tasks in memory (not saved)")


def run():
    log_path = configure_logging()
    logger.info(f"Logging to {log_path}")
    TodoListApp().run()


if __name__ == '__main__':
    run()
