import logging
from kivy.uix.screenmanager import Screen
from kivy.uix.boxlayout import BoxLayout
from kivy.uix.label import Label
from kivy.uix.button import Button
from kivy.properties import StringProperty, NumericProperty, BooleanProperty, ListProperty
from kivy.clock import Clock
from kivy.metrics import dp
from kivy.utils import get_color_from_hex

from ..config import DEFAULT_CATEGORY, DEFAULT_COLOR
from ..data.models import Task

logger = logging.getLogger(__name__)

COMPLETED_TEXT_COLOR = (0.55, 0.55, 0.55, 1)
ACTIVE_TEXT_COLOR = (0.1, 0.1, 0.1, 1)
MISSING_TASK_TEXT = "This task no longer exists"


def color_to_rgba(hex_color):
    """RGBA for a task color; anything that is not a usable hex string gets DEFAULT_COLOR."""
    try:
        rgba = get_color_from_hex(hex_color)
        if len(rgba) >= 4:
            return rgba[:4]
    except (ValueError, TypeError, AttributeError):
        pass
    logger.debug(f"Unusable task color {hex_color!r}, using default")
    return get_color_from_hex(DEFAULT_COLOR)


class TodoScreen(Screen):
    """
    The single screen of the app: search field, task list and add button.

    All state lives in ``app.store`` (tasks) and ``app.session`` (search
    text, dialog state). The list is rebuilt whenever the store changes.
    """
    font_size = NumericProperty()
    font_family = StringProperty()
    status_text = StringProperty("")

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.app = None
        self.dialog = None
        self._unsubscribe = None
        Clock.schedule_once(self._post_init, 0.1)

    def set_app_instance(self, app_instance):
        if self._unsubscribe:
            self._unsubscribe()
            self._unsubscribe = None

        self.app = app_instance
        if self.app:
            self.font_family = self.app.font_family
            self.font_size = self.app.font_size
            self._unsubscribe = self.app.store.subscribe(self._on_store_changed)

    def _post_init(self, dt):
        if self.app:
            self.load_tasks()
        Clock.schedule_once(lambda _dt: self._apply_font_to_children(), 0.2)

    def _apply_font_to_children(self):
        for child in self.walk():
            if hasattr(child, "font_name") and self.font_family:
                child.font_name = self.font_family
            in_button = isinstance(child, Button) or isinstance(child.parent, Button)
            if hasattr(child, "text") and hasattr(child, "font_size") and not in_button:
                child.font_size = dp(self.font_size)

    # ---------- Rendering ----------
    def _on_store_changed(self, _snapshot):
        self.load_tasks()

    def visible_tasks(self):
        if not self.app:
            return []
        return self.app.session.visible_tasks(self.app.store)

    def load_tasks(self):
        if not self.app:
            return
        try:
            self.update_tasks_display(self.visible_tasks())
        except Exception as e:
            logging.error(f"Error loading tasks: {e}")

    def update_tasks_display(self, tasks):
        if not hasattr(self, 'ids') or 'tasks_grid' not in self.ids:
            return

        grid = self.ids.tasks_grid
        grid.clear_widgets()

        if not tasks:
            text = "No matching tasks" if self.app.session.search_query else "No tasks yet"
            empty_label = Label(
                text=text,
                font_size=dp(self.font_size),
                font_name=self.font_family,
                color=(0.5, 0.5, 0.5, 1),
                size_hint_y=None,
                height=dp(100),
                halign='center'
            )
            grid.add_widget(empty_label)
            return

        for task in tasks:
            card = TaskCard.from_task(task, font_family=self.font_family, font_size=self.font_size)
            card.bind(on_toggle=lambda _card, task_id: self.toggle_task(task_id))
            card.bind(on_edit=lambda _card, task_id: self.open_edit_task_dialog(task_id))
            card.bind(on_delete=lambda _card, task_id: self.delete_task(task_id))
            grid.add_widget(card)

    # ---------- User actions ----------
    def search(self, query):
        if not self.app:
            return
        self.app.session.search_query = query or ""
        self.load_tasks()

    def create_task(self, title, description="", category=DEFAULT_CATEGORY, color=DEFAULT_COLOR):
        if not self.app:
            return None
        try:
            task = Task.create(title, description=description, category=category, color=color)
            self.app.store.add(task)
            self.status_text = ""
            return task
        except Exception as e:
            logging.error(f"Error creating task: {e}")
            self.status_text = "Could not create task"
            return None

    def edit_task(self, task_id, title, description, category, color):
        if not self.app:
            return None
        try:
            existing = self.app.store.get(task_id)
            if existing is None:
                self.notify_missing()
                return None
            updated = existing.edited(
                title=title, description=description, category=category, color=color
            )
            if self.app.store.update(updated) is None:
                self.notify_missing()
                return None
            self.status_text = ""
            return updated
        except Exception as e:
            logging.error(f"Error editing task {task_id}: {e}")
            self.status_text = "Could not save task"
            return None

    def toggle_task(self, task_id):
        if not self.app:
            return False
        try:
            if self.app.store.toggle(task_id) is None:
                self.notify_missing()
                return False
            self.status_text = ""
            return True
        except Exception as e:
            logging.error(f"Error toggling task {task_id}: {e}")
            self.status_text = "Could not update task"
            return False

    def delete_task(self, task_id):
        if not self.app:
            return
        try:
            self.app.store.delete(task_id)
            self.status_text = ""
        except Exception as e:
            logging.error(f"Error deleting task {task_id}: {e}")
            self.status_text = "Could not delete task"

    # ---------- Dialog ----------
    def open_new_task_dialog(self):
        if not self.app:
            return
        self.app.session.open_new()
        self._show_dialog()

    def open_edit_task_dialog(self, task_id):
        if not self.app:
            return
        task = self.app.store.get(task_id)
        if task is None:
            self.notify_missing()
            return
        self.app.session.open_edit(task)
        self._show_dialog()

    def _show_dialog(self):
        from .popups import TaskDialog

        self.dialog = TaskDialog(
            save_callback=self.on_dialog_save,
            cancel_callback=self.on_dialog_dismiss,
            task=self.app.session.editing_task,
        )
        self.dialog.open()

    def on_dialog_save(self, title, description, category, color):
        """Save from the dialog: add when creating, replace when editing."""
        if not self.app:
            return
        editing = self.app.session.editing_task
        if editing is None:
            self.create_task(title, description, category, color)
        else:
            self.edit_task(editing.id, title, description, category, color)
        self.on_dialog_dismiss()

    def on_dialog_dismiss(self):
        if self.app:
            self.app.session.dismiss()
        self.dialog = None

    def notify_missing(self):
        self.status_text = MISSING_TASK_TEXT
        self._show_notice(MISSING_TASK_TEXT)

    def _show_notice(self, message):
        from .popups import ConfirmationPopup

        ConfirmationPopup(confirmation_text=message).open()

    def on_enter(self):
        self.load_tasks()


class TaskCard(BoxLayout):
    __events__ = ('on_toggle', 'on_edit', 'on_delete')
    task_id = StringProperty("")
    title = StringProperty("")
    description = StringProperty("")
    category = StringProperty("")
    is_completed = BooleanProperty(False)
    card_color = ListProperty([1, 1, 1, 1])
    badge_color = ListProperty([0.8, 0.8, 0.8, 1])
    title_color = ListProperty(list(ACTIVE_TEXT_COLOR))
    font_family = StringProperty()
    font_size = NumericProperty()

    @classmethod
    def from_task(cls, task, **kwargs):
        badge = color_to_rgba(task.color)
        return cls(
            task_id=task.id,
            title=task.title,
            description=task.description,
            category=task.category,
            is_completed=task.is_completed,
            card_color=[badge[0], badge[1], badge[2], 0.2],
            badge_color=badge,
            title_color=list(COMPLETED_TEXT_COLOR if task.is_completed else ACTIVE_TEXT_COLOR),
            **kwargs
        )

    def toggle(self):
        self.dispatch('on_toggle', self.task_id)

    def on_toggle(self, *args):
        pass

    def edit(self):
        self.dispatch('on_edit', self.task_id)

    def on_edit(self, *args):
        pass

    def delete(self):
        self.dispatch('on_delete', self.task_id)

    def on_delete(self, *args):
        pass
