import logging
from kivy.uix.popup import Popup
from kivy.uix.button import Button
from kivy.uix.togglebutton import ToggleButton
from kivy.metrics import dp
from kivy.properties import StringProperty, NumericProperty, BooleanProperty
from kivy.utils import get_color_from_hex

from ..config import CATEGORIES, PALETTE, DEFAULT_FONT_FAMILY, DEFAULT_FONT_SIZE

logger = logging.getLogger(__name__)


class BasePopup(Popup):
    """Popups take their font from the running app when opened."""
    font_family = StringProperty(DEFAULT_FONT_FAMILY)
    font_size = NumericProperty(DEFAULT_FONT_SIZE)

    def on_open(self):
        try:
            from kivy.app import App

            app = App.get_running_app()
            if app:
                self.font_family = getattr(app, "font_family", DEFAULT_FONT_FAMILY)
                self.font_size = getattr(app, "font_size", DEFAULT_FONT_SIZE)
        except Exception as e:
            logger.debug(f"Popup font lookup failed: {e}")

        for child in self.walk():
            if hasattr(child, "font_name") and self.font_family:
                child.font_name = self.font_family
            # Buttons keep their own size
            if hasattr(child, "text") and hasattr(child, "font_size") and not isinstance(child, Button):
                child.font_size = dp(self.font_size)


class TaskDialog(BasePopup):
    """
    Create / edit dialog.

    With ``task`` set the fields start from that task and the dialog is
    titled 'Edit Task'; otherwise they start empty with the first category
    and the first palette color.
    """
    dialog_title = StringProperty("New Task")
    selected_category = StringProperty(CATEGORIES[0])
    selected_color = StringProperty(PALETTE[0])
    is_edit = BooleanProperty(False)

    def __init__(self, save_callback, cancel_callback=None, task=None,
                 categories=CATEGORIES, palette=PALETTE, **kwargs):
        self.save_callback = save_callback
        self.cancel_callback = cancel_callback
        self.task = task
        self.categories = tuple(categories)
        self.palette = tuple(palette)
        self._saved = False
        super().__init__(**kwargs)
        self._load_task(task)
        self._build_choices()

    def _load_task(self, task):
        self.is_edit = task is not None
        self.dialog_title = "Edit Task" if task else "New Task"
        self.selected_category = task.category if task else self.categories[0]
        self.selected_color = task.color if task else self.palette[0]

        if 'title_input' in self.ids:
            self.ids.title_input.text = task.title if task else ""
        if 'description_input' in self.ids:
            self.ids.description_input.text = task.description if task else ""

    def _build_choices(self):
        if 'category_row' in self.ids:
            row = self.ids.category_row
            row.clear_widgets()
            for index, category in enumerate(self.categories):
                chip = ToggleButton(
                    text=category,
                    group='task_category',
                    allow_no_selection=False,
                    state='down' if category == self.selected_category else 'normal',
                    background_normal='',
                    background_color=get_color_from_hex(self.palette[index % len(self.palette)]),
                    color=(0.2, 0.2, 0.2, 1),
                )
                chip.bind(on_release=lambda btn, value=category: self.select_category(value))
                row.add_widget(chip)

        if 'color_row' in self.ids:
            row = self.ids.color_row
            row.clear_widgets()
            for hex_color in self.palette:
                swatch = ToggleButton(
                    text='',
                    group='task_color',
                    allow_no_selection=False,
                    state='down' if hex_color == self.selected_color else 'normal',
                    background_normal='',
                    background_color=get_color_from_hex(hex_color),
                    size_hint=(None, None),
                    size=(dp(32), dp(32)),
                )
                swatch.bind(on_release=lambda btn, value=hex_color: self.select_color(value))
                row.add_widget(swatch)

    def select_category(self, category):
        self.selected_category = category

    def select_color(self, hex_color):
        self.selected_color = hex_color

    def save_task(self):
        """Hand the entered values to the save callback and close."""
        title = self.ids.title_input.text if 'title_input' in self.ids else ""
        description = self.ids.description_input.text if 'description_input' in self.ids else ""
        self._saved = True
        self.save_callback(title, description, self.selected_category, self.selected_color)
        self.dismiss()

    def cancel(self):
        self.dismiss()

    def on_dismiss(self):
        # Tapping outside the dialog counts as Cancel
        if not self._saved and self.cancel_callback:
            self.cancel_callback()


class ConfirmationPopup(BasePopup):
    """Short notice with a single OK button."""
    confirmation_text = StringProperty("")
    popup_title = StringProperty("Notice")

    def __init__(self, confirmation_text="", popup_title="Notice", **kwargs):
        super().__init__(**kwargs)
        self.confirmation_text = confirmation_text
        self.popup_title = popup_title
