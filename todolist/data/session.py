from dataclasses import dataclass
from typing import List, Optional

from .models import Task
from .store import TaskStore


@dataclass
class TodoSession:
    """
    Transient UI state: search text, dialog visibility and the task being
    edited. Never stored anywhere.
    """
    search_query: str = ""
    show_dialog: bool = False
    editing_task: Optional[Task] = None

    @property
    def is_editing(self) -> bool:
        return self.editing_task is not None

    def open_new(self):
        self.editing_task = None
        self.show_dialog = True

    def open_edit(self, task: Task):
        self.editing_task = task
        self.show_dialog = True

    def dismiss(self):
        self.show_dialog = False
        self.editing_task = None

    def visible_tasks(self, store: TaskStore) -> List[Task]:
        return store.filtered_and_sorted(self.search_query)
