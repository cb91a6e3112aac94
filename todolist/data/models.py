import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime

from ..config import DEFAULT_CATEGORY, DEFAULT_COLOR


def _new_task_id() -> str:
    return uuid.uuid4().hex


@dataclass
class Task:
    """
    One to-do entry.

    Only ``title`` is required. ``id`` and ``created_at`` are assigned when
    the task is built and are carried over unchanged by ``edited()`` and
    ``toggled()``.
    """
    title: str
    description: str = ""
    is_completed: bool = False
    category: str = DEFAULT_CATEGORY
    color: str = DEFAULT_COLOR  # hex string, e.g. '#F8BBD0'
    id: str = field(default_factory=_new_task_id)
    created_at: datetime = field(default_factory=datetime.now)

    @classmethod
    def create(cls, title: str, description: str = "",
               category: str = DEFAULT_CATEGORY, color: str = DEFAULT_COLOR) -> "Task":
        """Build a fresh, not-yet-completed task with a new id and timestamp."""
        return cls(
            title=title,
            description=description,
            category=category,
            color=color,
        )

    def edited(self, title: str = None, description: str = None,
               category: str = None, color: str = None) -> "Task":
        """Return a copy with the given fields replaced; id and created_at are kept."""
        changes = {}
        if title is not None:
            changes['title'] = title
        if description is not None:
            changes['description'] = description
        if category is not None:
            changes['category'] = category
        if color is not None:
            changes['color'] = color
        return replace(self, **changes)

    def toggled(self) -> "Task":
        return replace(self, is_completed=not self.is_completed)

    def matches(self, query: str) -> bool:
        """Case-insensitive substring match against title or description."""
        needle = (query or "").lower()
        return needle in self.title.lower() or needle in self.description.lower()
