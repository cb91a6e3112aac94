import logging
from typing import Callable, Iterator, List, Optional, Tuple, Union

from .models import Task

logger = logging.getLogger(__name__)

Snapshot = Tuple[Task, ...]
Listener = Callable[[Snapshot], None]


def _task_id(task_or_id: Union[Task, str]) -> str:
    return task_or_id.id if isinstance(task_or_id, Task) else task_or_id


class TaskStore:
    """
    In-memory owner of the task list.

    Readers only ever get immutable snapshots (tuples). Every mutation
    returns the new snapshot and notifies subscribers, except toggle and
    update on an unknown id, which change nothing and return None.
    Newly added tasks go to the front of the list.
    """

    def __init__(self, tasks: Optional[List[Task]] = None):
        self._tasks: List[Task] = list(tasks or [])
        self._listeners: List[Listener] = []

    # ----- Read access -----
    @property
    def tasks(self) -> Snapshot:
        return tuple(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self.tasks)

    def get(self, task_id: str) -> Optional[Task]:
        index = self._index_of(task_id)
        return self._tasks[index] if index is not None else None

    def filtered_and_sorted(self, query: str = "") -> List[Task]:
        """
        Tasks whose title or description contains ``query`` (ignoring case),
        newest first by creation time. An empty query matches every task.
        """
        matching = [task for task in self._tasks if task.matches(query)]
        return sorted(matching, key=lambda task: task.created_at, reverse=True)

    # ----- Mutations -----
    def add(self, task: Task) -> Snapshot:
        self._tasks.insert(0, task)
        logger.info(f"Task added: {task.id} ({len(self._tasks)} total)")
        return self._changed()

    def delete(self, task: Union[Task, str]) -> Snapshot:
        """Remove the task with the same id. Unknown ids are ignored."""
        task_id = _task_id(task)
        index = self._index_of(task_id)
        if index is None:
            logger.debug(f"Delete ignored, no task with id {task_id}")
            return self.tasks
        del self._tasks[index]
        logger.info(f"Task deleted: {task_id}")
        return self._changed()

    def toggle(self, task: Union[Task, str]) -> Optional[Snapshot]:
        task_id = _task_id(task)
        index = self._index_of(task_id)
        if index is None:
            logger.warning(f"Cannot toggle task {task_id}: not found")
            return None
        self._tasks[index] = self._tasks[index].toggled()
        logger.info(f"Task toggled: {task_id} -> completed={self._tasks[index].is_completed}")
        return self._changed()

    def update(self, task: Task) -> Optional[Snapshot]:
        """Replace the stored task that has the same id as ``task``."""
        index = self._index_of(task.id)
        if index is None:
            logger.warning(f"Cannot update task {task.id}: not found")
            return None
        self._tasks[index] = task
        logger.info(f"Task updated: {task.id}")
        return self._changed()

    # ----- Subscription -----
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener(snapshot)`` after every change. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _changed(self) -> Snapshot:
        snapshot = self.tasks
        for listener in list(self._listeners):
            listener(snapshot)
        return snapshot

    def _index_of(self, task_id: str) -> Optional[int]:
        for index, task in enumerate(self._tasks):
            if task.id == task_id:
                return index
        return None
