"""
To-Do Task Store

In-memory ordered list of tasks. Nothing is written to disk.
"""

import datetime
import logging
import threading
import uuid
from dataclasses import asdict, dataclass, field, replace
from typing import Callable, Iterable, List, Optional


def _new_id() -> str:
    return str(uuid.uuid4())


def _now() -> str:
    return datetime.datetime.now().isoformat()


@dataclass
class TaskRecord:
    """
    A single to-do entry.

    Fields:
        title: Text as entered (never blank).
        id: UUID string assigned at creation, never reused.
        is_completed: Completion flag toggled from the UI.
        created_at: ISO timestamp, informational only.
    """
    title: str
    id: str = field(default_factory=_new_id)
    is_completed: bool = False
    created_at: str = field(default_factory=_now)

    def to_dict(self) -> dict:
        return asdict(self)


class TaskStore:
    """
    Ordered to-do list with add / toggle / positional removal

    Buttons and web requests change the list from different threads, so every
    read and write holds the store lock. Listeners run after it is released.
    """

    def __init__(self):
        self.logger = logging.getLogger(__name__)
        self._lock = threading.RLock()
        self._tasks: List[TaskRecord] = []
        self._listeners: List[Callable[['TaskStore'], None]] = []

    def __len__(self) -> int:
        with self._lock:
            return len(self._tasks)

    def add_listener(self, callback: Callable[['TaskStore'], None]):
        """Register a callback run after every change to the list"""
        self._listeners.append(callback)

    def snapshot(self) -> List[TaskRecord]:
        """Copies of the current tasks, in order"""
        with self._lock:
            return [replace(task) for task in self._tasks]

    def get(self, task_id: str) -> Optional[TaskRecord]:
        with self._lock:
            index = self._find(task_id)
            return replace(self._tasks[index]) if index is not None else None

    def index_of(self, task_id: str) -> Optional[int]:
        """Position of a task, or None if it doesn't exist"""
        with self._lock:
            return self._find(task_id)

    def _find(self, task_id: str) -> Optional[int]:
        for index, task in enumerate(self._tasks):
            if task.id == task_id:
                return index
        return None

    def add(self, title: str) -> Optional[TaskRecord]:
        """
        Append a new task

        Args:
            title: Task title; blank titles are ignored

        Returns:
            The new task, or None if the title was blank
        """
        if not title or not title.strip():
            self.logger.debug("Ignoring blank task title")
            return None

        task = TaskRecord(title=title)
        with self._lock:
            self._tasks.append(task)
            added = replace(task)
        self.logger.info(f"Added task: {title}")
        self._notify()
        return added

    def toggle_completion(self, task_id: str) -> Optional[TaskRecord]:
        """
        Flip the completion flag of a task

        Returns:
            The updated task, or None if no task has that id
        """
        with self._lock:
            index = self._find(task_id)
            if index is None:
                self.logger.debug(f"Toggle ignored, no task {task_id}")
                return None
            task = self._tasks[index]
            task.is_completed = not task.is_completed
            updated = replace(task)

        status = "completed" if updated.is_completed else "not completed"
        self.logger.info(f"Marked task as {status}: {updated.title}")
        self._notify()
        return updated

    def remove_at(self, positions: Iterable[int]) -> List[TaskRecord]:
        """
        Remove every task at the given positions in one update

        Positions refer to the list before removal; out-of-range ones are
        skipped.

        Returns:
            The removed tasks, in list order
        """
        wanted = set(positions)
        with self._lock:
            removed = self._drop(wanted)
        if removed:
            self.logger.info(f"Removed {len(removed)} task(s)")
            self._notify()
        return removed

    def remove(self, task_id: str) -> Optional[TaskRecord]:
        """
        Remove a task by id

        The id is resolved to a position and removed under one lock, so a
        concurrent removal cannot shift the list in between.

        Returns:
            The removed task, or None if no task has that id
        """
        with self._lock:
            index = self._find(task_id)
            if index is None:
                return None
            removed = self._drop({index})

        self.logger.info(f"Removed task: {removed[0].title}")
        self._notify()
        return removed[0]

    def _drop(self, wanted) -> List[TaskRecord]:
        kept: List[TaskRecord] = []
        removed: List[TaskRecord] = []
        for index, task in enumerate(self._tasks):
            if index in wanted:
                removed.append(task)
            else:
                kept.append(task)
        if removed:
            self._tasks = kept
        return removed

    def _notify(self):
        for callback in list(self._listeners):
            try:
                callback(self)
            except Exception as e:
                self.logger.error(f"Task listener failed: {e}", exc_info=True)
