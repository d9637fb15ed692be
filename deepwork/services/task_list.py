"""Ordered list of objectives."""

import time

from deepwork.models.task import Task


class TaskList:
    """Objectives in insertion order.

    Ids are millisecond timestamps, bumped when needed so that they stay
    unique and strictly increasing even for tasks created in the same
    millisecond.
    """

    def __init__(self, tasks: list[Task] | None = None):
        self._tasks: list[Task] = list(tasks or [])
        self._last_id = max((t.id for t in self._tasks), default=0)

    def _next_id(self) -> int:
        self._last_id = max(int(time.time() * 1000), self._last_id + 1)
        return self._last_id

    def add(self, text: str) -> Task:
        """Append a new, uncompleted task.

        Raises:
            ValueError: If text is empty.
        """
        text = text.strip()
        if not text:
            raise ValueError("Task text must not be empty")
        task = Task(id=self._next_id(), text=text)
        self._tasks.append(task)
        return task

    def get(self, task_id: int) -> Task | None:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def toggle(self, task_id: int) -> Task | None:
        """Flip a task's completed flag. Returns None if the id is unknown."""
        task = self.get(task_id)
        if task is not None:
            task.completed = not task.completed
        return task

    def delete(self, task_id: int) -> bool:
        """Remove a task. Returns False if the id is unknown."""
        before = len(self._tasks)
        self._tasks = [t for t in self._tasks if t.id != task_id]
        return len(self._tasks) != before

    def list_tasks(self) -> list[Task]:
        return list(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)
