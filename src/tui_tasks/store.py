"""Task stores: the authoritative task collection.

Views never call a store directly; all mutations go through ActionBinder.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from datetime import date
from pathlib import Path
from typing import Protocol

from tui_tasks.models import Priority, Task, format_time, parse_priority, parse_time

logger = logging.getLogger(__name__)

DEFAULT_DATA_FILE = Path.home() / ".tui-tasks" / "tasks.json"


class TaskStoreError(Exception):
    """Raised when the backing data file cannot be read or parsed."""


class TaskStore(Protocol):
    """The store interface the core depends on."""

    def list_tasks(self) -> list[Task]: ...

    def add(self, task: Task) -> Task: ...

    def update(self, task: Task) -> None: ...

    def remove(self, task_id: str) -> None: ...


class InMemoryTaskStore:
    """Non-persistent store. Iteration order is insertion order."""

    def __init__(self, tasks: list[Task] | None = None) -> None:
        self._tasks: list[Task] = list(tasks or [])

    def list_tasks(self) -> list[Task]:
        """Return a snapshot of the collection (same Task objects)."""
        return list(self._tasks)

    def add(self, task: Task) -> Task:
        self._tasks.append(task)
        logger.debug("added task %s (%r)", task.id, task.title)
        return task

    def update(self, task: Task) -> None:
        # Tasks are mutated in place; only a foreign copy needs swapping in.
        for idx, existing in enumerate(self._tasks):
            if existing.id == task.id:
                if existing is not task:
                    self._tasks[idx] = task
                logger.debug("updated task %s", task.id)
                return
        logger.warning("update for unknown task %s ignored", task.id)

    def remove(self, task_id: str) -> None:
        before = len(self._tasks)
        self._tasks = [t for t in self._tasks if t.id != task_id]
        if len(self._tasks) != before:
            logger.debug("removed task %s", task_id)


def task_to_dict(task: Task) -> dict:
    return {
        "id": task.id,
        "title": task.title,
        "done": task.done,
        "due": task.due.isoformat() if task.due else None,
        "created_at": task.created_at.isoformat(),
        "priority": task.priority.value,
        "notes": task.notes,
        "tags": list(task.tags),
        "start_time": format_time(task.start_time) or None,
        "end_time": format_time(task.end_time) or None,
    }


def task_from_dict(data: dict) -> Task:
    """Build a Task from its JSON form. Raises ValueError/KeyError/TypeError."""
    due = data.get("due")
    created = data.get("created_at")
    task = Task(
        title=str(data["title"]),
        id=str(data["id"]),
        done=bool(data.get("done", False)),
        due=date.fromisoformat(due) if due else None,
        priority=parse_priority(str(data.get("priority", "")), Priority.MEDIUM),
        notes=str(data.get("notes") or ""),
        tags=[str(t) for t in data.get("tags") or [] if str(t).strip()],
        start_time=parse_time(data.get("start_time") or ""),
        end_time=parse_time(data.get("end_time") or ""),
    )
    if created:
        task.created_at = date.fromisoformat(created)
    return task


class JsonTaskStore(InMemoryTaskStore):
    """Store persisted to a JSON file, saved after every mutation."""

    def __init__(self, path: Path = DEFAULT_DATA_FILE) -> None:
        self.path = Path(path)
        super().__init__(self._load())

    def _load(self) -> list[Task]:
        if not self.path.exists():
            logger.info("no data file at %s, starting empty", self.path)
            return []
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8") or "[]")
        except (OSError, json.JSONDecodeError) as e:
            raise TaskStoreError(f"Cannot read {self.path}: {e}") from e
        if not isinstance(raw, list):
            raise TaskStoreError(f"{self.path}: expected a JSON list of tasks")
        tasks: list[Task] = []
        for idx, entry in enumerate(raw):
            try:
                tasks.append(task_from_dict(entry))
            except (KeyError, TypeError, ValueError) as e:
                raise TaskStoreError(f"{self.path}: bad task at index {idx}: {e}") from e
        logger.info("loaded %d task(s) from %s", len(tasks), self.path)
        return tasks

    def add(self, task: Task) -> Task:
        super().add(task)
        self.save()
        return task

    def update(self, task: Task) -> None:
        super().update(task)
        self.save()

    def remove(self, task_id: str) -> None:
        super().remove(task_id)
        self.save()

    def save(self) -> None:
        """Atomic write: temp file in the same directory, then os.replace."""
        content = json.dumps(
            [task_to_dict(t) for t in self._tasks], indent=2, ensure_ascii=False
        )
        target_dir = self.path.parent
        target_dir.mkdir(parents=True, exist_ok=True)

        fd, tmp_path = tempfile.mkstemp(dir=target_dir, suffix=".tmp", prefix=".tui-tasks-")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
            os.replace(tmp_path, self.path)
        except BaseException:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            raise
