"""Generic add/edit/toggle/delete wiring shared by every task list surface.

Interactive flows are called in continuation style: each receives a ``done``
callback and reports its result through it, which maps directly onto
Textual's ``push_screen(screen, callback=...)``. Synchronous fakes simply
call ``done`` before returning.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum

from tui_tasks.models import Task
from tui_tasks.store import TaskStore
from tui_tasks.task_list import ListCommand, TaskListModel

logger = logging.getLogger(__name__)

CreateFlow = Callable[[Callable[[Task | None], None]], None]
EditFlow = Callable[[Task, Callable[[bool], None]], None]
ConfirmFlow = Callable[[str, Callable[[bool], None]], None]


class ChangeKind(Enum):
    ADDED = "Added"
    EDITED = "Edited"
    TOGGLED = "Toggled"
    DELETED = "Deleted"


AfterChange = Callable[[ChangeKind, Task], None]


class ActionBinder:
    """The only mutation path from a view into the store.

    After every successful change the owning view's ``refresh`` runs first,
    then the optional ``after_change`` callback, so the callback always sees
    fresh state.
    """

    def __init__(
        self,
        store: TaskStore,
        refresh: Callable[[], None],
        edit_flow: EditFlow,
        confirm_flow: ConfirmFlow,
        create_flow: CreateFlow | None = None,
        new_task: Callable[[], Task] | None = None,
        after_change: AfterChange | None = None,
    ) -> None:
        self._store = store
        self._refresh = refresh
        self._edit_flow = edit_flow
        self._confirm_flow = confirm_flow
        self._new_task = new_task or Task
        self._create_flow = create_flow or self._create_and_edit
        self.after_change = after_change

    def _create_and_edit(self, done: Callable[[Task | None], None]) -> None:
        task = self._new_task()
        self._edit_flow(task, lambda ok: done(task if ok else None))

    def _changed(self, kind: ChangeKind, task: Task) -> None:
        logger.debug("%s task %s", kind.value.lower(), task.id)
        self._refresh()
        if self.after_change is not None:
            self.after_change(kind, task)

    def add(self) -> None:
        def created(task: Task | None) -> None:
            if task is None:
                return
            stored = self._store.add(task)
            self._changed(ChangeKind.ADDED, stored)

        self._create_flow(created)

    def edit(self, task: Task) -> None:
        def edited(committed: bool) -> None:
            if not committed:
                return
            self._store.update(task)
            self._changed(ChangeKind.EDITED, task)

        self._edit_flow(task, edited)

    def toggle(self, task: Task) -> None:
        task.done = not task.done
        self._store.update(task)
        self._changed(ChangeKind.TOGGLED, task)

    def delete(self, task: Task) -> None:
        def confirmed(yes: bool) -> None:
            if not yes:
                return
            self._store.remove(task.id)
            self._changed(ChangeKind.DELETED, task)

        self._confirm_flow(f"Delete '{task.title}'?", confirmed)


def dispatch(command: ListCommand, model: TaskListModel, binder: ActionBinder) -> None:
    """Run a list command against a model and its binder.

    Commands that need a selected task are no-ops when nothing is selected.
    """
    if command is ListCommand.MOVE_NEXT:
        model.move_next()
    elif command is ListCommand.MOVE_PREV:
        model.move_prev()
    elif command is ListCommand.MOVE_FIRST:
        model.move_first()
    elif command is ListCommand.MOVE_LAST:
        model.move_last()
    elif command is ListCommand.TOGGLE_EXPAND:
        model.toggle_expand()
    elif command is ListCommand.EXPAND:
        model.expand()
    elif command is ListCommand.COLLAPSE:
        model.collapse()
    elif command is ListCommand.ADD:
        binder.add()
    else:
        task = model.selected_task()
        if task is None:
            return
        if command is ListCommand.EDIT:
            binder.edit(task)
        elif command is ListCommand.TOGGLE_DONE:
            binder.toggle(task)
        elif command is ListCommand.DELETE:
            binder.delete(task)
