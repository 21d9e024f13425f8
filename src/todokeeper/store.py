from __future__ import annotations

from todokeeper.logging_utils import logger
from todokeeper.storage import StorageBackend
from todokeeper.todo import TodoItem


class TodoStore:
    """
    Owns the live todo collection and writes it through to a storage backend after every change.

    Indices are 0-based. A failed write does not undo the change in memory; it clears `persisted`
    so the caller can tell the user that what is on disk is stale.
    """

    def __init__(self, backend: StorageBackend) -> None:
        self._backend = backend
        loaded = backend.load()
        self.load_failed = loaded is None
        if self.load_failed:
            logger.warning("Could not load saved todos, starting with an empty list.")
        self._todos: list[TodoItem] = loaded if loaded is not None else []
        self.persisted = True

    def __len__(self) -> int:
        return len(self._todos)

    def list(self) -> list[TodoItem]:
        return [todo.model_copy() for todo in self._todos]

    def add(self, title: str) -> TodoItem:
        todo = TodoItem(title=title)
        self._todos.append(todo)
        logger.info(f"Added todo: {title}")
        self._write_through()
        return todo.model_copy()

    def toggle(self, index: int) -> None:
        if not self._in_range(index):
            return
        todo = self._todos[index]
        todo.is_completed = not todo.is_completed
        logger.info(f"Toggled todo {index}: {todo.title}")
        self._write_through()

    def delete(self, index: int) -> None:
        if not self._in_range(index):
            return
        todo = self._todos.pop(index)
        logger.info(f"Deleted todo {index}: {todo.title}")
        self._write_through()

    def _in_range(self, index: int) -> bool:
        # Negative indices would otherwise address from the end of the list
        return 0 <= index < len(self._todos)

    def _write_through(self) -> None:
        self.persisted = self._backend.save(self._todos)
        if not self.persisted:
            logger.warning("Todos changed in memory but could not be saved.")
