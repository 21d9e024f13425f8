"""Storage backends for the todo collection.

- **FileSystemStorage**: one JSON document on disk, replaced atomically on save
- **InMemoryStorage**: a process-lifetime slot, for tests and throwaway sessions
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Protocol, runtime_checkable

from pydantic import ValidationError
from tenacity import Retrying

from todokeeper.logging_utils import logger
from todokeeper.retry_utils import retrying_write
from todokeeper.todo import TodoItem, dump_todos, parse_todos

DEFAULT_FILENAME = "todos.json"


def default_todo_file(filename: str = DEFAULT_FILENAME) -> Path:
    return Path.home() / "Documents" / filename


@runtime_checkable
class StorageBackend(Protocol):
    """Persistence capability used by the TodoStore."""

    def save(self, todos: list[TodoItem]) -> bool:
        """Replace the stored collection. Returns False instead of raising on failure."""
        ...

    def load(self) -> list[TodoItem] | None:
        """Stored collection, [] if nothing was saved yet, None if it could not be read."""
        ...


class FileSystemStorage:
    def __init__(self, path: Path | None = None, *, retrying: Retrying | None = None) -> None:
        self._path = path if path is not None else default_todo_file()
        self._retrying = retrying if retrying is not None else retrying_write()

    @property
    def path(self) -> Path:
        return self._path

    def save(self, todos: list[TodoItem]) -> bool:
        try:
            data = dump_todos(todos)
            for attempt in self._retrying:
                with attempt:
                    self._write(data)
        except (OSError, ValueError) as e:
            logger.error(f"Error saving todos to {self._path}: {e}")
            return False
        logger.debug(f"Saved {len(todos)} todos to {self._path}.")
        return True

    def load(self) -> list[TodoItem] | None:
        try:
            data = self._path.read_bytes()
        except FileNotFoundError:
            # First run: nothing saved yet
            return []
        except OSError as e:
            logger.error(f"Error loading todos from {self._path}: {e}")
            return None

        try:
            todos = parse_todos(data)
        except ValidationError as e:
            logger.error(f"Error decoding todos in {self._path}: {e}")
            return None
        logger.debug(f"Loaded {len(todos)} todos from {self._path}.")
        return todos

    def _write(self, data: bytes) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp, self._path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise


class InMemoryStorage:
    def __init__(self) -> None:
        self._todos: list[TodoItem] = []

    def save(self, todos: list[TodoItem]) -> bool:
        self._todos = [todo.model_copy() for todo in todos]
        return True

    def load(self) -> list[TodoItem] | None:
        return [todo.model_copy() for todo in self._todos]
