from __future__ import annotations

from pathlib import Path

import pytest

from todokeeper.retry_utils import retrying_write
from todokeeper.storage import FileSystemStorage, InMemoryStorage

SETTINGS_ENV = ("TODO_FILE", "STORAGE", "LOG_LEVEL", "SAVE_ATTEMPTS")


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep the developer's environment, `.env` and home directory out of the tests."""
    for name in SETTINGS_ENV:
        monkeypatch.delenv(name, raising=False)
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(tmp_path)
    return home


@pytest.fixture()
def todo_file(tmp_path: Path) -> Path:
    return tmp_path / "data" / "todos.json"


@pytest.fixture()
def file_storage(todo_file: Path) -> FileSystemStorage:
    return FileSystemStorage(todo_file, retrying=retrying_write(attempts=2, max_wait=0))


@pytest.fixture()
def memory_storage() -> InMemoryStorage:
    return InMemoryStorage()
