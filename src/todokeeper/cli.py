from __future__ import annotations

from enum import StrEnum
from pathlib import Path

import click
import yaml
from pydantic import ValidationError

from todokeeper.logging_utils import logger, set_level
from todokeeper.retry_utils import retrying_write
from todokeeper.settings import Settings
from todokeeper.storage import FileSystemStorage, InMemoryStorage, StorageBackend
from todokeeper.store import TodoStore


class Command(StrEnum):
    ADD = "add"
    LIST = "list"
    TOGGLE = "toggle"
    DELETE = "delete"
    EXIT = "exit"


class App:
    """Interactive prompt loop on top of a TodoStore. Indices shown to the user are 1-based."""

    def __init__(self, store: TodoStore) -> None:
        self._store = store

    def run(self) -> None:
        if self._store.load_failed:
            click.echo("⚠️ Could not load saved todos; starting with an empty list")

        while True:
            try:
                raw = _ask("\nEnter command (add, list, toggle, delete, exit)").strip()
            except click.Abort:
                # End of input behaves like `exit`
                raw = Command.EXIT.value

            try:
                command = Command(raw.lower())
            except ValueError:
                click.echo("❗ Invalid command")
                continue

            try:
                match command:
                    case Command.ADD:
                        self._add()
                    case Command.LIST:
                        self._list()
                    case Command.TOGGLE:
                        self._toggle()
                    case Command.DELETE:
                        self._delete()
                    case Command.EXIT:
                        click.echo("👋 Exiting...")
                        return
            except click.Abort:
                click.echo("\n👋 Exiting...")
                return

    def _add(self) -> None:
        title = _ask("Enter title")
        if not title.strip():
            click.echo("❗ Title cannot be empty")
            return
        self._store.add(title)
        click.echo(f"📌 Todo added: {title}")
        self._warn_if_unsaved()

    def _list(self) -> None:
        todos = self._store.list()
        if not todos:
            click.echo("No todos.")
            return
        for i, todo in enumerate(todos, 1):
            click.echo(f"{i}. {todo}")

    def _toggle(self) -> None:
        index = self._ask_index()
        if index is None:
            return
        self._store.toggle(index - 1)
        click.echo(f"🔄 Todo toggled at index {index}")
        self._warn_if_unsaved()

    def _delete(self) -> None:
        index = self._ask_index()
        if index is None:
            return
        self._store.delete(index - 1)
        click.echo(f"🗑️ Todo deleted at index {index}")
        self._warn_if_unsaved()

    def _ask_index(self) -> int | None:
        """1-based index typed by the user, or None (after telling them) if it is not usable"""
        raw = _ask("Enter index").strip()
        index = int(raw) if raw.isascii() and raw.isdigit() else 0
        if not 1 <= index <= len(self._store):
            click.echo("❗ Invalid index")
            return None
        return index

    def _warn_if_unsaved(self) -> None:
        if not self._store.persisted:
            click.echo("⚠️ Changes could not be saved")


def _ask(text: str) -> str:
    """Read one line; raises click.Abort on end of input"""
    return click.prompt(text, default="", show_default=False)


def build_store(settings: Settings) -> TodoStore:
    """Pick the storage backend named in the settings and load a store from it"""
    backend: StorageBackend
    match settings.STORAGE:
        case "memory":
            backend = InMemoryStorage()
        case "file":
            backend = FileSystemStorage(settings.TODO_FILE, retrying=retrying_write(attempts=settings.SAVE_ATTEMPTS))
        case _:
            raise ValueError(f"Unsupported storage type: {settings.STORAGE}")
    logger.info(f"Using {settings.STORAGE} storage.")
    return TodoStore(backend)


def load_settings(config_path: Path | None, **overrides: object) -> Settings:
    try:
        if config_path is not None:
            return Settings.from_yaml(config_path, **overrides)
        return Settings(**overrides)
    except (ValidationError, ValueError, OSError, yaml.YAMLError) as e:
        raise click.BadParameter(str(e)) from e


@click.command(help="Manage a todo list interactively.")
@click.option(
    "-f",
    "--file",
    "todo_file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Todo file to use (default: ~/Documents/todos.json).",
)
@click.option("--memory", is_flag=True, help="Keep todos in memory only; nothing is written to disk.")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML settings file.",
)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    help="Logging level (also read from LOG_LEVEL).",
)
def cli(todo_file: Path | None, memory: bool, config_path: Path | None, log_level: str | None) -> None:
    """
    Start the interactive todo prompt.

    Usage:
        todokeeper                        # todos in ~/Documents/todos.json
        todokeeper --file ./todos.json
        todokeeper --memory               # nothing is persisted

        LOG_LEVEL=debug todokeeper        # Enable debug logging
    """
    overrides: dict[str, object] = {}
    if todo_file is not None:
        overrides["TODO_FILE"] = todo_file
    if memory:
        overrides["STORAGE"] = "memory"
    if log_level is not None:
        overrides["LOG_LEVEL"] = log_level

    settings = load_settings(config_path, **overrides)
    set_level(settings.log_level, logger=logger)

    App(build_store(settings)).run()


if __name__ == "__main__":
    cli()
