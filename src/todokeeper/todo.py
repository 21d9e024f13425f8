from __future__ import annotations

from typing import Annotated
from uuid import UUID, uuid4

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, TypeAdapter


class TodoItem(BaseModel):
    """A single task. `id` and `title` are fixed once the item exists."""

    model_config = ConfigDict(populate_by_name=True)

    id: UUID = Field(default_factory=uuid4, frozen=True)
    title: str = Field(frozen=True)
    is_completed: bool = Field(default=False, alias="isCompleted")

    def __str__(self) -> str:
        status = "✅" if self.is_completed else "❌"
        return f"{status} {self.title}"


def _unique_ids(todos: list[TodoItem]) -> list[TodoItem]:
    seen: set[UUID] = set()
    for todo in todos:
        if todo.id in seen:
            raise ValueError(f"Duplicate todo id: {todo.id}")
        seen.add(todo.id)
    return todos


# Encodes the whole collection as one JSON array of records
TODO_LIST_ADAPTER = TypeAdapter(Annotated[list[TodoItem], AfterValidator(_unique_ids)])


def dump_todos(todos: list[TodoItem]) -> bytes:
    return TODO_LIST_ADAPTER.dump_json(todos, by_alias=True, indent=2)


def parse_todos(data: bytes | str) -> list[TodoItem]:
    """Raises pydantic.ValidationError on malformed JSON or records"""
    return TODO_LIST_ADAPTER.validate_json(data)
