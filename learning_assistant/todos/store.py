from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import Dict, List

from learning_assistant.summarizer.errors import InvalidInputError


@dataclass(slots=True)
class TodoItem:
    id: int
    text: str
    completed: bool = False


class TodoNotFoundError(KeyError):
    pass


class TodoStore:
    """Per-process todo list, kept in insertion order."""

    def __init__(self) -> None:
        self._items: Dict[int, TodoItem] = {}
        self._ids = itertools.count(1)

    def list(self) -> List[TodoItem]:
        return list(self._items.values())

    def add(self, text: str) -> TodoItem:
        if not text or not text.strip():
            raise InvalidInputError("Todo text must not be empty")
        item = TodoItem(id=next(self._ids), text=text)
        self._items[item.id] = item
        return item

    def toggle(self, todo_id: int) -> TodoItem:
        item = self._get(todo_id)
        item.completed = not item.completed
        return item

    def delete(self, todo_id: int) -> None:
        self._get(todo_id)
        del self._items[todo_id]

    def _get(self, todo_id: int) -> TodoItem:
        try:
            return self._items[todo_id]
        except KeyError:
            raise TodoNotFoundError(todo_id) from None
