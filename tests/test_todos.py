import pytest

from learning_assistant.summarizer.errors import InvalidInputError
from learning_assistant.todos.store import TodoNotFoundError, TodoStore


def test_add_toggle_delete():
    store = TodoStore()
    first = store.add("read chapter 3")
    second = store.add("summarize lecture")

    assert [item.text for item in store.list()] == ["read chapter 3", "summarize lecture"]
    assert first.completed is False

    assert store.toggle(first.id).completed is True
    assert store.toggle(first.id).completed is False

    store.delete(second.id)
    assert [item.id for item in store.list()] == [first.id]


def test_blank_todo_rejected():
    store = TodoStore()
    with pytest.raises(InvalidInputError):
        store.add("   ")
    assert store.list() == []


def test_unknown_todo_id():
    store = TodoStore()
    with pytest.raises(TodoNotFoundError):
        store.toggle(42)
    with pytest.raises(TodoNotFoundError):
        store.delete(42)
