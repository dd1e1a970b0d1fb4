"""In-memory todo list."""

from learning_assistant.todos.store import TodoItem, TodoNotFoundError, TodoStore

__all__ = ["TodoItem", "TodoNotFoundError", "TodoStore"]
