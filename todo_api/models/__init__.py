"""SQLAlchemy models for Todo API."""

from .base import Base
from .label import LabelModel
from .todo import TodoModel
from .todo_label import todo_labels

__all__ = [
    "Base",
    "TodoModel",
    "LabelModel",
    "todo_labels",
]
