"""Repository layer for data access."""

from .base import LabelRepository, TodoRepository, transaction
from .errors import DuplicateError, NotFoundError, RepositoryError, UnexpectedError
from .fold import TodoWithLabelRow, fold_entities
from .label import LabelRepositoryForDb
from .memory import TodoRepositoryForMemory
from .todo import TodoRepositoryForDb

__all__ = [
    "TodoRepository",
    "LabelRepository",
    "transaction",
    "TodoRepositoryForDb",
    "LabelRepositoryForDb",
    "TodoRepositoryForMemory",
    "TodoWithLabelRow",
    "fold_entities",
    "RepositoryError",
    "NotFoundError",
    "DuplicateError",
    "UnexpectedError",
]
