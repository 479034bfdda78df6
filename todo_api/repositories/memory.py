"""In-memory todo repository (no labels, no database)."""

import threading

from ..core.logging import get_logger
from ..entities import CreateTodo, Todo, UpdateTodo
from .errors import NotFoundError

logger = get_logger(__name__)


class TodoRepositoryForMemory:
    """
    Хранилище задач в словаре процесса.

    Подходит для демо и тестов, когда не нужны ни БД, ни метки:
    payload.labels игнорируется, возвращаются Todo без поля labels.

    Все операции держат один lock и ни разу не делают await внутри,
    поэтому запись никогда не прерывается на полпути.

    Чтения (find, all) тоже идут через этот lock и сериализуются с записью:
    в threading нет reader-writer lock, а держится он на время копирования словаря.
    """

    def __init__(self) -> None:
        self._store: dict[int, Todo] = {}
        self._lock = threading.Lock()

    async def create(self, payload: CreateTodo) -> Todo:
        with self._lock:
            # id = текущий размер + 1; после удалений может совпасть с существующим
            id = len(self._store) + 1
            if id in self._store:
                logger.warning("Todo id collision, overwriting existing todo", extra={"todo_id": id})
            todo = Todo(id=id, text=payload.text, completed=False)
            self._store[id] = todo
            return todo.model_copy()

    async def find(self, id: int) -> Todo:
        with self._lock:
            todo = self._store.get(id)
            if todo is None:
                raise NotFoundError(id)
            return todo.model_copy()

    async def all(self) -> list[Todo]:
        with self._lock:
            return [todo.model_copy() for todo in self._store.values()]

    async def update(self, id: int, payload: UpdateTodo) -> Todo:
        with self._lock:
            todo = self._store.get(id)
            if todo is None:
                raise NotFoundError(id)
            todo = Todo(
                id=id,
                text=payload.text if payload.text is not None else todo.text,
                completed=payload.completed if payload.completed is not None else todo.completed,
            )
            self._store[id] = todo
            return todo.model_copy()

    async def delete(self, id: int) -> None:
        with self._lock:
            if self._store.pop(id, None) is None:
                raise NotFoundError(id)
