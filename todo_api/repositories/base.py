"""
Контракты репозиториев и общая транзакция для реляционного хранилища.

Обработчики HTTP пишутся против протоколов TodoRepository и LabelRepository,
а не против конкретного хранилища. Поэтому TodoRepositoryForDb и
TodoRepositoryForMemory взаимозаменяемы без изменения кода обработчиков.

Протоколы (typing.Protocol) - структурная типизация: реализации НЕ наследуются
от контракта, достаточно иметь методы с такими же сигнатурами.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Protocol, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ..core.logging import get_logger
from ..entities import CreateTodo, Label, Todo, UpdateTodo
from .errors import UnexpectedError

logger = get_logger(__name__)

# Тип задачи, который возвращает хранилище: TodoEntity (БД, с метками) или Todo (память)
TodoType = TypeVar("TodoType", bound=Todo, covariant=True)


class TodoRepository(Protocol[TodoType]):
    """
    Контракт хранилища задач.

    TodoRepository[TodoEntity] - TodoRepositoryForDb,
    TodoRepository[Todo] - TodoRepositoryForMemory.

    Все методы асинхронные и могут завершиться ошибкой:
    - NotFoundError(id) - задачи нет (find, update, delete)
    - UnexpectedError(message) - любая другая ошибка хранилища
    """

    async def create(self, payload: CreateTodo) -> TodoType:
        """Создать задачу (completed=False) с метками payload.labels."""
        ...

    async def find(self, id: int) -> TodoType:
        """Получить задачу по id."""
        ...

    async def all(self) -> list[TodoType]:
        """Получить все задачи."""
        ...

    async def update(self, id: int, payload: UpdateTodo) -> TodoType:
        """Обновить только переданные поля; labels заменяет набор меток целиком."""
        ...

    async def delete(self, id: int) -> None:
        """Удалить задачу вместе со связями с метками."""
        ...


class LabelRepository(Protocol):
    """
    Контракт хранилища меток.

    Ошибки:
    - DuplicateError(existing_id) - метка с таким именем уже существует
    - NotFoundError(id) - метки нет (delete)
    - UnexpectedError(message) - любая другая ошибка хранилища
    """

    async def create(self, name: str) -> Label:
        """Создать метку."""
        ...

    async def all(self) -> list[Label]:
        """Получить все метки (по возрастанию id)."""
        ...

    async def delete(self, id: int) -> None:
        """Удалить метку (связи с задачами не трогаются)."""
        ...


@asynccontextmanager
async def transaction(session_factory: async_sessionmaker) -> AsyncIterator[AsyncSession]:
    """
    Открыть сессию и транзакцию на время одной операции репозитория.

    - успешный выход из блока -> COMMIT
    - любое исключение -> ROLLBACK (ни одна строка не станет видна другим)
    - ошибки SQLAlchemy превращаются в UnexpectedError с исходным текстом,
      ошибки репозитория (NotFoundError, DuplicateError) пробрасываются как есть

    Пример:
        async with transaction(self.session_factory) as session:
            await session.execute(...)
            await session.execute(...)
        # обе команды применены, либо ни одна
    """
    async with session_factory() as session:
        try:
            async with session.begin():
                yield session
        except SQLAlchemyError as e:
            logger.warning("Transaction rolled back", extra={"error": str(e)})
            raise UnexpectedError(str(e)) from e
