"""Todo repository backed by a relational database."""

from sqlalchemy import Select, delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ..core.logging import get_logger
from ..entities import CreateTodo, TodoEntity, UpdateTodo
from ..models import LabelModel, TodoModel, todo_labels
from .base import transaction
from .errors import NotFoundError, UnexpectedError
from .fold import fold_entities

logger = get_logger(__name__)


def select_todos_with_labels() -> Select:
    """
    Задачи вместе с метками одним запросом (без N+1).

    SQL эквивалент:
        SELECT todos.id, todos.text, todos.completed,
               labels.id AS label_id, labels.name AS label_name
        FROM todos
        LEFT OUTER JOIN todo_labels ON todos.id = todo_labels.todo_id
        LEFT OUTER JOIN labels ON labels.id = todo_labels.label_id;
    """
    return (
        select(
            TodoModel.id,
            TodoModel.text,
            TodoModel.completed,
            LabelModel.id.label("label_id"),
            LabelModel.name.label("label_name"),
        )
        .select_from(TodoModel)
        .outerjoin(todo_labels, TodoModel.id == todo_labels.c.todo_id)
        .outerjoin(LabelModel, LabelModel.id == todo_labels.c.label_id)
    )


class TodoRepositoryForDb:
    """
    Репозиторий задач поверх таблиц todos, labels и todo_labels.

    Каждая операция берёт соединение из пула на своё время и выполняется
    в одной транзакции: задача и её связи с метками меняются атомарно.

    Пример использования:
        repo = TodoRepositoryForDb(AsyncSessionLocal)
        todo = await repo.create(CreateTodo(text="buy milk", labels=[1]))
        todo = await repo.update(todo.id, UpdateTodo(completed=True))
        await repo.delete(todo.id)
    """

    def __init__(self, session_factory: async_sessionmaker):
        self.session_factory = session_factory

    async def create(self, payload: CreateTodo) -> TodoEntity:
        """
        Создать задачу и привязать к ней метки.

        SQL эквивалент (в одной транзакции):
            INSERT INTO todos (text, completed) VALUES ({text}, false);
            INSERT INTO todo_labels (todo_id, label_id) VALUES ({id}, {label_id}), ...;

        Raises:
            UnexpectedError: запись не удалась (например, метки с таким id нет)
        """
        async with transaction(self.session_factory) as session:
            todo = TodoModel(text=payload.text, completed=False)
            session.add(todo)
            await session.flush()  # flush() выдаёт todo.id, commit будет в конце блока

            await self._insert_labels(session, todo.id, payload.labels)
            entity = await self._find(session, todo.id)

        logger.info("Todo created", extra={"todo_id": entity.id, "labels": payload.labels})
        return entity

    async def find(self, id: int) -> TodoEntity:
        async with transaction(self.session_factory) as session:
            return await self._find(session, id)

    async def all(self) -> list[TodoEntity]:
        """Все задачи с метками, новые первыми (ORDER BY todos.id DESC)."""
        async with transaction(self.session_factory) as session:
            result = await session.execute(
                select_todos_with_labels().order_by(TodoModel.id.desc(), LabelModel.id)
            )
            return fold_entities(result.all())

    async def update(self, id: int, payload: UpdateTodo) -> TodoEntity:
        """
        Обновить задачу.

        - text / completed: если не переданы, остаются текущие значения
        - labels: если передан, старые связи удаляются и вставляются новые
          (в той же транзакции, что и UPDATE todos)

        Raises:
            NotFoundError: задачи с таким id нет
            UnexpectedError: любая другая ошибка (транзакция откатывается)
        """
        async with transaction(self.session_factory) as session:
            current = await session.get(TodoModel, id)
            if current is None:
                raise NotFoundError(id)

            await session.execute(
                update(TodoModel)
                .where(TodoModel.id == id)
                .values(
                    text=payload.text if payload.text is not None else current.text,
                    completed=(
                        payload.completed if payload.completed is not None else current.completed
                    ),
                )
            )

            if payload.labels is not None:
                await session.execute(delete(todo_labels).where(todo_labels.c.todo_id == id))
                await self._insert_labels(session, id, payload.labels)

            entity = await self._find(session, id)

        logger.info(
            "Todo updated",
            extra={"todo_id": id, "fields": sorted(payload.model_dump(exclude_none=True))},
        )
        return entity

    async def delete(self, id: int) -> None:
        """
        Удалить задачу: сначала связи с метками, потом саму строку.

        SQL эквивалент (в одной транзакции):
            DELETE FROM todo_labels WHERE todo_id = {id};
            DELETE FROM todos WHERE id = {id};

        Сами метки остаются - это независимые сущности.
        """
        async with transaction(self.session_factory) as session:
            await session.execute(delete(todo_labels).where(todo_labels.c.todo_id == id))
            result = await session.execute(delete(TodoModel).where(TodoModel.id == id))
            if result.rowcount == 0:
                # rollback: связи тоже остаются на месте
                raise NotFoundError(id)

        logger.info("Todo deleted", extra={"todo_id": id})

    async def _find(self, session: AsyncSession, id: int) -> TodoEntity:
        result = await session.execute(
            select_todos_with_labels().where(TodoModel.id == id).order_by(LabelModel.id)
        )
        todos = fold_entities(result.all())
        if not todos:
            raise NotFoundError(id)
        return todos[0]

    async def _insert_labels(self, session: AsyncSession, todo_id: int, label_ids: list[int]) -> None:
        if not label_ids:
            return

        # todo_labels.label_id без внешнего ключа, поэтому проверяем метки сами
        result = await session.execute(select(LabelModel.id).where(LabelModel.id.in_(label_ids)))
        missing = set(label_ids) - set(result.scalars().all())
        if missing:
            raise UnexpectedError(f"labels do not exist: {sorted(missing)}")

        await session.execute(
            insert(todo_labels),
            [{"todo_id": todo_id, "label_id": label_id} for label_id in label_ids],
        )
