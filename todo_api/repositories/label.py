"""Label repository backed by a relational database."""

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ..core.logging import get_logger
from ..entities import Label
from ..models import LabelModel
from .base import transaction
from .errors import DuplicateError, NotFoundError, UnexpectedError

logger = get_logger(__name__)


class LabelRepositoryForDb:
    """
    Репозиторий меток.

    Имя метки уникально: перед INSERT проверяем, нет ли уже такой
    (точное совпадение с учётом регистра), и возвращаем id существующей.
    """

    def __init__(self, session_factory: async_sessionmaker):
        self.session_factory = session_factory

    async def create(self, name: str) -> Label:
        """
        Создать метку.

        SQL эквивалент:
            SELECT * FROM labels WHERE name = {name};
            INSERT INTO labels (name) VALUES ({name}) RETURNING *;

        Если параллельный запрос успел вставить то же имя между SELECT и INSERT,
        INSERT падает на UNIQUE(name) - это тоже DuplicateError, а не UnexpectedError.

        Raises:
            DuplicateError: метка с таким именем уже существует
        """
        try:
            async with transaction(self.session_factory) as session:
                existing = await self._get_by_name(session, name)
                if existing is not None:
                    raise DuplicateError(existing.id)

                label = LabelModel(name=name)
                session.add(label)
                await session.flush()
                created = Label.model_validate(label)
        except UnexpectedError as e:
            if not isinstance(e.__cause__, IntegrityError):
                raise
            # Транзакция уже откачена - ищем победившую метку в новой
            async with transaction(self.session_factory) as session:
                existing = await self._get_by_name(session, name)
            if existing is None:
                raise
            raise DuplicateError(existing.id) from e

        logger.info("Label created", extra={"label_id": created.id, "label_name": created.name})
        return created

    async def all(self) -> list[Label]:
        async with transaction(self.session_factory) as session:
            result = await session.scalars(select(LabelModel).order_by(LabelModel.id.asc()))
            return [Label.model_validate(label) for label in result]

    async def delete(self, id: int) -> None:
        """
        Удалить метку.

        Связи в todo_labels НЕ удаляются: задачи просто перестают
        показывать эту метку (LEFT JOIN вернёт NULL).
        """
        async with transaction(self.session_factory) as session:
            result = await session.execute(delete(LabelModel).where(LabelModel.id == id))
            if result.rowcount == 0:
                raise NotFoundError(id)

        logger.info("Label deleted", extra={"label_id": id})

    async def _get_by_name(self, session: AsyncSession, name: str) -> LabelModel | None:
        return await session.scalar(select(LabelModel).where(LabelModel.name == name))
