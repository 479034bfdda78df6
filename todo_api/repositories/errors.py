"""Ошибки репозиториев."""


class RepositoryError(Exception):
    """Базовый класс для всех ошибок слоя хранения."""


class NotFoundError(RepositoryError):
    """Задача или метка с таким id не существует."""

    def __init__(self, id: int):
        self.id = id
        super().__init__(f"NotFound, id is {id}")


class DuplicateError(RepositoryError):
    """Метка с таким именем уже есть; existing_id - id существующей метки."""

    def __init__(self, existing_id: int):
        self.existing_id = existing_id
        super().__init__(f"Duplicate, id is {existing_id}")


class UnexpectedError(RepositoryError):
    """
    Любая другая ошибка хранилища.

    message сохраняет исходную диагностику (например текст ошибки драйвера БД).
    """

    def __init__(self, message: str):
        self.message = message
        super().__init__(f"Unexpected Error: [{message}]")
