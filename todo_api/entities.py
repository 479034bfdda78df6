"""
Сущности и входные данные (payloads) для репозиториев.

Сущности (Todo, Label, TodoEntity) - то, что возвращают репозитории.
Payloads (CreateTodo, UpdateTodo, CreateLabel) - то, что приходит от клиента;
ограничения длины проверяет Pydantic ещё на уровне HTTP.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

# ============================================================================
# ENTITIES
# ============================================================================


class Label(BaseModel):
    """Метка. Имя уникально в пределах хранилища."""

    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class Todo(BaseModel):
    """Задача без меток (используется in-memory репозиторием)."""

    id: int
    text: str
    completed: bool = False

    model_config = ConfigDict(from_attributes=True)


class TodoEntity(Todo):
    """
    Задача вместе с метками.

    Пример:
    {
        "id": 1,
        "text": "buy milk",
        "completed": false,
        "labels": [{"id": 10, "name": "shopping"}]
    }
    """

    labels: list[Label]


# ============================================================================
# PAYLOADS
# ============================================================================


def _unique_ids(ids: list[int] | None) -> list[int] | None:
    # Повторы убираем сразу: у задачи не может быть одной метки дважды
    if ids is None:
        return None
    return list(dict.fromkeys(ids))


class CreateTodo(BaseModel):
    """
    Схема для создания задачи (POST /todos).

    Пример запроса:
    {
        "text": "buy milk",
        "labels": [1, 2]
    }
    """

    text: str = Field(..., min_length=1, max_length=100, description="Текст задачи")
    labels: list[int] = Field(default_factory=list, description="ID меток")

    @field_validator("labels")
    @classmethod
    def dedupe_labels(cls, value: list[int] | None) -> list[int] | None:
        return _unique_ids(value)


class UpdateTodo(BaseModel):
    """
    Схема для обновления задачи (PATCH /todos/{id}).

    Все поля опциональные: отсутствующее поле оставляет значение как есть.
    labels, если передан, ЗАМЕНЯЕТ весь набор меток ([] - убрать все метки).
    """

    text: str | None = Field(None, min_length=1, max_length=100)
    completed: bool | None = None
    labels: list[int] | None = None

    @field_validator("labels")
    @classmethod
    def dedupe_labels(cls, value: list[int] | None) -> list[int] | None:
        return _unique_ids(value)


class CreateLabel(BaseModel):
    """Схема для создания метки (POST /labels)."""

    name: str = Field(..., min_length=1, max_length=100, description="Название метки")
