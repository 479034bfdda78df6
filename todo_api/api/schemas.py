"""
Pydantic схемы ответов API.

Сами сущности и payloads (TodoEntity, CreateTodo, ...) живут в todo_api.entities -
их используют и репозитории, и endpoints. Здесь только формат ошибок.
"""

from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    """
    Детали ошибки для конкретного поля.

    Пример:
    {
        "field": "text",
        "message": "String should have at least 1 character"
    }
    """

    field: str = Field(..., description="Название поля с ошибкой")
    message: str = Field(..., description="Описание ошибки")


class ErrorBody(BaseModel):
    """
    Тело ошибки с кодом и деталями.

    Коды:
    - VALIDATION_ERROR: ошибка валидации полей (422)
    - NOT_FOUND: задача или метка не найдена (404)
    - ALREADY_EXISTS: метка с таким именем уже есть (400)
    - INTERNAL_ERROR: любая другая ошибка хранилища (500)
    """

    code: str = Field(..., description="Код ошибки (VALIDATION_ERROR, NOT_FOUND, etc.)")
    message: str = Field(..., description="Человекочитаемое сообщение")
    details: list[ErrorDetail] | None = Field(
        default=None, description="Список ошибок по полям (для валидации)"
    )


class ErrorResponse(BaseModel):
    """
    Единый формат ответа для всех ошибок API.

    Пример:
    {
        "error": {
            "code": "NOT_FOUND",
            "message": "Todo с id=999 не найден",
            "details": null
        }
    }
    """

    error: ErrorBody
