"""
Обработчики ошибок (Exception Handlers) для API.

Репозитории бросают NotFoundError / DuplicateError / UnexpectedError,
endpoints их не ловят - здесь каждая ошибка превращается в HTTP ответ
единого формата ErrorResponse:

    NotFoundError   -> 404 NOT_FOUND
    DuplicateError  -> 400 ALREADY_EXISTS
    UnexpectedError -> 500 INTERNAL_ERROR (детали только в логах)
    RequestValidationError (Pydantic) -> 422 VALIDATION_ERROR
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..core.logging import get_logger
from ..repositories import DuplicateError, NotFoundError, RepositoryError, UnexpectedError
from .schemas import ErrorBody, ErrorDetail, ErrorResponse

logger = get_logger(__name__)


def _error_response(
    status_code: int, code: str, message: str, details: list[ErrorDetail] | None = None
) -> JSONResponse:
    error_response = ErrorResponse(error=ErrorBody(code=code, message=message, details=details))
    return JSONResponse(status_code=status_code, content=error_response.model_dump())


async def repository_error_handler(request: Request, exc: RepositoryError) -> JSONResponse:
    """
    Обработчик ошибок слоя хранения.

    Resource определяется по пути запроса (/todos/... или /labels/...).
    """
    resource = "Label" if "/labels" in request.url.path else "Todo"

    if isinstance(exc, NotFoundError):
        logger.warning(f"API Error: NOT_FOUND - {exc}")
        return _error_response(
            status.HTTP_404_NOT_FOUND, "NOT_FOUND", f"{resource} с id={exc.id} не найден"
        )

    if isinstance(exc, DuplicateError):
        logger.warning(f"API Error: ALREADY_EXISTS - {exc}")
        return _error_response(
            status.HTTP_400_BAD_REQUEST,
            "ALREADY_EXISTS",
            f"{resource} с таким именем уже существует (id={exc.existing_id})",
            details=[ErrorDetail(field="name", message=f"Уже используется меткой id={exc.existing_id}")],
        )

    # UnexpectedError и всё остальное: НЕ показываем клиенту текст ошибки БД
    message = exc.message if isinstance(exc, UnexpectedError) else str(exc)
    logger.error(f"Internal Error: {type(exc).__name__}: {message}")
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "INTERNAL_ERROR", "Внутренняя ошибка сервера"
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Обработчик для ошибок валидации Pydantic (422).

    Pydantic: {"detail": [{"loc": ["body", "text"], "msg": "..."}]}
    Мы: {"error": {"code": "VALIDATION_ERROR", "details": [{"field": "text", ...}]}}
    """
    logger.warning(f"Validation Error: {exc.errors()}")

    details = []
    for error in exc.errors():
        # loc - путь к полю, например ["body", "text"] или ["path", "id"]
        field_path = error.get("loc", [])
        field_name = field_path[-1] if field_path else "unknown"

        if len(field_path) > 1 and field_path[0] == "body":
            field_name = ".".join(str(p) for p in field_path[1:])

        details.append(
            ErrorDetail(field=str(field_name), message=error.get("msg", "Ошибка валидации"))
        )

    return _error_response(
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "VALIDATION_ERROR",
        "Ошибка валидации входных данных",
        details=details,
    )


def register_error_handlers(app: FastAPI) -> None:
    """Регистрирует все error handlers в приложении FastAPI."""
    app.add_exception_handler(RepositoryError, repository_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
