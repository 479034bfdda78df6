"""
Главный файл FastAPI приложения.

Запуск:
    uvicorn todo_api.main:app --reload

    # без БД, задачи в памяти процесса (без меток):
    STORAGE_BACKEND=memory uvicorn todo_api.main:app --reload

API документация:
    http://localhost:8000/docs       - Swagger UI
    http://localhost:8000/redoc      - ReDoc
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from .api import labels_router, todos_router
from .api.errors import register_error_handlers
from .api.middleware import RequestLoggingMiddleware
from .core.config import settings
from .core.database import AsyncSessionLocal
from .core.logging import get_logger, setup_logging
from .entities import Todo
from .repositories import (
    LabelRepository,
    LabelRepositoryForDb,
    TodoRepository,
    TodoRepositoryForDb,
    TodoRepositoryForMemory,
)

setup_logging(
    log_level=settings.LOG_LEVEL, log_format=settings.LOG_FORMAT, echo_sql=settings.DATABASE_ECHO
)

logger = get_logger(__name__)

APP_VERSION = "1.0.0"

# Rate limiter по IP адресу клиента
limiter = Limiter(key_func=get_remote_address)


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Превышение лимита запросов в едином формате ErrorResponse."""
    return JSONResponse(
        status_code=429,
        content={
            "error": {
                "code": "RATE_LIMIT_EXCEEDED",
                "message": f"Слишком много запросов. Лимит: {exc.detail}",
                "details": [{"field": "rate_limit", "message": str(exc.detail)}],
            }
        },
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    logger.info(
        "Application started",
        extra={
            "app_name": settings.APP_NAME,
            "version": APP_VERSION,
            "todo_repository": type(app.state.todo_repository).__name__,
            "labels_enabled": app.state.label_repository is not None,
        },
    )
    yield
    logger.info("Application stopped")


@limiter.limit("100/minute")
async def root(request: Request) -> dict:
    """Корневой endpoint: информация о API."""
    return {
        "name": settings.APP_NAME,
        "version": APP_VERSION,
        "docs": "/docs",
        "endpoints": {"todos": "/todos", "labels": "/labels"},
    }


def create_app(
    todo_repository: TodoRepository[Todo], label_repository: LabelRepository | None = None
) -> FastAPI:
    """
    Собрать приложение вокруг переданных репозиториев.

    Endpoints работают с контрактами TodoRepository / LabelRepository,
    поэтому хранилище меняется без изменения кода endpoints:

        create_app(TodoRepositoryForDb(sf), LabelRepositoryForDb(sf))
        create_app(TodoRepositoryForMemory())  # /labels не подключается
    """
    app = FastAPI(
        lifespan=lifespan,
        title=settings.APP_NAME,
        description="Задачи (todos) с метками (labels), связь многие-ко-многим.",
        version=APP_VERSION,
    )

    app.state.todo_repository = todo_repository
    app.state.label_repository = label_repository

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)  # type: ignore[arg-type]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["content-type"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    app.add_api_route("/", root, methods=["GET"], tags=["root"], summary="Root endpoint")

    app.include_router(todos_router)
    # In-memory хранилище меток не поддерживает
    if label_repository is not None:
        app.include_router(labels_router)

    register_error_handlers(app)
    return app


def create_app_from_settings() -> FastAPI:
    """Выбрать хранилище по STORAGE_BACKEND и собрать приложение."""
    if settings.STORAGE_BACKEND == "memory":
        return create_app(TodoRepositoryForMemory())

    return create_app(
        TodoRepositoryForDb(AsyncSessionLocal), LabelRepositoryForDb(AsyncSessionLocal)
    )


app = create_app_from_settings()
