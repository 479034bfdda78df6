"""
API endpoints для работы с задачами.

Ошибки репозитория (NotFoundError, UnexpectedError) здесь не ловятся -
их переводит в HTTP ответ repository_error_handler (см. errors.py).
"""

from fastapi import APIRouter, Depends, Response, status

from ..entities import CreateTodo, Todo, TodoEntity, UpdateTodo
from ..repositories import TodoRepository
from .dependencies import get_todo_repository
from .schemas import ErrorResponse

router = APIRouter(prefix="/todos", tags=["todos"])

# БД возвращает задачи с метками, in-memory хранилище - без
TodoResponse = TodoEntity | Todo


# ============================================================================
# CREATE TODO
# ============================================================================


@router.post(
    "",
    response_model=TodoResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Создать задачу",
    responses={
        201: {"description": "Задача создана"},
        500: {"model": ErrorResponse, "description": "Не удалось записать (например, нет метки)"},
    },
)
async def create_todo(
    payload: CreateTodo, repository: TodoRepository[Todo] = Depends(get_todo_repository)
) -> TodoResponse:
    """
    Создать задачу.

    Пример запроса:
    ```json
    {
        "text": "buy milk",
        "labels": [1, 2]
    }
    ```
    """
    return await repository.create(payload)


# ============================================================================
# GET TODOS
# ============================================================================


@router.get("", response_model=list[TodoResponse], summary="Получить все задачи")
async def all_todo(
    repository: TodoRepository[Todo] = Depends(get_todo_repository),
) -> list[TodoResponse]:
    """Получить все задачи с метками (новые первыми)."""
    return await repository.all()


@router.get(
    "/{id}",
    response_model=TodoResponse,
    summary="Получить задачу по ID",
    responses={404: {"model": ErrorResponse, "description": "Задача не найдена"}},
)
async def find_todo(
    id: int, repository: TodoRepository[Todo] = Depends(get_todo_repository)
) -> TodoResponse:
    return await repository.find(id)


# ============================================================================
# UPDATE TODO
# ============================================================================


@router.patch(
    "/{id}",
    response_model=TodoResponse,
    summary="Обновить задачу",
    description="""
    Частичное обновление: не переданные поля остаются как есть.

    labels ЗАМЕНЯЕТ весь набор меток задачи:
    - [1, 3] - у задачи будут ровно метки 1 и 3
    - [] - у задачи не будет меток
    """,
    responses={404: {"model": ErrorResponse, "description": "Задача не найдена"}},
)
async def update_todo(
    id: int, payload: UpdateTodo, repository: TodoRepository[Todo] = Depends(get_todo_repository)
) -> TodoResponse:
    return await repository.update(id, payload)


# ============================================================================
# DELETE TODO
# ============================================================================


@router.delete(
    "/{id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Удалить задачу",
    responses={404: {"model": ErrorResponse, "description": "Задача не найдена"}},
)
async def delete_todo(
    id: int, repository: TodoRepository[Todo] = Depends(get_todo_repository)
) -> Response:
    await repository.delete(id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
