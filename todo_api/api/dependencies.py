"""
Dependencies для FastAPI endpoints.

Репозитории создаются один раз в create_app() и кладутся в app.state.
Endpoints получают их через Depends() и ничего не знают о конкретном
хранилище (БД или память):

    @router.get("/todos")
    async def all_todo(repository: TodoRepository[Todo] = Depends(get_todo_repository)):
        return await repository.all()

В тестах достаточно собрать приложение с другими репозиториями:
    app = create_app(TodoRepositoryForMemory())
"""

from fastapi import Request

from ..entities import Todo
from ..repositories import LabelRepository, TodoRepository


def get_todo_repository(request: Request) -> TodoRepository[Todo]:
    """Dependency для репозитория задач (TodoEntity или Todo - оба подходят как Todo)."""
    return request.app.state.todo_repository


def get_label_repository(request: Request) -> LabelRepository:
    """Dependency для репозитория меток."""
    return request.app.state.label_repository
