"""API endpoints для работы с метками."""

from fastapi import APIRouter, Depends, Response, status

from ..entities import CreateLabel, Label
from ..repositories import LabelRepository
from .dependencies import get_label_repository
from .schemas import ErrorResponse

router = APIRouter(prefix="/labels", tags=["labels"])


@router.post(
    "",
    response_model=Label,
    status_code=status.HTTP_201_CREATED,
    summary="Создать метку",
    responses={
        201: {"description": "Метка создана"},
        400: {"model": ErrorResponse, "description": "Метка с таким именем уже существует"},
    },
)
async def create_label(
    payload: CreateLabel, repository: LabelRepository = Depends(get_label_repository)
) -> Label:
    """
    Создать метку.

    Пример запроса:
    ```json
    {
        "name": "shopping"
    }
    ```
    """
    return await repository.create(payload.name)


@router.get("", response_model=list[Label], summary="Получить все метки")
async def all_label(repository: LabelRepository = Depends(get_label_repository)) -> list[Label]:
    return await repository.all()


@router.delete(
    "/{id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Удалить метку",
    description="Удаляет только метку; задачи, где она была, просто перестают её показывать.",
    responses={404: {"model": ErrorResponse, "description": "Метка не найдена"}},
)
async def delete_label(
    id: int, repository: LabelRepository = Depends(get_label_repository)
) -> Response:
    await repository.delete(id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
