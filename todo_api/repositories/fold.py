"""Сборка вложенных сущностей из плоского результата JOIN."""

from collections.abc import Iterable
from typing import NamedTuple

from ..entities import Label, TodoEntity


class TodoWithLabelRow(NamedTuple):
    """
    Одна строка запроса todos LEFT JOIN todo_labels LEFT JOIN labels.

    Задача без меток даёт ровно одну строку с label_id = label_name = None.
    Строки SQLAlchemy (Row) с такими же колонками подходят без преобразования.
    """

    id: int
    text: str
    completed: bool
    label_id: int | None = None
    label_name: str | None = None


def fold_entities(rows: Iterable[TodoWithLabelRow]) -> list[TodoEntity]:
    """
    Свернуть плоские строки JOIN в список TodoEntity.

    Порядок задач - порядок первого появления id в строках,
    порядок меток внутри задачи - порядок строк.

    Пример:
        rows = [
            TodoWithLabelRow(1, "a", False, 10, "x"),
            TodoWithLabelRow(1, "a", False, 11, "y"),
            TodoWithLabelRow(2, "b", True),
        ]
        fold_entities(rows)
        # [TodoEntity(id=1, labels=[Label(10, "x"), Label(11, "y")]),
        #  TodoEntity(id=2, labels=[])]
    """
    # dict сохраняет порядок вставки - это и есть порядок первого появления
    entities: dict[int, TodoEntity] = {}

    for row in rows:
        entity = entities.get(row.id)
        if entity is None:
            entity = TodoEntity(id=row.id, text=row.text, completed=row.completed, labels=[])
            entities[row.id] = entity

        # NULL в колонках метки: у задачи нет меток,
        # либо связь указывает на уже удалённую метку
        if row.label_id is not None:
            entity.labels.append(Label(id=row.label_id, name=row.label_name))

    return list(entities.values())
