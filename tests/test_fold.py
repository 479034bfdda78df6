"""
Тесты для сборки TodoEntity из плоских строк JOIN.

Чистая функция - БД не нужна.
"""

from todo_api.entities import Label, TodoEntity
from todo_api.repositories import TodoWithLabelRow, fold_entities


class TestFoldEntities:
    """Тесты для fold_entities."""

    def test_labels_grouped_under_their_todo(self):
        rows = [
            TodoWithLabelRow(1, "a", False, 10, "x"),
            TodoWithLabelRow(1, "a", False, 11, "y"),
            TodoWithLabelRow(2, "b", True, None, None),
        ]

        assert fold_entities(rows) == [
            TodoEntity(
                id=1,
                text="a",
                completed=False,
                labels=[Label(id=10, name="x"), Label(id=11, name="y")],
            ),
            TodoEntity(id=2, text="b", completed=True, labels=[]),
        ]

    def test_empty_rows(self):
        assert fold_entities([]) == []

    def test_todo_without_labels(self):
        result = fold_entities([TodoWithLabelRow(5, "solo", False)])

        assert len(result) == 1
        assert result[0].id == 5
        assert result[0].labels == []

    def test_first_seen_todo_order_is_kept(self):
        """Порядок задач - порядок первого появления, даже если строки перемешаны."""
        rows = [
            TodoWithLabelRow(3, "c", False, 1, "one"),
            TodoWithLabelRow(1, "a", False, 2, "two"),
            TodoWithLabelRow(3, "c", False, 2, "two"),
            TodoWithLabelRow(2, "b", False),
        ]

        result = fold_entities(rows)

        assert [todo.id for todo in result] == [3, 1, 2]
        assert [label.id for label in result[0].labels] == [1, 2]
        assert [label.id for label in result[1].labels] == [2]

    def test_null_label_row_after_labeled_row_adds_nothing(self):
        """Висячая связь (метка удалена) даёт строку с NULL - метку не добавляем."""
        rows = [
            TodoWithLabelRow(1, "a", False, 10, "x"),
            TodoWithLabelRow(1, "a", False, None, None),
        ]

        result = fold_entities(rows)

        assert result[0].labels == [Label(id=10, name="x")]

    def test_same_label_on_different_todos(self):
        rows = [
            TodoWithLabelRow(2, "b", False, 7, "shared"),
            TodoWithLabelRow(1, "a", True, 7, "shared"),
        ]

        result = fold_entities(rows)

        assert result[0].labels == result[1].labels == [Label(id=7, name="shared")]
        # Списки меток не должны быть общим объектом
        assert result[0].labels is not result[1].labels
