"""Todo-Label junction table."""

from sqlalchemy import Column, ForeignKey, Integer, Table

from .base import Base

# Many-to-many junction table for todos and labels.
# label_id намеренно без ForeignKey: удаление метки не трогает связи,
# а LEFT JOIN на labels для висячей связи даёт NULL в колонках метки.
todo_labels = Table(
    "todo_labels",
    Base.metadata,
    Column("todo_id", Integer, ForeignKey("todos.id"), primary_key=True),
    Column("label_id", Integer, primary_key=True),
)
