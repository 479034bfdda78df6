"""Label model."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class LabelModel(Base):
    """Label model. Имя метки уникально во всей базе."""

    __tablename__ = "labels"
    # AUTOINCREMENT: SQLite иначе отдаёт id удалённой метки новой,
    # и висячие связи в todo_labels начинают указывать на неё
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)

    def __repr__(self) -> str:
        return f"<LabelModel(id={self.id}, name='{self.name}')>"
