"""Database engine and session factory."""

from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from .config import settings


def create_engine(database_url: str, echo: bool = False, pool_size: int = 5) -> AsyncEngine:
    """
    Создать async engine для заданного URL.

    SQLite требует StaticPool (одно соединение на процесс),
    для PostgreSQL используется обычный пул соединений -
    каждая операция репозитория берёт соединение из пула на своё время.
    """
    if "sqlite" in database_url:
        return create_async_engine(
            database_url,
            echo=echo,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    return create_async_engine(
        database_url,
        echo=echo,
        pool_size=pool_size,
        pool_pre_ping=True,
    )


def create_session_factory(bind: AsyncEngine) -> async_sessionmaker:
    """Create a session factory for repositories bound to ``bind``."""
    return async_sessionmaker(
        bind,
        expire_on_commit=False,
        autoflush=False,
    )


engine = create_engine(
    settings.DATABASE_URL,
    echo=settings.DATABASE_ECHO,
    pool_size=settings.DATABASE_POOL_SIZE,
)

AsyncSessionLocal = create_session_factory(engine)


async def init_db(bind: AsyncEngine = engine) -> None:
    """Initialize database (create all tables)."""
    from ..models import Base

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_db(bind: AsyncEngine = engine) -> None:
    """Drop all tables (use with caution!)."""
    from ..models import Base

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
