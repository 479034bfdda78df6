"""
Pytest fixtures для тестов.

Предоставляет:
- test_engine / session_factory: изолированная SQLite in-memory БД для каждого теста
- todo_repo / label_repo: репозитории поверх этой БД
- memory_repo: in-memory репозиторий задач
- test_client / memory_client: HTTP клиенты для API поверх БД и поверх памяти
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from todo_api.core.database import create_engine, create_session_factory, drop_db, init_db
from todo_api.main import create_app
from todo_api.repositories import LabelRepositoryForDb, TodoRepositoryForDb, TodoRepositoryForMemory

# Test database URL (SQLite in-memory)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def test_engine():
    """
    Async engine для тестовой БД (SQLite in-memory, StaticPool).

    Таблицы создаются заново для каждого теста.
    """
    engine = create_engine(TEST_DATABASE_URL)
    await init_db(engine)

    yield engine

    await drop_db(engine)
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return create_session_factory(test_engine)


@pytest.fixture
def todo_repo(session_factory) -> TodoRepositoryForDb:
    return TodoRepositoryForDb(session_factory)


@pytest.fixture
def label_repo(session_factory) -> LabelRepositoryForDb:
    return LabelRepositoryForDb(session_factory)


@pytest.fixture
def memory_repo() -> TodoRepositoryForMemory:
    return TodoRepositoryForMemory()


@pytest_asyncio.fixture
async def test_client(todo_repo, label_repo):
    """HTTP клиент для API поверх тестовой БД."""
    app = create_app(todo_repo, label_repo)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def memory_client(memory_repo):
    """HTTP клиент для API поверх in-memory хранилища (без /labels)."""
    app = create_app(memory_repo)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
