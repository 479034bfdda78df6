"""Тесты для in-memory репозитория задач."""

import asyncio
from concurrent.futures import ThreadPoolExecutor

import pytest

from todo_api.entities import CreateTodo, Todo, UpdateTodo
from todo_api.repositories import NotFoundError


@pytest.mark.asyncio
async def test_create_and_find(memory_repo):
    todo = await memory_repo.create(CreateTodo(text="buy milk"))

    assert todo == Todo(id=1, text="buy milk", completed=False)
    assert await memory_repo.find(1) == todo


@pytest.mark.asyncio
async def test_create_ignores_labels(memory_repo):
    """Test: метки в памяти не хранятся, у Todo нет поля labels."""
    todo = await memory_repo.create(CreateTodo(text="report", labels=[1, 2]))

    assert not hasattr(todo, "labels")


@pytest.mark.asyncio
async def test_find_not_found(memory_repo):
    with pytest.raises(NotFoundError) as exc_info:
        await memory_repo.find(42)

    assert exc_info.value.id == 42


@pytest.mark.asyncio
async def test_all(memory_repo):
    await memory_repo.create(CreateTodo(text="a"))
    await memory_repo.create(CreateTodo(text="b"))

    todos = await memory_repo.all()

    # Порядок не гарантирован
    assert {(todo.id, todo.text) for todo in todos} == {(1, "a"), (2, "b")}


@pytest.mark.asyncio
async def test_update_keeps_absent_fields(memory_repo):
    todo = await memory_repo.create(CreateTodo(text="buy milk"))

    updated = await memory_repo.update(todo.id, UpdateTodo(completed=True))

    assert updated == Todo(id=todo.id, text="buy milk", completed=True)
    assert await memory_repo.find(todo.id) == updated


@pytest.mark.asyncio
async def test_update_empty_payload_is_noop(memory_repo):
    todo = await memory_repo.create(CreateTodo(text="buy milk"))

    await memory_repo.update(todo.id, UpdateTodo())

    assert await memory_repo.find(todo.id) == todo


@pytest.mark.asyncio
async def test_update_not_found(memory_repo):
    with pytest.raises(NotFoundError):
        await memory_repo.update(1, UpdateTodo(text="nothing here"))


@pytest.mark.asyncio
async def test_returned_todo_is_a_copy(memory_repo):
    """Test: изменение возвращённого объекта не меняет хранилище."""
    todo = await memory_repo.create(CreateTodo(text="buy milk"))
    todo.text = "changed outside"

    assert (await memory_repo.find(1)).text == "buy milk"


@pytest.mark.asyncio
async def test_delete(memory_repo):
    todo = await memory_repo.create(CreateTodo(text="buy milk"))

    await memory_repo.delete(todo.id)

    with pytest.raises(NotFoundError):
        await memory_repo.find(todo.id)
    with pytest.raises(NotFoundError):
        await memory_repo.delete(todo.id)


@pytest.mark.asyncio
async def test_id_is_size_plus_one_after_delete(memory_repo):
    """Test: id = размер + 1, поэтому после удаления новый id может совпасть со старым."""
    await memory_repo.create(CreateTodo(text="a"))
    await memory_repo.create(CreateTodo(text="b"))
    await memory_repo.delete(1)

    todo = await memory_repo.create(CreateTodo(text="c"))

    assert todo.id == 2
    assert [t.text for t in await memory_repo.all()] == ["c"]


@pytest.mark.asyncio
async def test_concurrent_creates_get_distinct_ids(memory_repo):
    todos = await asyncio.gather(
        *(memory_repo.create(CreateTodo(text=f"todo {i}")) for i in range(20))
    )

    assert sorted(todo.id for todo in todos) == list(range(1, 21))


def test_reads_from_threads_alongside_writes(memory_repo):
    """Test: all() из других потоков не падает, пока словарь растёт."""

    def write(start: int) -> None:
        for i in range(start, start + 50):
            asyncio.run(memory_repo.create(CreateTodo(text=f"todo {i}")))

    def read() -> list[int]:
        sizes = []
        for _ in range(50):
            todos = asyncio.run(memory_repo.all())
            assert all(isinstance(todo, Todo) for todo in todos)
            sizes.append(len(todos))
        return sizes

    with ThreadPoolExecutor(max_workers=4) as pool:
        writers = [pool.submit(write, 0), pool.submit(write, 50)]
        readers = [pool.submit(read), pool.submit(read)]
        for future in writers + readers:
            future.result()

    assert len(asyncio.run(memory_repo.all())) == 100
