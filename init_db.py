"""
Скрипт для инициализации базы данных.

Создаёт таблицы todos, labels и todo_labels по DATABASE_URL.

Запуск:
    python init_db.py
    python init_db.py --drop   # сначала удалить все таблицы
"""

import asyncio
import sys

from todo_api.core.database import drop_db, engine, init_db


async def main(drop: bool = False):
    """Создать все таблицы."""
    if drop:
        print("Удаление таблиц...")
        await drop_db()
    print("Создание таблиц...")
    await init_db()
    await engine.dispose()
    print("✓ Таблицы созданы успешно!")


if __name__ == "__main__":
    asyncio.run(main(drop="--drop" in sys.argv[1:]))
