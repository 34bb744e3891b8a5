#!/usr/bin/env python3
"""Создание таблиц users и sessions без alembic (для локального запуска)"""
import argparse
import asyncio
import sys
from pathlib import Path
sys.path.append(str(Path(__file__).parent.parent))

from config.settings import settings
from database.core import engine
from database.models import Base


async def create_database(drop: bool):
    async with engine.begin() as conn:
        if drop:
            await conn.run_sync(Base.metadata.drop_all)
            print("Таблицы удалены")
        await conn.run_sync(Base.metadata.create_all)
    print(f"База данных готова: {settings.DB_URL}")


async def main():
    parser = argparse.ArgumentParser(description="Create time tracker tables")
    parser.add_argument("--drop", action="store_true", help="удалить существующие таблицы перед созданием")
    args = parser.parse_args()
    try:
        await create_database(args.drop)
    finally:
        await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
