import logging

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool, StaticPool

from api.deps import TraceLoggerAdapter, get_people_client
from api.main import app
from database.core import enable_sqlite_foreign_keys, get_db
from database.models import Base
from services.people import Person
from utils.exceptions import PersonNotFoundError
from utils.passport import format_passport

# Use in-memory SQLite for testing
TEST_DB_URL = "sqlite+aiosqlite:///:memory:"

PEOPLE = {
    (4012, 345678): Person(name="Петр", surname="Петров", patronymic="Петрович",
                           address="г. Санкт-Петербург, пр. Невский, д. 10"),
    (1234, 567890): Person(name="Олег", surname="Новиков",
                           address="г. Ростов-на-Дону, ул. Советская, д. 12"),
    (4321, 123456): Person(name="Иван", surname="Иванов", patronymic="Иванович",
                           address="г. Москва, ул. Тверская, д. 5"),
}


class FakePeopleClient:
    """Сервис people без сети"""

    def __init__(self, people=None):
        self.people = dict(PEOPLE if people is None else people)
        self.calls = []

    async def lookup(self, passport_serie: int, passport_number: int, log=None) -> Person:
        self.calls.append((passport_serie, passport_number))
        try:
            return self.people[(passport_serie, passport_number)]
        except KeyError:
            raise PersonNotFoundError(f"Person with passport {format_passport(passport_serie, passport_number)} not found")


@pytest.fixture
def people_client():
    return FakePeopleClient()


@pytest.fixture
def log():
    return TraceLoggerAdapter(logging.getLogger("time_tracker.tests"), {"trace_id": "test"})


@pytest_asyncio.fixture(scope="function")
async def db_session():
    engine = create_async_engine(TEST_DB_URL, echo=False, poolclass=StaticPool)
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    AsyncSessionLocal = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False
    )

    async with AsyncSessionLocal() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def db_path(tmp_path):
    """Файловая БД: TestClient ходит в неё из своего event loop"""
    path = tmp_path / "time_tracker_test.db"
    sync_engine = create_engine(f"sqlite:///{path}")
    Base.metadata.create_all(sync_engine)
    sync_engine.dispose()
    return path


@pytest.fixture
def sync_db(db_path):
    """Синхронная сессия к той же БД для подготовки и проверки данных"""
    sync_engine = create_engine(f"sqlite:///{db_path}")
    SessionLocal = sessionmaker(bind=sync_engine, expire_on_commit=False)
    with SessionLocal() as session:
        yield session
    sync_engine.dispose()


@pytest.fixture
def client(db_path, people_client):
    """HTTP клиент для тестов"""
    engine = create_async_engine(f"sqlite+aiosqlite:///{db_path}", poolclass=NullPool)
    enable_sqlite_foreign_keys(engine)
    TestSessionLocal = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False
    )

    async def override_get_db():
        async with TestSessionLocal() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_people_client] = lambda: people_client
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
