"""
Тесты жизненного цикла сессий на in-memory SQLite
"""
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import func, select

from database.models import User, WorkSession
from services import sessions as session_service
from services.sessions import Window
from utils.exceptions import ConflictError, NotFoundError
from utils.timeutil import as_utc


async def make_user(db, serie=4012, number=345678) -> int:
    user = User(name="Петр", surname="Петров", passport_serie=serie, passport_number=number, address="Невский, 10")
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user.id


async def open_sessions_count(db, user_id: int, task_id: int) -> int:
    result = await db.execute(
        select(func.count()).select_from(WorkSession).where(
            WorkSession.user_id == user_id,
            WorkSession.task_id == task_id,
            WorkSession.end.is_(None),
        )
    )
    return result.scalar_one()


@pytest.mark.asyncio
async def test_start_session(db_session, log):
    user_id = await make_user(db_session)

    work_session = await session_service.start_session(db_session, user_id, 7, log)

    assert work_session.id is not None
    assert work_session.user_id == user_id
    assert work_session.task_id == 7
    assert work_session.end is None
    assert work_session.is_open


@pytest.mark.asyncio
async def test_start_twice_conflicts(db_session, log):
    """Вторая открытая сессия по той же задаче запрещена"""
    user_id = await make_user(db_session)
    await session_service.start_session(db_session, user_id, 7, log)

    with pytest.raises(ConflictError):
        await session_service.start_session(db_session, user_id, 7, log)

    assert await open_sessions_count(db_session, user_id, 7) == 1


@pytest.mark.asyncio
async def test_different_tasks_open_independently(db_session, log):
    user_id = await make_user(db_session)

    await session_service.start_session(db_session, user_id, 1, log)
    await session_service.start_session(db_session, user_id, 2, log)

    assert await open_sessions_count(db_session, user_id, 1) == 1
    assert await open_sessions_count(db_session, user_id, 2) == 1


@pytest.mark.asyncio
async def test_start_unknown_user(db_session, log):
    with pytest.raises(NotFoundError):
        await session_service.start_session(db_session, 999, 7, log)


@pytest.mark.asyncio
async def test_stop_session(db_session, log):
    user_id = await make_user(db_session)
    started = await session_service.start_session(db_session, user_id, 7, log)

    stopped = await session_service.stop_session(db_session, user_id, 7, log)

    assert stopped.id == started.id
    assert stopped.end is not None
    assert as_utc(stopped.end) >= as_utc(stopped.begin)


@pytest.mark.asyncio
async def test_stop_twice_not_found(db_session, log):
    user_id = await make_user(db_session)
    await session_service.start_session(db_session, user_id, 7, log)
    await session_service.stop_session(db_session, user_id, 7, log)

    with pytest.raises(NotFoundError):
        await session_service.stop_session(db_session, user_id, 7, log)


@pytest.mark.asyncio
async def test_stop_without_session(db_session, log):
    user_id = await make_user(db_session)

    with pytest.raises(NotFoundError):
        await session_service.stop_session(db_session, user_id, 7, log)


@pytest.mark.asyncio
async def test_restart_after_stop(db_session, log):
    user_id = await make_user(db_session)
    first = await session_service.start_session(db_session, user_id, 7, log)
    await session_service.stop_session(db_session, user_id, 7, log)

    second = await session_service.start_session(db_session, user_id, 7, log)

    assert second.id != first.id
    assert await open_sessions_count(db_session, user_id, 7) == 1


@pytest.mark.asyncio
async def test_last_session(db_session, log):
    user_id = await make_user(db_session)
    base = datetime(2024, 3, 1, 10, 0, tzinfo=timezone.utc)
    db_session.add_all([
        WorkSession(user_id=user_id, task_id=7, begin=base, end=base + timedelta(minutes=30)),
        WorkSession(user_id=user_id, task_id=7, begin=base + timedelta(hours=1)),
        WorkSession(user_id=user_id, task_id=8, begin=base + timedelta(hours=2)),
    ])
    await db_session.commit()

    last = await session_service.last_session(db_session, user_id, 7, log)

    assert as_utc(last.begin) == base + timedelta(hours=1)
    assert last.end is None

    with pytest.raises(NotFoundError):
        await session_service.last_session(db_session, user_id, 9, log)


@pytest.mark.asyncio
async def test_find_sessions_in_window(db_session, log):
    user_id = await make_user(db_session)
    base = datetime(2024, 3, 1, 10, 0, tzinfo=timezone.utc)
    db_session.add_all([
        WorkSession(user_id=user_id, task_id=1, begin=base - timedelta(hours=2), end=base - timedelta(hours=1)),
        WorkSession(user_id=user_id, task_id=1, begin=base - timedelta(minutes=30), end=base + timedelta(minutes=30)),
        WorkSession(user_id=user_id, task_id=2, begin=base + timedelta(hours=1)),
        WorkSession(user_id=user_id, task_id=3, begin=base + timedelta(hours=5), end=base + timedelta(hours=6)),
    ])
    await db_session.commit()

    window = Window(after=base, before=base + timedelta(hours=3))
    sessions = await session_service.find_sessions(db_session, user_id, window, log)

    assert [(s.task_id, as_utc(s.begin)) for s in sessions] == [
        (1, base - timedelta(minutes=30)),
        (2, base + timedelta(hours=1)),
    ]

    all_sessions = await session_service.find_sessions(db_session, user_id, Window(), log)
    assert len(all_sessions) == 4


@pytest.mark.asyncio
async def test_user_stats(db_session, log):
    """10:00-10:30 и открытая с 11:00 по задаче 7"""
    user_id = await make_user(db_session)
    base = datetime(2024, 3, 1, 10, 0, tzinfo=timezone.utc)
    db_session.add_all([
        WorkSession(user_id=user_id, task_id=7, begin=base, end=base + timedelta(minutes=30)),
        WorkSession(user_id=user_id, task_id=7, begin=base + timedelta(hours=1)),
        WorkSession(user_id=user_id, task_id=3, begin=base, end=base + timedelta(minutes=10)),
    ])
    await db_session.commit()
    now = base + timedelta(hours=1, minutes=15)

    stats = await session_service.user_stats(db_session, user_id, Window(), log, now=now)
    assert [(s.task, s.duration) for s in stats] == [(3, timedelta(minutes=10)), (7, timedelta(minutes=45))]

    window = Window(before=base + timedelta(minutes=45))
    stats = await session_service.user_stats(db_session, user_id, window, log, now=now)
    assert [(s.task, s.duration) for s in stats] == [(3, timedelta(minutes=10)), (7, timedelta(minutes=30))]


@pytest.mark.asyncio
async def test_user_stats_unknown_user(db_session, log):
    with pytest.raises(NotFoundError):
        await session_service.user_stats(db_session, 404, Window(), log)
