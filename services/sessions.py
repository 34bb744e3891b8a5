"""
Жизненный цикл рабочих сессий для пары (пользователь, задача)

Состояния: открыта (есть сессия без end) и закрыта. Старт и стоп
выполняются одной условной записью, без чтения перед ней.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from database import crud
from database.models import WorkSession
from services.users import get_user
from utils.durations import TaskDuration, aggregate
from utils.exceptions import NotFoundError
from utils.timeutil import now_server


@dataclass(frozen=True)
class Window:
    after: Optional[datetime] = None
    before: Optional[datetime] = None


async def start_session(db: AsyncSession, user_id: int, task_id: int, log: logging.LoggerAdapter) -> WorkSession:
    await get_user(db, user_id, log)

    log.debug(f"insert session user={user_id} task={task_id}")
    work_session = await crud.insert_session(db, user_id, task_id, now_server())
    log.info(f"session started id={work_session.id} user={user_id} task={task_id}")
    return work_session


async def stop_session(db: AsyncSession, user_id: int, task_id: int, log: logging.LoggerAdapter) -> WorkSession:
    log.debug(f"close open session user={user_id} task={task_id}")
    session_id = await crud.close_open_session(db, user_id, task_id, now_server())
    if session_id is None:
        raise NotFoundError("Session not found")

    work_session = await crud.get_session(db, session_id)
    log.info(f"session stopped id={session_id} user={user_id} task={task_id}")
    return work_session


async def last_session(db: AsyncSession, user_id: int, task_id: int, log: logging.LoggerAdapter) -> WorkSession:
    log.debug(f"last session user={user_id} task={task_id}")
    work_session = await crud.last_session_by_task_and_user(db, task_id, user_id)
    if work_session is None:
        raise NotFoundError("Session not found")
    return work_session


async def find_sessions(db: AsyncSession, user_id: int, window: Window, log: logging.LoggerAdapter) -> List[WorkSession]:
    await get_user(db, user_id, log)

    log.debug(f"find sessions user={user_id} after={window.after} before={window.before}")
    sessions = await crud.find_sessions_by_user(db, user_id, window.after, window.before)
    log.debug(f"sessions found: {len(sessions)}")
    return sessions


async def user_stats(
    db: AsyncSession,
    user_id: int,
    window: Window,
    log: logging.LoggerAdapter,
    now: Optional[datetime] = None,
) -> List[TaskDuration]:
    sessions = await find_sessions(db, user_id, window, log)
    return aggregate(sessions, after=window.after, before=window.before, now=now)
