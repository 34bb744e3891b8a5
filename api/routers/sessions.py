"""
API роутер для рабочих сессий (учёт времени)
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps import TaskId, UserId, get_logger, get_window
from api.schemas.session import WorkSession
from database.core import get_db
from services import sessions as session_service
from services.sessions import Window

router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.get("/{user_id}", response_model=List[WorkSession])
async def find_sessions(
    user_id: UserId,
    window: Window = Depends(get_window),
    db: AsyncSession = Depends(get_db),
    log: logging.LoggerAdapter = Depends(get_logger),
):
    """Сессии пользователя, пересекающиеся с окном [after, before]"""
    return await session_service.find_sessions(db, user_id, window, log)


@router.get("/{user_id}/{task_id}", response_model=WorkSession)
async def last_session(
    user_id: UserId,
    task_id: TaskId,
    db: AsyncSession = Depends(get_db),
    log: logging.LoggerAdapter = Depends(get_logger),
):
    """Последняя сессия по задаче"""
    return await session_service.last_session(db, user_id, task_id, log)


@router.post("/{user_id}/{task_id}", response_model=WorkSession, status_code=status.HTTP_201_CREATED)
async def start_session(
    user_id: UserId,
    task_id: TaskId,
    db: AsyncSession = Depends(get_db),
    log: logging.LoggerAdapter = Depends(get_logger),
):
    """Начать сессию; 409 если по задаче уже есть открытая"""
    return await session_service.start_session(db, user_id, task_id, log)


@router.delete("/{user_id}/{task_id}", response_model=WorkSession)
async def stop_session(
    user_id: UserId,
    task_id: TaskId,
    db: AsyncSession = Depends(get_db),
    log: logging.LoggerAdapter = Depends(get_logger),
):
    """Завершить открытую сессию; 404 если открытой нет"""
    return await session_service.stop_session(db, user_id, task_id, log)
