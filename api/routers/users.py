import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps import MAX_ID, UserId, get_logger, get_people_client, get_window
from api.schemas.session import TaskStat
from api.schemas.user import User, UserCreate, UserUpdate
from config.settings import settings
from database.core import get_db
from database.crud import Pagination, UserFilter
from services import sessions as session_service
from services import users as user_service
from services.people import PeopleClient
from services.sessions import Window
from utils.passport import MAX_NUMBER, MAX_SERIE

router = APIRouter(prefix="/users", tags=["users"])

NOT_BLANK = r"\S"


@router.get("", response_model=List[User])
async def find_users(
    page: int = Query(1, ge=1, le=MAX_ID, description="Номер страницы"),
    page_size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE, alias="pageSize"),
    name: Optional[str] = Query(None, pattern=NOT_BLANK),
    surname: Optional[str] = Query(None, pattern=NOT_BLANK),
    patronymic: Optional[str] = Query(None, pattern=NOT_BLANK),
    address: Optional[str] = Query(None, pattern=NOT_BLANK),
    passport_serie: Optional[int] = Query(None, ge=0, le=MAX_SERIE, alias="passportSerie"),
    passport_number: Optional[int] = Query(None, ge=0, le=MAX_NUMBER, alias="passportNumber"),
    db: AsyncSession = Depends(get_db),
    log: logging.LoggerAdapter = Depends(get_logger),
):
    """Найти пользователей по фильтрам с пагинацией"""
    user_filter = UserFilter(
        name=name,
        surname=surname,
        patronymic=patronymic,
        passport_serie=passport_serie,
        passport_number=passport_number,
        address=address,
    )
    return await user_service.find_users(db, user_filter, Pagination(page=page, page_size=page_size), log)


@router.post("", response_model=User, status_code=status.HTTP_201_CREATED)
async def create_user(
    user_data: UserCreate,
    db: AsyncSession = Depends(get_db),
    people: PeopleClient = Depends(get_people_client),
    log: logging.LoggerAdapter = Depends(get_logger),
):
    """Создать пользователя по серии и номеру паспорта.

    Имя и адрес берутся из сервиса people.
    """
    passport_serie, passport_number = user_data.passport()
    return await user_service.create_user(db, people, passport_serie, passport_number, log)


@router.get("/{user_id}", response_model=User)
async def get_user(
    user_id: UserId,
    db: AsyncSession = Depends(get_db),
    log: logging.LoggerAdapter = Depends(get_logger),
):
    return await user_service.get_user(db, user_id, log)


@router.put("/{user_id}", response_model=User)
async def update_user(
    user_id: UserId,
    user_data: UserUpdate,
    db: AsyncSession = Depends(get_db),
    log: logging.LoggerAdapter = Depends(get_logger),
):
    """Обновить переданные поля пользователя"""
    return await user_service.update_user(db, user_id, user_data.values(), log)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: UserId,
    db: AsyncSession = Depends(get_db),
    log: logging.LoggerAdapter = Depends(get_logger),
):
    """Удалить пользователя вместе с его сессиями"""
    await user_service.delete_user(db, user_id, log)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{user_id}/stats", response_model=List[TaskStat])
async def user_stats(
    user_id: UserId,
    window: Window = Depends(get_window),
    db: AsyncSession = Depends(get_db),
    log: logging.LoggerAdapter = Depends(get_logger),
):
    """Суммарное время по задачам в окне [after, before], по возрастанию"""
    stats = await session_service.user_stats(db, user_id, window, log)
    return [TaskStat.from_duration(item) for item in stats]
