"""
Реестр пользователей: поиск, создание по паспорту, изменение, удаление
"""
import logging
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from database import crud
from database.crud import Pagination, UserFilter
from database.models import User
from services.people import PeopleClient
from utils.exceptions import NotFoundError


async def find_users(
    db: AsyncSession,
    user_filter: UserFilter,
    pagination: Pagination,
    log: logging.LoggerAdapter,
) -> List[User]:
    log.debug(f"find users filter={user_filter.conditions()} offset={pagination.offset} limit={pagination.limit}")
    users = await crud.find_users(db, user_filter, pagination)
    log.debug(f"users found: {len(users)}")
    return users


async def get_user(db: AsyncSession, user_id: int, log: logging.LoggerAdapter) -> User:
    log.debug(f"get user {user_id}")
    user = await crud.get_user(db, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


async def create_user(
    db: AsyncSession,
    people: PeopleClient,
    passport_serie: int,
    passport_number: int,
    log: logging.LoggerAdapter,
) -> User:
    """Создать пользователя по данным сервиса people.

    Дубликат паспорта ловится уникальным ограничением при вставке.
    """
    person = await people.lookup(passport_serie, passport_number, log)

    user = await crud.insert_user(
        db,
        name=person.name,
        surname=person.surname,
        patronymic=person.patronymic,
        passport_serie=passport_serie,
        passport_number=passport_number,
        address=person.address,
    )
    log.info(f"user created id={user.id}")
    return user


async def update_user(db: AsyncSession, user_id: int, values: dict, log: logging.LoggerAdapter) -> User:
    user = await get_user(db, user_id, log)
    log.debug(f"update user {user_id} fields={sorted(values)}")
    user = await crud.update_user(db, user, values)
    log.info(f"user updated id={user.id}")
    return user


async def delete_user(db: AsyncSession, user_id: int, log: logging.LoggerAdapter) -> None:
    user = await get_user(db, user_id, log)
    await crud.delete_user(db, user)
    log.info(f"user deleted id={user_id}")
