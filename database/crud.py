from dataclasses import dataclass, fields
from datetime import datetime
from typing import Optional, List

from sqlalchemy import select, update, delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from database.models import User, WorkSession
from utils.exceptions import ConflictError, NotFoundError


@dataclass
class UserFilter:
    """Фильтр пользователей: незаданные поля не ограничивают выборку"""
    name: Optional[str] = None
    surname: Optional[str] = None
    patronymic: Optional[str] = None
    passport_serie: Optional[int] = None
    passport_number: Optional[int] = None
    address: Optional[str] = None

    def conditions(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not None}


@dataclass
class Pagination:
    page: int = 1
    page_size: int = 10

    @property
    def offset(self) -> int:
        return self.page_size * (self.page - 1)

    @property
    def limit(self) -> int:
        return self.page_size


def _is_foreign_key_violation(error: IntegrityError) -> bool:
    # SQLite: "FOREIGN KEY constraint failed", PostgreSQL: "violates foreign key constraint"
    return "foreign key" in str(error.orig).lower()


# Users

async def get_user(session: AsyncSession, user_id: int) -> Optional[User]:
    return await session.get(User, user_id)


async def find_users(session: AsyncSession, user_filter: UserFilter, pagination: Pagination) -> List[User]:
    stmt = select(User).filter_by(**user_filter.conditions())
    stmt = stmt.order_by(User.created_at, User.id).offset(pagination.offset).limit(pagination.limit)
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def insert_user(
    session: AsyncSession,
    name: str,
    surname: str,
    passport_serie: int,
    passport_number: int,
    address: str,
    patronymic: Optional[str] = None,
) -> User:
    user = User(
        name=name,
        surname=surname,
        patronymic=patronymic,
        passport_serie=passport_serie,
        passport_number=passport_number,
        address=address,
    )
    session.add(user)
    try:
        await session.commit()
    except IntegrityError as e:
        await session.rollback()
        raise ConflictError("User already exists") from e
    await session.refresh(user)
    return user


async def update_user(session: AsyncSession, user: User, values: dict) -> User:
    for key, value in values.items():
        setattr(user, key, value)
    try:
        await session.commit()
    except IntegrityError as e:
        await session.rollback()
        raise ConflictError("User already exists") from e
    await session.refresh(user)
    return user


async def delete_user(session: AsyncSession, user: User) -> None:
    # Сессии удаляются явно: на SQLite без PRAGMA каскад не сработает
    await session.execute(delete(WorkSession).where(WorkSession.user_id == user.id))
    await session.delete(user)
    await session.commit()


# Sessions

async def get_session(session: AsyncSession, session_id: int) -> Optional[WorkSession]:
    return await session.get(WorkSession, session_id, populate_existing=True)


async def last_session_by_task_and_user(session: AsyncSession, task_id: int, user_id: int) -> Optional[WorkSession]:
    stmt = (
        select(WorkSession)
        .where(WorkSession.task_id == task_id, WorkSession.user_id == user_id)
        .order_by(WorkSession.begin.desc(), WorkSession.id.desc())
        .limit(1)
    )
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


async def insert_session(session: AsyncSession, user_id: int, task_id: int, begin: datetime) -> WorkSession:
    """Открыть сессию. Уникальный частичный индекс не даст открыть вторую"""
    work_session = WorkSession(user_id=user_id, task_id=task_id, begin=begin)
    session.add(work_session)
    try:
        await session.commit()
    except IntegrityError as e:
        await session.rollback()
        # Пользователя могли удалить между проверкой и вставкой
        if _is_foreign_key_violation(e):
            raise NotFoundError("User not found") from e
        raise ConflictError("Session already exists") from e
    await session.refresh(work_session)
    return work_session


async def close_open_session(session: AsyncSession, user_id: int, task_id: int, end: datetime) -> Optional[int]:
    """Закрыть открытую сессию одним UPDATE. Возвращает id или None"""
    stmt = (
        update(WorkSession)
        .where(
            WorkSession.user_id == user_id,
            WorkSession.task_id == task_id,
            WorkSession.end.is_(None),
        )
        .values(end=end)
        .returning(WorkSession.id)
        .execution_options(synchronize_session=False)
    )
    result = await session.execute(stmt)
    session_id = result.scalar_one_or_none()
    await session.commit()
    return session_id


async def find_sessions_by_user(
    session: AsyncSession,
    user_id: int,
    after: Optional[datetime] = None,
    before: Optional[datetime] = None,
) -> List[WorkSession]:
    """Сессии пользователя, пересекающиеся с окном [after, before]"""
    stmt = select(WorkSession).where(WorkSession.user_id == user_id)
    if before is not None:
        stmt = stmt.where(WorkSession.begin < before)
    if after is not None:
        stmt = stmt.where((WorkSession.end.is_(None)) | (WorkSession.end > after))
    stmt = stmt.order_by(WorkSession.begin, WorkSession.id)
    result = await session.execute(stmt)
    return list(result.scalars().all())
