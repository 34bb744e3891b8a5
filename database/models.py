from datetime import datetime
from typing import Optional

from sqlalchemy import Integer, String, DateTime, ForeignKey, Index, UniqueConstraint, func, text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

class Base(DeclarativeBase):
    pass


class User(Base):
    __tablename__ = "users"
    __table_args__ = (
        UniqueConstraint("passport_serie", "passport_number", name="uq_users_passport"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(100))
    surname: Mapped[str] = mapped_column(String(100))
    patronymic: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    passport_serie: Mapped[int] = mapped_column(Integer)
    passport_number: Mapped[int] = mapped_column(Integer)
    address: Mapped[str] = mapped_column(String(255))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), onupdate=func.now(), server_default=func.now())

    sessions: Mapped[list["WorkSession"]] = relationship(
        "WorkSession",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, passport={self.passport_serie} {self.passport_number})>"


class WorkSession(Base):
    """Интервал работы пользователя над задачей; открыт, пока end пуст"""
    __tablename__ = "sessions"
    __table_args__ = (
        # Не больше одной открытой сессии на пару (user, task)
        Index(
            "uq_sessions_open_task_user",
            "user_id",
            "task_id",
            unique=True,
            sqlite_where=text("sess_end IS NULL"),
            postgresql_where=text("sess_end IS NULL"),
        ),
        Index("ix_sessions_task_user_begin", "task_id", "user_id", "sess_begin"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"))
    task_id: Mapped[int] = mapped_column(Integer)
    begin: Mapped[datetime] = mapped_column("sess_begin", DateTime(timezone=True))
    end: Mapped[Optional[datetime]] = mapped_column("sess_end", DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), onupdate=func.now(), server_default=func.now())

    user: Mapped["User"] = relationship("User", back_populates="sessions")

    @property
    def is_open(self) -> bool:
        return self.end is None

    def __repr__(self) -> str:
        return f"<WorkSession(id={self.id}, user={self.user_id}, task={self.task_id}, begin={self.begin})>"
