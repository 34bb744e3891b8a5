"""
Подсчёт времени по задачам

Сессии группируются по задаче, каждая обрезается окном [after, before],
открытые сессии считаются до before или до текущего момента.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta
from itertools import groupby
from typing import Iterable, List, Optional, Protocol

from utils.timeutil import as_utc, now_server

ZERO = timedelta(0)


class SessionLike(Protocol):
    task_id: int
    begin: datetime
    end: Optional[datetime]


@dataclass(frozen=True)
class TaskDuration:
    task: int
    duration: timedelta

    @property
    def seconds(self) -> int:
        return int(self.duration.total_seconds())

    @property
    def formatted(self) -> str:
        return format_duration(self.duration)


def effective_interval(
    session: SessionLike,
    after: Optional[datetime],
    before: Optional[datetime],
    now: datetime,
) -> tuple[datetime, datetime]:
    """Интервал сессии внутри окна"""
    begin = as_utc(session.begin)
    if after is not None and after > begin:
        begin = after

    end = as_utc(session.end)
    if end is None or (before is not None and end > before):
        end = before if before is not None else now

    return begin, end


def session_duration(
    session: SessionLike,
    after: Optional[datetime] = None,
    before: Optional[datetime] = None,
    now: Optional[datetime] = None,
) -> timedelta:
    """Вклад одной сессии; интервал вне окна даёт ноль, а не отрицательное время"""
    begin, end = effective_interval(session, as_utc(after), as_utc(before), as_utc(now) or now_server())
    return max(end - begin, ZERO)


def aggregate(
    sessions: Iterable[SessionLike],
    after: Optional[datetime] = None,
    before: Optional[datetime] = None,
    now: Optional[datetime] = None,
) -> List[TaskDuration]:
    """Суммарное время по каждой задаче.

    Результат отсортирован по возрастанию длительности, при равенстве по id задачи.
    """
    now = as_utc(now) or now_server()
    after, before = as_utc(after), as_utc(before)

    by_task = sorted(sessions, key=lambda s: s.task_id)
    totals = [
        TaskDuration(
            task=task,
            duration=sum((session_duration(s, after, before, now) for s in group), ZERO),
        )
        for task, group in groupby(by_task, key=lambda s: s.task_id)
    ]

    totals.sort(key=lambda t: (t.duration, t.task))
    return totals


def format_duration(value: timedelta) -> str:
    """Формат 'HhMMmSSs': 0h45m00s, 26h03m07s. Доли секунды отбрасываются"""
    total = int(value.total_seconds())
    sign = "-" if total < 0 else ""
    hours, rest = divmod(abs(total), 3600)
    minutes, seconds = divmod(rest, 60)
    return f"{sign}{hours}h{minutes:02d}m{seconds:02d}s"
