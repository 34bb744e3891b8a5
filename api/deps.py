"""
Общие зависимости роутеров
"""
import logging
from typing import Annotated, Optional

from fastapi import Path, Query, Request

from config.settings import settings
from services.people import PeopleClient
from services.sessions import Window
from utils.exceptions import BadRequestError
from utils.timeutil import now_server, parse_time_param


class TraceLoggerAdapter(logging.LoggerAdapter):
    """Добавляет trace id запроса в каждое сообщение"""

    def process(self, msg, kwargs):
        return f"[{self.extra['trace_id']}] {msg}", kwargs


def get_logger(request: Request) -> logging.LoggerAdapter:
    trace_id = getattr(request.state, "trace_id", "-")
    handler = getattr(request.scope.get("route"), "name", "unknown")
    return TraceLoggerAdapter(logging.getLogger(f"time_tracker.handlers.{handler}"), {"trace_id": trace_id})


def get_people_client() -> PeopleClient:
    return PeopleClient(settings.PEOPLE_SERVICE_URL, timeout=settings.PEOPLE_SERVICE_TIMEOUT)


def get_window(
    after: Optional[str] = Query(None, description="Начало окна (ISO-8601 или MM-DD-YYYY HH:MM UTC)"),
    before: Optional[str] = Query(None, description="Конец окна (ISO-8601 или MM-DD-YYYY HH:MM UTC)"),
) -> Window:
    """Окно [after, before]; before из будущего сдвигается на текущий момент"""
    after_dt = parse_time_param("after", after)
    before_dt = parse_time_param("before", before)

    if before_dt is not None:
        before_dt = min(before_dt, now_server())

    if after_dt is not None and before_dt is not None and after_dt > before_dt:
        raise BadRequestError("after must not be later than before", details={"after": after, "before": before})

    return Window(after=after_dt, before=before_dt)


# Идентификаторы в API 32-битные; большее число до БД не доходит
MAX_ID = 2 ** 31 - 1

UserId = Annotated[int, Path(ge=1, le=MAX_ID, description="ID пользователя")]
TaskId = Annotated[int, Path(ge=1, le=MAX_ID, description="ID задачи")]
