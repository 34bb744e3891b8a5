from datetime import datetime, timezone
from typing import Optional

from utils.exceptions import BadRequestError

# Формат из первой версии API: 01-02-2006 15:04 UTC
LEGACY_TIME_FORMAT = "%m-%d-%Y %H:%M %Z"


def now_server() -> datetime:
    """Получить текущее время сервера без микросекунд (UTC)"""
    return datetime.now(timezone.utc).replace(microsecond=0)


def as_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """Привести дату к UTC; наивные даты (SQLite) считаются UTC"""
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def parse_time_param(name: str, value: Optional[str]) -> Optional[datetime]:
    """Разобрать дату из query-параметра: ISO-8601 или 'MM-DD-YYYY HH:MM UTC'"""
    if value is None:
        return None
    raw = value.strip().strip("'\"")
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    try:
        return as_utc(datetime.fromisoformat(raw))
    except ValueError:
        pass
    try:
        return as_utc(datetime.strptime(raw, LEGACY_TIME_FORMAT))
    except ValueError:
        raise BadRequestError(f"invalid {name}: expected ISO-8601 or MM-DD-YYYY HH:MM UTC", details={name: value})
