from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from api.schemas.user import CamelModel
from utils.durations import TaskDuration
from utils.timeutil import as_utc


class WorkSession(CamelModel):
    id: int
    user_id: int
    task_id: int
    begin: datetime
    end: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    @field_validator("begin", "end", "created_at", "updated_at")
    @classmethod
    def to_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return as_utc(v)


class TaskStat(BaseModel):
    task: int
    time: str = Field(..., description="Суммарное время в формате 1h05m09s")
    seconds: int

    @classmethod
    def from_duration(cls, item: TaskDuration) -> "TaskStat":
        return cls(task=item.task, time=item.formatted, seconds=item.seconds)
