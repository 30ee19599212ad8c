"""Schedule schemas."""

import datetime as dt
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_SUBJECT_COLOR = "#6366f1"


class Subject(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    priority: int  # 1 = high, 2 = medium, 3 = low
    color: str = DEFAULT_SUBJECT_COLOR


class ScheduledTask(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: dt.date
    task: str
    duration: int  # whole minutes
    subject_id: str


class ScheduledTaskRecord(ScheduledTask):
    """A scheduled task as handed to the store: completable, timestamped."""

    completed: bool = False
    created_at: dt.datetime


# ─── API ─────────────────────────────────────────────────────

class GenerateScheduleRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    available_hours_per_day: float = Field(alias="availableHoursPerDay")
    days: int
    start_date: Optional[dt.date] = Field(default=None, alias="startDate")
    subjects: List[Subject]


class GenerateScheduleResponse(BaseModel):
    schedules: List[ScheduledTask]
