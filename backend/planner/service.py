"""Caller-side planning flow: load subjects, allocate, optionally save."""
from __future__ import annotations

import logging
from collections import OrderedDict
from datetime import date, datetime, timezone
from typing import NamedTuple, Optional, Protocol, Sequence

from planner.allocator import allocate
from planner.schemas import ScheduledTask, ScheduledTaskRecord, Subject

logger = logging.getLogger(__name__)


class SubjectSource(Protocol):
    def get_subjects_for_user(self, user_id: str) -> list[Subject]:
        """Subjects in insertion/creation order."""
        ...


class ScheduleSink(Protocol):
    def insert_scheduled_tasks(self, user_id: str, records: list[ScheduledTaskRecord]) -> None:
        """Bulk insert. No upsert: saving twice stores the rows twice."""
        ...


def to_records(tasks: Sequence[ScheduledTask], created_at: datetime) -> list[ScheduledTaskRecord]:
    return [
        ScheduledTaskRecord(**task.model_dump(), completed=False, created_at=created_at)
        for task in tasks
    ]


def plan_for_user(
    user_id: str,
    source: SubjectSource,
    hours_per_day: float,
    num_days: int,
    start_date: date,
    sink: Optional[ScheduleSink] = None,
    now: Optional[datetime] = None,
) -> list[ScheduledTask]:
    """
    Allocate a schedule from the user's stored subjects.
    When a sink is given the tasks are saved as pending records; allocation
    errors propagate before anything is written.
    """
    subjects = source.get_subjects_for_user(user_id)
    tasks = allocate(subjects, hours_per_day, num_days, start_date)

    if sink is not None:
        created_at = now or datetime.now(timezone.utc)
        sink.insert_scheduled_tasks(user_id, to_records(tasks, created_at))
        logger.info(f"Saved {len(tasks)} scheduled tasks for user {user_id}")

    return tasks


def group_by_date(tasks: Sequence[ScheduledTask]) -> "OrderedDict[date, list[ScheduledTask]]":
    """Group tasks per calendar date, dates ascending, task order kept within a date."""
    grouped: dict[date, list[ScheduledTask]] = {}
    for task in tasks:
        grouped.setdefault(task.date, []).append(task)
    return OrderedDict(sorted(grouped.items()))


class DaySummary(NamedTuple):
    total_tasks: int
    completed_tasks: int
    total_minutes: int
    progress: float  # percent, 0-100


def summarize_day(records: Sequence[ScheduledTaskRecord], day: date) -> DaySummary:
    """Completion progress and planned minutes for one date."""
    todays = [r for r in records if r.date == day]
    completed = sum(1 for r in todays if r.completed)
    progress = completed / len(todays) * 100 if todays else 0.0
    return DaySummary(
        total_tasks=len(todays),
        completed_tasks=completed,
        total_minutes=sum(r.duration for r in todays),
        progress=progress,
    )
