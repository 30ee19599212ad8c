"""
Priority-Weighted Study Time Allocator.
Splits a daily minute budget across subjects in proportion to priority weight.

Rounding is half-away-from-zero per subject with no remainder pass, so a
day's total may drift from the budget by up to one minute per subject.
"""
from __future__ import annotations

import logging
import math
from datetime import date, datetime, timedelta
from numbers import Real
from typing import Sequence

from planner.errors import EmptyInputError, InvalidRangeError
from planner.schemas import ScheduledTask, Subject

logger = logging.getLogger(__name__)

MAX_HOURS_PER_DAY = 12
MIN_DAYS = 1
MAX_DAYS = 30
VALID_PRIORITIES = (1, 2, 3)


def subject_weight(priority: int) -> int:
    """High (1) → 3, medium (2) → 2, low (3) → 1."""
    return 4 - priority


def round_half_away(value: float) -> int:
    if value < 0:
        return -math.floor(-value + 0.5)
    return math.floor(value + 0.5)


def _validate(subjects: Sequence[Subject], hours_per_day: float, num_days: int) -> None:
    if not subjects:
        raise EmptyInputError("Cannot allocate study time with zero subjects")

    if isinstance(hours_per_day, bool) or not isinstance(hours_per_day, Real):
        raise InvalidRangeError(f"hours_per_day must be a number, got {hours_per_day!r}")
    # NaN fails both comparisons
    if not (0 < hours_per_day <= MAX_HOURS_PER_DAY):
        raise InvalidRangeError(
            f"hours_per_day must be in (0, {MAX_HOURS_PER_DAY}], got {hours_per_day}"
        )

    if isinstance(num_days, bool) or not isinstance(num_days, int):
        raise InvalidRangeError(f"num_days must be an integer, got {num_days!r}")
    if not (MIN_DAYS <= num_days <= MAX_DAYS):
        raise InvalidRangeError(f"num_days must be in [{MIN_DAYS}, {MAX_DAYS}], got {num_days}")


def allocate(
    subjects: Sequence[Subject],
    hours_per_day: float,
    num_days: int,
    start_date: date,
) -> list[ScheduledTask]:
    """
    Build day-by-day study tasks, day order first, then input subject order.
    Subjects with a priority outside 1-3 are left out of both the weight sum
    and the output. All-or-nothing: raises before producing any task.
    """
    _validate(subjects, hours_per_day, num_days)
    if isinstance(start_date, datetime):
        start_date = start_date.date()

    weighted = []
    for subject in subjects:
        if subject.priority not in VALID_PRIORITIES:
            logger.warning(
                f"Skipping subject {subject.id} ({subject.name!r}): invalid priority {subject.priority}"
            )
            continue
        weighted.append((subject, subject_weight(subject.priority)))

    total_weight = sum(w for _, w in weighted)
    if total_weight <= 0:
        raise EmptyInputError("No subject has a valid priority (expected 1, 2 or 3)")

    minutes_per_day = round_half_away(hours_per_day * 60)

    # Shares are identical every day, so compute them once.
    daily_shares = []
    for subject, weight in weighted:
        duration = round_half_away(weight / total_weight * minutes_per_day)
        if duration > 0:
            daily_shares.append((subject, duration))

    tasks = []
    for day_offset in range(num_days):
        day = start_date + timedelta(days=day_offset)
        for subject, duration in daily_shares:
            tasks.append(ScheduledTask(
                date=day,
                task=f"Study {subject.name}",
                duration=duration,
                subject_id=subject.id,
            ))

    logger.debug(
        f"Allocated {len(tasks)} tasks over {num_days} day(s): "
        f"{minutes_per_day} min/day across {len(weighted)} subject(s), total weight {total_weight}"
    )
    return tasks
