from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from planner.allocator import allocate
from planner.errors import InvalidRangeError
from planner.schemas import ScheduledTaskRecord, Subject
from planner.service import group_by_date, plan_for_user, summarize_day, to_records

NOW = datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)


class FakeSubjectSource:
    def __init__(self, subjects_by_user: dict[str, list[Subject]]):
        self.subjects_by_user = subjects_by_user
        self.lookups: list[str] = []

    def get_subjects_for_user(self, user_id: str) -> list[Subject]:
        self.lookups.append(user_id)
        return list(self.subjects_by_user.get(user_id, []))


class FakeScheduleSink:
    def __init__(self):
        self.rows: list[tuple[str, ScheduledTaskRecord]] = []

    def insert_scheduled_tasks(self, user_id: str, records: list[ScheduledTaskRecord]) -> None:
        self.rows.extend((user_id, record) for record in records)


def _source() -> FakeSubjectSource:
    return FakeSubjectSource({
        "u1": [
            Subject(id="m", name="Math", priority=1, color="#ef4444"),
            Subject(id="a", name="Art", priority=3),
        ],
    })


def test_plan_without_sink_only_allocates() -> None:
    source = _source()

    tasks = plan_for_user("u1", source, 3, 2, date(2024, 1, 1))

    assert source.lookups == ["u1"]
    assert [(t.date.isoformat(), t.task, t.duration) for t in tasks] == [
        ("2024-01-01", "Study Math", 135),
        ("2024-01-01", "Study Art", 45),
        ("2024-01-02", "Study Math", 135),
        ("2024-01-02", "Study Art", 45),
    ]


def test_plan_with_sink_saves_pending_records() -> None:
    sink = FakeScheduleSink()

    tasks = plan_for_user("u1", _source(), 3, 1, date(2024, 1, 1), sink=sink, now=NOW)

    assert [user for user, _ in sink.rows] == ["u1", "u1"]
    records = [record for _, record in sink.rows]
    assert all(not r.completed and r.created_at == NOW for r in records)
    assert [(r.subject_id, r.duration) for r in records] == [(t.subject_id, t.duration) for t in tasks]


def test_saving_twice_appends_rows() -> None:
    sink = FakeScheduleSink()

    plan_for_user("u1", _source(), 3, 1, date(2024, 1, 1), sink=sink, now=NOW)
    plan_for_user("u1", _source(), 3, 1, date(2024, 1, 1), sink=sink, now=NOW)

    assert len(sink.rows) == 4


def test_allocation_error_writes_nothing() -> None:
    sink = FakeScheduleSink()

    with pytest.raises(InvalidRangeError):
        plan_for_user("u1", _source(), 3, 31, date(2024, 1, 1), sink=sink, now=NOW)

    assert sink.rows == []


def test_to_records_defaults_to_not_completed() -> None:
    tasks = plan_for_user("u1", _source(), 1, 1, date(2024, 1, 1))

    records = to_records(tasks, NOW)

    assert [r.model_dump(exclude={"completed", "created_at"}) for r in records] == [
        t.model_dump() for t in tasks
    ]
    assert {r.completed for r in records} == {False}


def test_group_by_date_keeps_order() -> None:
    tasks = plan_for_user("u1", _source(), 2, 3, date(2024, 1, 30))

    grouped = group_by_date(tasks)

    assert list(grouped) == [date(2024, 1, 30), date(2024, 1, 31), date(2024, 2, 1)]
    assert [t.subject_id for t in grouped[date(2024, 1, 31)]] == ["m", "a"]


def test_group_by_date_sorts_dates_across_runs() -> None:
    subjects = _source().get_subjects_for_user("u1")
    later_run = allocate(subjects, 1, 1, date(2024, 1, 5))
    earlier_run = allocate(subjects, 1, 1, date(2024, 1, 1))

    grouped = group_by_date(later_run + earlier_run)

    assert list(grouped) == [date(2024, 1, 1), date(2024, 1, 5)]
    assert [t.subject_id for t in grouped[date(2024, 1, 1)]] == ["m", "a"]


def test_group_by_date_keeps_duplicate_runs_in_order() -> None:
    subjects = _source().get_subjects_for_user("u1")
    first = allocate(subjects, 1, 1, date(2024, 1, 1))
    second = allocate(subjects, 2, 1, date(2024, 1, 1))

    grouped = group_by_date(first + second)

    assert [t.duration for t in grouped[date(2024, 1, 1)]] == [45, 15, 90, 30]


def test_summarize_day_counts_completed_and_minutes() -> None:
    records = to_records(plan_for_user("u1", _source(), 3, 2, date(2024, 1, 1)), NOW)
    records[0] = records[0].model_copy(update={"completed": True})

    summary = summarize_day(records, date(2024, 1, 1))

    assert summary.total_tasks == 2
    assert summary.completed_tasks == 1
    assert summary.total_minutes == 180
    assert summary.progress == 50.0


def test_summarize_day_without_tasks() -> None:
    summary = summarize_day([], date(2024, 1, 1))

    assert summary == (0, 0, 0, 0.0)
