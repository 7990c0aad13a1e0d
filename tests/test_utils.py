from datetime import datetime, timezone

import pytest

from app.schemas import TaskPriority, TaskStatus
from app.utils import parse_choice, parse_due_date, parse_task_id

UTC = timezone.utc


@pytest.mark.parametrize(
    "value, expected",
    [
        ("2024-10-15", datetime(2024, 10, 15, tzinfo=UTC)),
        ("2024-10-15T14:30:00Z", datetime(2024, 10, 15, 14, 30, tzinfo=UTC)),
        ("2024-10-15T14:30:00+02:00", datetime(2024, 10, 15, 12, 30, tzinfo=UTC)),
        ("Tue, 15 Oct 2024 14:30:00 GMT", datetime(2024, 10, 15, 14, 30, tzinfo=UTC)),
        (1697371800000, datetime(2023, 10, 15, 12, 10, tzinfo=UTC)),
    ],
)
def test_parse_due_date_accepted_formats(value, expected):
    assert parse_due_date(value) == expected


@pytest.mark.parametrize(
    "value",
    [
        None, "", "   ", "not a date", "2024-13-45", "1697371800000", True, [], {},
        "0001-01-01T00:00:00+01:00", "9999-12-31T23:00:00-05:00",
    ],
)
def test_parse_due_date_rejects_invalid(value):
    assert parse_due_date(value) is None


def test_parse_task_id_canonicalizes():
    raw = "3F2504E0-4F89-11D3-9A0C-0305E82C3301"
    assert parse_task_id(raw) == "3f2504e0-4f89-11d3-9a0c-0305e82c3301"


@pytest.mark.parametrize("value", ["", "123", "not-an-id", None])
def test_parse_task_id_rejects_malformed(value):
    assert parse_task_id(value) is None


def test_parse_choice():
    assert parse_choice(TaskStatus, "in-progress") is TaskStatus.IN_PROGRESS
    assert parse_choice(TaskPriority, "high") is TaskPriority.HIGH
    assert parse_choice(TaskStatus, "in_progress") is None
    assert parse_choice(TaskPriority, "urgent") is None
