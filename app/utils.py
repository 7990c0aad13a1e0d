import re
import uuid
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from enum import Enum
from typing import Any, Optional, Type, TypeVar

E = TypeVar("E", bound=Enum)

_DIGITS = re.compile(r"^\d+$")


def parse_due_date(value: Any) -> Optional[datetime]:
    """Parse a due date into an aware UTC datetime.

    Accepts ISO 8601 dates and date-times (``2024-10-15``,
    ``2024-10-15T14:30:00Z``), RFC 2822 strings
    (``Tue, 15 Oct 2024 14:30:00 GMT``) and Unix timestamps in milliseconds
    (``1697371800000``). Values without an offset are read as UTC.
    Returns None when the value is not a valid instant.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None

    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text or _DIGITS.match(text):
        return None

    parsed = None
    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        pass

    if parsed is None:
        try:
            parsed = parsedate_to_datetime(text)
        except (TypeError, ValueError, IndexError):
            return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    try:
        return parsed.astimezone(timezone.utc)
    except OverflowError:
        # Shifting to UTC walks past year 1 or year 9999
        return None


def parse_task_id(value: Any) -> Optional[str]:
    """Return the canonical form of a task identifier, or None if malformed"""
    if not isinstance(value, str):
        return None
    try:
        return str(uuid.UUID(value))
    except ValueError:
        return None


def parse_choice(choices: Type[E], value: Any) -> Optional[E]:
    """Map a raw value onto one of an enum's members, or None"""
    try:
        return choices(value)
    except ValueError:
        return None


def to_storage_datetime(value: datetime) -> datetime:
    """Aware datetimes are stored as naive UTC"""
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def from_storage_datetime(value: datetime) -> datetime:
    return value.replace(tzinfo=timezone.utc)
