"""Deadline lifecycle logic - pure functions of (deadline, completed, now)."""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum

from countdown.errors import InvalidDeadline

EXPIRED_LABEL = "expired"
INVALID_LABEL = "invalid date"


class DeadlineStatus(Enum):
    """Lifecycle status of a task at a given instant."""

    ACTIVE = "active"
    EXPIRED = "expired"
    COMPLETED = "completed"
    INVALID = "invalid"


@dataclass(frozen=True)
class Evaluation:
    """Result of evaluating a deadline against the clock."""

    status: DeadlineStatus
    remaining: str | None = None
    label: str | None = None


def _to_local_naive(dt: datetime) -> datetime:
    if dt.tzinfo is not None:
        return dt.astimezone().replace(tzinfo=None)
    return dt


def _to_aware(dt: datetime) -> datetime:
    """Attach the local offset to naive values; aware values are kept."""
    if dt.tzinfo is None:
        return dt.astimezone()
    return dt


def _parse_raw(value: object) -> datetime:
    """Parse a wire deadline as written: naive when it has no offset."""
    if isinstance(value, datetime):
        return value

    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            raise InvalidDeadline(value)

    if not isinstance(value, str) or not value.strip():
        raise InvalidDeadline(value)

    text = value.strip()
    if text[-1] in "Zz":
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        raise InvalidDeadline(value)


def parse_deadline(value: object) -> datetime:
    """
    Parse a wire deadline into a naive local datetime for display.

    ISO-8601 strings without an offset are local time and keep their wall
    clock fields. Strings with a `Z` or numeric offset are converted to local
    time. Date-only strings mean local midnight. Numbers are epoch
    milliseconds.
    """
    return _to_local_naive(_parse_raw(value))


def parse_instant(value: object) -> datetime:
    """Parse a wire deadline into an aware datetime for arithmetic."""
    return _to_aware(_parse_raw(value))


def format_remaining(delta: timedelta) -> str:
    """
    Format a remaining duration using its two coarsest units.

    Shapes: "1d 1h", "2h 5m", "3m 4s", "5s". Negative durations count as zero.
    """
    total = max(int(delta.total_seconds()), 0)
    days, rest = divmod(total, 86400)
    hours, rest = divmod(rest, 3600)
    minutes, seconds = divmod(rest, 60)

    if days > 0:
        return f"{days}d {hours}h"
    elif hours > 0:
        return f"{hours}h {minutes}m"
    elif minutes > 0:
        return f"{minutes}m {seconds}s"
    else:
        return f"{seconds}s"


def evaluate(deadline: object, completed: bool, now: datetime) -> Evaluation:
    """
    Derive the lifecycle status of a task.

    No deadline -> ACTIVE. Completed -> COMPLETED, even past the deadline.
    Unparsable -> INVALID. Deadline at or before now -> EXPIRED. Otherwise
    ACTIVE with a remaining-time string. Never raises.
    """
    if deadline is None or deadline == "":
        return Evaluation(DeadlineStatus.ACTIVE)

    if completed:
        return Evaluation(DeadlineStatus.COMPLETED)

    try:
        due = parse_instant(deadline)
    except InvalidDeadline:
        return Evaluation(DeadlineStatus.INVALID, label=INVALID_LABEL)

    # Aware values subtract as real elapsed time across offset changes
    now = _to_aware(now)
    if due <= now:
        return Evaluation(DeadlineStatus.EXPIRED, label=EXPIRED_LABEL)

    remaining = format_remaining(due - now)
    return Evaluation(DeadlineStatus.ACTIVE, remaining=remaining, label=remaining)


def format_deadline(deadline: object) -> str | None:
    """Display form of a deadline in local time: YYYY-MM-DD HH:MM."""
    if deadline is None or deadline == "":
        return None
    try:
        return parse_deadline(deadline).strftime("%Y-%m-%d %H:%M")
    except InvalidDeadline:
        return INVALID_LABEL


def to_local_input(deadline: object) -> str:
    """Editable form of a deadline (YYYY-MM-DDTHH:MM), or "" when absent or unparsable."""
    if deadline is None or deadline == "":
        return ""
    try:
        return parse_deadline(deadline).strftime("%Y-%m-%dT%H:%M")
    except InvalidDeadline:
        return ""


def format_clock(now: datetime) -> str:
    """Header clock: YYYY-MM-DD HH:MM:SS."""
    return now.strftime("%Y-%m-%d %H:%M:%S")
