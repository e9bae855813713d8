from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Iterable, Optional, Union


class EventStatus(str, Enum):
    on_going = "On Going"
    up_coming = "Up Coming"
    ended = "Ended"

    @property
    def sort_order(self) -> int:
        return _STATUS_ORDER[self]


_STATUS_ORDER = {
    EventStatus.on_going: 0,
    EventStatus.up_coming: 1,
    EventStatus.ended: 2,
}

Timestamp = Union[datetime, str]


def parse_timestamp(value: Timestamp) -> datetime:
    """
    Parse an ISO-8601 string (a trailing 'Z' is accepted) or pass a datetime through.
    Naive values are read as UTC, which is how the store persists them.
    """
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        value = datetime.fromisoformat(text)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def classify_event_status(
    start_time: Timestamp,
    end_time: Timestamp,
    now: Optional[Timestamp] = None,
) -> EventStatus:
    """
    On Going when start <= now <= end (both ends inclusive),
    Up Coming before the start, Ended after the end.
    """
    start = parse_timestamp(start_time)
    end = parse_timestamp(end_time)
    current = parse_timestamp(now) if now is not None else datetime.now(timezone.utc)

    if start <= current <= end:
        return EventStatus.on_going
    if current < start:
        return EventStatus.up_coming
    return EventStatus.ended


@dataclass(frozen=True)
class RatingSummary:
    average_rating: float
    total_ratings: int


def summarize_ratings(ratings: Iterable[int]) -> RatingSummary:
    """
    Average rounded half-up to one decimal on the exact quotient,
    so [5, 5, 5, 4] gives 4.8. An empty set averages to 0.
    """
    values = [int(r) for r in ratings]
    total = len(values)
    if total == 0:
        return RatingSummary(average_rating=0.0, total_ratings=0)

    average = (Decimal(sum(values)) / Decimal(total)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    return RatingSummary(average_rating=float(average), total_ratings=total)
