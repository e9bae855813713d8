"""
Filtering, searching and ordering of the dashboard event list.

These helpers work on anything shaped like an ``Event`` row (``event_id``,
``event_title``, ``start_time``, ``end_time`` and ``categories`` with a
``category_name``), so they can be exercised without a database.
"""
from datetime import datetime
from typing import Iterable, List, Optional, Sequence

from app.services.aggregation import EventStatus, classify_event_status, parse_timestamp


def category_names(events: Iterable) -> List[str]:
    """Sorted distinct category names, as offered by the dashboard filter dropdown."""
    names = {
        category.category_name
        for event in events
        for category in event.categories
        if category.category_name
    }
    return sorted(names)


def filter_events(
    events: Iterable,
    search: Optional[str] = None,
    categories: Optional[Sequence[str]] = None,
    status: Optional[EventStatus] = None,
    saved: Optional[Sequence[int]] = None,
    now: Optional[datetime] = None,
) -> list:
    term = (search or "").strip().lower()
    wanted_categories = set(categories or [])
    saved_ids = set(saved or [])

    selected = []
    for event in events:
        if saved_ids and event.event_id not in saved_ids:
            continue
        if term and term not in (event.event_title or "").lower():
            continue
        if wanted_categories and not any(c.category_name in wanted_categories for c in event.categories):
            continue
        if status is not None and classify_event_status(event.start_time, event.end_time, now) != status:
            continue
        selected.append(event)
    return selected


def sort_events(events: Iterable, now: Optional[datetime] = None) -> list:
    """On Going first, then Up Coming, then Ended; earliest start first within a group."""
    return sorted(
        events,
        key=lambda event: (
            classify_event_status(event.start_time, event.end_time, now).sort_order,
            parse_timestamp(event.start_time),
        ),
    )
