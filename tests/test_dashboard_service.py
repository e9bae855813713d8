"""
Tests for dashboard filtering, searching and ordering helpers.
"""
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

from app.services.aggregation import EventStatus
from app.services.dashboard import category_names, filter_events, sort_events

NOW = datetime(2025, 6, 15, 12, 0, tzinfo=timezone.utc)


def event(event_id, title, start_offset_hours, duration_hours=2, categories=()):
    start = NOW + timedelta(hours=start_offset_hours)
    return SimpleNamespace(
        event_id=event_id,
        event_title=title,
        start_time=start,
        end_time=start + timedelta(hours=duration_hours),
        categories=[SimpleNamespace(category_name=name) for name in categories],
    )


EVENTS = [
    event(1, "Jazz Night", 48, categories=["Music"]),
    event(2, "Python Workshop", -1, categories=["Tech", "Education"]),
    event(3, "Charity Run", -72, categories=["Sports"]),
    event(4, "Rock Concert", 24, categories=["Music"]),
    event(5, "AI Meetup", -48, categories=["Tech"]),
]


class TestFilterEvents:
    def test_no_filters_keeps_everything(self):
        assert len(filter_events(EVENTS, now=NOW)) == len(EVENTS)

    def test_search_is_case_insensitive_substring(self):
        result = filter_events(EVENTS, search="  python ", now=NOW)
        assert [e.event_id for e in result] == [2]

    def test_category_filter_matches_any(self):
        result = filter_events(EVENTS, categories=["Music", "Sports"], now=NOW)
        assert {e.event_id for e in result} == {1, 3, 4}

    def test_status_filter(self):
        result = filter_events(EVENTS, status=EventStatus.ended, now=NOW)
        assert {e.event_id for e in result} == {3, 5}

    def test_saved_filter(self):
        result = filter_events(EVENTS, saved=[4, 5], now=NOW)
        assert {e.event_id for e in result} == {4, 5}

    def test_filters_combine(self):
        result = filter_events(EVENTS, search="a", categories=["Tech"], status=EventStatus.ended, now=NOW)
        assert [e.event_id for e in result] == [5]


class TestSortEvents:
    def test_status_then_start_time(self):
        ordered = sort_events(EVENTS, now=NOW)
        assert [e.event_id for e in ordered] == [2, 4, 1, 3, 5]


class TestCategoryNames:
    def test_sorted_and_distinct(self):
        assert category_names(EVENTS) == ["Education", "Music", "Sports", "Tech"]
