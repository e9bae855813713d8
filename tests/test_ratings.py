"""
Test rating endpoints: validation, the ended-event gate and aggregation.
"""
from datetime import timedelta

import pytest
from sqlalchemy import select

from fastapi.testclient import TestClient

from app.models.rating import Rating


def rate(client, event_id, user_name, rating):
    return client.post(f"/api/events/{event_id}/rating", json={"userName": user_name, "rating": rating})


class TestSubmitRating:
    def test_submit_rating(self, client: TestClient, ended_event):
        response = rate(client, ended_event.event_id, " Fay ", 4)

        assert response.status_code == 201
        data = response.json()
        assert data["user_name"] == "Fay"
        assert data["rating"] == 4
        assert "rating_id" in data

    @pytest.mark.parametrize("bad_rating", [0, 6, -1, "abc", 3.5, None, True, False])
    def test_invalid_rating_rejected(self, client: TestClient, ended_event, fetch_all, bad_rating):
        response = rate(client, ended_event.event_id, "Fay", bad_rating)

        assert response.status_code == 400
        assert "error" in response.json()
        assert fetch_all(select(Rating)) == []

    def test_numeric_string_accepted(self, client: TestClient, ended_event):
        response = rate(client, ended_event.event_id, "Fay", "5")
        assert response.status_code == 201
        assert response.json()["rating"] == 5

    def test_blank_user_name_rejected(self, client: TestClient, ended_event):
        response = rate(client, ended_event.event_id, "   ", 3)
        assert response.status_code == 400
        assert response.json() == {"error": "User name is required"}

    def test_duplicate_rating_rejected(self, client: TestClient, ended_event, fetch_all):
        assert rate(client, ended_event.event_id, "Fay", 5).status_code == 201

        response = rate(client, ended_event.event_id, "Fay ", 1)

        assert response.status_code == 400
        assert response.json() == {"error": "You have already rated this event"}
        assert [r.rating for r in fetch_all(select(Rating))] == [5]

    def test_rating_before_event_ends_rejected(self, client: TestClient, upcoming_event, make_event, fetch_all):
        ongoing = make_event(title="Now", starts_in=-timedelta(minutes=30))

        for event in (upcoming_event, ongoing):
            response = rate(client, event.event_id, "Fay", 5)
            assert response.status_code == 400
            assert response.json() == {"error": "Ratings are only accepted after the event has ended"}
        assert fetch_all(select(Rating)) == []

    def test_missing_event(self, client: TestClient):
        assert rate(client, 31337, "Fay", 5).status_code == 404


class TestRatingQueries:
    def test_average_and_list(self, client: TestClient, ended_event):
        for name, value in [("a", 5), ("b", 5), ("c", 5), ("d", 4)]:
            rate(client, ended_event.event_id, name, value)

        response = client.get(f"/api/events/{ended_event.event_id}/rating")

        assert response.status_code == 200
        data = response.json()
        assert data["averageRating"] == 4.8
        assert data["totalRatings"] == 4
        assert [r["user_name"] for r in data["ratings"]] == ["d", "c", "b", "a"]

    def test_no_ratings(self, client: TestClient, ended_event):
        data = client.get(f"/api/events/{ended_event.event_id}/rating").json()
        assert data["averageRating"] == 0
        assert data["totalRatings"] == 0
        assert data["ratings"] == []

    def test_check_rating(self, client: TestClient, ended_event):
        rate(client, ended_event.event_id, "Fay", 3)

        rated = client.get(f"/api/events/{ended_event.event_id}/check-rating/Fay").json()
        not_rated = client.get(f"/api/events/{ended_event.event_id}/check-rating/Gus").json()

        assert rated == {"hasRated": True, "userRating": 3}
        assert not_rated == {"hasRated": False, "userRating": None}
