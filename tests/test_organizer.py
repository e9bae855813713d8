"""
Test the organizer gate and the committee / expense endpoints behind it.
"""
from datetime import timedelta
from decimal import Decimal

from fastapi.testclient import TestClient
from jose import jwt

from app.auth.security import create_access_token
from app.config import settings


class TestOrganizerGate:
    """Test bearer-token checks in front of organizer resources."""

    def test_missing_header_is_unauthenticated(self, client: TestClient):
        response = client.get("/api/organizer/committee")
        assert response.status_code == 401
        assert "error" in response.json()

    def test_invalid_token_is_unauthenticated(self, client: TestClient):
        response = client.get("/api/organizer/committee", headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == 401

    def test_token_signed_with_other_key(self, client: TestClient, auth_headers):
        auth_headers()
        forged = jwt.encode({"email": "organizer@example.com"}, "another-secret", algorithm=settings.ALGORITHM)
        response = client.get("/api/organizer/committee", headers={"Authorization": f"Bearer {forged}"})
        assert response.status_code == 401

    def test_expired_token(self, client: TestClient, auth_headers):
        auth_headers()
        token = create_access_token("organizer@example.com", expires_delta=timedelta(minutes=-5))
        response = client.get("/api/organizer/committee", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401

    def test_unknown_identity_is_forbidden(self, client: TestClient, auth_headers):
        headers = auth_headers(email="ghost@example.com", create=False)
        response = client.get("/api/organizer/committee", headers=headers)
        assert response.status_code == 403
        assert response.json() == {"error": "User not found"}

    def test_non_organizer_is_forbidden(self, client: TestClient, auth_headers):
        headers = auth_headers(email="attendee@example.com", role="user")
        response = client.get("/api/organizer/expenses", headers=headers)
        assert response.status_code == 403
        assert response.json() == {"error": "Organizer access required"}

    def test_organizer_is_allowed(self, client: TestClient, auth_headers):
        response = client.get("/api/organizer/committee", headers=auth_headers())
        assert response.status_code == 200
        assert response.json() == {"success": True, "members": []}


class TestCommittee:
    def test_committee_crud(self, client: TestClient, auth_headers):
        headers = auth_headers()

        created = client.post(
            "/api/organizer/committee",
            json={"member_name": " Grace ", "role": "Treasurer", "email": " ", "phone": "555-0100"},
            headers=headers,
        )
        assert created.status_code == 201
        member = created.json()["member"]
        assert member["member_name"] == "Grace"
        assert member["email"] is None
        assert member["phone"] == "555-0100"

        updated = client.put(
            f"/api/organizer/committee/{member['member_id']}",
            json={"member_name": "Grace H", "role": "Chair", "responsibilities": "Everything"},
            headers=headers,
        )
        assert updated.status_code == 200
        assert updated.json()["member"]["role"] == "Chair"
        assert updated.json()["member"]["responsibilities"] == "Everything"

        listing = client.get("/api/organizer/committee", headers=headers).json()
        assert [m["member_name"] for m in listing["members"]] == ["Grace H"]
        assert client.get("/api/organizer/committee/stats", headers=headers).json() == {
            "success": True, "totalMembers": 1
        }

        deleted = client.delete(f"/api/organizer/committee/{member['member_id']}", headers=headers)
        assert deleted.status_code == 200
        assert deleted.json()["success"] is True
        assert client.get("/api/organizer/committee/stats", headers=headers).json()["totalMembers"] == 0

    def test_name_and_role_required(self, client: TestClient, auth_headers):
        response = client.post("/api/organizer/committee", json={"member_name": "Grace"}, headers=auth_headers())
        assert response.status_code == 400
        assert response.json() == {"error": "Member name and role are required"}

    def test_update_missing_member(self, client: TestClient, auth_headers):
        response = client.put(
            "/api/organizer/committee/404", json={"member_name": "X", "role": "Y"}, headers=auth_headers()
        )
        assert response.status_code == 404


class TestExpenses:
    def test_expense_crud(self, client: TestClient, auth_headers, ended_event, upcoming_event):
        headers = auth_headers()

        created = client.post(
            "/api/organizer/expenses",
            json={"event_id": ended_event.event_id, "expense_category": " Catering ", "amount": 120.5},
            headers=headers,
        )
        assert created.status_code == 201
        expense = created.json()["expense"]
        assert expense["expense_category"] == "Catering"
        assert Decimal(expense["amount"]) == Decimal("120.5")
        assert expense["expense_date"] is not None
        assert expense["event"] == {"event_id": ended_event.event_id, "event_title": "Past Meetup"}

        client.post(
            "/api/organizer/expenses",
            json={"event_id": upcoming_event.event_id, "expense_category": "Venue", "amount": "79.50",
                  "expense_date": "2020-01-01"},
            headers=headers,
        )

        listing = client.get("/api/organizer/expenses", headers=headers).json()
        assert [e["expense_category"] for e in listing["expenses"]] == ["Catering", "Venue"]

        stats = client.get("/api/organizer/expenses/stats", headers=headers).json()
        assert Decimal(str(stats["totalExpenses"])) == Decimal("200.00")
        assert stats["totalCount"] == 2

        updated = client.put(
            f"/api/organizer/expenses/{expense['expense_id']}",
            json={"event_id": upcoming_event.event_id, "expense_category": "Catering", "amount": 99},
            headers=headers,
        )
        assert updated.status_code == 200
        assert updated.json()["expense"]["event"]["event_title"] == "Future Summit"
        assert Decimal(updated.json()["expense"]["amount"]) == Decimal("99")

        deleted = client.delete(f"/api/organizer/expenses/{expense['expense_id']}", headers=headers)
        assert deleted.status_code == 200
        assert client.get("/api/organizer/expenses/stats", headers=headers).json()["totalCount"] == 1

    def test_required_fields(self, client: TestClient, auth_headers, ended_event):
        response = client.post(
            "/api/organizer/expenses",
            json={"event_id": ended_event.event_id, "expense_category": "Venue"},
            headers=auth_headers(),
        )
        assert response.status_code == 400
        assert response.json() == {"error": "Event, category, and amount are required"}

    def test_negative_amount_rejected(self, client: TestClient, auth_headers, ended_event):
        response = client.post(
            "/api/organizer/expenses",
            json={"event_id": ended_event.event_id, "expense_category": "Venue", "amount": -5},
            headers=auth_headers(),
        )
        assert response.status_code == 400

    def test_unknown_event(self, client: TestClient, auth_headers):
        response = client.post(
            "/api/organizer/expenses",
            json={"event_id": 5150, "expense_category": "Venue", "amount": 10},
            headers=auth_headers(),
        )
        assert response.status_code == 404

    def test_update_missing_expense(self, client: TestClient, auth_headers, ended_event):
        response = client.put(
            "/api/organizer/expenses/8080",
            json={"event_id": ended_event.event_id, "expense_category": "Venue", "amount": 10},
            headers=auth_headers(),
        )
        assert response.status_code == 404

    def test_events_dropdown(self, client: TestClient, auth_headers, make_event):
        make_event(title="Zumba")
        make_event(title="Archery")

        response = client.get("/api/organizer/events", headers=auth_headers())

        assert response.status_code == 200
        assert [e["event_title"] for e in response.json()["events"]] == ["Archery", "Zumba"]
