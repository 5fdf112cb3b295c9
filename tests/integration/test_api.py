"""
End-to-end tests of the HTTP API against the in-memory store.
"""

import asyncio

import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.domain.models.user import User, UserRole
from app.main import create_application

API = "/api/v1"


@pytest.fixture
def app(tmp_path):
    settings = Settings(
        environment="testing",
        storage_backend="memory",
        file_storage_backend="local",
        upload_dir=str(tmp_path / "uploads"),
        seed_fixtures=False,
        jwt_secret_key="test-secret",
    )
    return create_application(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


def auth_header(token):
    return {"Authorization": f"Bearer {token}"}


def register(client, email="john@example.com", role="EMPLOYEE"):
    response = client.post(f"{API}/auth/register", json={
        "email": email,
        "password": "secret123",
        "name": "John Doe",
        "role": role,
        "department": "Engineering"
    })
    assert response.status_code == 201, response.text
    return response.json()


def admin_token(client):
    """Provision an administrator directly in the store and log in."""
    container = client.app.state.container
    asyncio.run(container.user_repository.save(User(
        email="admin@example.com",
        name="Admin User",
        role=UserRole.ADMIN,
        password_hash=container.auth_service.hash_password("admin123")
    )))

    response = client.post(f"{API}/auth/login", json={"email": "admin@example.com", "password": "admin123"})
    assert response.status_code == 200, response.text
    return response.json()["access_token"]


def submit_hours(client, token, day="2024-01-15", hours=8):
    response = client.post(
        f"{API}/entries/hours",
        json={"date": day, "hours_worked": hours, "description": "Feature work"},
        headers=auth_header(token)
    )
    assert response.status_code == 201, response.text
    return response.json()


class TestAuthentication:
    """Test cases for the authentication endpoints."""

    def test_register_login_and_profile(self, client):
        """Test a user can register, log in and read their profile."""
        registered = register(client)
        assert registered["user"]["role"] == "EMPLOYEE"
        assert "password_hash" not in registered["user"]

        login = client.post(f"{API}/auth/login", json={"email": "john@example.com", "password": "secret123"})
        assert login.status_code == 200
        token = login.json()["access_token"]

        profile = client.get(f"{API}/auth/me", headers=auth_header(token))
        assert profile.status_code == 200
        assert profile.json()["email"] == "john@example.com"

    def test_duplicate_registration(self, client):
        register(client)

        response = client.post(f"{API}/auth/register", json={
            "email": "john@example.com", "password": "secret123", "name": "John Again"
        })

        assert response.status_code == 409
        assert response.json()["error"] == "DUPLICATE_ENTITY"

    def test_admin_self_registration_refused(self, client):
        """Test nobody can register as an administrator."""
        response = client.post(f"{API}/auth/register", json={
            "email": "eve@example.com", "password": "secret123", "name": "Eve", "role": "ADMIN"
        })

        assert response.status_code == 422
        assert response.json()["error"] == "VALIDATION_ERROR"

    def test_wrong_password(self, client):
        register(client)

        response = client.post(f"{API}/auth/login", json={"email": "john@example.com", "password": "nope"})

        assert response.status_code == 401
        assert response.json()["error"] == "AUTHENTICATION_REQUIRED"

    def test_missing_token(self, client):
        """Test protected routes refuse anonymous callers with the error envelope."""
        response = client.get(f"{API}/entries")

        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"
        body = response.json()
        assert body["error"] == "AUTHENTICATION_REQUIRED"
        assert "message" in body

    def test_garbage_token(self, client):
        response = client.get(f"{API}/entries", headers=auth_header("garbage"))

        assert response.status_code == 401


class TestEntries:
    """Test cases for submitting and listing entries."""

    def test_submit_and_list(self, client):
        """Test submissions start PENDING and list newest first."""
        token = register(client)["access_token"]

        first = submit_hours(client, token, day="2024-01-15")
        submit_hours(client, token, day="2024-01-16", hours=7.5)

        assert first["type"] == "WORK_HOURS"
        assert first["status"] == "PENDING"

        listing = client.get(f"{API}/entries", headers=auth_header(token)).json()
        assert listing["total"] == 2
        assert [entry["date"] for entry in listing["entries"]] == ["2024-01-16", "2024-01-15"]

    def test_each_variant(self, client):
        """Test every entry type can be submitted."""
        token = register(client)["access_token"]
        headers = auth_header(token)

        expense = client.post(f"{API}/entries/expenses", headers=headers, json={
            "date": "2024-01-16", "amount": 125.5, "category": "Client Meeting", "receipt_url": "/uploads/r.pdf"
        })
        vacation = client.post(f"{API}/entries/vacation", headers=headers, json={
            "start_date": "2024-02-01", "end_date": "2024-02-05", "days": 5
        })
        travel = client.post(f"{API}/entries/travel", headers=headers, json={
            "travel_date": "2024-01-20", "from_location": "Main Office", "to_location": "Client Site",
            "distance_km": 45.5
        })

        assert expense.status_code == 201
        assert expense.json()["receipt_url"] == "/uploads/r.pdf"
        assert vacation.json()["type"] == "VACATION"
        assert travel.json()["distance_km"] == 45.5

        only_travel = client.get(f"{API}/entries", headers=headers, params={"type": "TRAVEL"}).json()
        assert only_travel["total"] == 1

    def test_invalid_hours_envelope(self, client):
        """Test request validation failures use the envelope with field details."""
        token = register(client)["access_token"]

        response = client.post(
            f"{API}/entries/hours",
            json={"date": "2024-01-15", "hours_worked": 30},
            headers=auth_header(token)
        )

        assert response.status_code == 422
        body = response.json()
        assert body["error"] == "VALIDATION_ERROR"
        assert [error["field"] for error in body["details"]["fields"]] == ["hours_worked"]

    def test_reversed_vacation(self, client):
        """Test a vacation ending before it starts is an INVALID_RANGE error."""
        token = register(client)["access_token"]

        response = client.post(f"{API}/entries/vacation", headers=auth_header(token), json={
            "start_date": "2024-02-05", "end_date": "2024-02-01", "days": 3
        })

        assert response.status_code == 422
        body = response.json()
        assert body["error"] == "INVALID_RANGE"
        assert body["details"]["field"] == "end_date"

        listing = client.get(f"{API}/entries", headers=auth_header(token)).json()
        assert listing["total"] == 0

    def test_calendar(self, client):
        """Test a week calendar bins a spanning vacation and hours."""
        token = register(client)["access_token"]
        headers = auth_header(token)
        submit_hours(client, token, day="2024-01-15")
        client.post(f"{API}/entries/vacation", headers=headers, json={
            "start_date": "2024-01-14", "end_date": "2024-01-16", "days": 3
        })

        response = client.get(
            f"{API}/entries/calendar", headers=headers, params={"view": "week", "date": "2024-01-17"}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["start_date"] == "2024-01-14"
        assert body["end_date"] == "2024-01-20"
        days = {day["date"]: day for day in body["days"]}
        assert len(days["2024-01-15"]["entries"]) == 2
        assert len(days["2024-01-14"]["entries"]) == 1
        assert body["totals"]["total_hours"] == 8
        assert body["totals"]["total_vacation_days"] == 3

    def test_calendar_at_date_limits(self, client):
        """Test calendar windows past the supported date range are validation errors."""
        headers = auth_header(register(client)["access_token"])

        for view, day in [("month", "9999-12-15"), ("week", "9999-12-30"), ("week", "0001-01-01")]:
            response = client.get(f"{API}/entries/calendar", headers=headers, params={"view": view, "date": day})

            assert response.status_code == 422
            body = response.json()
            assert body["error"] == "VALIDATION_ERROR"
            assert body["details"]["field"] == "date"


class TestAdministration:
    """Test cases for the admin endpoints."""

    def test_moderation_flow(self, client):
        """Test approval, the conflict on a second decision, and the queue."""
        employee = register(client)["access_token"]
        entry = submit_hours(client, employee)
        admin = admin_token(client)

        queue = client.get(f"{API}/admin/entries", headers=auth_header(admin), params={"status": "PENDING"})
        assert queue.status_code == 200
        assert [item["owner_name"] for item in queue.json()["entries"]] == ["John Doe"]

        approved = client.patch(
            f"{API}/admin/entries/{entry['id']}/status",
            json={"status": "APPROVED"},
            headers=auth_header(admin)
        )
        assert approved.status_code == 200
        assert approved.json()["status"] == "APPROVED"
        assert approved.json()["reviewed_by"] is not None

        again = client.patch(
            f"{API}/admin/entries/{entry['id']}/status",
            json={"status": "REJECTED"},
            headers=auth_header(admin)
        )
        assert again.status_code == 409
        assert again.json()["error"] == "INVALID_STATE"

        mine = client.get(f"{API}/entries", headers=auth_header(employee)).json()
        assert mine["entries"][0]["status"] == "APPROVED"

    def test_pending_is_not_a_decision(self, client):
        employee = register(client)["access_token"]
        entry = submit_hours(client, employee)
        admin = admin_token(client)

        response = client.patch(
            f"{API}/admin/entries/{entry['id']}/status",
            json={"status": "PENDING"},
            headers=auth_header(admin)
        )

        assert response.status_code == 422

    def test_moderate_missing_entry(self, client):
        admin = admin_token(client)

        response = client.patch(
            f"{API}/admin/entries/missing/status",
            json={"status": "APPROVED"},
            headers=auth_header(admin)
        )

        assert response.status_code == 404
        assert response.json()["details"]["entity_id"] == "missing"

    def test_employee_cannot_moderate(self, client):
        """Test non-admins get 403 and the entry stays pending."""
        employee = register(client)["access_token"]
        entry = submit_hours(client, employee)

        response = client.patch(
            f"{API}/admin/entries/{entry['id']}/status",
            json={"status": "APPROVED"},
            headers=auth_header(employee)
        )

        assert response.status_code == 403
        assert response.json()["error"] == "FORBIDDEN"
        assert client.get(f"{API}/entries", headers=auth_header(employee)).json()["entries"][0]["status"] == "PENDING"

    def test_users_and_stats(self, client):
        """Test user listing with counts and the dashboard."""
        employee = register(client)["access_token"]
        submit_hours(client, employee)
        register(client, email="charlie@example.com", role="VOLUNTEER")
        admin = admin_token(client)

        users = client.get(f"{API}/admin/users", headers=auth_header(admin)).json()
        assert users["total"] == 3
        counts = {user["email"]: user["entry_count"] for user in users["users"]}
        assert counts["john@example.com"] == 1

        stats = client.get(f"{API}/admin/stats", headers=auth_header(admin))
        assert stats.status_code == 200
        body = stats.json()
        assert body["users"] == {"total": 3, "admin": 1, "employee": 1, "volunteer": 1}
        assert body["entries"]["pending"] == 1

    def test_delete_user(self, client):
        """Test deletion removes the user, their entries and their access."""
        registered = register(client)
        employee = registered["access_token"]
        submit_hours(client, employee)
        admin = admin_token(client)

        response = client.delete(f"{API}/admin/users/{registered['user']['id']}", headers=auth_header(admin))
        assert response.status_code == 204

        queue = client.get(f"{API}/admin/entries", headers=auth_header(admin)).json()
        assert queue["total"] == 0
        assert client.get(f"{API}/entries", headers=auth_header(employee)).status_code == 401

    def test_admin_cannot_delete_self(self, client):
        admin = admin_token(client)
        me = client.get(f"{API}/auth/me", headers=auth_header(admin)).json()

        response = client.delete(f"{API}/admin/users/{me['id']}", headers=auth_header(admin))

        assert response.status_code == 400
        assert response.json()["error"] == "BUSINESS_RULE_VIOLATION"


class TestUploads:
    """Test cases for receipt uploads."""

    def test_upload_and_fetch_receipt(self, client):
        """Test an uploaded receipt is stored and served back."""
        token = register(client)["access_token"]

        response = client.post(
            f"{API}/uploads/receipts",
            files={"file": ("receipt.pdf", b"%PDF-1.4 receipt", "application/pdf")},
            headers=auth_header(token)
        )

        assert response.status_code == 201, response.text
        url = response.json()["url"]
        assert url.startswith("/uploads/")

        served = client.get(url)
        assert served.status_code == 200
        assert served.content == b"%PDF-1.4 receipt"

    def test_upload_rejects_other_types(self, client):
        token = register(client)["access_token"]

        response = client.post(
            f"{API}/uploads/receipts",
            files={"file": ("page.html", b"<html></html>", "text/html")},
            headers=auth_header(token)
        )

        assert response.status_code == 422
        assert response.json()["details"]["field"] == "file"


class TestService:
    """Test cases for service endpoints."""

    def test_health(self, client):
        response = client.get(f"{API}/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["storage_backend"] == "memory"

    def test_unknown_path(self, client):
        response = client.get(f"{API}/nowhere")

        assert response.status_code == 404
        assert response.json()["error"] == "NOT_FOUND"
