from datetime import timedelta

import pytest

from hotelms.models.base import UserRole
from hotelms.utils.date_utils import today_utc

from .conftest import PASSWORD

API = "/api/v1"


def future(days: int) -> str:
    return (today_utc() + timedelta(days=days)).isoformat()


def book(client, headers, room_id, check_in=30, check_out=32, **extra):
    payload = {"room_id": room_id, "check_in_date": future(check_in), "check_out_date": future(check_out)}
    payload.update(extra)
    return client.post(f"{API}/bookings", json=payload, headers=headers)


# ==================== Auth ====================

def test_register_login_profile_flow(client):
    response = client.post(
        f"{API}/auth/register",
        json={"name": "Carol", "email": "carol@example.com", "password": "pa55word"},
    )
    assert response.status_code == 201
    assert response.json()["user"]["role"] == "user"

    response = client.post(f"{API}/auth/login", json={"email": "carol@example.com", "password": "pa55word"})
    assert response.status_code == 200
    body = response.json()
    assert body["token_type"] == "bearer"
    assert body["expires_in"] > 0

    response = client.get(
        f"{API}/auth/profile",
        headers={"Authorization": f"Bearer {body['access_token']}"},
    )
    assert response.status_code == 200
    assert response.json()["email"] == "carol@example.com"


def test_duplicate_registration_conflicts(client, guest):
    response = client.post(
        f"{API}/auth/register",
        json={"name": "Again", "email": "guest@example.com", "password": PASSWORD},
    )
    assert response.status_code == 409
    assert response.json()["error"]["code"] == "CONFLICT"


def test_wrong_password_unauthorized(client, guest):
    response = client.post(f"{API}/auth/login", json={"email": "guest@example.com", "password": "nope"})
    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Bearer"


def test_missing_token_unauthorized(client):
    response = client.get(f"{API}/bookings/my-bookings")
    assert response.status_code == 401
    assert response.json()["error"]["code"] == "AUTHENTICATION_ERROR"


def test_garbage_token_unauthorized(client):
    response = client.get(f"{API}/auth/profile", headers={"Authorization": "Bearer not.a.token"})
    assert response.status_code == 401


# ==================== Rooms ====================

def test_public_room_listing(client, room_id):
    response = client.get(f"{API}/rooms")
    assert response.status_code == 200
    rooms = response.json()
    assert [r["room_number"] for r in rooms] == ["R101"]
    assert rooms[0]["price_per_night"] == 100.0

    assert client.get(f"{API}/rooms/{room_id}").status_code == 200
    assert client.get(f"{API}/rooms/unknown").status_code == 404


def test_room_admin_routes(client, admin, guest, auth_headers):
    payload = {"room_number": "a12", "room_type": "Suite", "capacity": 4, "price_per_night": "250.00"}

    assert client.post(f"{API}/rooms", json=payload, headers=auth_headers(guest)).status_code == 403

    response = client.post(f"{API}/rooms", json=payload, headers=auth_headers(admin))
    assert response.status_code == 201
    room = response.json()
    assert room["room_number"] == "A12"

    assert client.post(f"{API}/rooms", json=payload, headers=auth_headers(admin)).status_code == 409

    response = client.put(f"{API}/rooms/{room['id']}", json={"capacity": 3}, headers=auth_headers(admin))
    assert response.status_code == 200
    assert response.json()["capacity"] == 3

    response = client.patch(
        f"{API}/rooms/{room['id']}/status", json={"status": "Cleaning"}, headers=auth_headers(admin)
    )
    assert response.json()["status"] == "Cleaning"

    response = client.patch(
        f"{API}/rooms/{room['id']}/availability", json={"is_available": False}, headers=auth_headers(admin)
    )
    assert response.json()["is_available"] is False

    response = client.get(f"{API}/rooms/admin/all", params={"status": "Cleaning"}, headers=auth_headers(admin))
    assert [r["id"] for r in response.json()] == [room["id"]]

    response = client.delete(f"{API}/rooms/{room['id']}", headers=auth_headers(admin))
    assert response.status_code == 200
    assert response.json()["message"] == "Room deleted successfully"


def test_room_delete_with_booking_conflicts(client, admin, guest, room_id, auth_headers):
    assert book(client, auth_headers(guest), room_id).status_code == 201
    response = client.delete(f"{API}/rooms/{room_id}", headers=auth_headers(admin))
    assert response.status_code == 409


def test_room_availability_query(client, guest, room_id, auth_headers):
    book(client, auth_headers(guest), room_id, 30, 32)

    response = client.get(
        f"{API}/rooms/{room_id}/availability",
        params={"check_in": future(31), "check_out": future(33)},
    )
    assert response.status_code == 200
    assert response.json()["available"] is False

    response = client.get(
        f"{API}/rooms/{room_id}/availability",
        params={"check_in": future(32), "check_out": future(33)},
    )
    assert response.json()["available"] is True


# ==================== Bookings ====================

def test_booking_lifecycle_over_http(client, guest, other_guest, admin, room_id, auth_headers):
    response = book(client, auth_headers(guest), room_id)
    assert response.status_code == 201
    booking = response.json()
    assert booking["nights"] == 2
    assert booking["total_price"] == 200.0
    assert booking["status"] == "confirmed"
    assert booking["room"]["room_number"] == "R101"
    assert booking["user"]["email"] == "guest@example.com"

    assert book(client, auth_headers(other_guest), room_id, 31, 33).status_code == 409

    response = client.get(f"{API}/bookings/my-bookings", headers=auth_headers(guest))
    assert [b["id"] for b in response.json()] == [booking["id"]]

    assert client.get(f"{API}/bookings/{booking['id']}", headers=auth_headers(other_guest)).status_code == 403
    assert client.patch(f"{API}/bookings/{booking['id']}/cancel", headers=auth_headers(other_guest)).status_code == 403

    response = client.patch(f"{API}/bookings/{booking['id']}/cancel", headers=auth_headers(guest))
    assert response.status_code == 200
    assert response.json()["booking"]["status"] == "cancelled"

    assert client.patch(f"{API}/bookings/{booking['id']}/cancel", headers=auth_headers(guest)).status_code == 409
    assert book(client, auth_headers(other_guest), room_id, 31, 33).status_code == 201

    response = client.get(f"{API}/bookings/admin/all", headers=auth_headers(admin))
    assert len(response.json()) == 2
    response = client.get(f"{API}/bookings/admin/all", params={"status": "cancelled"}, headers=auth_headers(admin))
    assert [b["id"] for b in response.json()] == [booking["id"]]


def test_booking_status_update_and_delete(client, guest, staff, admin, room_id, auth_headers):
    booking = book(client, auth_headers(guest), room_id).json()

    response = client.patch(
        f"{API}/bookings/{booking['id']}/status",
        json={"status": "completed", "payment_status": "Paid"},
        headers=auth_headers(guest),
    )
    assert response.status_code == 403

    response = client.patch(
        f"{API}/bookings/{booking['id']}/status",
        json={"status": "completed", "payment_status": "Paid"},
        headers=auth_headers(staff),
    )
    assert response.status_code == 200
    assert response.json()["booking"]["status"] == "completed"
    assert response.json()["booking"]["payment_status"] == "Paid"

    response = client.patch(
        f"{API}/bookings/{booking['id']}/status", json={"status": "confirmed"}, headers=auth_headers(staff)
    )
    assert response.status_code == 409

    assert client.delete(f"{API}/bookings/{booking['id']}", headers=auth_headers(staff)).status_code == 403
    response = client.delete(f"{API}/bookings/{booking['id']}", headers=auth_headers(admin))
    assert response.status_code == 200
    assert client.get(f"{API}/bookings/{booking['id']}", headers=auth_headers(admin)).status_code == 404


def test_booking_edit_over_http(client, guest, other_guest, staff, room_id, auth_headers):
    booking = book(client, auth_headers(guest), room_id, 30, 32).json()
    book(client, auth_headers(other_guest), room_id, 40, 42)
    url = f"{API}/bookings/{booking['id']}"

    moved = {"check_in_date": future(31), "check_out_date": future(34)}
    assert client.put(url, json=moved, headers=auth_headers(guest)).status_code == 403

    response = client.put(url, json=moved, headers=auth_headers(staff))
    assert response.status_code == 200
    assert response.json()["booking"]["check_out_date"] == future(34)
    assert response.json()["booking"]["total_price"] == 300.0

    overlapping = {"check_in_date": future(39), "check_out_date": future(41)}
    assert client.put(url, json=overlapping, headers=auth_headers(staff)).status_code == 409


def test_unknown_booking_is_forbidden_for_guests(client, guest, staff, auth_headers):
    assert client.get(f"{API}/bookings/missing", headers=auth_headers(guest)).status_code == 403
    assert client.get(f"{API}/bookings/missing", headers=auth_headers(staff)).status_code == 404


@pytest.mark.parametrize(
    "overrides, field",
    [
        ({"check_in_date": future(10), "check_out_date": future(10)}, "check_out_date"),
        ({"guests": 3}, "guests"),
    ],
)
def test_booking_business_validation_is_400(client, guest, room_id, auth_headers, overrides, field):
    payload = {"room_id": room_id, "check_in_date": future(10), "check_out_date": future(12)}
    payload.update(overrides)
    response = client.post(f"{API}/bookings", json=payload, headers=auth_headers(guest))
    assert response.status_code == 400
    assert response.json()["error"]["details"]["field"] == field


def test_malformed_body_is_400_with_field_errors(client, guest, room_id, auth_headers):
    response = client.post(
        f"{API}/bookings",
        json={"room_id": room_id, "check_in_date": "not-a-date", "check_out_date": future(2)},
        headers=auth_headers(guest),
    )
    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert "check_in_date" in error["details"]["field_errors"]


def test_unknown_room_booking_is_404(client, guest, auth_headers):
    assert book(client, auth_headers(guest), "missing").status_code == 404


# ==================== Guests & dashboard ====================

def test_guest_profile_routes(client, guest, staff, admin, room_id, auth_headers):
    assert client.get(f"{API}/guests/profile", headers=auth_headers(guest)).status_code == 404

    response = client.post(
        f"{API}/guests/profile",
        json={"phone": "555-0100", "address": {"city": "Paris"}},
        headers=auth_headers(guest),
    )
    assert response.status_code == 200
    profile = response.json()
    assert profile["address"]["city"] == "Paris"

    assert client.get(f"{API}/guests", headers=auth_headers(guest)).status_code == 403
    assert len(client.get(f"{API}/guests", headers=auth_headers(staff)).json()) == 1

    response = client.put(f"{API}/guests/{profile['id']}", json={"vip": True}, headers=auth_headers(staff))
    assert response.json()["vip"] is True

    assert client.delete(f"{API}/guests/{profile['id']}", headers=auth_headers(staff)).status_code == 403
    assert client.delete(f"{API}/guests/{profile['id']}", headers=auth_headers(admin)).status_code == 200


def test_dashboard_access(client, guest, staff, room_id, auth_headers):
    assert client.get(f"{API}/dashboard/stats", headers=auth_headers(guest)).status_code == 403
    response = client.get(f"{API}/dashboard/stats", headers=auth_headers(staff))
    assert response.status_code == 200
    assert response.json()["total_rooms"] == 1


# ==================== Ambient ====================

def test_health_and_request_id(client):
    response = client.get(f"{API}/health", headers={"X-Request-ID": "abc-123"})
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.headers["X-Request-ID"] == "abc-123"
    assert "X-Process-Time" in response.headers
    assert response.headers["X-Content-Type-Options"] == "nosniff"


def test_error_body_carries_request_id(client):
    response = client.get(f"{API}/rooms/unknown", headers={"X-Request-ID": "req-42"})
    assert response.status_code == 404
    body = response.json()
    assert body["request_id"] == "req-42"
    assert set(body["error"]) == {"code", "message", "details", "timestamp"}


def test_forbidden_response_has_no_details(client, guest, auth_headers):
    response = client.get(f"{API}/dashboard/stats", headers=auth_headers(guest))
    assert response.json()["error"]["details"] == {}


def test_unhandled_error_is_generic_500(app, client):
    @app.get("/boom")
    def boom():
        raise RuntimeError("secret internals")

    response = client.get("/boom")
    assert response.status_code == 500
    assert "secret internals" not in response.text
    assert response.json()["error"]["code"] == "INTERNAL_SERVER_ERROR"
