"""
Name: Session + Promotion Flow Endpoint Tests

Responsibilities:
  - Register starts as guest with a cart and a cookie
  - Guest is blocked from transactional cart operations (INCOMPLETE_PROFILE)
  - Completing the profile via PUT /users/{uid} promotes to user
  - After promotion the same token can buy (role reloaded from the store)
"""

import pytest
from factories import PERSONAL_DATA, address_payload
from storefront import container
from storefront.crosscutting.exceptions import DatabaseError
from storefront.identity.auth_users import hash_password
from storefront.identity.users import UserRole

pytestmark = pytest.mark.unit


def _register(client, **overrides):
    payload = {
        "email": "ana@example.com",
        "password": "supersecret",
        "first_name": "Ana",
        "last_name": "Pérez",
    }
    payload.update(overrides)
    return client.post("/api/sessions/register", json=payload)


def test_register_returns_guest_with_token_and_cookie(client):
    res = _register(client)

    body = res.json()
    assert res.status_code == 201
    assert body["status"] == "success"
    assert body["message"] == "User registered successfully"
    assert body["user"]["role"] == "guest"
    assert body["user"]["cart_id"]
    assert body["user_is_completed"] is False
    assert body["address_is_completed"] is False
    assert body["token"]
    assert "password_hash" not in body["user"]
    assert res.cookies.get("access_token")


def test_register_validation_errors_use_envelope(client):
    res = _register(client, password="short")

    assert res.status_code == 400
    assert res.json()["code"] == "VALIDATION_ERROR"


def test_register_duplicate_email(client):
    _register(client)

    res = _register(client)

    assert res.status_code == 400
    assert res.json()["message"] == "Email already in use"


def test_register_race_on_email_is_reported_as_in_use(client, monkeypatch):
    _register(client)
    users = container.get_user_repository()
    monkeypatch.setattr(users, "get_user_by_email", lambda email: None)

    res = _register(client)

    assert res.status_code == 400
    assert res.json()["code"] == "VALIDATION_ERROR"
    assert res.json()["message"] == "Email already in use"


def test_login_and_current(client):
    _register(client)

    login = client.post(
        "/api/sessions/login",
        json={"email": "ANA@example.com", "password": "supersecret"},
    )
    token = login.json()["token"]
    current = client.get(
        "/api/sessions/current", headers={"Authorization": f"Bearer {token}"}
    )

    assert login.status_code == 200
    assert current.status_code == 200
    assert current.json()["user"]["email"] == "ana@example.com"


def test_login_wrong_password(client):
    _register(client)

    res = client.post(
        "/api/sessions/login",
        json={"email": "ana@example.com", "password": "not-the-one"},
    )

    assert res.status_code == 401
    assert res.json()["message"] == "Invalid credentials"


def test_current_without_token(client):
    res = client.get("/api/sessions/current")

    assert res.status_code == 401
    assert res.json()["code"] == "UNAUTHORIZED"


def test_logout_clears_cookie(client):
    _register(client)

    res = client.post("/api/sessions/logout")

    assert res.status_code == 200
    assert res.json()["message"] == "Logout successful"
    assert "access_token" in res.headers.get("set-cookie", "")


def test_guest_completes_profile_and_buys(client, seed_product):
    product = seed_product(price=50.0, stock=3)
    registered = _register(client).json()
    headers = {"Authorization": f"Bearer {registered['token']}"}
    user_id = registered["user"]["id"]
    cart_id = registered["user"]["cart_id"]

    blocked = client.post(
        f"/api/carts/{cart_id}/products/{product.id}",
        json={"quantity": 1},
        headers=headers,
    )
    assert blocked.status_code == 403
    assert blocked.json()["code"] == "INCOMPLETE_PROFILE"

    updated = client.put(
        f"/api/users/{user_id}",
        json={**PERSONAL_DATA, "address": address_payload(), "role": "admin"},
        headers=headers,
    )
    assert updated.status_code == 200
    assert updated.json()["message"] == "User updated successfully. Role promoted to user"
    assert updated.json()["user"]["role"] == UserRole.USER.value
    assert updated.json()["user_is_completed"] is True
    assert updated.json()["address_is_completed"] is True

    added = client.post(
        f"/api/carts/{cart_id}/products/{product.id}",
        json={"quantity": 2},
        headers=headers,
    )
    assert added.status_code == 200
    assert added.json()["payload"]["items"][0]["quantity"] == 2

    purchase = client.post(
        f"/api/carts/{cart_id}/purchase",
        json={"payment_method": "transfer"},
        headers=headers,
    )
    assert purchase.status_code == 201
    order = purchase.json()["payload"]
    assert order["total_amount"] == 100.0
    assert order["status"] == "pending"
    assert order["shipping_address"]["city"] == address_payload()["city"]

    cart = client.get(f"/api/carts/{cart_id}", headers=headers)
    assert cart.json()["payload"]["items"] == []

    mine = client.get("/api/orders/user", headers=headers)
    assert [o["id"] for o in mine.json()["payload"]] == [order["id"]]


def test_partial_update_keeps_guest(client):
    registered = _register(client).json()
    headers = {"Authorization": f"Bearer {registered['token']}"}

    res = client.put(
        f"/api/users/{registered['user']['id']}",
        json={"phone": "+54 11 4444-0000"},
        headers=headers,
    )

    assert res.status_code == 200
    assert res.json()["message"] == "User updated successfully"
    assert res.json()["user"]["role"] == "guest"


def test_create_admin_requires_admin(client, seed_user, auth_for):
    user = seed_user(UserRole.USER)
    admin = seed_user(UserRole.ADMIN, with_cart=False)
    payload = {
        "email": "second-admin@example.com",
        "password": "supersecret",
        "first_name": "Root",
        "last_name": "Two",
    }

    denied = client.post("/api/sessions/admin", json=payload, headers=auth_for(user))
    created = client.post("/api/sessions/admin", json=payload, headers=auth_for(admin))

    assert denied.status_code == 403
    assert denied.json()["code"] == "FORBIDDEN"
    assert created.status_code == 201
    assert created.json()["user"]["role"] == "admin"


def test_login_complete_user_keeps_role(client, seed_user):
    seed_user(
        UserRole.USER,
        email="maria@example.com",
        password_hash=hash_password("supersecret"),
    )

    res = client.post(
        "/api/sessions/login",
        json={"email": "maria@example.com", "password": "supersecret"},
    )

    body = res.json()
    assert res.status_code == 200
    assert body["user"]["role"] == "user"
    assert body["user_is_completed"] is True
    assert body["address_is_completed"] is True


def test_promotion_write_failure_is_update_failed(
    client, seed_user, auth_for, monkeypatch
):
    guest = seed_user(UserRole.GUEST)

    def _fail(user_id, role):
        raise DatabaseError("Error actualizando rol")

    monkeypatch.setattr(container.get_user_repository(), "update_role", _fail)

    res = client.get("/api/sessions/current", headers=auth_for(guest))

    body = res.json()
    assert res.status_code == 500
    assert body["code"] == "UPDATE_FAILED"
    assert body["message"] == "Failed to update user role"
    assert body["error_id"]
    assert container.get_user_repository().get_user(guest.id).role == UserRole.GUEST
