"""
Name: Cart Access Endpoint Tests

Responsibilities:
  - Ownership is symmetric: a user never touches another user's cart
  - Admin bypasses ownership; missing cart => 404 for admin, 403 otherwise
  - Invalid ids => 400 with a stable message
  - Quantity coercion and stock check details on checkout
"""

from uuid import uuid4

import pytest
from storefront.identity.users import UserRole

pytestmark = pytest.mark.unit


def test_owner_can_read_own_cart(client, seed_user, auth_for):
    owner = seed_user()

    res = client.get(f"/api/carts/{owner.cart_id}", headers=auth_for(owner))

    assert res.status_code == 200
    assert res.json()["payload"]["owner_user_id"] == str(owner.id)


def test_user_cannot_read_someone_elses_cart(client, seed_user, auth_for):
    owner = seed_user()
    intruder = seed_user()

    res = client.get(f"/api/carts/{owner.cart_id}", headers=auth_for(intruder))

    assert res.status_code == 403
    assert res.json()["code"] == "FORBIDDEN"


def test_user_cannot_add_to_someone_elses_cart(
    client, seed_user, seed_product, auth_for
):
    owner = seed_user()
    intruder = seed_user()
    product = seed_product()

    res = client.post(
        f"/api/carts/{owner.cart_id}/products/{product.id}",
        json={"quantity": 1},
        headers=auth_for(intruder),
    )

    assert res.status_code == 403


def test_guest_gets_incomplete_profile_even_on_foreign_cart(
    client, seed_user, seed_product, auth_for
):
    owner = seed_user()
    guest = seed_user(UserRole.GUEST)
    product = seed_product()

    res = client.post(
        f"/api/carts/{owner.cart_id}/products/{product.id}",
        headers=auth_for(guest),
    )

    assert res.status_code == 403
    assert res.json()["code"] == "INCOMPLETE_PROFILE"


def test_guest_can_still_read_own_cart(client, seed_user, auth_for):
    guest = seed_user(UserRole.GUEST)

    res = client.get(f"/api/carts/{guest.cart_id}", headers=auth_for(guest))

    assert res.status_code == 200


def test_admin_reads_any_cart(client, seed_user, auth_for):
    owner = seed_user()
    admin = seed_user(UserRole.ADMIN, with_cart=False)

    res = client.get(f"/api/carts/{owner.cart_id}", headers=auth_for(admin))

    assert res.status_code == 200


def test_missing_cart_is_403_for_user_and_404_for_admin(client, seed_user, auth_for):
    user = seed_user()
    admin = seed_user(UserRole.ADMIN, with_cart=False)
    missing = uuid4()

    as_user = client.get(f"/api/carts/{missing}", headers=auth_for(user))
    as_admin = client.get(f"/api/carts/{missing}", headers=auth_for(admin))

    assert as_user.status_code == 403
    assert as_admin.status_code == 404
    assert as_admin.json()["message"] == "Cart not found"


def test_invalid_cart_id_format(client, seed_user, auth_for):
    user = seed_user()

    res = client.get("/api/carts/not-a-uuid", headers=auth_for(user))

    assert res.status_code == 400
    assert res.json()["message"] == "Invalid cart ID format"


def test_invalid_product_id_format(client, seed_user, auth_for):
    user = seed_user()

    res = client.post(
        f"/api/carts/{user.cart_id}/products/xyz",
        json={"quantity": 1},
        headers=auth_for(user),
    )

    assert res.status_code == 400
    assert res.json()["message"] == "Invalid product ID format"


def test_cart_requires_authentication(client, seed_user):
    owner = seed_user()

    res = client.get(f"/api/carts/{owner.cart_id}")

    assert res.status_code == 401


@pytest.mark.parametrize("quantity", ["abc", 0, -3])
def test_invalid_quantity_value(client, seed_user, seed_product, auth_for, quantity):
    user = seed_user()
    product = seed_product()

    res = client.post(
        f"/api/carts/{user.cart_id}/products/{product.id}",
        json={"quantity": quantity},
        headers=auth_for(user),
    )

    assert res.status_code == 400
    assert res.json()["message"] == "Invalid quantity value"


def test_create_cart_is_idempotent(client, seed_user, auth_for):
    user = seed_user()

    res = client.post("/api/carts", headers=auth_for(user))

    assert res.status_code == 200
    assert res.json()["message"] == "Cart already exists"
    assert res.json()["payload"]["id"] == str(user.cart_id)


def test_item_lifecycle(client, seed_user, seed_product, auth_for):
    user = seed_user()
    product = seed_product()
    headers = auth_for(user)
    base = f"/api/carts/{user.cart_id}/products/{product.id}"

    client.post(base, json={"quantity": 1}, headers=headers)
    updated = client.put(base, json={"quantity": "4"}, headers=headers)
    removed = client.delete(base, headers=headers)
    emptied = client.delete(f"/api/carts/{user.cart_id}", headers=headers)

    assert updated.json()["payload"]["items"][0]["quantity"] == 4
    assert removed.json()["payload"]["items"] == []
    assert emptied.json()["message"] == "Cart emptied"


def test_checkout_reports_unavailable_products(
    client, seed_user, seed_product, auth_for
):
    user = seed_user()
    product = seed_product(stock=1)
    headers = auth_for(user)
    client.post(
        f"/api/carts/{user.cart_id}/products/{product.id}",
        json={"quantity": 5},
        headers=headers,
    )

    res = client.post(f"/api/carts/{user.cart_id}/purchase", headers=headers)

    body = res.json()
    assert res.status_code == 400
    assert body["message"] == "Some products are not available"
    assert body["errors"] == [
        {"product_id": str(product.id), "requested": 5, "available": 1}
    ]


def test_checkout_empty_cart(client, seed_user, auth_for):
    user = seed_user()

    res = client.post(f"/api/carts/{user.cart_id}/purchase", headers=auth_for(user))

    assert res.status_code == 400
    assert res.json()["message"] == "Cart is empty"
