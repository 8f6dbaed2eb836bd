"""
Name: User Profile Use Case Tests

Responsibilities:
  - Partial profile update (only sent keys; address merged by sub-field)
  - Promotion after the update completes the profile
  - Role is never writable through the profile update
  - Get / delete user semantics
"""

from dataclasses import replace
from uuid import uuid4

import pytest
from factories import full_address, make_user
from storefront.application.role_promotion import RolePromotionService
from storefront.application.usecases import (
    DeleteUserUseCase,
    GetUserUseCase,
    UpdateUserProfileInput,
    UpdateUserProfileUseCase,
    UserErrorCode,
)
from storefront.domain.entities import Cart
from storefront.identity.users import UserRole
from storefront.infrastructure.repositories import (
    InMemoryCartRepository,
    InMemoryUserRepository,
)

pytestmark = pytest.mark.unit


def _update_use_case(users):
    return UpdateUserProfileUseCase(
        user_repository=users, promotion_service=RolePromotionService(users)
    )


def test_update_without_fields_is_rejected():
    user = make_user()
    users = InMemoryUserRepository([user])

    result = _update_use_case(users).execute(
        UpdateUserProfileInput(user_id=user.id, changes={})
    )

    assert result.error.code == UserErrorCode.VALIDATION_ERROR
    assert result.error.message == "No fields provided for update"


def test_update_rejects_invalid_phone():
    user = make_user()
    users = InMemoryUserRepository([user])

    result = _update_use_case(users).execute(
        UpdateUserProfileInput(user_id=user.id, changes={"phone": "abc"})
    )

    assert result.error.message == "Please provide a valid phone number"


def test_update_unknown_user_is_not_found():
    result = _update_use_case(InMemoryUserRepository()).execute(
        UpdateUserProfileInput(user_id=uuid4(), changes={"first_name": "Eva"})
    )

    assert result.error.code == UserErrorCode.NOT_FOUND


def test_update_completing_address_promotes_guest():
    guest = make_user(role=UserRole.GUEST, address=None)
    users = InMemoryUserRepository([guest])
    address = full_address()

    result = _update_use_case(users).execute(
        UpdateUserProfileInput(
            user_id=guest.id,
            changes={
                "address": {
                    "street": address.street,
                    "city": address.city,
                    "state": address.state,
                    "zip_code": address.zip_code,
                    "country": address.country,
                }
            },
        )
    )

    assert result.error is None
    assert result.promoted is True
    assert result.user.role == UserRole.USER
    assert result.completeness.address_complete is True


def test_update_merges_address_sub_fields():
    user = make_user(address=full_address())
    users = InMemoryUserRepository([user])

    result = _update_use_case(users).execute(
        UpdateUserProfileInput(user_id=user.id, changes={"address": {"city": "Rosario"}})
    )

    assert result.user.address.city == "Rosario"
    assert result.user.address.street == full_address().street


def test_partial_update_keeps_guest_when_still_incomplete():
    guest = make_user(role=UserRole.GUEST, complete_personal=False, address=None)
    users = InMemoryUserRepository([guest])

    result = _update_use_case(users).execute(
        UpdateUserProfileInput(user_id=guest.id, changes={"phone": "+54 11 4444-0000"})
    )

    assert result.promoted is False
    assert result.user.role == UserRole.GUEST
    assert result.user.phone == "+54 11 4444-0000"


def test_role_key_is_ignored():
    user = make_user(role=UserRole.GUEST, address=None)
    users = InMemoryUserRepository([user])

    result = _update_use_case(users).execute(
        UpdateUserProfileInput(
            user_id=user.id, changes={"role": "admin", "first_name": "Eva"}
        )
    )

    assert result.user.role == UserRole.GUEST
    assert result.user.first_name == "Eva"


def test_get_user_reports_completeness_without_promoting():
    guest = make_user(role=UserRole.GUEST, address=full_address())
    users = InMemoryUserRepository([guest])

    result = GetUserUseCase(user_repository=users).execute(guest.id)

    assert result.completeness.profile_complete is True
    assert users.get_user(guest.id).role == UserRole.GUEST


def test_get_missing_user_is_not_found():
    result = GetUserUseCase(user_repository=InMemoryUserRepository()).execute(uuid4())

    assert result.error.code == UserErrorCode.NOT_FOUND
    assert result.error.message == "User not found"


def test_delete_user_removes_cart_too():
    carts = InMemoryCartRepository()
    user = make_user()
    cart = carts.create_cart(Cart(id=uuid4(), owner_user_id=user.id))
    users = InMemoryUserRepository([replace(user, cart_id=cart.id)])

    result = DeleteUserUseCase(user_repository=users, cart_repository=carts).execute(
        user.id
    )

    assert result.deleted is True
    assert users.get_user(user.id) is None
    assert carts.get_cart(cart.id) is None


def test_delete_missing_user_is_not_found():
    result = DeleteUserUseCase(
        user_repository=InMemoryUserRepository(),
        cart_repository=InMemoryCartRepository(),
    ).execute(uuid4())

    assert result.deleted is False
    assert result.error.code == UserErrorCode.NOT_FOUND