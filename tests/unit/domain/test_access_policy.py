"""
Name: Access Policy Tests

Responsibilities:
  - Role checks and self-or-admin
  - Cart ownership (symmetric for every non-admin; admin bypass)
  - Order existence hidden from non-owners
  - Incomplete profile (guest) denial
"""

from uuid import uuid4

import pytest
from storefront.domain.access_policy import (
    DenialCode,
    check_cart_owner_or_admin,
    check_complete_profile,
    check_order_owner_or_admin,
    check_role,
    check_self_or_admin,
)
from storefront.identity.users import AuthenticatedPrincipal, UserRole

pytestmark = pytest.mark.unit


def _principal(role: UserRole = UserRole.USER, *, with_cart: bool = True):
    return AuthenticatedPrincipal(
        user_id=uuid4(),
        email="someone@example.com",
        role=role,
        cart_id=uuid4() if with_cart else None,
    )


def test_every_check_denies_anonymous():
    assert check_role(None, [UserRole.USER]).code == DenialCode.UNAUTHORIZED
    assert check_self_or_admin(None, uuid4()).code == DenialCode.UNAUTHORIZED
    assert check_cart_owner_or_admin(None, uuid4()).code == DenialCode.UNAUTHORIZED
    assert check_order_owner_or_admin(None, uuid4()).code == DenialCode.UNAUTHORIZED
    assert check_complete_profile(None).code == DenialCode.UNAUTHORIZED


def test_role_outside_allowed_set_is_forbidden():
    decision = check_role(_principal(UserRole.USER), [UserRole.ADMIN])

    assert decision.allowed is False
    assert decision.code == DenialCode.FORBIDDEN


def test_role_inside_allowed_set_is_allowed():
    assert check_role(_principal(UserRole.ADMIN), [UserRole.ADMIN]).allowed


def test_self_or_admin():
    me = _principal()
    admin = _principal(UserRole.ADMIN)

    assert check_self_or_admin(me, me.user_id).allowed
    assert check_self_or_admin(admin, uuid4()).allowed
    assert check_self_or_admin(me, uuid4()).code == DenialCode.FORBIDDEN


@pytest.mark.parametrize("role", [UserRole.GUEST, UserRole.USER])
def test_cart_ownership_is_symmetric_for_non_admins(role):
    me = _principal(role)

    assert check_cart_owner_or_admin(me, me.user_id).allowed
    assert check_cart_owner_or_admin(me, uuid4()).code == DenialCode.FORBIDDEN


def test_cart_without_assigned_cart_is_forbidden():
    me = _principal(with_cart=False)

    assert check_cart_owner_or_admin(me, me.user_id).code == DenialCode.FORBIDDEN


def test_cart_missing_is_forbidden_for_non_admin():
    me = _principal()

    assert check_cart_owner_or_admin(me, None).code == DenialCode.FORBIDDEN


def test_admin_bypasses_cart_ownership():
    admin = _principal(UserRole.ADMIN, with_cart=False)

    assert check_cart_owner_or_admin(admin, uuid4()).allowed
    assert check_cart_owner_or_admin(admin, None).allowed


def test_order_of_someone_else_looks_like_missing_order():
    me = _principal()

    foreign = check_order_owner_or_admin(me, uuid4())
    missing = check_order_owner_or_admin(me, None)

    assert foreign.code == missing.code == DenialCode.NOT_FOUND
    assert foreign.reason == missing.reason


def test_order_owner_and_admin_are_allowed():
    me = _principal()
    admin = _principal(UserRole.ADMIN)

    assert check_order_owner_or_admin(me, me.user_id).allowed
    assert check_order_owner_or_admin(admin, uuid4()).allowed
    assert check_order_owner_or_admin(admin, None).code == DenialCode.NOT_FOUND


def test_guest_has_incomplete_profile():
    decision = check_complete_profile(_principal(UserRole.GUEST))

    assert decision.code == DenialCode.INCOMPLETE_PROFILE


@pytest.mark.parametrize("role", [UserRole.USER, UserRole.ADMIN])
def test_non_guest_passes_profile_check(role):
    assert check_complete_profile(_principal(role)).allowed
