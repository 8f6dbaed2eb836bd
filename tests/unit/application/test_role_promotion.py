"""
Name: Role Promotion Service Tests

Responsibilities:
  - guest -> user only when both groups are complete
  - Never demotes; admins are never touched
  - Idempotent on repeated calls
  - Missing user => UserNotFoundError; failed write => UpdateFailedError
"""

from dataclasses import replace
from unittest.mock import MagicMock

import pytest
from factories import full_address, make_user
from storefront.application.role_promotion import RolePromotionService
from storefront.crosscutting.exceptions import (
    DatabaseError,
    UpdateFailedError,
    UserNotFoundError,
)
from storefront.domain.profile import ProfileRequirements
from storefront.identity.users import UserRole
from storefront.infrastructure.repositories import InMemoryUserRepository

pytestmark = pytest.mark.unit


def _service_with(*users, requirements=None):
    repo = InMemoryUserRepository(list(users))
    kwargs = {"requirements": requirements} if requirements else {}
    return RolePromotionService(repo, **kwargs), repo


def test_complete_guest_is_promoted():
    guest = make_user(role=UserRole.GUEST, address=full_address())
    service, repo = _service_with(guest)

    outcome = service.maybe_promote(guest.id)

    assert outcome.promoted is True
    assert outcome.user.role == UserRole.USER
    assert repo.get_user(guest.id).role == UserRole.USER


def test_guest_without_address_stays_guest():
    guest = make_user(role=UserRole.GUEST, address=None)
    service, repo = _service_with(guest)

    outcome = service.maybe_promote(guest.id)

    assert outcome.promoted is False
    assert outcome.personal_complete is True
    assert outcome.address_complete is False
    assert repo.get_user(guest.id).role == UserRole.GUEST


def test_promotion_is_idempotent():
    guest = make_user(role=UserRole.GUEST, address=full_address())
    service, repo = _service_with(guest)

    first = service.maybe_promote(guest.id)
    second = service.maybe_promote(guest.id)

    assert first.promoted is True
    assert second.promoted is False
    assert repo.get_user(guest.id).role == UserRole.USER


def test_user_is_never_demoted_when_profile_becomes_incomplete():
    user = make_user(role=UserRole.USER, address=None)
    service, repo = _service_with(replace(user, phone=None))

    outcome = service.maybe_promote(user.id)

    assert outcome.promoted is False
    assert outcome.user.role == UserRole.USER
    assert repo.get_user(user.id).role == UserRole.USER


@pytest.mark.parametrize("address", [None, full_address()])
def test_admin_is_never_touched(address):
    admin = make_user(role=UserRole.ADMIN, address=address)
    repo = MagicMock()
    repo.get_user.return_value = admin
    service = RolePromotionService(repo)

    outcome = service.maybe_promote(admin.id)

    assert outcome.promoted is False
    assert outcome.user.role == UserRole.ADMIN
    repo.update_role.assert_not_called()


def test_missing_user_raises_not_found():
    service, _ = _service_with()
    guest = make_user()

    with pytest.raises(UserNotFoundError):
        service.maybe_promote(guest.id)


def test_database_error_on_write_becomes_update_failed():
    guest = make_user(role=UserRole.GUEST, address=full_address())
    repo = MagicMock()
    repo.get_user.return_value = guest
    repo.update_role.side_effect = DatabaseError("write rejected")
    service = RolePromotionService(repo)

    with pytest.raises(UpdateFailedError) as exc_info:
        service.maybe_promote(guest.id)

    assert isinstance(exc_info.value.original_error, DatabaseError)


def test_user_vanishing_before_write_is_update_failed():
    guest = make_user(role=UserRole.GUEST, address=full_address())
    repo = MagicMock()
    repo.get_user.return_value = guest
    repo.update_role.return_value = None
    service = RolePromotionService(repo)

    with pytest.raises(UpdateFailedError):
        service.maybe_promote(guest.id)


def test_requirements_are_injectable():
    guest = replace(make_user(address=full_address()), phone=None)
    relaxed = ProfileRequirements(personal_fields=("first_name", "last_name", "email"))
    service, _ = _service_with(guest, requirements=relaxed)

    assert service.maybe_promote(guest.id).promoted is True
