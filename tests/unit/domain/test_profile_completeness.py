"""
Name: Profile Completeness Evaluator Tests

Responsibilities:
  - Both groups are evaluated independently
  - No partial credit: one missing field flips the group to False
  - Whitespace-only strings count as absent
  - Required personal fields are configurable
"""

from dataclasses import replace

import pytest
from factories import full_address, make_user
from storefront.domain.profile import (
    DEFAULT_REQUIREMENTS,
    ProfileRequirements,
    evaluate_completeness,
    is_address_complete,
    is_personal_complete,
)
from storefront.identity.users import Address

pytestmark = pytest.mark.unit


def test_complete_user_is_complete_in_both_groups():
    user = make_user(address=full_address())

    flags = evaluate_completeness(user)

    assert flags.personal_complete is True
    assert flags.address_complete is True
    assert flags.profile_complete is True


def test_personal_complete_without_address():
    user = make_user(address=None)

    flags = evaluate_completeness(user)

    assert flags.personal_complete is True
    assert flags.address_complete is False
    assert flags.profile_complete is False


@pytest.mark.parametrize(
    "field", ["first_name", "phone", "birth_date", "activity_number"]
)
def test_one_missing_personal_field_means_incomplete(field):
    user = replace(make_user(address=full_address()), **{field: None})

    assert is_personal_complete(user) is False
    assert is_address_complete(user) is True


def test_whitespace_only_value_counts_as_absent():
    user = replace(make_user(address=full_address()), last_name="   ")

    assert is_personal_complete(user) is False


def test_address_missing_one_field_is_incomplete():
    partial = Address(street="Calle 1", city="Rosario", state="SF", zip_code="2000")
    user = make_user(address=partial)

    assert is_address_complete(user) is False


def test_non_object_address_is_incomplete():
    user = {"address": "Calle 1, Rosario"}

    assert is_address_complete(user) is False


def test_works_with_mappings():
    payload = {
        "first_name": "Ana",
        "last_name": "Pérez",
        "address": {
            "street": "Calle 1",
            "city": "Rosario",
            "state": "SF",
            "zip_code": "2000",
            "country": "AR",
        },
    }
    requirements = ProfileRequirements(personal_fields=("first_name", "last_name"))

    flags = evaluate_completeness(payload, requirements)

    assert flags.profile_complete is True


def test_configurable_personal_fields():
    user = replace(make_user(), phone=None)
    relaxed = ProfileRequirements(personal_fields=("first_name", "last_name"))

    assert is_personal_complete(user, DEFAULT_REQUIREMENTS) is False
    assert is_personal_complete(user, relaxed) is True


def test_evaluation_is_idempotent():
    user = make_user(address=full_address())

    first = evaluate_completeness(user)
    second = evaluate_completeness(user)

    assert first == second


def test_none_user_is_incomplete():
    flags = evaluate_completeness(None)

    assert flags.personal_complete is False
    assert flags.address_complete is False
