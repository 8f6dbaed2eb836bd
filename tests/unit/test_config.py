"""
Name: Settings Tests

Responsibilities:
  - Defaults and parsing helpers (origins, personal fields)
  - Field validators (TTL, pagination limits)
  - Production hardening rules
"""

import pytest
from pydantic import ValidationError
from storefront.crosscutting.config import Settings

pytestmark = pytest.mark.unit

STRONG_SECRET = "s" * 40


def test_personal_fields_are_parsed_in_order_without_duplicates():
    settings = Settings(profile_personal_fields=" phone, first_name,phone,, email ")

    assert settings.get_personal_fields() == ("phone", "first_name", "email")


def test_default_personal_fields_cover_the_profile():
    fields = Settings().get_personal_fields()

    assert fields[:2] == ("first_name", "last_name")
    assert "phone" in fields
    assert "email" in fields


def test_empty_personal_fields_are_rejected():
    with pytest.raises(ValidationError):
        Settings(profile_personal_fields=" , ")


def test_allowed_origins_list():
    settings = Settings(allowed_origins="http://a.test, http://b.test,")

    assert settings.get_allowed_origins_list() == ["http://a.test", "http://b.test"]


@pytest.mark.parametrize(
    "field",
    ["jwt_access_ttl_minutes", "password_reset_ttl_minutes", "products_max_limit"],
)
def test_non_positive_numbers_are_rejected(field):
    with pytest.raises(ValidationError):
        Settings(**{field: 0})


def test_default_limit_must_fit_max_limit():
    settings = Settings(products_default_limit=50, products_max_limit=20)

    with pytest.raises(ValueError, match="products_default_limit"):
        settings.validate_pagination_params()


def test_environment_helpers():
    production = Settings(
        app_env=" Production ", jwt_secret=STRONG_SECRET, jwt_cookie_secure=True
    )

    assert production.is_production()
    assert Settings(app_env="ci").is_test()
    assert not Settings(app_env="development").is_test()


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"jwt_secret": "dev-secret"}, "JWT_SECRET"),
        ({"jwt_secret": "short-but-custom"}, "at least 32"),
        ({"jwt_cookie_secure": False}, "JWT_COOKIE_SECURE"),
        ({"dev_seed_admin": True}, "DEV_SEED_ADMIN"),
    ],
)
def test_production_hardening(overrides, message):
    values = {
        "app_env": "production",
        "jwt_secret": STRONG_SECRET,
        "jwt_cookie_secure": True,
    }
    values.update(overrides)

    with pytest.raises(ValidationError, match=message):
        Settings(**values)


def test_production_with_hardened_values_is_valid():
    settings = Settings(
        app_env="production", jwt_secret=STRONG_SECRET, jwt_cookie_secure=True
    )

    assert settings.is_production()
