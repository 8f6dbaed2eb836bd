"""
Tests for dev_seed_admin module.

Validates:
  - Disabled when config says so
  - Fail-fast outside development/local
  - Creates admin when missing
  - Idempotent when user exists
  - Force reset behavior
"""

from unittest.mock import MagicMock

import pytest
from factories import make_user
from storefront.application.dev_seed_admin import ensure_dev_admin
from storefront.crosscutting.config import Settings
from storefront.identity.users import UserRole

pytestmark = pytest.mark.unit


def _make_settings(**overrides):
    defaults = {
        "app_env": "local",
        "jwt_secret": "test-secret",
        "dev_seed_admin": True,
        "dev_seed_admin_email": "Root@Local.dev",
        "dev_seed_admin_password": "admin-pass",
    }
    defaults.update(overrides)
    return Settings(**defaults)


def _dummy_hasher(password: str) -> str:
    return f"hashed:{password}"


def test_ensure_dev_admin_disabled():
    repo = MagicMock()

    ensure_dev_admin(
        _make_settings(dev_seed_admin=False),
        user_repo=repo,
        password_hasher=_dummy_hasher,
    )

    repo.get_user_by_email.assert_not_called()
    repo.create_user.assert_not_called()


@pytest.mark.parametrize("env", ["test", "staging"])
def test_ensure_dev_admin_fail_fast_outside_dev(env):
    repo = MagicMock()

    with pytest.raises(RuntimeError, match="DEV_SEED_ADMIN is enabled"):
        ensure_dev_admin(
            _make_settings(app_env=env), user_repo=repo, password_hasher=_dummy_hasher
        )

    repo.create_user.assert_not_called()


def test_ensure_dev_admin_requires_credentials():
    with pytest.raises(ValueError):
        ensure_dev_admin(
            _make_settings(dev_seed_admin_password=""),
            user_repo=MagicMock(),
            password_hasher=_dummy_hasher,
        )


def test_ensure_dev_admin_create_new():
    repo = MagicMock()
    repo.get_user_by_email.return_value = None

    ensure_dev_admin(
        _make_settings(app_env="development"),
        user_repo=repo,
        password_hasher=_dummy_hasher,
    )

    repo.get_user_by_email.assert_called_once_with("root@local.dev")
    created = repo.create_user.call_args.args[0]
    assert created.role == UserRole.ADMIN
    assert created.password_hash == "hashed:admin-pass"


def test_ensure_dev_admin_skips_existing():
    repo = MagicMock()
    repo.get_user_by_email.return_value = make_user(email="root@local.dev")

    ensure_dev_admin(_make_settings(), user_repo=repo, password_hasher=_dummy_hasher)

    repo.create_user.assert_not_called()
    repo.update_user_fields.assert_not_called()
    repo.update_role.assert_not_called()


def test_ensure_dev_admin_force_reset():
    existing = make_user(email="root@local.dev", role=UserRole.USER)
    repo = MagicMock()
    repo.get_user_by_email.return_value = existing

    ensure_dev_admin(
        _make_settings(dev_seed_admin_force_reset=True),
        user_repo=repo,
        password_hasher=_dummy_hasher,
    )

    repo.update_user_fields.assert_called_once_with(
        existing.id, {"password_hash": "hashed:admin-pass"}
    )
    repo.update_role.assert_called_once_with(existing.id, UserRole.ADMIN)
