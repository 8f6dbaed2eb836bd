"""
Name: Pytest Configuration and Shared Fixtures

Responsibilities:
  - Configure test environment (APP_ENV=test => in-memory repositories)
  - Provide shared fixtures (address, admin principal)
  - Reset container singletons between tests

Collaborators:
  - pytest: Test framework
  - storefront.container: lru_cache factories for repositories/services
  - storefront.identity: users, principals and tokens

Notes:
  - APP_ENV must be set BEFORE importing storefront (settings are cached)
  - Use @pytest.fixture(scope="function") for per-test isolation
"""

import os
import sys
from pathlib import Path
from uuid import uuid4

os.environ["APP_ENV"] = "test"
os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from storefront.crosscutting import config as app_config  # noqa: E402

app_config.Settings.model_config["env_file"] = None

from storefront import container  # noqa: E402
from factories import full_address  # noqa: E402
from storefront.identity.users import AuthenticatedPrincipal, UserRole  # noqa: E402

_CACHED_FACTORIES = (
    container.get_user_repository,
    container.get_cart_repository,
    container.get_order_repository,
    container.get_product_repository,
    container.get_question_repository,
    container.get_password_reset_repository,
    container.get_profile_requirements,
    container.get_role_promotion_service,
    container.get_authentication_resolver,
    container.get_password_reset_notifier,
)


def pytest_configure(config) -> None:
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )


@pytest.fixture(autouse=True)
def _reset_container():
    """R: Cada test arranca con repositorios in-memory vacíos."""
    for factory in _CACHED_FACTORIES:
        factory.cache_clear()
    yield
    for factory in _CACHED_FACTORIES:
        factory.cache_clear()


# ============================================================================
# Shared Fixtures
# ============================================================================


@pytest.fixture
def address():
    return full_address()


@pytest.fixture
def admin_principal() -> AuthenticatedPrincipal:
    return AuthenticatedPrincipal(
        user_id=uuid4(), email="admin@example.com", role=UserRole.ADMIN
    )
