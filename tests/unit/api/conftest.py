"""
Name: API Test Fixtures

Responsibilities:
  - TestClient over the real app (in-memory repositories via APP_ENV=test)
  - Seed users / carts / products straight into the container repositories
  - Mint bearer headers for seeded users
"""

from dataclasses import replace
from uuid import uuid4

import pytest
from factories import full_address, make_product, make_user
from fastapi.testclient import TestClient
from storefront import container
from storefront.api.main import app
from storefront.domain.entities import Cart
from storefront.identity.auth_users import create_access_token
from storefront.identity.users import UserRole


@pytest.fixture
def client():
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def seed_user():
    def _seed(role=UserRole.USER, *, with_cart=True, address=None, **kwargs):
        user = make_user(role=role, address=address or full_address(), **kwargs)
        if with_cart:
            cart = container.get_cart_repository().create_cart(
                Cart(id=uuid4(), owner_user_id=user.id)
            )
            user = replace(user, cart_id=cart.id)
        return container.get_user_repository().create_user(user)

    return _seed


@pytest.fixture
def seed_product():
    def _seed(**kwargs):
        return container.get_product_repository().create_product(make_product(**kwargs))

    return _seed


@pytest.fixture
def auth_for():
    def _headers(user) -> dict:
        token, _ = create_access_token(user)
        return {"Authorization": f"Bearer {token}"}

    return _headers
