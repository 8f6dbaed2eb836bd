"""
Name: Mongo Repository Tests

Responsibilities:
  - Document <-> entity mapping (users, carts, products)
  - Query/filter construction for the catalog
  - PyMongoError translated to DatabaseError
  - Client lifecycle (init twice, use before init)

Notes:
  - Offline: the Database is a MagicMock, no server needed
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock, patch
from uuid import uuid4

import pytest
from factories import full_address, make_product, make_user
from pymongo.errors import DuplicateKeyError, ServerSelectionTimeoutError
from storefront.crosscutting.exceptions import DatabaseError, DuplicateEmailError
from storefront.domain.entities import Cart, CartItem, PasswordResetToken
from storefront.domain.repositories import ProductQuery
from storefront.identity.users import UserRole
from storefront.infrastructure.repositories import (
    MongoCartRepository,
    MongoPasswordResetTokenRepository,
    MongoProductRepository,
    MongoUserRepository,
)

pytestmark = pytest.mark.unit


@pytest.fixture
def database():
    return MagicMock()


class TestMongoUserRepository:
    def test_create_user_inserts_document(self, database):
        user = make_user(address=full_address())
        repo = MongoUserRepository(database)

        created = repo.create_user(user)

        doc = database.users.insert_one.call_args.args[0]
        assert doc["_id"] == user.id
        assert doc["role"] == "guest"
        assert doc["address"]["city"] == "Springfield"
        assert created.address == full_address()
        assert created.created_at is not None

    def test_duplicate_key_is_duplicate_email(self, database):
        database.users.insert_one.side_effect = DuplicateKeyError("E11000 email_1")

        with pytest.raises(DuplicateEmailError) as excinfo:
            MongoUserRepository(database).create_user(
                make_user(email="ana@example.com")
            )

        assert excinfo.value.email == "ana@example.com"
        assert excinfo.value.message == "Email already in use"

    def test_get_user_maps_document(self, database):
        user_id = uuid4()
        database.users.find_one.return_value = {
            "_id": user_id,
            "email": "ana@example.com",
            "password_hash": "h",
            "role": "user",
            "first_name": "Ana",
            "address": None,
        }

        user = MongoUserRepository(database).get_user(user_id)

        assert user.id == user_id
        assert user.role == UserRole.USER
        assert user.first_name == "Ana"
        assert user.address is None

    def test_unknown_role_in_store_is_database_error(self, database):
        database.users.find_one.return_value = {
            "_id": uuid4(),
            "email": "x@example.com",
            "password_hash": "h",
            "role": "superuser",
        }

        with pytest.raises(DatabaseError):
            MongoUserRepository(database).get_user(uuid4())

    def test_update_rejects_unknown_fields(self, database):
        with pytest.raises(ValueError):
            MongoUserRepository(database).update_user_fields(uuid4(), {"role": "admin"})

        database.users.find_one_and_update.assert_not_called()

    def test_update_role_sets_value(self, database):
        user = make_user()
        database.users.find_one_and_update.return_value = {
            "_id": user.id,
            "email": user.email,
            "password_hash": "h",
            "role": "user",
        }

        updated = MongoUserRepository(database).update_role(user.id, UserRole.USER)

        update = database.users.find_one_and_update.call_args.args[1]
        assert update["$set"]["role"] == "user"
        assert updated.role == UserRole.USER

    def test_pymongo_error_is_translated(self, database):
        database.users.find_one.side_effect = ServerSelectionTimeoutError("down")

        with pytest.raises(DatabaseError) as exc_info:
            MongoUserRepository(database).get_user_by_email("a@example.com")

        assert isinstance(exc_info.value.original_error, ServerSelectionTimeoutError)


class TestMongoCartRepository:
    def test_get_cart_owner_uses_projection(self, database):
        cart_id, owner_id = uuid4(), uuid4()
        database.carts.find_one.return_value = {"_id": cart_id, "owner_user_id": owner_id}

        assert MongoCartRepository(database).get_cart_owner(cart_id) == owner_id
        _, kwargs = database.carts.find_one.call_args
        assert kwargs["projection"] == {"owner_user_id": 1}

    def test_missing_cart_owner_is_none(self, database):
        database.carts.find_one.return_value = None

        assert MongoCartRepository(database).get_cart_owner(uuid4()) is None

    def test_save_cart_writes_items(self, database):
        product_id = uuid4()
        cart = Cart(
            id=uuid4(),
            owner_user_id=uuid4(),
            items=[CartItem(product_id=product_id, quantity=2)],
        )
        database.carts.find_one_and_update.return_value = {
            "_id": cart.id,
            "owner_user_id": cart.owner_user_id,
            "items": [{"product_id": product_id, "quantity": 2}],
        }

        saved = MongoCartRepository(database).save_cart(cart)

        update = database.carts.find_one_and_update.call_args.args[1]
        assert update["$set"]["items"] == [{"product_id": product_id, "quantity": 2}]
        assert saved.items[0].quantity == 2


class TestMongoProductRepository:
    def test_list_products_builds_filter_and_page(self, database):
        product = make_product()
        collection = database.products
        collection.count_documents.return_value = 11
        cursor = collection.find.return_value
        cursor.sort.return_value = cursor
        cursor.skip.return_value = cursor
        cursor.limit.return_value = iter(
            [{"_id": product.id, "title": product.title, "description": "d",
              "brand": "Bosch", "price": 100.0}]
        )

        page = MongoProductRepository(database).list_products(
            ProductQuery(
                page=2,
                limit=5,
                brand="bo.sch",
                min_price=10,
                sort_field="price",
                sort_descending=True,
            )
        )

        mongo_filter = collection.find.call_args.args[0]
        assert mongo_filter["is_active"] is True
        assert mongo_filter["brand"] == {"$regex": r"^bo\.sch$", "$options": "i"}
        assert mongo_filter["price"] == {"$gte": 10}
        cursor.skip.assert_called_once_with(5)
        cursor.limit.assert_called_once_with(5)
        assert page.total == 11
        assert page.items[0].id == product.id

    def test_get_products_by_ids_short_circuits(self, database):
        assert MongoProductRepository(database).get_products_by_ids([]) == []
        database.products.find.assert_not_called()

    def test_delete_reports_deleted_count(self, database):
        database.products.delete_one.return_value.deleted_count = 0

        assert MongoProductRepository(database).delete_product(uuid4()) is False


class TestMongoPasswordResetTokenRepository:
    def test_create_token_invalidates_previous_ones(self, database):
        user_id = uuid4()
        expires = datetime.now(timezone.utc) + timedelta(hours=1)
        token = PasswordResetToken(
            id=uuid4(), user_id=user_id, token_hash="abc", expires_at=expires
        )

        created = MongoPasswordResetTokenRepository(database).create_token(token)

        database.password_reset_tokens.update_many.assert_called_once_with(
            {"user_id": user_id, "used": False}, {"$set": {"used": True}}
        )
        doc = database.password_reset_tokens.insert_one.call_args.args[0]
        assert doc["token_hash"] == "abc"
        assert doc["used"] is False
        assert created.is_usable()

    def test_find_valid_token_filters_used_and_expired(self, database):
        now = datetime(2026, 1, 1, tzinfo=timezone.utc)
        database.password_reset_tokens.find_one.return_value = {
            "_id": uuid4(),
            "user_id": uuid4(),
            "token_hash": "abc",
            "expires_at": datetime(2026, 1, 1, 1, 0),
            "used": False,
        }

        token = MongoPasswordResetTokenRepository(database).find_valid_token(
            "abc", now
        )

        query = database.password_reset_tokens.find_one.call_args.args[0]
        assert query == {"token_hash": "abc", "used": False, "expires_at": {"$gt": now}}
        assert token.expires_at.tzinfo is not None
        assert token.is_usable(now)

    def test_mark_used_is_conditional(self, database):
        token_id = uuid4()
        database.password_reset_tokens.update_one.return_value.modified_count = 0

        assert MongoPasswordResetTokenRepository(database).mark_used(token_id) is False
        database.password_reset_tokens.update_one.assert_called_once_with(
            {"_id": token_id, "used": False}, {"$set": {"used": True}}
        )


class TestMongoClientLifecycle:
    def test_get_database_before_init_raises(self):
        from storefront.infrastructure.db import client
        from storefront.infrastructure.db.errors import ClientNotInitializedError

        client.close_client()

        with pytest.raises(ClientNotInitializedError):
            client.get_database()

    def test_init_twice_raises(self):
        from storefront.infrastructure.db import client
        from storefront.infrastructure.db.errors import ClientAlreadyInitializedError

        client.close_client()
        with patch("storefront.infrastructure.db.client.MongoClient"):
            client.init_client("mongodb://test", "storefront_test")
            try:
                with pytest.raises(ClientAlreadyInitializedError):
                    client.init_client("mongodb://test", "storefront_test")
            finally:
                client.close_client()

    def test_ping_without_client_is_false(self):
        from storefront.infrastructure.db import client

        client.close_client()

        assert client.ping() is False
