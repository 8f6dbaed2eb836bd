"""
Name: Order Use Case Tests

Responsibilities:
  - Create order: items required, snapshot prices, consolidate lines
  - Shipping address falls back to the owner's profile
  - List with status filter validation
  - Status update keeps previous_status
"""

from datetime import datetime, timezone
from uuid import uuid4

import pytest
from factories import full_address, make_product, make_user
from storefront.application.usecases import (
    CreateOrderInput,
    CreateOrderUseCase,
    GetOrderUseCase,
    ListOrdersUseCase,
    OrderErrorCode,
    OrderLineInput,
    UpdateOrderStatusUseCase,
)
from storefront.application.usecases.orders import generate_order_code
from storefront.domain.entities import Order, OrderStatus
from storefront.identity.users import Address
from storefront.infrastructure.repositories import (
    InMemoryOrderRepository,
    InMemoryProductRepository,
    InMemoryUserRepository,
)

pytestmark = pytest.mark.unit


def _create_use_case(products=(), users=(), orders=None):
    return CreateOrderUseCase(
        order_repository=orders or InMemoryOrderRepository(),
        product_repository=InMemoryProductRepository(list(products)),
        user_repository=InMemoryUserRepository(list(users)),
    )


def test_generate_order_code_format():
    code = generate_order_code(datetime(2024, 3, 9, tzinfo=timezone.utc))

    prefix, stamp, suffix = code.split("-")
    assert prefix == "ORD"
    assert stamp == "20240309"
    assert len(suffix) == 8


def test_create_order_requires_items():
    result = _create_use_case().execute(CreateOrderInput(owner_user_id=uuid4()))

    assert result.error.code == OrderErrorCode.VALIDATION_ERROR
    assert result.error.message == "Cart items are required"


def test_create_order_rejects_non_positive_quantity():
    product = make_product()

    result = _create_use_case([product]).execute(
        CreateOrderInput(
            owner_user_id=uuid4(),
            items=[OrderLineInput(product_id=product.id, quantity=0)],
        )
    )

    assert result.error.message == "Invalid quantity value"


def test_create_order_with_unknown_product():
    result = _create_use_case().execute(
        CreateOrderInput(
            owner_user_id=uuid4(), items=[OrderLineInput(product_id=uuid4())]
        )
    )

    assert result.error.code == OrderErrorCode.NOT_FOUND
    assert result.error.message == "Product not found"


def test_create_order_consolidates_lines_and_snapshots_price():
    product = make_product(price=12.5)
    owner = make_user(address=full_address())

    result = _create_use_case([product], [owner]).execute(
        CreateOrderInput(
            owner_user_id=owner.id,
            items=[
                OrderLineInput(product_id=product.id, quantity=2),
                OrderLineInput(product_id=product.id, quantity=1),
            ],
        )
    )

    assert result.error is None
    assert len(result.order.items) == 1
    item = result.order.items[0]
    assert item.quantity == 3
    assert item.unit_price == 12.5
    assert item.title == product.title
    assert result.order.total_amount == 37.5
    assert result.order.status == OrderStatus.PENDING


def test_create_order_uses_profile_address_when_missing():
    product = make_product()
    owner = make_user(address=full_address())

    result = _create_use_case([product], [owner]).execute(
        CreateOrderInput(
            owner_user_id=owner.id, items=[OrderLineInput(product_id=product.id)]
        )
    )

    assert result.order.shipping_address == full_address()


def test_create_order_keeps_explicit_address():
    product = make_product()
    owner = make_user(address=full_address())
    elsewhere = Address(
        street="Calle Falsa 123",
        city="Córdoba",
        state="Córdoba",
        zip_code="5000",
        country="AR",
    )

    result = _create_use_case([product], [owner]).execute(
        CreateOrderInput(
            owner_user_id=owner.id,
            items=[OrderLineInput(product_id=product.id)],
            shipping_address=elsewhere,
        )
    )

    assert result.order.shipping_address == elsewhere


# =============================================================================
# Queries
# =============================================================================


def _stored_order(orders, owner_id, status=OrderStatus.PENDING):
    return orders.create_order(
        Order(
            id=uuid4(),
            code=generate_order_code(),
            owner_user_id=owner_id,
            status=status,
        )
    )


def test_list_orders_filters_by_owner_and_status():
    orders = InMemoryOrderRepository()
    me, other = uuid4(), uuid4()
    mine = _stored_order(orders, me)
    _stored_order(orders, other)
    _stored_order(orders, me, status=OrderStatus.DELIVERED)
    use_case = ListOrdersUseCase(order_repository=orders)

    own = use_case.execute(owner_user_id=me)
    pending = use_case.execute(status="PENDING ")

    assert len(own.orders) == 2
    assert {o.id for o in pending.orders} >= {mine.id}
    assert all(o.status == OrderStatus.PENDING for o in pending.orders)


def test_list_orders_rejects_unknown_status():
    result = ListOrdersUseCase(order_repository=InMemoryOrderRepository()).execute(
        status="shipped"
    )

    assert result.error.code == OrderErrorCode.VALIDATION_ERROR
    assert result.error.message == "Invalid status value"


def test_get_missing_order():
    result = GetOrderUseCase(order_repository=InMemoryOrderRepository()).execute(
        uuid4()
    )

    assert result.error.message == "Order not found"


# =============================================================================
# Status update
# =============================================================================


def test_update_status_keeps_previous_status():
    orders = InMemoryOrderRepository()
    order = _stored_order(orders, uuid4())

    result = UpdateOrderStatusUseCase(order_repository=orders).execute(
        order.id, "processing"
    )

    assert result.order.status == OrderStatus.PROCESSING
    assert result.order.previous_status == OrderStatus.PENDING
    assert orders.get_order(order.id).status == OrderStatus.PROCESSING


@pytest.mark.parametrize("status", [None, "", "lost"])
def test_update_status_rejects_invalid_value(status):
    orders = InMemoryOrderRepository()
    order = _stored_order(orders, uuid4())

    result = UpdateOrderStatusUseCase(order_repository=orders).execute(
        order.id, status
    )

    assert result.error.message == "Invalid status value"


def test_update_status_of_missing_order():
    result = UpdateOrderStatusUseCase(
        order_repository=InMemoryOrderRepository()
    ).execute(uuid4(), "delivered")

    assert result.error.code == OrderErrorCode.NOT_FOUND
