"""
Name: Cart and Checkout Use Case Tests

Responsibilities:
  - Create cart is idempotent per user
  - Add / update / remove / empty items with stable error messages
  - Checkout: empty cart, stock check, order snapshot, cart cleared
"""

from dataclasses import replace
from uuid import uuid4

import pytest
from factories import full_address, make_product, make_user
from storefront.application.usecases import (
    AddProductToCartUseCase,
    CartErrorCode,
    CheckoutCartInput,
    CheckoutCartUseCase,
    CreateCartUseCase,
    EmptyCartUseCase,
    GetCartUseCase,
    RemoveCartItemUseCase,
    UpdateCartItemUseCase,
)
from storefront.crosscutting.exceptions import UserNotFoundError
from storefront.domain.entities import Cart, OrderStatus, PaymentMethod
from storefront.infrastructure.repositories import (
    InMemoryCartRepository,
    InMemoryOrderRepository,
    InMemoryProductRepository,
    InMemoryUserRepository,
)

pytestmark = pytest.mark.unit


@pytest.fixture
def carts():
    return InMemoryCartRepository()


@pytest.fixture
def cart(carts):
    return carts.create_cart(Cart(id=uuid4(), owner_user_id=uuid4()))


# =============================================================================
# Create / Get
# =============================================================================


def test_create_cart_assigns_cart_to_user(carts):
    user = make_user()
    users = InMemoryUserRepository([user])

    result = CreateCartUseCase(user_repository=users, cart_repository=carts).execute(
        user.id
    )

    assert result.created is True
    assert users.get_user(user.id).cart_id == result.cart.id


def test_create_cart_is_idempotent(carts):
    user = make_user()
    users = InMemoryUserRepository([user])
    use_case = CreateCartUseCase(user_repository=users, cart_repository=carts)

    first = use_case.execute(user.id)
    second = use_case.execute(user.id)

    assert second.created is False
    assert second.cart.id == first.cart.id


def test_create_cart_for_missing_user_raises(carts):
    use_case = CreateCartUseCase(
        user_repository=InMemoryUserRepository(), cart_repository=carts
    )

    with pytest.raises(UserNotFoundError):
        use_case.execute(uuid4())


def test_get_missing_cart(carts):
    result = GetCartUseCase(cart_repository=carts).execute(uuid4())

    assert result.error.code == CartErrorCode.NOT_FOUND
    assert result.error.message == "Cart not found"


# =============================================================================
# Items
# =============================================================================


def test_add_product_accumulates_quantity(carts, cart):
    product = make_product()
    use_case = AddProductToCartUseCase(
        cart_repository=carts,
        product_repository=InMemoryProductRepository([product]),
    )

    use_case.execute(cart.id, product.id, 2)
    result = use_case.execute(cart.id, product.id, 3)

    assert result.error is None
    assert len(result.cart.items) == 1
    assert result.cart.items[0].quantity == 5


@pytest.mark.parametrize("quantity", [0, -1, True, "2"])
def test_add_product_rejects_invalid_quantity(carts, cart, quantity):
    product = make_product()
    use_case = AddProductToCartUseCase(
        cart_repository=carts,
        product_repository=InMemoryProductRepository([product]),
    )

    result = use_case.execute(cart.id, product.id, quantity)

    assert result.error.code == CartErrorCode.VALIDATION_ERROR
    assert result.error.message == "Invalid quantity value"


def test_add_inactive_product_is_not_found(carts, cart):
    product = make_product(is_active=False)
    use_case = AddProductToCartUseCase(
        cart_repository=carts,
        product_repository=InMemoryProductRepository([product]),
    )

    result = use_case.execute(cart.id, product.id, 1)

    assert result.error.message == "Product not found"


def test_update_quantity_of_missing_item(carts, cart):
    result = UpdateCartItemUseCase(cart_repository=carts).execute(
        cart.id, uuid4(), 2
    )

    assert result.error.message == "Product not found in cart"


def test_update_remove_and_empty(carts, cart):
    first, second = make_product(), make_product(title="Sierra")
    adder = AddProductToCartUseCase(
        cart_repository=carts,
        product_repository=InMemoryProductRepository([first, second]),
    )
    adder.execute(cart.id, first.id, 1)
    adder.execute(cart.id, second.id, 1)

    updated = UpdateCartItemUseCase(cart_repository=carts).execute(
        cart.id, first.id, 4
    )
    assert updated.cart.find_item(first.id).quantity == 4

    removed = RemoveCartItemUseCase(cart_repository=carts).execute(cart.id, second.id)
    assert [i.product_id for i in removed.cart.items] == [first.id]

    emptied = EmptyCartUseCase(cart_repository=carts).execute(cart.id)
    assert emptied.cart.is_empty


# =============================================================================
# Checkout
# =============================================================================


def _checkout_setup(*products, owner=None):
    owner = owner or make_user(address=full_address())
    carts = InMemoryCartRepository()
    cart = carts.create_cart(Cart(id=uuid4(), owner_user_id=owner.id))
    users = InMemoryUserRepository([replace(owner, cart_id=cart.id)])
    product_repo = InMemoryProductRepository(list(products))
    orders = InMemoryOrderRepository()
    use_case = CheckoutCartUseCase(
        cart_repository=carts,
        product_repository=product_repo,
        order_repository=orders,
        user_repository=users,
    )
    return use_case, carts, cart, orders


def _put(carts, cart, product, quantity):
    stored = carts.get_cart(cart.id)
    stored.add_product(product.id, quantity)
    carts.save_cart(stored)


def test_checkout_empty_cart():
    use_case, _, cart, _ = _checkout_setup()

    result = use_case.execute(CheckoutCartInput(cart_id=cart.id))

    assert result.error.code == CartErrorCode.VALIDATION_ERROR
    assert result.error.message == "Cart is empty"


def test_checkout_rejects_insufficient_stock():
    scarce = make_product(stock=1)
    use_case, carts, cart, orders = _checkout_setup(scarce)
    _put(carts, cart, scarce, 3)

    result = use_case.execute(CheckoutCartInput(cart_id=cart.id))

    assert result.error.message == "Some products are not available"
    assert result.error.details == [
        {"product_id": str(scarce.id), "requested": 3, "available": 1}
    ]
    assert orders.list_orders() == []
    assert not carts.get_cart(cart.id).is_empty


def test_checkout_creates_order_and_clears_cart():
    drill = make_product(price=150.0, stock=5)
    saw = make_product(price=80.5, stock=5, title="Sierra")
    owner = make_user(address=full_address())
    use_case, carts, cart, orders = _checkout_setup(drill, saw, owner=owner)
    _put(carts, cart, drill, 2)
    _put(carts, cart, saw, 1)

    result = use_case.execute(
        CheckoutCartInput(cart_id=cart.id, payment_method=PaymentMethod.TRANSFER)
    )

    assert result.error is None
    order = result.order
    assert order.code.startswith("ORD-")
    assert order.owner_user_id == owner.id
    assert order.status == OrderStatus.PENDING
    assert order.total_amount == 380.5
    assert order.shipping_address == full_address()
    assert order.payment_method == PaymentMethod.TRANSFER
    assert carts.get_cart(cart.id).is_empty
    assert orders.get_order(order.id) is not None
