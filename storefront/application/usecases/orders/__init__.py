"""Order use cases."""

from .create_order import (
    CreateOrderInput,
    CreateOrderUseCase,
    OrderLineInput,
    build_order_items,
    generate_order_code,
)
from .order_results import OrderError, OrderErrorCode, OrderListResult, OrderResult
from .query_orders import GetOrderUseCase, ListOrdersUseCase, parse_order_status
from .update_order_status import UpdateOrderStatusUseCase

__all__ = [
    "CreateOrderInput",
    "CreateOrderUseCase",
    "GetOrderUseCase",
    "ListOrdersUseCase",
    "OrderError",
    "OrderErrorCode",
    "OrderLineInput",
    "OrderListResult",
    "OrderResult",
    "UpdateOrderStatusUseCase",
    "build_order_items",
    "generate_order_code",
    "parse_order_status",
]
