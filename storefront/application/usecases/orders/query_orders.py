"""
===============================================================================
USE CASES: Get Order / List Orders
===============================================================================

Notas:
    - GetOrderUseCase asume que el guard de órdenes ya resolvió existencia y
      ownership; igual devuelve NOT_FOUND si la orden desapareció entre medio.
    - ListOrdersUseCase sirve tanto "mis órdenes" (owner_user_id fijo) como
      el listado admin (filtro opcional por estado, validado acá).
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....domain.entities import OrderStatus
from ....domain.repositories import OrderRepository
from .order_results import OrderError, OrderErrorCode, OrderListResult, OrderResult

MSG_ORDER_NOT_FOUND = "Order not found"
MSG_INVALID_STATUS = "Invalid status value"


def parse_order_status(value: str | None) -> OrderStatus | None:
    """None si el valor no es un estado válido."""
    if value is None:
        return None
    try:
        return OrderStatus(value.strip().lower())
    except ValueError:
        return None


class GetOrderUseCase:
    def __init__(self, *, order_repository: OrderRepository) -> None:
        self._orders = order_repository

    def execute(self, order_id: UUID) -> OrderResult:
        order = self._orders.get_order(order_id)
        if order is None:
            return OrderResult(
                error=OrderError(
                    code=OrderErrorCode.NOT_FOUND, message=MSG_ORDER_NOT_FOUND
                )
            )
        return OrderResult(order=order)


class ListOrdersUseCase:
    def __init__(self, *, order_repository: OrderRepository) -> None:
        self._orders = order_repository

    def execute(
        self,
        *,
        owner_user_id: UUID | None = None,
        status: str | None = None,
    ) -> OrderListResult:
        status_filter = None
        if status is not None and status.strip():
            status_filter = parse_order_status(status)
            if status_filter is None:
                return OrderListResult(
                    error=OrderError(
                        code=OrderErrorCode.VALIDATION_ERROR,
                        message=MSG_INVALID_STATUS,
                    )
                )

        return OrderListResult(
            orders=self._orders.list_orders(
                owner_user_id=owner_user_id, status=status_filter
            )
        )
