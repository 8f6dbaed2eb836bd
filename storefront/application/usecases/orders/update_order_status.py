"""
===============================================================================
USE CASE: Update Order Status (admin)
===============================================================================

Business Goal:
    Cambiar el estado de una orden conservando el estado anterior
    (previous_status) para trazabilidad.

Notas:
    - No se impone una máquina de estados: el admin puede mover la orden a
      cualquiera de los estados soportados.
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....crosscutting.logger import logger
from ....domain.repositories import OrderRepository
from .order_results import OrderError, OrderErrorCode, OrderResult
from .query_orders import MSG_INVALID_STATUS, MSG_ORDER_NOT_FOUND, parse_order_status


class UpdateOrderStatusUseCase:
    def __init__(self, *, order_repository: OrderRepository) -> None:
        self._orders = order_repository

    def execute(self, order_id: UUID, status: str | None) -> OrderResult:
        new_status = parse_order_status(status)
        if new_status is None:
            return self._error(OrderErrorCode.VALIDATION_ERROR, MSG_INVALID_STATUS)

        order = self._orders.get_order(order_id)
        if order is None:
            return self._error(OrderErrorCode.NOT_FOUND, MSG_ORDER_NOT_FOUND)

        order.change_status(new_status)
        saved = self._orders.save_order(order)
        if saved is None:
            return self._error(OrderErrorCode.NOT_FOUND, MSG_ORDER_NOT_FOUND)

        logger.info(
            "Estado de orden actualizado",
            extra={
                "order_id": str(order_id),
                "status": saved.status.value,
                "previous_status": (
                    saved.previous_status.value if saved.previous_status else None
                ),
            },
        )
        return OrderResult(order=saved)

    @staticmethod
    def _error(code: OrderErrorCode, message: str) -> OrderResult:
        return OrderResult(error=OrderError(code=code, message=message))
