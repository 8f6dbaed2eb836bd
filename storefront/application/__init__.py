"""
Application layer: servicios de aplicación (promoción de rol, seed) y casos
de uso. No depende de FastAPI ni del driver de base de datos.
"""

from .role_promotion import PromotionOutcome, RolePromotionService

__all__ = ["PromotionOutcome", "RolePromotionService"]
