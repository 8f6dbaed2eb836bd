"""
===============================================================================
TARJETA CRC — domain/__init__.py
===============================================================================

Módulo:
    Exportaciones de la Capa de Dominio (API pública del dominio)

Responsabilidades:
    - Centralizar exports para imports limpios en application/interfaces.
    - Mantener estable el “surface area” del dominio.

Colaboradores:
    - domain.entities: Product, Cart, Order, ProductQuestion
    - domain.profile: evaluador de completitud de perfil
    - domain.access_policy: decisiones de acceso puras (sin HTTP)
    - domain.repositories: Puertos de persistencia

Reglas:
    - Solo re-exporta contratos/entidades del dominio.
    - No importar infraestructura aquí.
===============================================================================
"""

from .access_policy import (
    AccessDecision,
    DenialCode,
    check_cart_owner_or_admin,
    check_complete_profile,
    check_order_owner_or_admin,
    check_role,
    check_self_or_admin,
)
from .entities import (
    Cart,
    CartItem,
    Order,
    OrderItem,
    OrderStatus,
    PaymentMethod,
    Product,
    ProductQuestion,
)
from .profile import (
    DEFAULT_REQUIREMENTS,
    ProfileCompleteness,
    ProfileRequirements,
    evaluate_completeness,
    is_address_complete,
    is_personal_complete,
)
from .repositories import (
    CartRepository,
    OrderRepository,
    ProductPage,
    ProductQuery,
    ProductQuestionRepository,
    ProductRepository,
    UserRepository,
)

__all__ = [
    # Entities
    "Product",
    "Cart",
    "CartItem",
    "Order",
    "OrderItem",
    "OrderStatus",
    "PaymentMethod",
    "ProductQuestion",
    # Profile
    "ProfileRequirements",
    "ProfileCompleteness",
    "DEFAULT_REQUIREMENTS",
    "evaluate_completeness",
    "is_personal_complete",
    "is_address_complete",
    # Access policy
    "AccessDecision",
    "DenialCode",
    "check_role",
    "check_self_or_admin",
    "check_cart_owner_or_admin",
    "check_order_owner_or_admin",
    "check_complete_profile",
    # Repositories
    "UserRepository",
    "CartRepository",
    "OrderRepository",
    "ProductRepository",
    "ProductQuestionRepository",
    "ProductQuery",
    "ProductPage",
]
