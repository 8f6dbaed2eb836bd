"""
===============================================================================
TARJETA CRC — storefront/container.py (Composition Root / DI manual)
===============================================================================

Responsabilidades:
  - Componer dependencias (repositorios, servicios, casos de uso) siguiendo DIP.
  - Exponer factories para FastAPI (Depends).
  - Mantener singletons con caching (lru_cache) para recursos compartidos.
  - Centralizar decisiones runtime basadas en Settings (config).

Colaboradores:
  - storefront.crosscutting.config.get_settings
  - storefront.domain.repositories.* (puertos)
  - storefront.infrastructure.* (implementaciones Mongo / InMemory)
  - storefront.identity.auth_users (hash, tokens, resolver de principal)
  - storefront.application.* (promoción + casos de uso)

Patrones aplicados:
  - Composition Root
  - Dependency Inversion (use cases dependen de puertos)
  - Lazy singletons con lru_cache

Notas:
  - Este archivo NO contiene lógica de negocio.
  - Este archivo NO debe depender de FastAPI (solo expone factories).
  - El resolver de autenticación se elige ACÁ; el core nunca mira flags de
    entorno para decidir cómo autenticar.
===============================================================================
"""

from __future__ import annotations

from functools import lru_cache

from .application.role_promotion import RolePromotionService
from .application.usecases import (
    AddProductToCartUseCase,
    AnswerQuestionUseCase,
    AskQuestionUseCase,
    CheckoutCartUseCase,
    CreateAdminUseCase,
    CreateCartUseCase,
    CreateOrderUseCase,
    CreateProductUseCase,
    DeleteProductUseCase,
    DeleteUserUseCase,
    EmptyCartUseCase,
    GetCartUseCase,
    GetCurrentUserUseCase,
    GetOrderUseCase,
    GetProductUseCase,
    GetUserUseCase,
    ListOrdersUseCase,
    ListProductsUseCase,
    ListQuestionsUseCase,
    ListUsersUseCase,
    LoginUserUseCase,
    RegisterUserUseCase,
    RemoveCartItemUseCase,
    RequestPasswordResetUseCase,
    ResetPasswordUseCase,
    UpdateCartItemUseCase,
    UpdateOrderStatusUseCase,
    UpdateProductUseCase,
    UpdateUserProfileUseCase,
    VerifyResetTokenUseCase,
)
from .crosscutting.config import get_settings
from .domain.profile import ProfileRequirements
from .domain.repositories import (
    CartRepository,
    OrderRepository,
    PasswordResetTokenRepository,
    ProductQuestionRepository,
    ProductRepository,
    UserRepository,
)
from .domain.services import PasswordResetNotifier
from .identity.auth_users import (
    AuthenticationResolver,
    JwtAuthenticationResolver,
    create_access_token,
    hash_password,
    verify_password,
)
from .infrastructure.db.client import get_database
from .infrastructure.repositories import (
    InMemoryCartRepository,
    InMemoryOrderRepository,
    InMemoryPasswordResetTokenRepository,
    InMemoryProductQuestionRepository,
    InMemoryProductRepository,
    InMemoryUserRepository,
    MongoCartRepository,
    MongoOrderRepository,
    MongoPasswordResetTokenRepository,
    MongoProductQuestionRepository,
    MongoProductRepository,
    MongoUserRepository,
)
from .infrastructure.services import LoggingPasswordResetNotifier


def _is_test_env() -> bool:
    """
    Determina si estamos en entorno de test.

    Regla:
      - app_env ∈ {"test", "testing", "ci"} => se favorecen in-memory adapters.
    """
    return get_settings().is_test()


# =============================================================================
# Repositorios (singletons)
# =============================================================================


@lru_cache(maxsize=1)
def get_user_repository() -> UserRepository:
    """Repositorio de usuarios (in-memory en test; Mongo en runtime)."""
    if _is_test_env():
        return InMemoryUserRepository()
    return MongoUserRepository(get_database())


@lru_cache(maxsize=1)
def get_cart_repository() -> CartRepository:
    if _is_test_env():
        return InMemoryCartRepository()
    return MongoCartRepository(get_database())


@lru_cache(maxsize=1)
def get_order_repository() -> OrderRepository:
    if _is_test_env():
        return InMemoryOrderRepository()
    return MongoOrderRepository(get_database())


@lru_cache(maxsize=1)
def get_product_repository() -> ProductRepository:
    if _is_test_env():
        return InMemoryProductRepository()
    return MongoProductRepository(get_database())


@lru_cache(maxsize=1)
def get_question_repository() -> ProductQuestionRepository:
    if _is_test_env():
        return InMemoryProductQuestionRepository()
    return MongoProductQuestionRepository(get_database())


@lru_cache(maxsize=1)
def get_password_reset_repository() -> PasswordResetTokenRepository:
    if _is_test_env():
        return InMemoryPasswordResetTokenRepository()
    return MongoPasswordResetTokenRepository(get_database())


# =============================================================================
# Servicios (singletons)
# =============================================================================


@lru_cache(maxsize=1)
def get_profile_requirements() -> ProfileRequirements:
    """Campos requeridos para considerar el perfil completo (desde Settings)."""
    return ProfileRequirements(personal_fields=get_settings().get_personal_fields())


@lru_cache(maxsize=1)
def get_role_promotion_service() -> RolePromotionService:
    return RolePromotionService(
        get_user_repository(), requirements=get_profile_requirements()
    )


@lru_cache(maxsize=1)
def get_authentication_resolver() -> AuthenticationResolver:
    """Resolver token -> principal (JWT + recarga del usuario)."""
    return JwtAuthenticationResolver(get_user_repository())


@lru_cache(maxsize=1)
def get_password_reset_notifier() -> PasswordResetNotifier:
    """Notificador de reset (solo log; el link se omite en producción)."""
    return LoggingPasswordResetNotifier(include_link=not get_settings().is_production())


# =============================================================================
# Casos de uso: auth
# =============================================================================


def get_register_user_use_case() -> RegisterUserUseCase:
    return RegisterUserUseCase(
        user_repository=get_user_repository(),
        cart_repository=get_cart_repository(),
        password_hasher=hash_password,
        token_issuer=create_access_token,
        requirements=get_profile_requirements(),
    )


def get_login_user_use_case() -> LoginUserUseCase:
    return LoginUserUseCase(
        user_repository=get_user_repository(),
        promotion_service=get_role_promotion_service(),
        password_verifier=verify_password,
        token_issuer=create_access_token,
    )


def get_current_user_use_case() -> GetCurrentUserUseCase:
    return GetCurrentUserUseCase(promotion_service=get_role_promotion_service())


def get_create_admin_use_case() -> CreateAdminUseCase:
    return CreateAdminUseCase(
        user_repository=get_user_repository(),
        password_hasher=hash_password,
        token_issuer=create_access_token,
        requirements=get_profile_requirements(),
    )


def get_request_password_reset_use_case() -> RequestPasswordResetUseCase:
    return RequestPasswordResetUseCase(
        user_repository=get_user_repository(),
        token_repository=get_password_reset_repository(),
        notifier=get_password_reset_notifier(),
        ttl_minutes=get_settings().password_reset_ttl_minutes,
    )


def get_verify_reset_token_use_case() -> VerifyResetTokenUseCase:
    return VerifyResetTokenUseCase(
        user_repository=get_user_repository(),
        token_repository=get_password_reset_repository(),
    )


def get_reset_password_use_case() -> ResetPasswordUseCase:
    return ResetPasswordUseCase(
        user_repository=get_user_repository(),
        token_repository=get_password_reset_repository(),
        notifier=get_password_reset_notifier(),
        password_hasher=hash_password,
        password_verifier=verify_password,
    )


# =============================================================================
# Casos de uso: usuarios
# =============================================================================


def get_list_users_use_case() -> ListUsersUseCase:
    return ListUsersUseCase(user_repository=get_user_repository())


def get_get_user_use_case() -> GetUserUseCase:
    return GetUserUseCase(
        user_repository=get_user_repository(),
        requirements=get_profile_requirements(),
    )


def get_update_user_profile_use_case() -> UpdateUserProfileUseCase:
    return UpdateUserProfileUseCase(
        user_repository=get_user_repository(),
        promotion_service=get_role_promotion_service(),
    )


def get_delete_user_use_case() -> DeleteUserUseCase:
    return DeleteUserUseCase(
        user_repository=get_user_repository(),
        cart_repository=get_cart_repository(),
    )


# =============================================================================
# Casos de uso: carritos
# =============================================================================


def get_create_cart_use_case() -> CreateCartUseCase:
    return CreateCartUseCase(
        user_repository=get_user_repository(),
        cart_repository=get_cart_repository(),
    )


def get_get_cart_use_case() -> GetCartUseCase:
    return GetCartUseCase(cart_repository=get_cart_repository())


def get_add_product_to_cart_use_case() -> AddProductToCartUseCase:
    return AddProductToCartUseCase(
        cart_repository=get_cart_repository(),
        product_repository=get_product_repository(),
    )


def get_update_cart_item_use_case() -> UpdateCartItemUseCase:
    return UpdateCartItemUseCase(cart_repository=get_cart_repository())


def get_remove_cart_item_use_case() -> RemoveCartItemUseCase:
    return RemoveCartItemUseCase(cart_repository=get_cart_repository())


def get_empty_cart_use_case() -> EmptyCartUseCase:
    return EmptyCartUseCase(cart_repository=get_cart_repository())


def get_checkout_cart_use_case() -> CheckoutCartUseCase:
    return CheckoutCartUseCase(
        cart_repository=get_cart_repository(),
        product_repository=get_product_repository(),
        order_repository=get_order_repository(),
        user_repository=get_user_repository(),
    )


# =============================================================================
# Casos de uso: órdenes
# =============================================================================


def get_create_order_use_case() -> CreateOrderUseCase:
    return CreateOrderUseCase(
        order_repository=get_order_repository(),
        product_repository=get_product_repository(),
        user_repository=get_user_repository(),
    )


def get_get_order_use_case() -> GetOrderUseCase:
    return GetOrderUseCase(order_repository=get_order_repository())


def get_list_orders_use_case() -> ListOrdersUseCase:
    return ListOrdersUseCase(order_repository=get_order_repository())


def get_update_order_status_use_case() -> UpdateOrderStatusUseCase:
    return UpdateOrderStatusUseCase(order_repository=get_order_repository())


# =============================================================================
# Casos de uso: catálogo
# =============================================================================


def get_list_products_use_case() -> ListProductsUseCase:
    settings = get_settings()
    return ListProductsUseCase(
        product_repository=get_product_repository(),
        default_limit=settings.products_default_limit,
        max_limit=settings.products_max_limit,
    )


def get_get_product_use_case() -> GetProductUseCase:
    return GetProductUseCase(product_repository=get_product_repository())


def get_create_product_use_case() -> CreateProductUseCase:
    return CreateProductUseCase(product_repository=get_product_repository())


def get_update_product_use_case() -> UpdateProductUseCase:
    return UpdateProductUseCase(product_repository=get_product_repository())


def get_delete_product_use_case() -> DeleteProductUseCase:
    return DeleteProductUseCase(product_repository=get_product_repository())


# =============================================================================
# Casos de uso: preguntas
# =============================================================================


def get_ask_question_use_case() -> AskQuestionUseCase:
    return AskQuestionUseCase(
        question_repository=get_question_repository(),
        product_repository=get_product_repository(),
    )


def get_list_questions_use_case() -> ListQuestionsUseCase:
    return ListQuestionsUseCase(question_repository=get_question_repository())


def get_answer_question_use_case() -> AnswerQuestionUseCase:
    return AnswerQuestionUseCase(question_repository=get_question_repository())
