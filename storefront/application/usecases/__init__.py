"""
Use Cases Layer (Business Operations)

Organizados por feature:

usecases/
├── auth/       # registro, login, sesión actual, alta de admins, reset
├── users/      # gestión de usuarios + update de perfil (dispara promoción)
├── carts/      # contenido del carrito + checkout
├── orders/     # órdenes de compra
├── catalog/    # productos
└── questions/  # preguntas y respuestas sobre productos

Uso:

    from storefront.application.usecases.auth import LoginUserUseCase
    from storefront.application.usecases import LoginUserUseCase
"""

from .auth import (
    AuthError,
    AuthErrorCode,
    AuthResult,
    CreateAdminInput,
    CreateAdminUseCase,
    GetCurrentUserUseCase,
    LoginUserInput,
    LoginUserUseCase,
    PasswordResetResult,
    RegisterUserInput,
    RegisterUserUseCase,
    RequestPasswordResetUseCase,
    ResetPasswordUseCase,
    VerifyResetTokenUseCase,
)
from .carts import (
    AddProductToCartUseCase,
    CartError,
    CartErrorCode,
    CartResult,
    CheckoutCartInput,
    CheckoutCartUseCase,
    CheckoutResult,
    CreateCartUseCase,
    EmptyCartUseCase,
    GetCartUseCase,
    RemoveCartItemUseCase,
    UpdateCartItemUseCase,
)
from .catalog import (
    CreateProductInput,
    CreateProductUseCase,
    DeleteProductUseCase,
    GetProductUseCase,
    ListProductsInput,
    ListProductsUseCase,
    ProductError,
    ProductErrorCode,
    UpdateProductUseCase,
)
from .orders import (
    CreateOrderInput,
    CreateOrderUseCase,
    GetOrderUseCase,
    ListOrdersUseCase,
    OrderError,
    OrderErrorCode,
    OrderLineInput,
    UpdateOrderStatusUseCase,
)
from .questions import (
    AnswerQuestionInput,
    AnswerQuestionUseCase,
    AskQuestionInput,
    AskQuestionUseCase,
    ListQuestionsUseCase,
    QuestionError,
    QuestionErrorCode,
)
from .users import (
    DeleteUserUseCase,
    GetUserUseCase,
    ListUsersUseCase,
    UpdateUserProfileInput,
    UpdateUserProfileUseCase,
    UserError,
    UserErrorCode,
)

__all__ = [
    # Auth
    "AuthError",
    "AuthErrorCode",
    "AuthResult",
    "CreateAdminInput",
    "CreateAdminUseCase",
    "GetCurrentUserUseCase",
    "LoginUserInput",
    "LoginUserUseCase",
    "PasswordResetResult",
    "RegisterUserInput",
    "RegisterUserUseCase",
    "RequestPasswordResetUseCase",
    "ResetPasswordUseCase",
    "VerifyResetTokenUseCase",
    # Users
    "DeleteUserUseCase",
    "GetUserUseCase",
    "ListUsersUseCase",
    "UpdateUserProfileInput",
    "UpdateUserProfileUseCase",
    "UserError",
    "UserErrorCode",
    # Carts
    "AddProductToCartUseCase",
    "CartError",
    "CartErrorCode",
    "CartResult",
    "CheckoutCartInput",
    "CheckoutCartUseCase",
    "CheckoutResult",
    "CreateCartUseCase",
    "EmptyCartUseCase",
    "GetCartUseCase",
    "RemoveCartItemUseCase",
    "UpdateCartItemUseCase",
    # Orders
    "CreateOrderInput",
    "CreateOrderUseCase",
    "GetOrderUseCase",
    "ListOrdersUseCase",
    "OrderError",
    "OrderErrorCode",
    "OrderLineInput",
    "UpdateOrderStatusUseCase",
    # Catalog
    "CreateProductInput",
    "CreateProductUseCase",
    "DeleteProductUseCase",
    "GetProductUseCase",
    "ListProductsInput",
    "ListProductsUseCase",
    "ProductError",
    "ProductErrorCode",
    "UpdateProductUseCase",
    # Questions
    "AnswerQuestionInput",
    "AnswerQuestionUseCase",
    "AskQuestionInput",
    "AskQuestionUseCase",
    "ListQuestionsUseCase",
    "QuestionError",
    "QuestionErrorCode",
]
