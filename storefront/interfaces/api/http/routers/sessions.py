"""
===============================================================================
TARJETA CRC — interfaces/api/http/routers/sessions.py
===============================================================================

Class/Module:
    Sessions Router (registro / login / sesión actual / logout / alta admin /
    reset de contraseña)

Responsibilities:
    - Convertir requests HTTP -> inputs de los casos de uso de auth.
    - Setear / limpiar la cookie httpOnly del access token.
    - Devolver usuario + flags de completitud (+ token cuando corresponde).
    - Flujo de reset: pedir link, verificar token, fijar nueva contraseña.

Collaborators:
    - application.usecases.auth
    - identity.auth_dependencies (require_principal, require_admin)
    - identity.auth_users.get_auth_settings (cookie)
    - schemas.users

Notes:
    - login y current disparan la promoción guest -> user (en el caso de uso).
    - forgot-password responde igual exista o no el email.
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request, Response

from .....application.usecases import (
    AuthResult,
    CreateAdminInput,
    CreateAdminUseCase,
    GetCurrentUserUseCase,
    LoginUserInput,
    LoginUserUseCase,
    RegisterUserInput,
    RegisterUserUseCase,
    RequestPasswordResetUseCase,
    ResetPasswordUseCase,
    VerifyResetTokenUseCase,
)
from .....application.usecases.auth.password_reset import (
    MSG_PASSWORD_RESET,
    MSG_RESET_REQUESTED,
    MSG_TOKEN_VALID,
)
from .....container import (
    get_create_admin_use_case,
    get_current_user_use_case,
    get_login_user_use_case,
    get_register_user_use_case,
    get_request_password_reset_use_case,
    get_reset_password_use_case,
    get_verify_reset_token_use_case,
)
from .....identity.auth_dependencies import require_admin, require_principal
from .....identity.auth_users import (
    DEFAULT_ACCESS_TOKEN_COOKIE,
    get_auth_settings,
)
from .....identity.users import AuthenticatedPrincipal
from ..error_mapping import raise_auth_error
from ..schemas.users import (
    AuthRes,
    CreateAdminReq,
    ForgotPasswordReq,
    LoginReq,
    MessageRes,
    RegisterReq,
    ResetPasswordReq,
    ResetTokenRes,
    UserDetailRes,
    UserRes,
)

router = APIRouter(prefix="/sessions", tags=["sessions"])


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------


def _set_auth_cookie(response: Response, token: str, expires_in: int) -> None:
    """Setea cookie httpOnly de acceso."""
    settings = get_auth_settings()
    response.set_cookie(
        key=settings.jwt_cookie_name or DEFAULT_ACCESS_TOKEN_COOKIE,
        value=token,
        httponly=True,
        secure=settings.jwt_cookie_secure,
        samesite="lax",
        max_age=expires_in,
        path="/",
    )


def _clear_auth_cookie(response: Response) -> None:
    settings = get_auth_settings()
    response.delete_cookie(
        key=settings.jwt_cookie_name or DEFAULT_ACCESS_TOKEN_COOKIE,
        path="/",
        samesite="lax",
        secure=settings.jwt_cookie_secure,
    )


def _to_auth_res(result: AuthResult, message: str) -> AuthRes:
    completeness = result.completeness
    return AuthRes(
        message=message,
        user=UserRes.from_domain(result.user),
        user_is_completed=completeness.personal_complete,
        address_is_completed=completeness.address_complete,
        token=result.token,
        expires_in=result.expires_in,
    )


# -----------------------------------------------------------------------------
# Endpoints
# -----------------------------------------------------------------------------


@router.post("/register", response_model=AuthRes, status_code=201)
def register(
    req: RegisterReq,
    response: Response,
    use_case: RegisterUserUseCase = Depends(get_register_user_use_case),
):
    result = use_case.execute(
        RegisterUserInput(
            email=req.email,
            password=req.password,
            first_name=req.first_name,
            last_name=req.last_name,
            identification_number=req.identification_number,
            birth_date=req.birth_date,
            activity_type=req.activity_type,
            activity_number=req.activity_number,
            phone=req.phone,
            address=req.address.model_dump() if req.address else None,
        )
    )
    if result.error is not None:
        raise_auth_error(result.error)

    _set_auth_cookie(response, result.token, result.expires_in)
    return _to_auth_res(result, "User registered successfully")


@router.post("/login", response_model=AuthRes)
def login(
    req: LoginReq,
    response: Response,
    use_case: LoginUserUseCase = Depends(get_login_user_use_case),
):
    result = use_case.execute(LoginUserInput(email=req.email, password=req.password))
    if result.error is not None:
        raise_auth_error(result.error)

    _set_auth_cookie(response, result.token, result.expires_in)
    return _to_auth_res(result, "Login successful")


@router.get("/current", response_model=UserDetailRes)
def current(
    principal: AuthenticatedPrincipal = Depends(require_principal()),
    use_case: GetCurrentUserUseCase = Depends(get_current_user_use_case),
):
    result = use_case.execute(principal.user_id)
    return UserDetailRes.build(result.user, result.completeness)


@router.api_route("/logout", methods=["GET", "POST"], response_model=MessageRes)
def logout(response: Response):
    """Siempre borra la cookie. No requiere autenticación (idempotente)."""
    _clear_auth_cookie(response)
    return MessageRes(message="Logout successful")


@router.post("/admin", response_model=AuthRes, status_code=201)
def create_admin(
    req: CreateAdminReq,
    principal: AuthenticatedPrincipal = Depends(require_admin()),
    use_case: CreateAdminUseCase = Depends(get_create_admin_use_case),
):
    result = use_case.execute(
        CreateAdminInput(
            actor=principal,
            email=req.email,
            password=req.password,
            first_name=req.first_name,
            last_name=req.last_name,
        )
    )
    if result.error is not None:
        raise_auth_error(result.error)
    return _to_auth_res(result, "Admin user created successfully")


@router.post("/forgot-password", response_model=MessageRes)
def forgot_password(
    req: ForgotPasswordReq,
    request: Request,
    use_case: RequestPasswordResetUseCase = Depends(
        get_request_password_reset_use_case
    ),
):
    result = use_case.execute(
        req.email,
        lambda token: str(request.url_for("verify_reset_token", token=token)),
    )
    if result.error is not None:
        raise_auth_error(result.error)
    return MessageRes(message=MSG_RESET_REQUESTED)


@router.get(
    "/reset-password/{token}",
    response_model=ResetTokenRes,
    name="verify_reset_token",
)
def verify_reset_token(
    token: str,
    use_case: VerifyResetTokenUseCase = Depends(get_verify_reset_token_use_case),
):
    result = use_case.execute(token)
    if result.error is not None:
        raise_auth_error(result.error)
    return ResetTokenRes(message=MSG_TOKEN_VALID, email=result.email)


@router.post("/reset-password/{token}", response_model=MessageRes)
def reset_password(
    token: str,
    req: ResetPasswordReq,
    use_case: ResetPasswordUseCase = Depends(get_reset_password_use_case),
):
    result = use_case.execute(token, req.password)
    if result.error is not None:
        raise_auth_error(result.error)
    return MessageRes(message=MSG_PASSWORD_RESET)
