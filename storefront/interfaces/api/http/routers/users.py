"""
===============================================================================
TARJETA CRC — interfaces/api/http/routers/users.py
===============================================================================

Class/Module:
    Users Router

Responsibilities:
    - Listado (admin), lectura y update (self o admin), baja (admin).
    - Enforce de auth/ownership en el borde antes de tocar el caso de uso.
    - Devolver flags de completitud recalculados.

Collaborators:
    - application.usecases.users
    - identity.auth_dependencies / identity.access_control
    - interfaces.api.http.dependencies.parse_uuid

Notes:
    - El id de path se parsea a mano para responder "Invalid user ID format".
    - El update dispara la promoción guest -> user.
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from .....application.usecases import (
    DeleteUserUseCase,
    GetUserUseCase,
    ListUsersUseCase,
    UpdateUserProfileInput,
    UpdateUserProfileUseCase,
)
from .....container import (
    get_delete_user_use_case,
    get_get_user_use_case,
    get_list_users_use_case,
    get_update_user_profile_use_case,
)
from .....identity.access_control import require_self_or_admin
from .....identity.auth_dependencies import require_admin, require_principal
from .....identity.users import AuthenticatedPrincipal
from ..dependencies import parse_uuid
from ..error_mapping import raise_user_error
from ..schemas.users import (
    MessageRes,
    UpdateUserReq,
    UserDetailRes,
    UserRes,
    UsersListRes,
)

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=UsersListRes)
def list_users(
    _admin: AuthenticatedPrincipal = Depends(require_admin()),
    use_case: ListUsersUseCase = Depends(get_list_users_use_case),
):
    result = use_case.execute()
    return UsersListRes(payload=[UserRes.from_domain(u) for u in result.users])


@router.get("/{uid}", response_model=UserDetailRes)
def get_user(
    uid: str,
    principal: AuthenticatedPrincipal = Depends(require_principal()),
    use_case: GetUserUseCase = Depends(get_get_user_use_case),
):
    user_id = parse_uuid(uid, "user")
    require_self_or_admin(principal, user_id)

    result = use_case.execute(user_id)
    if result.error is not None:
        raise_user_error(result.error)
    return UserDetailRes.build(result.user, result.completeness)


@router.put("/{uid}", response_model=UserDetailRes)
def update_user(
    uid: str,
    req: UpdateUserReq,
    principal: AuthenticatedPrincipal = Depends(require_principal()),
    use_case: UpdateUserProfileUseCase = Depends(get_update_user_profile_use_case),
):
    user_id = parse_uuid(uid, "user")
    require_self_or_admin(principal, user_id)

    # R: solo las claves enviadas; role se descarta acá y en el caso de uso.
    changes = req.model_dump(exclude_unset=True, exclude={"role"})
    if "address" in changes and changes["address"] is not None:
        changes["address"] = req.address.model_dump(exclude_unset=True)

    result = use_case.execute(UpdateUserProfileInput(user_id=user_id, changes=changes))
    if result.error is not None:
        raise_user_error(result.error)

    message = (
        "User updated successfully. Role promoted to user"
        if result.promoted
        else "User updated successfully"
    )
    return UserDetailRes.build(result.user, result.completeness, message=message)


@router.delete("/{uid}", response_model=MessageRes)
def delete_user(
    uid: str,
    _admin: AuthenticatedPrincipal = Depends(require_admin()),
    use_case: DeleteUserUseCase = Depends(get_delete_user_use_case),
):
    user_id = parse_uuid(uid, "user")
    result = use_case.execute(user_id)
    if result.error is not None:
        raise_user_error(result.error)
    return MessageRes(message="User deleted successfully")
