import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from ..auth.dependencies import AuthorizationContext, require
from ..auth.requirements import Permission
from ..dependencies import get_user_port
from ..domain.ports.user import UserPort
from ..errors import NotFoundError, ValidationError
from ..schemas.user import UserRead, UserRoleUpdate

logger = logging.getLogger("ultrabms.users")

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=list[UserRead])
async def list_users(
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    _: AuthorizationContext = Depends(require(Permission("user:read"))),
    user_port: UserPort = Depends(get_user_port),
) -> list[UserRead]:
    users = await user_port.list(limit, offset)
    return [UserRead.model_validate(user) for user in users]


@router.get("/{user_id}", response_model=UserRead)
async def get_user(
    user_id: UUID,
    _: AuthorizationContext = Depends(require(Permission("user:read"))),
    user_port: UserPort = Depends(get_user_port),
) -> UserRead:
    user = await user_port.get(user_id)
    if user is None:
        raise NotFoundError("User not found")
    return UserRead.model_validate(user)


@router.patch("/{user_id}/role", response_model=UserRead)
async def change_user_role(
    user_id: UUID,
    payload: UserRoleUpdate,
    auth: AuthorizationContext = Depends(require(Permission("user:update"))),
    user_port: UserPort = Depends(get_user_port),
) -> UserRead:
    if user_id == auth.principal.user_id:
        raise ValidationError("Cannot change your own role")

    user = await user_port.update_role(user_id, payload.role.value)
    if user is None:
        raise NotFoundError("User not found")

    logger.info(
        "Role changed user=%s role=%s by=%s", user_id, payload.role.value, auth.principal.user_id
    )
    return UserRead.model_validate(user)
