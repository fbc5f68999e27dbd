from fastapi import APIRouter, Depends

from ..auth.gate import AuthorizationGate
from ..auth.principal import Principal
from ..dependencies import get_authorization_gate, get_current_principal
from ..schemas.user import CurrentUserRead

router = APIRouter(prefix="/auth", tags=["auth"])


@router.get("/me", response_model=CurrentUserRead)
async def me(
    principal: Principal = Depends(get_current_principal),
    gate: AuthorizationGate = Depends(get_authorization_gate),
) -> CurrentUserRead:
    return CurrentUserRead(
        id=principal.user_id,
        email=principal.email,
        role=principal.role,
        permissions=gate.matrix.permission_strings(principal.role),
        assigned_property_ids=sorted(principal.assigned_property_ids, key=str),
        tenant_id=principal.tenant_id,
        vendor_id=principal.vendor_id,
    )
