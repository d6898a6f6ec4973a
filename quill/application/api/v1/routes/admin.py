"""Admin routes for user role management."""

from datetime import datetime
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from pydantic import BaseModel, Field

from quill.domain.auth.command.update_user_role import (
    UpdateUserRole,
    UpdateUserRoleHandler,
)
from quill.domain.auth.query.dto import AccessDTO
from quill.domain.auth.query.get_user_access import (
    GetUserAccess,
    GetUserAccessHandler,
)

router = APIRouter(prefix="/admin", tags=["Admin"], route_class=DishkaRoute)


class UpdateRoleRequest(BaseModel):
    """Request body for replacing a user's role."""

    role_id: int = Field(gt=0)


class RoleAssignmentResponse(BaseModel):
    user_id: str
    role_id: int
    updated_at: datetime | None


class UserAccessResponse(BaseModel):
    user_id: str
    access: AccessDTO
    static_conflicts: list[str]
    dynamic_conflicts: list[str]


@router.get("/users/{user_id}/access", response_model=UserAccessResponse)
async def get_user_access(
    user_id: UUID,
    handler: FromDishka[GetUserAccessHandler],
) -> UserAccessResponse:
    """Resolved roles, permissions and violated constraints of a user. Requires ADMINISTER."""
    result = await handler.run(GetUserAccess(user_id=user_id))
    return UserAccessResponse(
        user_id=result.user_id,
        access=result.access,
        static_conflicts=result.static_conflicts,
        dynamic_conflicts=result.dynamic_conflicts,
    )


@router.patch("/users/{user_id}/role", response_model=RoleAssignmentResponse)
async def update_user_role(
    user_id: UUID,
    body: UpdateRoleRequest,
    handler: FromDishka[UpdateUserRoleHandler],
) -> RoleAssignmentResponse:
    """Replace a user's role after separation-of-duty checks. Requires ADMINISTER."""
    result = await handler.run(UpdateUserRole(user_id=user_id, role_id=body.role_id))
    return RoleAssignmentResponse(
        user_id=result.user_id,
        role_id=result.role_id,
        updated_at=result.updated_at,
    )
