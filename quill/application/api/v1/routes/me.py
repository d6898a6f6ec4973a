"""Routes for the caller's own access."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter

from quill.domain.auth.query.get_my_access import (
    GetMyAccess,
    GetMyAccessHandler,
    GetMyAccessResult,
)

router = APIRouter(prefix="/me", tags=["Me"], route_class=DishkaRoute)


@router.get("/access", response_model=GetMyAccessResult)
async def get_my_access(handler: FromDishka[GetMyAccessHandler]) -> GetMyAccessResult:
    """Roles and permissions the caller currently holds."""
    return await handler.run(GetMyAccess())
