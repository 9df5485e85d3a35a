"""GET /api/users: admin-only account listing (id, email, role)."""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from brandagent.database import Store, get_store
from brandagent.dependencies import require_admin
from brandagent.schemas.common import ErrorResponse
from brandagent.schemas.user import UserItem
from brandagent.services.user_service import user_service

router = APIRouter(prefix="/api", tags=["Users"])


@router.get(
    "/users",
    response_model=List[UserItem],
    responses={
        401: {"description": "Missing or invalid token", "model": ErrorResponse},
        403: {"description": "Token is not an admin's", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="List every user, newest first (admin only)",
)
async def list_users(
    claims: Dict[str, Any] = Depends(require_admin),
    store: Store = Depends(get_store),
) -> List[UserItem]:
    return await user_service.list_users(store)
