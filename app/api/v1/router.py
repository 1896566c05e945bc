from fastapi import APIRouter, Depends, status

from app.api.v1.deps.auth import get_current_identity
from app.api.v1.endpoints import auth, profile, user
from app.core import responses

api_v1_router = APIRouter(prefix="/api/v1")

PROTECTED_RESPONSES = {
    status.HTTP_401_UNAUTHORIZED: {"model": responses.UnauthorizedResponse},
}

api_v1_router.include_router(
    auth.router,
    prefix="/auth",
    tags=["Auth"],
)

api_v1_router.include_router(
    user.router,
    prefix="/users",
    tags=["Users"],
    dependencies=[Depends(get_current_identity)],
    responses=PROTECTED_RESPONSES,
)

api_v1_router.include_router(
    profile.router,
    prefix="/profile",
    tags=["Profile"],
    dependencies=[Depends(get_current_identity)],
    responses=PROTECTED_RESPONSES,
)
