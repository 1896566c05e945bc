from typing import Annotated

from fastapi import APIRouter, Depends, status

from app.api.v1.deps.rate_limit import LoginRateLimitedRoute
from app.api.v1.deps.services import get_auth_service, get_user_service
from app.core import responses
from app.core.constants import ErrorCode
from app.core.exceptions import http_exceptions
from app.core.exceptions.domain import DuplicateResourceError, ValidationError
from app.schemas import (
    LoginData,
    LoginRequest,
    MessageDataResponse,
    MessageResponse,
    UserCreate,
    UserResponse,
)
from app.services.auth_service import AuthService
from app.services.user_service import UserService

router = APIRouter()
login_router = APIRouter(route_class=LoginRateLimitedRoute)


@router.post(
    "/register",
    response_model=MessageDataResponse[UserResponse],
    status_code=status.HTTP_201_CREATED,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": responses.BadRequestResponse},
        status.HTTP_409_CONFLICT: {"model": responses.ConflictResponse},
    },
    summary="Register",
    description="Create a new user account.",
)
async def register(
    user_in: UserCreate,
    user_service: Annotated[UserService, Depends(get_user_service)],
):
    try:
        user = await user_service.create_user(user_in)
    except DuplicateResourceError as e:
        raise http_exceptions.ConflictException(
            detail=e.message,
            error_code=ErrorCode.REGISTRATION_FAILED,
        )

    return MessageDataResponse(
        message="User registered successfully",
        data=UserResponse.model_validate(user),
    )


@login_router.post(
    "/login",
    response_model=MessageDataResponse[LoginData],
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": responses.BadRequestResponse},
        status.HTTP_401_UNAUTHORIZED: {"model": responses.LoginFailedResponse},
        status.HTTP_429_TOO_MANY_REQUESTS: {
            "model": responses.TooManyRequestsResponse,
            "headers": {
                "Retry-After": {
                    "description": "Seconds until the client may try again",
                    "schema": {"type": "integer", "example": 840},
                },
                "X-RateLimit-Limit": {
                    "description": "Login attempts allowed per window",
                    "schema": {"type": "integer", "example": 5},
                },
            },
        },
    },
    summary="Login",
    description="Authenticate with email and password and receive a bearer token.",
)
async def login(
    login_in: LoginRequest,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    try:
        token, user = await auth_service.login(
            login_in.email,
            login_in.password.get_secret_value(),
        )
    except ValidationError as e:
        raise http_exceptions.UnauthorizedException(
            detail=e.message,
            error_code=ErrorCode.LOGIN_FAILED,
        )

    return MessageDataResponse(
        message="Login successful",
        data=LoginData(token=token, user=UserResponse.model_validate(user)),
    )


router.include_router(login_router)


@router.post(
    "/logout",
    response_model=MessageResponse,
    summary="Logout",
    description="Tokens are stateless; the client discards its token.",
)
async def logout():
    return MessageResponse(message="Logout successful")
