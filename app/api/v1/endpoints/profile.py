from typing import Annotated

from fastapi import APIRouter, Depends, status

from app.api.v1.deps.auth import CurrentIdentity
from app.api.v1.deps.services import get_user_service
from app.core import responses
from app.core.constants import ErrorCode
from app.core.exceptions import http_exceptions
from app.core.exceptions.domain import DuplicateResourceError, ResourceNotFoundError
from app.schemas import DataResponse, MessageDataResponse, UserResponse, UserUpdate
from app.services.user_service import UserService

router = APIRouter()

UserServiceDep = Annotated[UserService, Depends(get_user_service)]


@router.get(
    "",
    response_model=DataResponse[UserResponse],
    responses={
        status.HTTP_404_NOT_FOUND: {"model": responses.NotFoundResponse},
    },
    summary="Read profile",
    description="Get the details of the currently authenticated user.",
)
async def read_profile(identity: CurrentIdentity, user_service: UserServiceDep):
    try:
        user = await user_service.get_user(identity.user_id)
    except ResourceNotFoundError as e:
        raise http_exceptions.NotFoundException(
            detail=e.message,
            error_code=ErrorCode.USER_NOT_FOUND,
        )

    return DataResponse(data=UserResponse.model_validate(user))


@router.put(
    "",
    response_model=MessageDataResponse[UserResponse],
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": responses.BadRequestResponse},
        status.HTTP_404_NOT_FOUND: {"model": responses.NotFoundResponse},
        status.HTTP_409_CONFLICT: {"model": responses.ConflictResponse},
    },
    summary="Update profile",
)
async def update_profile(
    user_in: UserUpdate,
    identity: CurrentIdentity,
    user_service: UserServiceDep,
):
    try:
        user = await user_service.update_user(identity.user_id, user_in)
    except ResourceNotFoundError as e:
        raise http_exceptions.NotFoundException(
            detail=e.message,
            error_code=ErrorCode.USER_NOT_FOUND,
        )
    except DuplicateResourceError as e:
        raise http_exceptions.ConflictException(
            detail=e.message,
            error_code=ErrorCode.UPDATE_FAILED,
        )

    return MessageDataResponse(
        message="Profile updated successfully",
        data=UserResponse.model_validate(user),
    )
