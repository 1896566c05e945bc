from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status

from app.api.v1.deps.services import get_user_service
from app.core import responses
from app.core.constants import MAX_DB_INTEGER, ErrorCode
from app.core.exceptions import http_exceptions
from app.core.exceptions.domain import DuplicateResourceError, ResourceNotFoundError
from app.schemas import (
    DataResponse,
    MessageDataResponse,
    MessageResponse,
    UserCreate,
    UserFilter,
    UserListRequest,
    UserResponse,
    UsersListResponse,
    UserUpdate,
)
from app.schemas.user import SortField, SortOrder
from app.services.user_service import UserService

router = APIRouter()

UserServiceDep = Annotated[UserService, Depends(get_user_service)]
UserId = Annotated[int, Path(ge=1, le=MAX_DB_INTEGER)]


async def _list_users(user_service: UserService, request: UserListRequest) -> UsersListResponse:
    users, pagination = await user_service.list_users(request)

    return UsersListResponse(
        data=[UserResponse.model_validate(user) for user in users],
        pagination=pagination,
    )


@router.post(
    "",
    response_model=MessageDataResponse[UserResponse],
    status_code=status.HTTP_201_CREATED,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": responses.BadRequestResponse},
        status.HTTP_409_CONFLICT: {"model": responses.ConflictResponse},
    },
    summary="Create user",
)
async def create_user(user_in: UserCreate, user_service: UserServiceDep):
    try:
        user = await user_service.create_user(user_in)
    except DuplicateResourceError as e:
        raise http_exceptions.ConflictException(
            detail=e.message,
            error_code=ErrorCode.CREATION_FAILED,
        )

    return MessageDataResponse(
        message="User created successfully",
        data=UserResponse.model_validate(user),
    )


@router.get(
    "",
    response_model=UsersListResponse,
    summary="List users",
    description="Paginated user listing. Out of range page and limit values are clamped.",
)
async def list_users(
    user_service: UserServiceDep,
    page: int = 1,
    limit: int = 10,
    name: str | None = None,
    email: str | None = None,
    sort_by: Annotated[SortField, Query()] = "created_at",
    sort_order: Annotated[SortOrder, Query()] = "desc",
):
    request = UserListRequest(
        page=page,
        limit=limit,
        filter=UserFilter(name=name, email=email, sort_by=sort_by, sort_order=sort_order),
    )

    return await _list_users(user_service, request)


@router.post(
    "/pagination",
    response_model=UsersListResponse,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": responses.BadRequestResponse},
    },
    summary="List users (JSON body)",
    description="Same as the listing endpoint, with page, limit and filters in the body.",
)
async def list_users_with_body(request: UserListRequest, user_service: UserServiceDep):
    return await _list_users(user_service, request)


@router.get(
    "/{user_id}",
    response_model=DataResponse[UserResponse],
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": responses.BadRequestResponse},
        status.HTTP_404_NOT_FOUND: {"model": responses.NotFoundResponse},
    },
    summary="Read user",
)
async def read_user(user_id: UserId, user_service: UserServiceDep):
    try:
        user = await user_service.get_user(user_id)
    except ResourceNotFoundError as e:
        raise http_exceptions.NotFoundException(
            detail=e.message,
            error_code=ErrorCode.USER_NOT_FOUND,
        )

    return DataResponse(data=UserResponse.model_validate(user))


@router.put(
    "/{user_id}",
    response_model=MessageDataResponse[UserResponse],
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": responses.BadRequestResponse},
        status.HTTP_404_NOT_FOUND: {"model": responses.NotFoundResponse},
        status.HTTP_409_CONFLICT: {"model": responses.ConflictResponse},
    },
    summary="Update user",
)
async def update_user(user_id: UserId, user_in: UserUpdate, user_service: UserServiceDep):
    try:
        user = await user_service.update_user(user_id, user_in)
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
        message="User updated successfully",
        data=UserResponse.model_validate(user),
    )


@router.delete(
    "/{user_id}",
    response_model=MessageResponse,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": responses.BadRequestResponse},
        status.HTTP_404_NOT_FOUND: {"model": responses.NotFoundResponse},
    },
    summary="Delete user",
)
async def delete_user(user_id: UserId, user_service: UserServiceDep):
    try:
        await user_service.delete_user(user_id)
    except ResourceNotFoundError as e:
        raise http_exceptions.NotFoundException(
            detail=e.message,
            error_code=ErrorCode.DELETE_FAILED,
        )

    return MessageResponse(message="User deleted successfully")
