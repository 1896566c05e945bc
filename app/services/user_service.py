from typing import Sequence

from loguru import logger

from app.core.auth import get_password_hash
from app.core.exceptions.domain import DuplicateResourceError, ResourceNotFoundError
from app.core.utils import count_pages, normalize_pagination
from app.models.user import User
from app.repos.user import UserRepo
from app.schemas import Pagination, UserCreate, UserCreateDB, UserListRequest, UserUpdate

USER_EXISTS_MESSAGE = "user with this email already exists"
USER_NOT_FOUND_MESSAGE = "user not found"
EMAIL_TAKEN_MESSAGE = "email is already taken"


class UserService:
    """
    User management business logic.

    Receives a UserRepo via constructor. Raises domain exceptions, the
    endpoint layer maps them to HTTP responses.
    """

    def __init__(self, user_repo: UserRepo):
        self.user_repo = user_repo

    async def create_user(self, user_in: UserCreate) -> User:
        """
        Create a user with a hashed password.

        Emails of soft deleted users stay reserved, the unique index covers them.

        Raises:
            DuplicateResourceError: If the email is already registered.
        """
        existing = await self.user_repo.get_by_email(user_in.email, include_deleted=True)
        if existing:
            raise DuplicateResourceError(USER_EXISTS_MESSAGE)

        user = await self.user_repo.create_one(
            UserCreateDB(
                name=user_in.name,
                email=user_in.email,
                hashed_password=get_password_hash(user_in.password.get_secret_value()),
            )
        )
        logger.info(f"User {user.id} created")

        return user

    async def get_user(self, user_id: int) -> User:
        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise ResourceNotFoundError(USER_NOT_FOUND_MESSAGE)

        return user

    async def update_user(self, user_id: int, user_in: UserUpdate) -> User:
        """
        Apply a partial update to a user.

        Raises:
            ResourceNotFoundError: If the user does not exist.
            DuplicateResourceError: If the new email belongs to another user.
        """
        user = await self.get_user(user_id)

        if user_in.email is not None and user_in.email != user.email:
            owner = await self.user_repo.get_by_email(user_in.email, include_deleted=True)
            if owner is not None and owner.id != user.id:
                raise DuplicateResourceError(EMAIL_TAKEN_MESSAGE)

        updated = await self.user_repo.update_by_id(user_id, user_in)
        if updated is None:
            raise ResourceNotFoundError(USER_NOT_FOUND_MESSAGE)

        logger.info(f"User {user_id} updated")

        return updated

    async def delete_user(self, user_id: int) -> None:
        deleted = await self.user_repo.delete_by_id(user_id)
        if not deleted:
            raise ResourceNotFoundError(USER_NOT_FOUND_MESSAGE)

        logger.info(f"User {user_id} deleted")

    async def list_users(self, request: UserListRequest) -> tuple[Sequence[User], Pagination]:
        """
        Get one page of users.

        Args:
            request: Page, limit and filter. Out of range page and limit are clamped.

        Returns:
            The users on the page and the pagination metadata.
        """
        page, limit = normalize_pagination(request.page, request.limit)
        users, total = await self.user_repo.get_all_with_filter(
            request.filter,
            limit=limit,
            offset=(page - 1) * limit,
        )

        return users, Pagination(
            page=page,
            limit=limit,
            total=total,
            total_pages=count_pages(total, limit),
        )
