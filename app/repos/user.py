from typing import Sequence

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User
from app.repos.base import BaseRepository
from app.schemas import UserCreateDB, UserFilter, UserUpdate

SORT_COLUMNS = {
    "id": User.id,
    "name": User.name,
    "email": User.email,
    "created_at": User.created_at,
}


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class UserRepo(BaseRepository[User, UserCreateDB, UserUpdate]):
    def __init__(self, session: AsyncSession):
        """User repository for database operations"""
        super().__init__(session, User)

    async def get_by_email(self, email: str, include_deleted: bool = False) -> User | None:
        """
        Get a user by email

        Args:
            email (str): The email of the user.
            include_deleted (bool): Whether soft deleted users are matched too.

        Returns:
            User | None: The user object if found, else None.
        """
        query = self._select(include_deleted).where(self.model.email == email)
        result = await self.session.execute(query)

        return result.scalar_one_or_none()

    async def get_all_with_filter(
        self,
        user_filter: UserFilter,
        limit: int,
        offset: int,
    ) -> tuple[Sequence[User], int]:
        """
        Get one page of users matching a filter, plus the total match count.

        Args:
            user_filter (UserFilter): Name/email substrings and ordering.
            limit (int): Page size.
            offset (int): Number of matching rows to skip.

        Returns:
            tuple[Sequence[User], int]: The page of users and the total number of matches.
        """
        conditions = [self.model.deleted_at.is_(None)]

        if user_filter.name:
            pattern = f"%{_escape_like(user_filter.name.strip())}%"
            conditions.append(self.model.name.ilike(pattern, escape="\\"))

        if user_filter.email:
            pattern = f"%{_escape_like(user_filter.email.strip())}%"
            conditions.append(self.model.email.ilike(pattern, escape="\\"))

        sort_column = SORT_COLUMNS[user_filter.sort_by]
        if user_filter.sort_order == "asc":
            order_by = [sort_column.asc(), self.model.id.asc()]
        else:
            order_by = [sort_column.desc(), self.model.id.desc()]

        query = select(self.model).where(*conditions).order_by(*order_by).offset(offset).limit(limit)
        result = await self.session.execute(query)
        users = result.scalars().all()

        count_query = select(func.count()).select_from(self.model).where(*conditions)
        total = (await self.session.execute(count_query)).scalar_one()

        return users, total
