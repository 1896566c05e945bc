from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.db import get_session
from app.repos.user import UserRepo
from app.services.auth_service import AuthService
from app.services.token_service import token_service
from app.services.user_service import UserService


def get_user_repo(session: Annotated[AsyncSession, Depends(get_session)]) -> UserRepo:
    return UserRepo(session)


def get_user_service(user_repo: Annotated[UserRepo, Depends(get_user_repo)]) -> UserService:
    return UserService(user_repo)


def get_auth_service(user_repo: Annotated[UserRepo, Depends(get_user_repo)]) -> AuthService:
    """The user repository is the credential store in production"""
    return AuthService(credentials=user_repo, tokens=token_service, secret=settings.jwt_secret)
