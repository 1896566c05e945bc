from loguru import logger
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker

from app.core.auth import get_password_hash
from app.core.config import settings
from app.core.db import async_session_factory, engine
from app.models import Base
from app.repos.user import UserRepo
from app.schemas import UserCreateDB


async def migrate(db_engine: AsyncEngine = engine) -> None:
    """Create missing tables from the model metadata."""
    async with db_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.success("Database migrated")


async def seed_users(session_factory: async_sessionmaker = async_session_factory) -> bool:
    """
    Insert the default admin user when the users table is empty.

    Returns:
        True if the admin user was created, False if users already existed.
    """
    async with session_factory() as session:
        user_repo = UserRepo(session)

        if await user_repo.count(include_deleted=True) > 0:
            logger.info("Users already seeded, skipping")
            return False

        await user_repo.create_one(
            UserCreateDB(
                name=settings.seed_admin_name,
                email=settings.seed_admin_email,
                hashed_password=get_password_hash(settings.seed_admin_password),
            )
        )

    logger.success(f"Seeded admin user {settings.seed_admin_email}")
    return True
