from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from app.core.constants import FieldSizes
from app.models.base import Base, SoftDeleteMixin


class User(SoftDeleteMixin, Base):
    """User model"""

    name: Mapped[str] = mapped_column(
        String(FieldSizes.NAME),
        nullable=False,
    )
    email: Mapped[str] = mapped_column(
        String(FieldSizes.EMAIL),
        unique=True,
        index=True,
        nullable=False,
    )
    hashed_password: Mapped[str] = mapped_column(
        String(FieldSizes.PASSWORD_HASH),
        nullable=False,
    )
