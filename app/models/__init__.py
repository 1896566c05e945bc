from .base import Base, SoftDeleteMixin
from .user import User

__all__ = ["Base", "SoftDeleteMixin", "User"]
