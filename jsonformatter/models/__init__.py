"""SQLAlchemy ORM models."""

from jsonformatter.models.base import Base
from jsonformatter.models.user import AuthType, User

__all__ = ["AuthType", "Base", "User"]
