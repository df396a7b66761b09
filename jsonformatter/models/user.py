"""ORM model for application users (local and directory accounts)."""

from enum import IntEnum

from sqlalchemy import Boolean, Column, Integer, LargeBinary, String, text

from jsonformatter.models.base import Base


class AuthType(IntEnum):
    """How an account's password is verified: local digest or directory bind."""

    LOCAL = 1
    DIRECTORY = 2

    @classmethod
    def from_stored(cls, value: int | None) -> "AuthType":
        """Map the stored user_auth_type column; anything but 2 is a local account."""
        return cls.DIRECTORY if value == cls.DIRECTORY else cls.LOCAL


class User(Base):
    """
    User account for JWT authentication.

    user_password: SHA-256 digest for local accounts, NULL for directory accounts.
    user_auth_type: see AuthType.from_stored.
    """

    __tablename__ = "user_master"

    user_id = Column(Integer, primary_key=True, autoincrement=True)
    user_name = Column(String(255), nullable=False, unique=True, index=True)
    full_name = Column(String(255), nullable=True)
    email = Column(String(255), nullable=True)
    user_password = Column(LargeBinary, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True, server_default=text("true"))
    user_auth_type = Column(Integer, nullable=True)
