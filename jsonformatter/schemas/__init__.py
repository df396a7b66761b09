"""Pydantic request/response schemas."""

from jsonformatter.schemas.admin import UserMasterInsert
from jsonformatter.schemas.auth import (
    CurrentUser,
    LoginData,
    LoginRequest,
    LoginResponse,
    LogoutResponse,
)
from jsonformatter.schemas.encryption import (
    DecryptionResponse,
    EncryptionRequest,
    EncryptionResponse,
)
from jsonformatter.schemas.health import HealthResponse

__all__ = [
    "CurrentUser",
    "DecryptionResponse",
    "EncryptionRequest",
    "EncryptionResponse",
    "HealthResponse",
    "LoginData",
    "LoginRequest",
    "LoginResponse",
    "LogoutResponse",
    "UserMasterInsert",
]
