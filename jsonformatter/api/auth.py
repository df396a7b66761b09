"""User login/logout endpoints and the bearer-token dependency for protected routes."""

import logging
from typing import Annotated

import jwt
from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from jsonformatter.core.config import Settings, get_settings
from jsonformatter.core.database import get_db
from jsonformatter.core.security import decode_access_token
from jsonformatter.schemas.auth import (
    CurrentUser,
    LoginRequest,
    LoginResponse,
    LogoutResponse,
)
from jsonformatter.services.authentication import Authenticator
from jsonformatter.services.credential_store import CredentialStore
from jsonformatter.services.directory import DirectoryValidator
from jsonformatter.services.errors import InvalidInputError

logger = logging.getLogger(__name__)

router = APIRouter()
security = HTTPBearer(auto_error=False)


def get_authenticator(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> Authenticator:
    """Dependency: an Authenticator bound to this request's DB session."""
    return Authenticator(
        store=CredentialStore(db),
        directory=DirectoryValidator(settings),
        settings=settings,
    )


@router.post("/Authenticate", response_model=LoginResponse, response_model_exclude_none=True)
def authenticate(
    body: LoginRequest,
    authenticator: Annotated[Authenticator, Depends(get_authenticator)],
) -> LoginResponse:
    """
    Authenticate with userName and password.

    Always answers 200 with the {isSuccess, data} envelope; on success data.token
    holds a JWT to send as: Authorization: Bearer <token>
    """
    return authenticator.authenticate(body.user_name, body.password)


async def login_validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Answer malformed login bodies with the failure envelope instead of a 422.
    Other routes keep FastAPI's default validation response.
    """
    if not request.url.path.rstrip("/").endswith("/User/Authenticate"):
        return await request_validation_exception_handler(request, exc)
    # Error details may echo the submitted password; only the count is logged.
    logger.info("Login failed: reason=%s errors=%s", InvalidInputError.code, len(exc.errors()))
    body = LoginResponse.failed(InvalidInputError.public_message)
    return JSONResponse(content=body.model_dump(by_alias=True, exclude_none=True))


@router.post("/Logout", response_model=LogoutResponse)
def logout() -> LogoutResponse:
    """Acknowledge logout. Tokens are stateless; the client discards its copy."""
    return LogoutResponse()


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> CurrentUser:
    """Dependency: require a valid Bearer JWT and return its subject. Raises 401 if missing or invalid."""
    if credentials is None:
        raise _unauthorized("Token not provided.")
    try:
        payload = decode_access_token(credentials.credentials, settings)
    except jwt.PyJWTError:
        raise _unauthorized("Invalid or expired token")
    try:
        user_id = int(payload["sub"])
    except (KeyError, TypeError, ValueError):
        raise _unauthorized("Invalid token payload")
    return CurrentUser(id=user_id, user_name=str(payload.get("name") or ""))
