"""Login orchestration: validate input, look up the user, verify the password, issue a token."""

import logging
from typing import TYPE_CHECKING, assert_never

from jsonformatter.core.security import create_access_token, verify_password
from jsonformatter.models import AuthType, User
from jsonformatter.schemas.auth import LoginResponse
from jsonformatter.services.errors import (
    AccountInactiveError,
    AuthenticationError,
    DirectoryUnavailableError,
    InvalidInputError,
    StoreUnavailableError,
    UnknownUserError,
    WrongPasswordError,
)

if TYPE_CHECKING:
    from jsonformatter.core.config import Settings
    from jsonformatter.services.credential_store import CredentialStore
    from jsonformatter.services.directory import DirectoryValidator

logger = logging.getLogger(__name__)


class Authenticator:
    """
    Turns a {userName, password} pair into the uniform login envelope.

    Every failure, expected or not, becomes a failure envelope; nothing is
    raised to the caller. The plaintext password is only handed to the one
    verifier selected by the account's AuthType and is never logged.
    """

    def __init__(
        self,
        store: "CredentialStore",
        directory: "DirectoryValidator",
        settings: "Settings",
    ) -> None:
        self._store = store
        self._directory = directory
        self._settings = settings

    def authenticate(self, user_name: str | None, password: str | None) -> LoginResponse:
        try:
            user, auth_type = self._verify(user_name or "", password or "")
            token = create_access_token(user.user_id, user.user_name, self._settings)
        except (StoreUnavailableError, DirectoryUnavailableError) as e:
            logger.error(
                "Login failed: user=%s reason=%s detail=%s",
                user_name,
                e.code,
                e.message,
                exc_info=e,
            )
            return LoginResponse.failed(e.public_message)
        except AuthenticationError as e:
            logger.info("Login failed: user=%s reason=%s", user_name, e.code)
            return LoginResponse.failed(e.public_message)
        except Exception:
            logger.exception("Login failed with unexpected error: user=%s", user_name)
            return LoginResponse.failed(AuthenticationError.public_message)

        logger.info("Login succeeded: user=%s auth_type=%s", user.user_name, auth_type.name)
        return LoginResponse.succeeded(token, int(auth_type))

    def _verify(self, user_name: str, password: str) -> tuple[User, AuthType]:
        if not user_name or not password:
            raise InvalidInputError()

        user = self._store.find_by_user_name(user_name)
        if user is None:
            raise UnknownUserError()
        if not user.is_active:
            raise AccountInactiveError()

        auth_type = AuthType.from_stored(user.user_auth_type)
        if auth_type is AuthType.DIRECTORY:
            valid = self._directory.validate(user_name, password)
        elif auth_type is AuthType.LOCAL:
            if not user.user_password:
                logger.warning("Local account has no password digest: user=%s", user_name)
            valid = verify_password(password, user.user_password)
        else:
            assert_never(auth_type)

        if not valid:
            raise WrongPasswordError()
        return user, auth_type
