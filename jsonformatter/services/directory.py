"""Validate directory-account credentials with an LDAP simple bind (e.g. Active Directory)."""

import logging
from typing import TYPE_CHECKING

from ldap3 import NONE, SIMPLE, Connection, Server
from ldap3.core.exceptions import LDAPException

from jsonformatter.services.errors import DirectoryUnavailableError

if TYPE_CHECKING:
    from jsonformatter.core.config import Settings

logger = logging.getLogger(__name__)

# LDAP resultCode for a bind rejected because of the password or DN; any other
# failed bind (busy, unavailable, unwillingToPerform, ...) is a directory fault.
INVALID_CREDENTIALS = 49


class DirectoryValidator:
    """
    Checks a username/password pair against the configured directory server.

    A bind rejected with invalidCredentials returns False. Any other failed
    bind, and an unreachable, slow, or unconfigured directory, raises
    DirectoryUnavailableError so that callers never report an infrastructure
    problem as a wrong password.
    """

    def __init__(self, settings: "Settings") -> None:
        self._server_uri = settings.DIRECTORY_SERVER_URI
        self._domain = settings.DIRECTORY_DOMAIN
        self._timeout = settings.DIRECTORY_TIMEOUT_SEC

    def bind_name(self, username: str) -> str:
        """Qualify a bare username as user@domain when a domain is configured."""
        if not self._domain or "@" in username or "\\" in username:
            return username
        return f"{username}@{self._domain}"

    def validate(self, username: str, password: str) -> bool:
        # An empty password would be an unauthenticated bind, which servers accept.
        if not username or not password:
            return False
        if not self._server_uri:
            raise DirectoryUnavailableError("DIRECTORY_SERVER_URI is not configured.")

        server = Server(
            self._server_uri,
            get_info=NONE,
            connect_timeout=self._timeout,
        )
        conn = Connection(
            server,
            user=self.bind_name(username),
            password=password,
            authentication=SIMPLE,
            receive_timeout=self._timeout,
            raise_exceptions=False,
        )
        try:
            bound = conn.bind()
        except LDAPException as e:
            raise DirectoryUnavailableError(
                f"Directory bind to {self._server_uri} failed: {e}"
            ) from e
        finally:
            if not conn.closed:
                conn.unbind()

        if bound:
            return True
        result = conn.result or {}
        if result.get("result") != INVALID_CREDENTIALS:
            raise DirectoryUnavailableError(
                f"Directory bind to {self._server_uri} did not complete: "
                f"result={result.get('result')} description={result.get('description')}"
            )
        logger.info("Directory rejected credentials: user=%s", username)
        return False
