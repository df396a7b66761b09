"""Credential store gateway over the user_master table."""

import logging
from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.orm import Session

from jsonformatter.models import AuthType, User
from jsonformatter.schemas.admin import UserMasterInsert
from jsonformatter.services.errors import StoreUnavailableError, UserExistsError

logger = logging.getLogger(__name__)

# Errors that mean the database could not be reached, as opposed to a bad query.
CONNECTIVITY_ERRORS = (OperationalError, InterfaceError, PoolTimeoutError)


class CredentialStore:
    """Reads (and, for admin/CLI paths, writes) user rows within one session."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def find_by_user_name(self, user_name: str) -> User | None:
        """
        Return the user with exactly this user_name, or None.

        Only the first row is consulted. Raises StoreUnavailableError when the
        database cannot be reached.
        """
        stmt = select(User).where(User.user_name == user_name).limit(1)
        try:
            return self._session.execute(stmt).scalars().first()
        except CONNECTIVITY_ERRORS as e:
            raise StoreUnavailableError(f"User lookup failed: {e}") from e

    def create_user(
        self,
        user_name: str,
        password_digest: bytes | None,
        auth_type: AuthType,
        full_name: str | None = None,
        email: str | None = None,
    ) -> User:
        """Insert one user row and commit. Raises UserExistsError if user_name is taken."""
        if self.find_by_user_name(user_name) is not None:
            raise UserExistsError(user_name)
        user = User(
            user_name=user_name,
            user_password=password_digest,
            user_auth_type=int(auth_type),
            full_name=full_name,
            email=email,
            is_active=True,
        )
        self._session.add(user)
        self._session.commit()
        return user

    def upsert_users(self, rows: Iterable[UserMasterInsert]) -> int:
        """
        Insert directory accounts, or refresh full_name/email of existing ones.

        Rows are applied in order, so a user_name repeated within the batch
        updates the row added earlier. All rows are written in one transaction; on any error it is rolled back
        and the error re-raised. Returns the number of rows processed.
        """
        count = 0
        try:
            for row in rows:
                existing = self.find_by_user_name(row.user_name)
                if existing is None:
                    self._session.add(
                        User(
                            user_name=row.user_name,
                            full_name=row.full_name,
                            email=row.email,
                            user_password=None,
                            user_auth_type=int(AuthType.DIRECTORY),
                            is_active=True,
                        )
                    )
                    # Later rows in the same batch must see this one.
                    self._session.flush()
                else:
                    existing.full_name = row.full_name
                    existing.email = row.email
                count += 1
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        logger.info("Upserted user_master rows: count=%s", count)
        return count
