"""Admin endpoint for bulk-inserting directory accounts into user_master."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jsonformatter.api.auth import get_current_user
from jsonformatter.core.database import get_db
from jsonformatter.schemas.admin import UserMasterInsert
from jsonformatter.schemas.auth import CurrentUser
from jsonformatter.services.credential_store import CredentialStore

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/UserMasterInsert", response_model=str)
def insert_user_master(
    users: list[UserMasterInsert],
    db: Annotated[Session, Depends(get_db)],
    user: Annotated[CurrentUser, Depends(get_current_user)],
) -> str:
    """
    Create directory accounts (no local password) or refresh their fullname/email.
    Returns a plain status string, as the admin client expects.
    """
    try:
        count = CredentialStore(db).upsert_users(users)
    except Exception:
        logger.exception("UserMasterInsert failed: requested_by=%s", user.id)
        return "DB operation failed!!"
    logger.info("UserMasterInsert succeeded: rows=%s requested_by=%s", count, user.id)
    return "DB operation succeed"
