"""Encrypt/decrypt proxy endpoints (bearer token required)."""

import logging
from functools import lru_cache
from typing import Annotated

from fastapi import APIRouter, Depends

from jsonformatter.api.auth import get_current_user
from jsonformatter.core.config import Settings, get_settings
from jsonformatter.schemas.auth import CurrentUser
from jsonformatter.schemas.encryption import (
    DecryptedData,
    DecryptionResponse,
    EncryptedData,
    EncryptionRequest,
    EncryptionResponse,
)
from jsonformatter.services.encryption import EncryptionError, EncryptionService

logger = logging.getLogger(__name__)

router = APIRouter()

ENCRYPT_FAILED_MESSAGE = "An error occurred during encryption."
DECRYPT_FAILED_MESSAGE = "An error occurred during decryption."


@lru_cache
def _encryption_service_for(settings: Settings) -> EncryptionService:
    # Settings is frozen (hashable): key derivation runs once per settings instance.
    return EncryptionService(settings)


def get_encryption_service(
    settings: Annotated[Settings, Depends(get_settings)],
) -> EncryptionService:
    """Dependency: the cached service for the injected settings."""
    return _encryption_service_for(settings)


@router.post("/encrypt", response_model=EncryptionResponse)
def encrypt(
    body: EncryptionRequest,
    service: Annotated[EncryptionService, Depends(get_encryption_service)],
    user: Annotated[CurrentUser, Depends(get_current_user)],
) -> EncryptionResponse:
    """Encrypt plainText with the key of the requested target."""
    logger.info("Encrypt called: target=%s user_id=%s", body.target, user.id)
    try:
        result = service.encrypt(body.target, body.plain_text)
    except EncryptionError as e:
        logger.error("Encryption failed: target=%s detail=%s", body.target, e.message)
        return EncryptionResponse(
            is_success=False, data=EncryptedData(encrypted_text=ENCRYPT_FAILED_MESSAGE)
        )
    return EncryptionResponse(is_success=True, data=EncryptedData(encrypted_text=result))


@router.post("/decrypt", response_model=DecryptionResponse)
def decrypt(
    body: EncryptionRequest,
    service: Annotated[EncryptionService, Depends(get_encryption_service)],
    user: Annotated[CurrentUser, Depends(get_current_user)],
) -> DecryptionResponse:
    """Decrypt plainText (a token from /encrypt) with the key of the requested target."""
    logger.info("Decrypt called: target=%s user_id=%s", body.target, user.id)
    try:
        result = service.decrypt(body.target, body.plain_text)
    except EncryptionError as e:
        logger.error("Decryption failed: target=%s detail=%s", body.target, e.message)
        return DecryptionResponse(
            is_success=False, data=DecryptedData(decrypted_text=DECRYPT_FAILED_MESSAGE)
        )
    return DecryptionResponse(is_success=True, data=DecryptedData(decrypted_text=result))
