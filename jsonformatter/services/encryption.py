"""Encrypt/decrypt text for the web, backend and analytics targets, each with its own key."""

import base64
import logging
from enum import Enum
from typing import TYPE_CHECKING

from cryptography.fernet import Fernet, InvalidToken
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

if TYPE_CHECKING:
    from pydantic import SecretStr

    from jsonformatter.core.config import Settings

logger = logging.getLogger(__name__)

# Fixed salt: keys must derive identically across restarts and instances.
KEY_DERIVATION_SALT = b"jsonformatter-encryption-v1"
KEY_DERIVATION_ITERATIONS = 100_000


class EncryptionTarget(str, Enum):
    """Target ids as sent by the client."""

    WEB = "1"
    BACKEND = "2"
    ANALYTICS = "3"


class EncryptionError(Exception):
    """Raised for an unknown target, a target without a key, or undecryptable input."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


def derive_cipher(secret: str) -> Fernet:
    """Derive a Fernet cipher from a configured secret string with PBKDF2-SHA256."""
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=32,
        salt=KEY_DERIVATION_SALT,
        iterations=KEY_DERIVATION_ITERATIONS,
    )
    return Fernet(base64.urlsafe_b64encode(kdf.derive(secret.encode("utf-8"))))


class EncryptionService:
    """Holds one cipher per configured target; targets without a key are rejected."""

    def __init__(self, settings: "Settings") -> None:
        configured: dict[EncryptionTarget, "SecretStr | None"] = {
            EncryptionTarget.WEB: settings.ENCRYPTION_WEB_KEY,
            EncryptionTarget.BACKEND: settings.ENCRYPTION_BACKEND_KEY,
            EncryptionTarget.ANALYTICS: settings.ENCRYPTION_ANALYTICS_KEY,
        }
        self._ciphers: dict[EncryptionTarget, Fernet] = {
            target: derive_cipher(secret.get_secret_value())
            for target, secret in configured.items()
            if secret is not None and secret.get_secret_value()
        }

    def _cipher(self, target: str | None) -> tuple[EncryptionTarget, Fernet]:
        try:
            resolved = EncryptionTarget((target or "").strip())
        except ValueError:
            raise EncryptionError(f"Invalid target specified: {target!r}") from None
        cipher = self._ciphers.get(resolved)
        if cipher is None:
            raise EncryptionError(f"No encryption key configured for target {resolved.name}")
        return resolved, cipher

    def encrypt(self, target: str | None, plain_text: str) -> str:
        resolved, cipher = self._cipher(target)
        logger.info("Encrypting data for target=%s", resolved.name)
        return cipher.encrypt(plain_text.encode("utf-8")).decode("ascii")

    def decrypt(self, target: str | None, encrypted_text: str) -> str:
        resolved, cipher = self._cipher(target)
        logger.info("Decrypting data for target=%s", resolved.name)
        try:
            return cipher.decrypt(encrypted_text.encode("utf-8")).decode("utf-8")
        except InvalidToken:
            raise EncryptionError(
                f"Ciphertext is not valid for target {resolved.name}"
            ) from None
