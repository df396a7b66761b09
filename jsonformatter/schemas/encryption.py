"""Request/response schemas for the encrypt/decrypt proxy endpoints."""

from pydantic import BaseModel, ConfigDict, Field


class EncryptionRequest(BaseModel):
    """Text to transform and the target whose key is used ("1" web, "2" backend, "3" analytics)."""

    model_config = ConfigDict(populate_by_name=True)

    target: str | None = Field(default=None, description="Encryption target id")
    plain_text: str = Field(default="", alias="plainText", description="Input text")


class EncryptedData(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    encrypted_text: str = Field(alias="encryptedText")


class DecryptedData(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    decrypted_text: str = Field(alias="decryptedText")


class EncryptionResponse(BaseModel):
    """Envelope for /encrypt. On failure encryptedText carries the error message."""

    model_config = ConfigDict(populate_by_name=True)

    is_success: bool = Field(alias="isSuccess")
    data: EncryptedData


class DecryptionResponse(BaseModel):
    """Envelope for /decrypt. On failure decryptedText carries the error message."""

    model_config = ConfigDict(populate_by_name=True)

    is_success: bool = Field(alias="isSuccess")
    data: DecryptedData
