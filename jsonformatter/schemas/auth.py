"""Request/response schemas for the User (login/logout) endpoints."""

from pydantic import BaseModel, ConfigDict, Field


class LoginRequest(BaseModel):
    """Credentials for login. Missing fields are treated as empty, not as a 422."""

    model_config = ConfigDict(populate_by_name=True)

    user_name: str | None = Field(default=None, alias="userName", description="Username")
    password: str | None = Field(default=None, description="Password")


class LoginData(BaseModel):
    """Payload of the login envelope; token fields are only set on success."""

    model_config = ConfigDict(populate_by_name=True)

    token: str | None = Field(default=None, description="JWT access token")
    authentication_type_id: int | None = Field(
        default=None,
        alias="authenticationTypeID",
        description="1 = local, 2 = directory",
    )
    message: str


class LoginResponse(BaseModel):
    """Uniform envelope returned for both successful and failed logins."""

    model_config = ConfigDict(populate_by_name=True)

    is_success: bool = Field(alias="isSuccess")
    data: LoginData

    @classmethod
    def succeeded(cls, token: str, authentication_type_id: int) -> "LoginResponse":
        return cls(
            is_success=True,
            data=LoginData(
                token=token,
                authentication_type_id=authentication_type_id,
                message="Login successful.",
            ),
        )

    @classmethod
    def failed(cls, message: str) -> "LoginResponse":
        return cls(is_success=False, data=LoginData(message=message))


class MessageData(BaseModel):
    message: str


class LogoutResponse(BaseModel):
    """Logout acknowledgement. Tokens are stateless; nothing is revoked."""

    model_config = ConfigDict(populate_by_name=True)

    is_success: bool = Field(default=True, alias="isSuccess")
    data: MessageData = Field(default_factory=lambda: MessageData(message="Logout Successful"))


class CurrentUser(BaseModel):
    """Authenticated caller (from the bearer token) for dependency injection."""

    id: int
    user_name: str
