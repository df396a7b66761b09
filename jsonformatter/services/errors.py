"""Authentication failure taxonomy.

Each error carries an internal ``message`` (logged) and a class-level
``public_message`` (returned to the client in the failure envelope).
"""


class AuthenticationError(Exception):
    """Base class; unexpected failures map to this generic message."""

    code = "system_error"
    public_message = "An unexpected error occurred. Please try again later."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.public_message
        super().__init__(self.message)


class InvalidInputError(AuthenticationError):
    code = "invalid_input"
    public_message = "Username and password are required."


class UnknownUserError(AuthenticationError):
    code = "unknown_user"
    public_message = "Invalid UserName, Please Try Again"


class AccountInactiveError(AuthenticationError):
    code = "account_inactive"
    public_message = "This user account is not active."


class WrongPasswordError(AuthenticationError):
    code = "wrong_password"
    public_message = "Password Is Incorrect, Please Enter Correct Password"


class StoreUnavailableError(AuthenticationError):
    """Raised by the credential store on connectivity or timeout errors."""

    code = "store_unavailable"
    public_message = "A database error occurred. Please try again later."


class DirectoryUnavailableError(AuthenticationError):
    """Raised by the directory validator when the directory cannot be reached."""

    code = "directory_unavailable"
    public_message = "An error occurred during directory authentication."


class UserExistsError(Exception):
    """Raised when creating a user whose user_name is already taken."""

    def __init__(self, user_name: str) -> None:
        self.message = f"User '{user_name}' already exists."
        super().__init__(self.message)
