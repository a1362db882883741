"""Structured exception hierarchy for the VidTube credential service.

Every error raised by the domain or infrastructure layers derives from
``VidTubeError`` and carries a human-readable ``message`` plus a
machine-readable ``code``. The API layer maps each branch of the hierarchy to
one HTTP status code in ``vidtube_auth.core.handlers``; nothing below this
module knows about HTTP.
"""

from typing import Final

__all__: Final = [
    "VidTubeError",
    "ValidationError",
    "MissingCredentialFieldError",
    "DuplicateUserError",
    "AuthenticationError",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "TokenExpiredError",
    "TokenSignatureError",
    "InvalidRefreshTokenError",
    "RefreshTokenSupersededError",
    "UserNotFoundError",
    "PolicyViolationError",
    "PasswordReuseError",
    "UsernameUnchangedError",
    "UsernameTakenError",
    "UpstreamError",
    "AssetUploadError",
    "AssetDeleteError",
    "DatabaseError",
]


class VidTubeError(Exception):
    """Base exception class for all application errors.

    Attributes:
        message (str): A human-readable error message. Safe to return to clients.
        code (str): A unique, machine-readable error code.
    """

    message: str
    code: str = "generic_error"

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or type(self).code
        Exception.__init__(self, self.message)

    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# Input errors
# ---------------------------------------------------------------------------


class ValidationError(VidTubeError):
    """Raised when required input is missing or malformed."""

    code = "validation_error"


class MissingCredentialFieldError(ValidationError):
    """Raised when a login or password change names neither username nor email."""

    code = "missing_credential_field"

    def __init__(self, message: str = "Username or email is required"):
        super().__init__(message)


class DuplicateUserError(VidTubeError):
    """Raised when a username or email is already registered."""

    code = "duplicate_user"

    def __init__(self, message: str = "User with email or username already exists"):
        super().__init__(message)


# ---------------------------------------------------------------------------
# Authentication errors
# ---------------------------------------------------------------------------


class AuthenticationError(VidTubeError):
    """Base class for every failure that surfaces as 401 Unauthorized."""

    code = "authentication_error"

    def __init__(self, message: str = "Unauthorized request", code: str | None = None):
        super().__init__(message, code)


class InvalidCredentialsError(AuthenticationError):
    """Raised when a submitted password does not match the stored hash."""

    code = "invalid_credentials"

    def __init__(self, message: str = "Invalid user credentials"):
        super().__init__(message)


class InvalidTokenError(AuthenticationError):
    """Raised when a token cannot be decoded or carries unexpected claims."""

    code = "invalid_token"

    def __init__(self, message: str = "Invalid token"):
        super().__init__(message)


class TokenExpiredError(InvalidTokenError):
    code = "token_expired"

    def __init__(self, message: str = "Token has expired"):
        super().__init__(message)


class TokenSignatureError(InvalidTokenError):
    code = "token_bad_signature"

    def __init__(self, message: str = "Token signature is invalid"):
        super().__init__(message)


class InvalidRefreshTokenError(AuthenticationError):
    """The single error every failed refresh is reported as.

    ``reason`` records the underlying cause for logging; it is never sent to
    the client.
    """

    code = "invalid_refresh_token"

    def __init__(self, message: str = "Refresh token is expired or invalid", reason: str = "invalid"):
        super().__init__(message)
        self.reason = reason


class RefreshTokenSupersededError(InvalidRefreshTokenError):
    """Raised when a valid refresh token is no longer the stored one."""

    code = "refresh_token_superseded"

    def __init__(self, message: str = "Refresh token is expired or invalid"):
        super().__init__(message, reason="superseded")


# ---------------------------------------------------------------------------
# Lookup and policy errors
# ---------------------------------------------------------------------------


class UserNotFoundError(VidTubeError):
    code = "user_not_found"

    def __init__(self, message: str = "User does not exist"):
        super().__init__(message)


class PolicyViolationError(VidTubeError):
    """Raised when a well-formed request breaks an account policy."""

    code = "policy_violation"


class PasswordReuseError(PolicyViolationError):
    code = "password_reuse"

    def __init__(self, message: str = "New password must differ from the old password"):
        super().__init__(message)


class UsernameUnchangedError(PolicyViolationError):
    code = "username_unchanged"

    def __init__(self, message: str = "New username must differ from the current username"):
        super().__init__(message)


class UsernameTakenError(PolicyViolationError):
    code = "username_taken"

    def __init__(self, message: str = "Username is already taken"):
        super().__init__(message)


# ---------------------------------------------------------------------------
# Upstream errors
# ---------------------------------------------------------------------------


class UpstreamError(VidTubeError):
    """Base class for failures of an external collaborator."""

    code = "upstream_error"


class AssetUploadError(UpstreamError):
    code = "asset_upload_failed"


class AssetDeleteError(UpstreamError):
    code = "asset_delete_failed"


class DatabaseError(UpstreamError):
    code = "database_error"

    def __init__(self, message: str = "A database error occurred"):
        super().__init__(message)
