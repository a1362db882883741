import secrets
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

from jwt import ExpiredSignatureError, InvalidSignatureError, PyJWTError
from jwt import decode as jwt_decode
from jwt import encode as jwt_encode
from structlog import get_logger

from vidtube_auth.core.exceptions import (
    InvalidTokenError,
    TokenExpiredError,
    TokenSignatureError,
)
from vidtube_auth.domain.value_objects.tokens import (
    TokenClaims,
    TokenPair,
    TokenSigningConfig,
    TokenType,
)

logger = get_logger(__name__)

_REQUIRED_CLAIMS = ["sub", "iat", "exp", "jti", "type", "iss", "aud"]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenIssuer:
    """Mints and verifies the signed access and refresh tokens.

    Both token classes are HMAC-signed JWTs with the same claim shape
    (``sub``, ``iat``, ``exp``, ``jti``, ``type``, ``iss``, ``aud``), but each
    class has its own secret and lifetime. Access tokens additionally carry
    ``username`` and ``email``. A random ``jti`` makes every minted token
    unique, even two issued for the same user within one second.

    Attributes:
        config (TokenSigningConfig): Immutable signing material, injected once.
        clock (Callable[[], datetime]): Source of the current UTC time.
    """

    def __init__(
        self,
        config: TokenSigningConfig,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.config = config
        self.clock = clock or _utcnow

    def issue_access_token(self, user) -> str:
        """Create a short-lived access token for a user or user profile."""
        return self._encode(
            user,
            token_type="access",
            secret=self.config.access_secret,
            extra={"username": user.username, "email": user.email},
        )

    def issue_refresh_token(self, user) -> str:
        """Create a long-lived refresh token signed with the refresh secret."""
        return self._encode(user, token_type="refresh", secret=self.config.refresh_secret)

    def issue_token_pair(self, user) -> TokenPair:
        return TokenPair(
            access_token=self.issue_access_token(user),
            refresh_token=self.issue_refresh_token(user),
        )

    def verify_access_token(self, token: str) -> TokenClaims:
        """Verify an access token.

        Raises:
            TokenExpiredError: If the token is past its expiry.
            TokenSignatureError: If it was not signed with the access secret.
            InvalidTokenError: For any other malformed token or claim.
        """
        return self._decode(token, expected_type="access", secret=self.config.access_secret)

    def verify_refresh_token(self, token: str) -> TokenClaims:
        """Verify a refresh token. Raises the same errors as `verify_access_token`."""
        return self._decode(token, expected_type="refresh", secret=self.config.refresh_secret)

    def _encode(
        self,
        user,
        token_type: TokenType,
        secret: str,
        extra: Optional[Dict[str, Any]] = None,
    ) -> str:
        issued_at = self.clock()
        ttl = self.config.access_ttl if token_type == "access" else self.config.refresh_ttl
        payload: Dict[str, Any] = {
            "sub": str(user.id),
            "iat": issued_at,
            "exp": issued_at + ttl,
            "jti": secrets.token_urlsafe(32),
            "type": token_type,
            "iss": self.config.issuer,
            "aud": self.config.audience,
        }
        if extra:
            payload.update(extra)
        token = jwt_encode(payload, secret, algorithm=self.config.algorithm)
        logger.debug("Token issued", user_id=user.id, token_type=token_type)
        return token

    def _decode(self, token: str, expected_type: TokenType, secret: str) -> TokenClaims:
        if not token:
            raise InvalidTokenError()
        try:
            payload = jwt_decode(
                token,
                secret,
                algorithms=[self.config.algorithm],
                issuer=self.config.issuer,
                audience=self.config.audience,
                options={"require": _REQUIRED_CLAIMS},
            )
        except ExpiredSignatureError as e:
            raise TokenExpiredError() from e
        except InvalidSignatureError as e:
            raise TokenSignatureError() from e
        except PyJWTError as e:
            logger.debug("JWT decode failed", token_type=expected_type, error=str(e))
            raise InvalidTokenError() from e

        if payload.get("type") != expected_type:
            logger.warning(
                "Token type mismatch",
                expected=expected_type,
                received=payload.get("type"),
            )
            raise InvalidTokenError()

        try:
            subject_id = int(payload["sub"])
        except (TypeError, ValueError) as e:
            raise InvalidTokenError() from e

        return TokenClaims(
            subject_id=subject_id,
            token_type=expected_type,
            token_id=payload["jti"],
            issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            username=payload.get("username"),
            email=payload.get("email"),
        )
