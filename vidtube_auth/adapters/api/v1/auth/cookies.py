"""Token delivery policy.

Browsers receive the token pair as http-only cookies, non-browser clients in
the response body. Each channel can be switched off in configuration.
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from fastapi import Response

from vidtube_auth.core.config.settings import settings
from vidtube_auth.core.dependencies.auth import ACCESS_TOKEN_COOKIE
from vidtube_auth.domain.value_objects.tokens import TokenPair

REFRESH_TOKEN_COOKIE = "refreshToken"


@dataclass(frozen=True)
class TokenDeliveryPolicy:
    deliver_as_cookie: bool = True
    deliver_in_body: bool = True
    cookie_secure: bool = True
    cookie_samesite: str = "strict"
    cookie_domain: Optional[str] = None
    access_max_age: int = 15 * 60
    refresh_max_age: int = 10 * 24 * 60 * 60

    def __post_init__(self):
        if not (self.deliver_as_cookie or self.deliver_in_body):
            raise ValueError("Tokens must be delivered through at least one channel")

    @classmethod
    def from_settings(cls, settings) -> "TokenDeliveryPolicy":
        return cls(
            deliver_as_cookie=settings.TOKEN_DELIVERY_COOKIE,
            deliver_in_body=settings.TOKEN_DELIVERY_BODY,
            cookie_secure=settings.COOKIE_SECURE,
            cookie_samesite=settings.COOKIE_SAMESITE,
            cookie_domain=settings.COOKIE_DOMAIN,
            access_max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
            refresh_max_age=settings.REFRESH_TOKEN_EXPIRE_DAYS * 24 * 60 * 60,
        )

    def apply(self, response: Response, tokens: TokenPair) -> None:
        """Set the token cookies on ``response`` when cookie delivery is enabled."""
        if not self.deliver_as_cookie:
            return
        self._set_cookie(response, ACCESS_TOKEN_COOKIE, tokens.access_token, self.access_max_age)
        self._set_cookie(response, REFRESH_TOKEN_COOKIE, tokens.refresh_token, self.refresh_max_age)

    def clear(self, response: Response) -> None:
        for name in (ACCESS_TOKEN_COOKIE, REFRESH_TOKEN_COOKIE):
            response.delete_cookie(
                name,
                path="/",
                domain=self.cookie_domain,
                secure=self.cookie_secure,
                httponly=True,
                samesite=self.cookie_samesite,
            )

    def body_tokens(self, tokens: TokenPair) -> dict:
        """Token fields for the response body, empty when body delivery is disabled."""
        if not self.deliver_in_body:
            return {}
        return {"access_token": tokens.access_token, "refresh_token": tokens.refresh_token}

    def _set_cookie(self, response: Response, name: str, value: str, max_age: int) -> None:
        response.set_cookie(
            name,
            value,
            max_age=max_age,
            path="/",
            domain=self.cookie_domain,
            secure=self.cookie_secure,
            httponly=True,
            samesite=self.cookie_samesite,
        )


@lru_cache
def get_token_delivery_policy() -> TokenDeliveryPolicy:
    return TokenDeliveryPolicy.from_settings(settings)
