"""Response models carrying tokens."""

from typing import Optional

from ..base import CamelModel
from .user import UserOut


class TokenPairOut(CamelModel):
    """Tokens in the response body. Both are None when body delivery is disabled."""

    access_token: Optional[str] = None
    refresh_token: Optional[str] = None


class LoginOut(TokenPairOut):
    user: UserOut
