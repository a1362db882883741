from typing import Optional

from passlib.context import CryptContext
from structlog import get_logger

logger = get_logger(__name__)


class PasswordVerifier:
    """One-way salted hashing of passwords with bcrypt.

    Attributes:
        pwd_context (CryptContext): Passlib context for bcrypt password hashing.
    """

    def __init__(self, work_factor: int = 12):
        self.pwd_context = CryptContext(
            schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=work_factor
        )

    def hash(self, plaintext: str) -> str:
        return self.pwd_context.hash(plaintext)

    def verify(self, plaintext: str, stored_hash: Optional[str]) -> bool:
        """Checks a plaintext password against a stored hash.

        A missing or unrecognizable hash verifies as False instead of raising,
        so callers see the same outcome as for a wrong password.
        """
        if not plaintext or not stored_hash:
            return False
        try:
            return self.pwd_context.verify(plaintext, stored_hash)
        except (ValueError, TypeError):
            logger.warning("Stored password hash could not be verified")
            return False
