"""Repository interfaces for abstracting data persistence in the domain layer.

The domain services depend on these abstract ports only. The SQLAlchemy
adapter lives in ``vidtube_auth.infrastructure.repositories``.
"""

from abc import ABC, abstractmethod
from typing import Optional

from vidtube_auth.domain.entities.user import User


class IUserRepository(ABC):
    """Contract for user persistence, including the refresh token field.

    Every write that touches ``refresh_token`` is a single statement, so the
    stored value is always exactly one token or ``None``.
    """

    @abstractmethod
    async def get_by_id(self, user_id: int) -> Optional[User]:
        """Retrieves a user by their unique identifier.

        Args:
            user_id: The unique integer ID of the user.

        Returns:
            An optional `User` entity. Returns `None` if no user is found.
        """
        raise NotImplementedError

    @abstractmethod
    async def get_by_username(self, username: str) -> Optional[User]:
        raise NotImplementedError

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    @abstractmethod
    async def find_by_username_or_email(
        self, username: Optional[str], email: Optional[str]
    ) -> Optional[User]:
        """Retrieves the user matching either the username or the email.

        Either argument may be ``None``; a user matching any supplied value is
        returned.
        """
        raise NotImplementedError

    @abstractmethod
    async def create(self, user: User) -> User:
        """Persists a new user.

        Raises:
            DuplicateUserError: If the username or email is already taken.
            DatabaseError: For any other storage failure.
        """
        raise NotImplementedError

    @abstractmethod
    async def update_password_hash(
        self, user_id: int, password_hash: str, revoke_refresh_token: bool = False
    ) -> None:
        """Stores a new password hash, optionally clearing the refresh token in the same write."""
        raise NotImplementedError

    @abstractmethod
    async def update_profile(self, user_id: int, **fields) -> Optional[User]:
        """Updates profile columns and returns the fresh record.

        Raises:
            DuplicateUserError: If the new username or email is already taken.
        """
        raise NotImplementedError

    @abstractmethod
    async def set_refresh_token(self, user_id: int, refresh_token: str) -> None:
        """Unconditionally replaces the stored refresh token."""
        raise NotImplementedError

    @abstractmethod
    async def compare_and_swap_refresh_token(
        self, user_id: int, expected: str, new: str
    ) -> bool:
        """Replaces the stored refresh token only if it still equals ``expected``.

        Returns:
            True if exactly one record was updated, False if the stored token
            had already changed.
        """
        raise NotImplementedError

    @abstractmethod
    async def clear_refresh_token(self, user_id: int) -> None:
        raise NotImplementedError
