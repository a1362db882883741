"""User repository implementation using SQLAlchemy.

Every refresh token write is a single UPDATE statement. Rotation uses a
conditional UPDATE whose WHERE clause includes the expected current token, so
the database, not the application, arbitrates concurrent refreshes.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import or_, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from vidtube_auth.core.exceptions import DatabaseError, DuplicateUserError
from vidtube_auth.domain.entities.user import User
from vidtube_auth.domain.interfaces.repositories import IUserRepository

logger = get_logger(__name__)

_PROFILE_FIELDS = frozenset({"username", "email", "full_name", "avatar_url", "cover_image_url"})


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserRepository(IUserRepository):
    """SQLAlchemy implementation of `IUserRepository`.

    Args:
        db_session: SQLAlchemy async session, one per request.
    """

    def __init__(self, db_session: AsyncSession):
        self.db_session = db_session

    async def get_by_id(self, user_id: int) -> Optional[User]:
        return await self._first(select(User).where(User.id == user_id), operation="get_by_id")

    async def get_by_username(self, username: str) -> Optional[User]:
        if not username:
            return None
        statement = select(User).where(User.username == username.strip().lower())
        return await self._first(statement, operation="get_by_username")

    async def get_by_email(self, email: str) -> Optional[User]:
        if not email:
            return None
        statement = select(User).where(User.email == email.strip().lower())
        return await self._first(statement, operation="get_by_email")

    async def find_by_username_or_email(
        self, username: Optional[str], email: Optional[str]
    ) -> Optional[User]:
        conditions = []
        if username:
            conditions.append(User.username == username.strip().lower())
        if email:
            conditions.append(User.email == email.strip().lower())
        if not conditions:
            return None
        statement = select(User).where(or_(*conditions)).order_by(User.id)
        return await self._first(statement, operation="find_by_username_or_email")

    async def create(self, user: User) -> User:
        """Insert a new user and return it with its generated id.

        Raises:
            DuplicateUserError: On a unique constraint violation.
            DatabaseError: On any other database failure.
        """
        self.db_session.add(user)
        try:
            await self.db_session.commit()
        except IntegrityError as e:
            await self.db_session.rollback()
            logger.info("User insert rejected by unique constraint")
            raise DuplicateUserError() from e
        except SQLAlchemyError as e:
            await self.db_session.rollback()
            logger.error("Error creating user", error_type=type(e).__name__)
            raise DatabaseError() from e
        await self.db_session.refresh(user)
        logger.debug("User created", user_id=user.id)
        return user

    async def update_password_hash(
        self, user_id: int, password_hash: str, revoke_refresh_token: bool = False
    ) -> None:
        values = {"password_hash": password_hash, "updated_at": _utcnow()}
        if revoke_refresh_token:
            values["refresh_token"] = None
        await self._update(update(User).where(User.id == user_id).values(**values), "update_password_hash")

    async def update_profile(self, user_id: int, **fields) -> Optional[User]:
        """Update profile columns of a user.

        Raises:
            ValueError: If a non-profile column is passed.
            DuplicateUserError: If the new username or email is taken.
        """
        unknown = set(fields) - _PROFILE_FIELDS
        if unknown:
            raise ValueError(f"Not profile fields: {', '.join(sorted(unknown))}")

        user = await self.get_by_id(user_id)
        if user is None:
            return None
        for name, value in fields.items():
            setattr(user, name, value)
        user.updated_at = _utcnow()
        try:
            await self.db_session.commit()
        except IntegrityError as e:
            await self.db_session.rollback()
            raise DuplicateUserError() from e
        except SQLAlchemyError as e:
            await self.db_session.rollback()
            logger.error("Error updating user profile", user_id=user_id, error_type=type(e).__name__)
            raise DatabaseError() from e
        await self.db_session.refresh(user)
        return user

    async def set_refresh_token(self, user_id: int, refresh_token: str) -> None:
        statement = (
            update(User)
            .where(User.id == user_id)
            .values(refresh_token=refresh_token, updated_at=_utcnow())
        )
        await self._update(statement, "set_refresh_token")

    async def compare_and_swap_refresh_token(self, user_id: int, expected: str, new: str) -> bool:
        statement = (
            update(User)
            .where(User.id == user_id, User.refresh_token == expected)
            .values(refresh_token=new, updated_at=_utcnow())
        )
        swapped = await self._update(statement, "compare_and_swap_refresh_token") == 1
        if not swapped:
            logger.warning("Refresh token swap lost to a concurrent write", user_id=user_id)
        return swapped

    async def clear_refresh_token(self, user_id: int) -> None:
        statement = (
            update(User)
            .where(User.id == user_id)
            .values(refresh_token=None, updated_at=_utcnow())
        )
        await self._update(statement, "clear_refresh_token")

    async def _first(self, statement, operation: str) -> Optional[User]:
        try:
            result = await self.db_session.execute(
                statement.execution_options(populate_existing=True)
            )
        except SQLAlchemyError as e:
            logger.error("Error reading users", operation=operation, error_type=type(e).__name__)
            raise DatabaseError() from e
        return result.scalars().first()

    async def _update(self, statement, operation: str) -> int:
        """Execute an UPDATE, commit it and return the number of matched rows."""
        try:
            result = await self.db_session.execute(
                statement.execution_options(synchronize_session="evaluate")
            )
            await self.db_session.commit()
        except SQLAlchemyError as e:
            await self.db_session.rollback()
            logger.error("Error updating user", operation=operation, error_type=type(e).__name__)
            raise DatabaseError() from e
        return result.rowcount
