"""
User info service - persistence for user accounts
"""

import logging
from datetime import datetime, timezone
from typing import Optional

import asyncpg

from database.errors import (
    DataAccessError,
    DuplicateEmailError,
    EditConflictError,
    PersistenceError,
    RecordNotFoundError,
)
from models.user import Password, User
from services.base_service import TableModel

logger = logging.getLogger(__name__)

EMAIL_UNIQUE_CONSTRAINT = "user_info_email_key"

USER_COLUMNS = "id, created_at, updated_at, fname, lname, email, password_hash, user_role, activated, version"

def _user_from_row(row) -> User:
    return User(
        id=row["id"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        name=row["fname"],
        surname=row["lname"],
        email=row["email"],
        password=Password(hash=bytes(row["password_hash"])),
        role=row["user_role"],
        activated=row["activated"],
        version=row["version"],
    )

class UserInfoModel(TableModel):
    """CRUD and lookup-by-email over the user_info table"""

    table_name = "user_info"

    def _classify_unique_violation(self, exc: asyncpg.UniqueViolationError) -> Optional[DataAccessError]:
        constraint = getattr(exc, "constraint_name", None)
        if constraint == EMAIL_UNIQUE_CONSTRAINT or EMAIL_UNIQUE_CONSTRAINT in str(exc):
            return DuplicateEmailError()
        return None

    async def insert(self, user: User) -> None:
        """
        Insert a new user

        The generated id, created_at and version are written back into ``user``.

        Raises:
            DuplicateEmailError: the email is already registered
        """
        self._revalidate(user)
        query = """
            INSERT INTO user_info (fname, lname, email, password_hash, user_role, activated)
            VALUES ($1, $2, $3, $4, $5, $6)
            RETURNING id, created_at, version
        """
        row = await self._fetchrow(
            "insert", query,
            user.name, user.surname, user.email, user.password.hash, user.role, user.activated,
            context={"email": user.email},
        )
        if not row:
            raise PersistenceError("Insert operation failed - no data returned")

        user.id = row["id"]
        user.created_at = row["created_at"]
        user.version = row["version"]
        logger.info(f"Created user {user.id}: {user.email}")

    async def get(self, user_id: int) -> User:
        """
        Get a user by ID

        Raises:
            RecordNotFoundError: no user has this id
        """
        if user_id < 1:
            raise RecordNotFoundError()

        query = f"SELECT {USER_COLUMNS} FROM user_info WHERE id = $1"
        row = await self._fetchrow("get", query, user_id, context={"id": user_id})
        if row is None:
            raise RecordNotFoundError()
        return _user_from_row(row)

    async def get_by_email(self, email: str) -> User:
        """
        Get the user whose email matches exactly

        Surrounding whitespace is dropped first, as it is for stored emails.

        Raises:
            RecordNotFoundError: no user has this email
        """
        email = email.strip()
        query = f"SELECT {USER_COLUMNS} FROM user_info WHERE email = $1"
        row = await self._fetchrow("get_by_email", query, email, context={"email": email})
        if row is None:
            raise RecordNotFoundError()
        return _user_from_row(row)

    async def update(self, user: User) -> None:
        """
        Update a user, conditioned on its id and version

        Role is not written here; it is fixed at insert time.
        On success the new version and updated_at are written back into ``user``.

        Raises:
            EditConflictError: the version is stale or the user no longer exists
            DuplicateEmailError: the new email belongs to another user
        """
        self._revalidate(user)
        updated_at = datetime.now(timezone.utc)
        query = """
            UPDATE user_info
            SET fname = $1, lname = $2, email = $3, password_hash = $4, activated = $5,
                updated_at = $6, version = version + 1
            WHERE id = $7 AND version = $8
            RETURNING version
        """
        row = await self._fetchrow(
            "update", query,
            user.name, user.surname, user.email, user.password.hash, user.activated,
            updated_at, user.id, user.version,
            context={"id": user.id, "version": user.version},
        )
        if row is None:
            logger.warning(f"Edit conflict updating user {user.id} at version {user.version}")
            raise EditConflictError()

        user.version = row["version"]
        user.updated_at = updated_at
        logger.info(f"Updated user {user.id} to version {user.version}")
