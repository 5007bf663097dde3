"""
CRUD operations for users.
"""
from typing import Any, Dict, Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from socialfeed.core.security import get_password_hash
from socialfeed.db.models.user import User

# Request field name -> model attribute
UPDATABLE_FIELDS = {
    "email": "email",
    "firstName": "first_name",
    "lastName": "last_name",
}


def normalize_email(email: str) -> str:
    return email.strip()


async def get_user(db: AsyncSession, user_id: UUID) -> Optional[User]:
    """Get a user by ID."""
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def get_user_by_email(db: AsyncSession, email: str) -> Optional[User]:
    """Get a user by email address (case-insensitive)."""
    result = await db.execute(
        select(User).where(func.lower(User.email) == normalize_email(email).lower())
    )
    return result.scalar_one_or_none()


async def create_user(
    db: AsyncSession,
    email: str,
    password: str,
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
) -> User:
    """
    Create a new user with a hashed password.

    Args:
        db: Database session
        email: Login email
        password: Plain password
        first_name: Given name
        last_name: Family name

    Returns:
        User: Created user
    """
    db_user = User(
        email=normalize_email(email),
        password_hash=get_password_hash(password),
        first_name=first_name,
        last_name=last_name,
    )
    db.add(db_user)
    await db.flush()
    await db.refresh(db_user)
    return db_user


async def update_user(db: AsyncSession, db_user: User, fields: Dict[str, Any]) -> User:
    """
    Apply a partial update. Keys missing from ``fields``, or sent as
    None, are left untouched.

    Args:
        db: Database session
        db_user: User to update
        fields: Any subset of email, password, firstName, lastName

    Returns:
        User: Updated user
    """
    for key, attribute in UPDATABLE_FIELDS.items():
        value = fields.get(key)
        if value is None:
            continue
        if key == "email":
            value = normalize_email(value)
        setattr(db_user, attribute, value)

    if fields.get("password") is not None:
        db_user.password_hash = get_password_hash(fields["password"])

    await db.flush()
    return db_user


async def delete_user(db: AsyncSession, db_user: User) -> None:
    """Delete a user row. Dependent rows are the caller's concern."""
    await db.delete(db_user)
    await db.flush()
