"""
Account lifecycle: registration, login, profile updates and deletion.
"""
import logging
from typing import Any, Dict, Optional

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from socialfeed.core.exceptions import EmailTakenError, InvalidCredentialsError, UserNotFoundError
from socialfeed.core.security import verify_password
from socialfeed.crud import post as post_crud
from socialfeed.crud import user as user_crud
from socialfeed.db.models.user import User
from socialfeed.db.session import get_db

logger = logging.getLogger(__name__)


class AccountService:
    """Account rules, bound to one request's session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def register(self, email: str, password: str, first_name: Optional[str] = None, last_name: Optional[str] = None) -> User:
        """
        Raises:
            EmailTakenError: another account already uses ``email``
        """
        if await user_crud.get_user_by_email(self.db, email) is not None:
            logger.warning(f"Registration refused, email in use: {email}")
            raise EmailTakenError()

        user = await user_crud.create_user(
            self.db,
            email=email,
            password=password,
            first_name=first_name,
            last_name=last_name,
        )
        await self.db.commit()
        logger.info(f"Registered user {user.id}")
        return user

    async def authenticate(self, email: str, password: str) -> User:
        """
        Raises:
            InvalidCredentialsError: unknown email or wrong password
        """
        user = await user_crud.get_user_by_email(self.db, email)
        if user is None or not verify_password(password, user.password_hash):
            logger.warning(f"Failed login for {email}")
            raise InvalidCredentialsError()
        return user

    async def update(self, actor: User, fields: Dict[str, Any]) -> User:
        """
        Apply a partial profile update to ``actor``.

        Raises:
            EmailTakenError: the new email belongs to another account
        """
        new_email = fields.get("email")
        if new_email is not None:
            owner = await user_crud.get_user_by_email(self.db, new_email)
            if owner is not None and owner.id != actor.id:
                logger.warning(f"User {actor.id} tried to take email of user {owner.id}")
                raise EmailTakenError()

        user = await user_crud.update_user(self.db, actor, fields)
        await self.db.commit()
        logger.info(f"Updated user {user.id}: {sorted(fields)}")
        return user

    async def delete(self, actor: User) -> None:
        """
        Delete ``actor`` and everything that references them.

        Removed in one transaction: posts they authored, authorless posts
        carrying a comment recorded under their id, their likes on the
        remaining posts (with those posts' counts lowered), and the account
        itself. Other users' posts survive along with every comment on them,
        the deleted user's included.

        Raises:
            UserNotFoundError: the account disappeared after authentication
        """
        user = await user_crud.get_user(self.db, actor.id)
        if user is None:
            logger.warning(f"User {actor.id} vanished before deletion")
            raise UserNotFoundError()

        doomed = await post_crud.get_posts_referencing_user(self.db, user.id)
        doomed_ids = {post.id for post in doomed}

        surviving_liked = await post_crud.get_liked_post_ids(self.db, user.id) - doomed_ids
        for post_id in surviving_liked:
            await post_crud.remove_like(self.db, post_id, user.id)

        deleted = await post_crud.delete_posts(self.db, doomed)
        await user_crud.delete_user(self.db, user)
        await self.db.commit()
        logger.info(
            f"Deleted user {user.id} with {deleted} posts; "
            f"withdrew likes from {len(surviving_liked)} posts"
        )


async def get_account_service(db: AsyncSession = Depends(get_db)) -> AccountService:
    return AccountService(db)
