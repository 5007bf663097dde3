"""
Post mutation service.

Creates posts and applies likes, unlikes and comments, enforcing that a
user contributes at most one like per post.
"""
import logging
from typing import List, Optional
from uuid import UUID

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from socialfeed.core.exceptions import AlreadyLikedError, PostNotFoundError
from socialfeed.crud import post as post_crud
from socialfeed.db.models.post import Post
from socialfeed.db.models.user import User
from socialfeed.db.session import get_db
from socialfeed.schemas.post import CommentAuthor

logger = logging.getLogger(__name__)


def parse_post_id(raw_post_id: str) -> UUID:
    """
    Raises:
        PostNotFoundError: the ID cannot name any post
    """
    try:
        return UUID(str(raw_post_id))
    except ValueError:
        raise PostNotFoundError()


def normalize_author_id(raw_author_id: Optional[str]) -> Optional[str]:
    # Canonical UUID text so snapshots can be matched against users later
    if raw_author_id is None:
        return None
    try:
        return str(UUID(str(raw_author_id)))
    except ValueError:
        return str(raw_author_id)


class PostService:
    """Business rules for posts, bound to one request's session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _require_post(self, raw_post_id: str) -> Post:
        post_id = parse_post_id(raw_post_id)
        post = await post_crud.get_post(self.db, post_id)
        if post is None:
            logger.warning(f"Post {raw_post_id} not found")
            raise PostNotFoundError()
        return post

    async def list_posts(self) -> List[Post]:
        """All posts, newest first."""
        return await post_crud.get_posts(self.db)

    async def create_post(self, actor: User, message: str) -> Post:
        """Create a post authored by ``actor`` with no likes or comments."""
        post = await post_crud.create_post(self.db, message=message, author_id=actor.id)
        await self.db.commit()
        logger.info(f"User {actor.id} created post {post.id}")
        return post

    async def add_like(self, actor: User, raw_post_id: str) -> Post:
        """
        Like a post once.

        Raises:
            PostNotFoundError: no such post
            AlreadyLikedError: ``actor`` is already in the post's liker set
        """
        post = await self._require_post(raw_post_id)
        added = await post_crud.add_like(self.db, post.id, actor.id)
        if not added:
            logger.warning(f"User {actor.id} tried to like post {post.id} twice")
            raise AlreadyLikedError()

        await self.db.commit()
        logger.info(f"User {actor.id} liked post {post.id}")
        return await post_crud.get_post(self.db, post.id, refresh=True)

    async def remove_like(self, actor: User, raw_post_id: str) -> Post:
        """
        Withdraw a like. A user who has not liked the post changes nothing,
        and the like count never goes below zero.

        Raises:
            PostNotFoundError: no such post
        """
        post = await self._require_post(raw_post_id)
        removed = await post_crud.remove_like(self.db, post.id, actor.id)
        if removed:
            await self.db.commit()
            logger.info(f"User {actor.id} unliked post {post.id}")
        else:
            logger.info(f"User {actor.id} unliked post {post.id} without having liked it")
        return await post_crud.get_post(self.db, post.id, refresh=True)

    async def add_comment(
        self,
        actor: User,
        raw_post_id: str,
        text: str,
        author: Optional[CommentAuthor] = None,
    ) -> Post:
        """
        Append a comment. The author snapshot is taken from ``author`` when
        given, otherwise from ``actor``.

        Raises:
            PostNotFoundError: no such post
        """
        post = await self._require_post(raw_post_id)
        if author is None:
            author = CommentAuthor(
                id=str(actor.id),
                name=actor.display_name,
                firstName=actor.first_name,
                lastName=actor.last_name,
            )

        await post_crud.add_comment(
            self.db,
            post_id=post.id,
            text=text,
            author_id=normalize_author_id(author.id),
            author_name=author.name,
            author_first_name=author.firstName,
            author_last_name=author.lastName,
        )
        await self.db.commit()
        logger.info(f"User {actor.id} commented on post {post.id}")
        return await post_crud.get_post(self.db, post.id, refresh=True)


async def get_post_service(db: AsyncSession = Depends(get_db)) -> PostService:
    return PostService(db)
