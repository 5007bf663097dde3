"""
CRUD operations for posts, likes and comments.
"""
from typing import Iterable, List, Optional, Set
from uuid import UUID

from sqlalchemy import and_, delete, or_, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from socialfeed.db.models.post import Comment, Post, PostLike


def _insert_for(db: AsyncSession):
    # ON CONFLICT DO NOTHING lives in the dialect-specific insert constructs
    if db.get_bind().dialect.name == "postgresql":
        return pg_insert
    return sqlite_insert


async def create_post(db: AsyncSession, message: str, author_id: Optional[UUID] = None) -> Post:
    """
    Create a new post.

    Args:
        db: Database session
        message: Post body, stored as given
        author_id: ID of the creating user

    Returns:
        Post: Created post
    """
    db_post = Post(message=message, author_id=author_id, like_count=0)
    db.add(db_post)
    # Flush to send changes to DB within the transaction
    await db.flush()
    return await get_post(db, db_post.id, refresh=True)


async def get_post(db: AsyncSession, post_id: UUID, refresh: bool = False) -> Optional[Post]:
    """
    Get a post by ID, with its likes and comments.

    Args:
        db: Database session
        post_id: Post ID
        refresh: Overwrite any copy already in the session with the row's
            current state, e.g. after a server-side update

    Returns:
        Optional[Post]: Post if found, None otherwise
    """
    stmt = select(Post).where(Post.id == post_id)
    if refresh:
        stmt = stmt.execution_options(populate_existing=True)
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def get_posts(db: AsyncSession) -> List[Post]:
    """
    Get every post, newest first.

    Args:
        db: Database session

    Returns:
        List[Post]: List of posts
    """
    result = await db.execute(select(Post).order_by(Post.created_at.desc(), Post.id.desc()))
    return list(result.scalars().all())


async def add_like(db: AsyncSession, post_id: UUID, user_id: UUID) -> bool:
    """
    Add ``user_id`` to the post's liker set and bump its like count.

    The membership check and the insert are one statement, so two
    concurrent likes from the same user cannot both succeed.

    Returns:
        bool: False if the user was already in the liker set
    """
    insert = _insert_for(db)
    stmt = (
        insert(PostLike.__table__)
        .values(post_id=post_id, user_id=user_id)
        .on_conflict_do_nothing(index_elements=["post_id", "user_id"])
    )
    result = await db.execute(stmt)
    if result.rowcount != 1:
        return False

    await db.execute(
        update(Post)
        .where(Post.id == post_id)
        .values(like_count=Post.like_count + 1)
        .execution_options(synchronize_session=False)
    )
    return True


async def remove_like(db: AsyncSession, post_id: UUID, user_id: UUID) -> bool:
    """
    Remove ``user_id`` from the post's liker set and lower its like count.

    The count never drops below zero.

    Returns:
        bool: False if the user was not in the liker set
    """
    result = await db.execute(
        delete(PostLike.__table__).where(
            PostLike.__table__.c.post_id == post_id,
            PostLike.__table__.c.user_id == user_id,
        )
    )
    if result.rowcount != 1:
        return False

    await db.execute(
        update(Post)
        .where(Post.id == post_id, Post.like_count > 0)
        .values(like_count=Post.like_count - 1)
        .execution_options(synchronize_session=False)
    )
    return True


async def add_comment(
    db: AsyncSession,
    post_id: UUID,
    text: str,
    author_id: Optional[str],
    author_name: Optional[str],
    author_first_name: Optional[str] = None,
    author_last_name: Optional[str] = None,
) -> Comment:
    """Append a comment with the given author snapshot."""
    db_comment = Comment(
        post_id=post_id,
        comment=text,
        author_id=author_id,
        author_name=author_name,
        author_first_name=author_first_name,
        author_last_name=author_last_name,
    )
    db.add(db_comment)
    await db.flush()
    return db_comment


async def get_posts_referencing_user(db: AsyncSession, user_id: UUID) -> List[Post]:
    """
    Posts owned by the user: those they authored, plus authorless posts
    carrying a comment with the user as the recorded author.

    Posts written by someone else are never returned, whoever commented.
    """
    commented = select(Comment.post_id).where(Comment.author_id == str(user_id))
    result = await db.execute(
        select(Post).where(
            or_(
                Post.author_id == user_id,
                and_(Post.author_id.is_(None), Post.id.in_(commented)),
            )
        )
    )
    return list(result.scalars().all())


async def get_liked_post_ids(db: AsyncSession, user_id: UUID) -> Set[UUID]:
    """IDs of the posts whose liker set contains the user."""
    result = await db.execute(select(PostLike.post_id).where(PostLike.user_id == user_id))
    return set(result.scalars().all())


async def delete_posts(db: AsyncSession, posts: Iterable[Post]) -> int:
    """Delete posts together with their likes and comments."""
    count = 0
    for db_post in posts:
        await db.delete(db_post)
        count += 1
    await db.flush()
    return count
