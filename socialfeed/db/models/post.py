"""
Post, like and comment models.
"""
from typing import Set
from uuid import UUID

from sqlalchemy import Column, String, Integer, Text, ForeignKey, CheckConstraint, Uuid
from sqlalchemy.orm import relationship

from ..base import Base, UUIDMixin, TimestampMixin


class PostLike(Base, TimestampMixin):
    """
    One row per (post, user) pair: the post's liker set.

    The composite primary key is what keeps a user from liking the same
    post twice, independently of any application-level check.
    """
    __tablename__ = "post_likes"

    post_id = Column(Uuid(as_uuid=True), ForeignKey("posts.id", ondelete="CASCADE"), primary_key=True)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True, index=True)

    # Relationships
    post = relationship("Post", back_populates="likes")
    user = relationship("User", back_populates="likes")


class Comment(Base, UUIDMixin, TimestampMixin):
    """
    Comment on a post.

    The author is a snapshot copied in when the comment is written, not a
    foreign key, so it outlives the account it was taken from.
    """
    __tablename__ = "comments"

    post_id = Column(Uuid(as_uuid=True), ForeignKey("posts.id", ondelete="CASCADE"), nullable=False, index=True)
    comment = Column(Text, nullable=False)

    # Author snapshot
    author_id = Column(String(255), index=True)
    author_name = Column(String(255))
    author_first_name = Column(String(255))
    author_last_name = Column(String(255))

    # Relationships
    post = relationship("Post", back_populates="comments")


class Post(Base, UUIDMixin, TimestampMixin):
    """
    A message on the feed, with its like count, liker set and comments.
    """
    __tablename__ = "posts"
    __table_args__ = (
        CheckConstraint("like_count >= 0", name="like_count_non_negative"),
    )

    message = Column(Text, nullable=False, default="")
    like_count = Column(Integer, nullable=False, default=0, server_default="0")
    author_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="SET NULL"), index=True)

    # Relationships
    author = relationship("User", back_populates="posts")
    likes = relationship(
        "PostLike",
        back_populates="post",
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    comments = relationship(
        "Comment",
        back_populates="post",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="Comment.created_at",
    )

    @property
    def liked_by(self) -> Set[UUID]:
        return {like.user_id for like in self.likes}
