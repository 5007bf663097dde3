"""
Import all models to ensure they are registered with SQLAlchemy.
"""
from ..base import Base
from .user import User
from .post import Post, PostLike, Comment

__all__ = ["Base", "User", "Post", "PostLike", "Comment"]
