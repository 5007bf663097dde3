"""
Pydantic schemas for posts.
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from socialfeed.db.models.post import Comment, Post


class PostCreate(BaseModel):
    """Request body for creating a post."""
    message: str = Field("", description="Post body")


class CommentAuthor(BaseModel):
    """Author snapshot stored with a comment."""
    id: Optional[str] = Field(None, description="ID of the author at the time of writing")
    name: Optional[str] = Field(None, description="Display name")
    firstName: Optional[str] = Field(None, description="Given name")
    lastName: Optional[str] = Field(None, description="Family name")


class CommentCreate(BaseModel):
    """Request body for commenting on a post."""
    comment: str = Field(..., description="Comment text")
    author: Optional[CommentAuthor] = Field(None, description="Author snapshot; defaults to the authenticated user")


class CommentRead(BaseModel):
    id: str
    comment: str
    author: CommentAuthor
    createdAt: Optional[datetime] = None

    @classmethod
    def from_model(cls, comment: Comment) -> "CommentRead":
        return cls(
            id=str(comment.id),
            comment=comment.comment,
            author=CommentAuthor(
                id=comment.author_id,
                name=comment.author_name,
                firstName=comment.author_first_name,
                lastName=comment.author_last_name,
            ),
            createdAt=comment.created_at,
        )


class PostRead(BaseModel):
    """Post as returned to clients."""
    id: str = Field(..., description="Post ID")
    message: str = Field(..., description="Post body")
    like: int = Field(0, description="Number of likes")
    likedBy: List[str] = Field(default_factory=list, description="IDs of the users who liked the post")
    comments: List[CommentRead] = Field(default_factory=list)
    authorId: Optional[str] = Field(None, description="ID of the creating user")
    createdAt: Optional[datetime] = None

    @classmethod
    def from_model(cls, post: Post) -> "PostRead":
        return cls(
            id=str(post.id),
            message=post.message,
            like=post.like_count,
            likedBy=sorted(str(user_id) for user_id in post.liked_by),
            comments=[CommentRead.from_model(comment) for comment in post.comments],
            authorId=str(post.author_id) if post.author_id else None,
            createdAt=post.created_at,
        )


class PostResponse(BaseModel):
    post: PostRead
    token: str


class PostListResponse(BaseModel):
    posts: List[PostRead]
    token: str
