"""
API endpoints for post-related operations.

Every successful response carries a freshly issued token.
"""
from fastapi import APIRouter, Depends, status

from socialfeed.auth.dependencies import Actor, get_current_actor
from socialfeed.core.security import TokenService, get_token_service
from socialfeed.schemas.auth import ErrorResponse
from socialfeed.schemas.post import (
    CommentCreate,
    PostCreate,
    PostListResponse,
    PostRead,
    PostResponse,
)
from socialfeed.services.posts import PostService, get_post_service

router = APIRouter(
    prefix="/posts",
    tags=["posts"],
    responses={
        status.HTTP_401_UNAUTHORIZED: {"model": ErrorResponse},
        status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
    },
)


@router.get("", response_model=PostListResponse)
async def list_posts(
    actor: Actor = Depends(get_current_actor),
    posts: PostService = Depends(get_post_service),
    tokens: TokenService = Depends(get_token_service),
):
    """List every post, newest first."""
    items = await posts.list_posts()
    return PostListResponse(
        posts=[PostRead.from_model(post) for post in items],
        token=tokens.refresh(actor.claims),
    )


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    post_in: PostCreate,
    actor: Actor = Depends(get_current_actor),
    posts: PostService = Depends(get_post_service),
    tokens: TokenService = Depends(get_token_service),
):
    """Create a post as the authenticated user."""
    post = await posts.create_post(actor.user, post_in.message)
    return PostResponse(post=PostRead.from_model(post), token=tokens.refresh(actor.claims))


@router.post(
    "/{post_id}/likes",
    response_model=PostResponse,
    status_code=status.HTTP_201_CREATED,
    responses={status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}},
)
async def add_like(
    post_id: str,
    actor: Actor = Depends(get_current_actor),
    posts: PostService = Depends(get_post_service),
    tokens: TokenService = Depends(get_token_service),
):
    """Like a post. Each user can like a given post once."""
    post = await posts.add_like(actor.user, post_id)
    return PostResponse(post=PostRead.from_model(post), token=tokens.refresh(actor.claims))


@router.delete("/{post_id}/likes", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def remove_like(
    post_id: str,
    actor: Actor = Depends(get_current_actor),
    posts: PostService = Depends(get_post_service),
    tokens: TokenService = Depends(get_token_service),
):
    """Withdraw the authenticated user's like from a post."""
    post = await posts.remove_like(actor.user, post_id)
    return PostResponse(post=PostRead.from_model(post), token=tokens.refresh(actor.claims))


@router.post("/{post_id}/comments", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def add_comment(
    post_id: str,
    comment_in: CommentCreate,
    actor: Actor = Depends(get_current_actor),
    posts: PostService = Depends(get_post_service),
    tokens: TokenService = Depends(get_token_service),
):
    """Comment on a post."""
    post = await posts.add_comment(actor.user, post_id, comment_in.comment, comment_in.author)
    return PostResponse(post=PostRead.from_model(post), token=tokens.refresh(actor.claims))
