"""
Account routes for the authenticated user: profile, update and deletion.
"""
from fastapi import APIRouter, Depends, Response, status

from socialfeed.auth.dependencies import Actor, get_current_actor
from socialfeed.core.config import settings
from socialfeed.core.security import TokenService, get_token_service
from socialfeed.schemas.auth import ErrorResponse
from socialfeed.services.accounts import AccountService, get_account_service
from .schemas import MeResponse, MessageResponse, UserRead, UserUpdate

router = APIRouter(
    tags=["Users"],
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_401_UNAUTHORIZED: {"model": ErrorResponse},
        status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
    },
)


def set_token_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.TOKEN_COOKIE_NAME,
        value=token,
        httponly=True,
        max_age=settings.JWT_EXPIRATION_MINUTES * 60,
        path="/",
        samesite="lax",
    )


@router.get("/users/me", response_model=MeResponse)
async def read_users_me(
    actor: Actor = Depends(get_current_actor),
    tokens: TokenService = Depends(get_token_service),
):
    """Retrieve the details of the currently authenticated user."""
    return MeResponse(user=UserRead.from_model(actor.user), token=tokens.refresh(actor.claims))


@router.put(
    "/userUpdatesRoute",
    response_model=MessageResponse,
    responses={status.HTTP_409_CONFLICT: {"model": ErrorResponse}},
)
async def update_user(
    user_in: UserUpdate,
    response: Response,
    actor: Actor = Depends(get_current_actor),
    accounts: AccountService = Depends(get_account_service),
    tokens: TokenService = Depends(get_token_service),
):
    """Update any of email, password, firstName and lastName; fields left out or sent as null stay as they are."""
    await accounts.update(actor.user, user_in.model_dump(exclude_unset=True, exclude_none=True))
    token = tokens.refresh(actor.claims)
    set_token_cookie(response, token)
    return MessageResponse(message="OK", token=token)


@router.delete("/userUpdatesRoute", response_model=MessageResponse, response_model_exclude_none=True)
async def delete_user(
    response: Response,
    actor: Actor = Depends(get_current_actor),
    accounts: AccountService = Depends(get_account_service),
):
    """Delete the authenticated account and the posts that reference it."""
    await accounts.delete(actor.user)
    response.delete_cookie(key=settings.TOKEN_COOKIE_NAME, path="/")
    return MessageResponse(message="OK")
