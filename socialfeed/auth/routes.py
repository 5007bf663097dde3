"""
Registration and login routes.
"""
import logging

from fastapi import APIRouter, Depends, Response, status

from socialfeed.core.security import TokenService, get_token_service
from socialfeed.schemas.auth import ErrorResponse, LoginRequest, RegisterRequest, TokenResponse
from socialfeed.services.accounts import AccountService, get_account_service
from socialfeed.user.routes import set_token_cookie
from socialfeed.user.schemas import UserRead, UserResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Authentication"])


@router.post(
    "/users",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses={status.HTTP_409_CONFLICT: {"model": ErrorResponse}},
)
async def register(
    user_in: RegisterRequest,
    accounts: AccountService = Depends(get_account_service),
):
    """
    Sign up with email and password.

    Raises:
        EmailTakenError: 409 if the email is already registered
    """
    user = await accounts.register(
        email=user_in.email,
        password=user_in.password,
        first_name=user_in.firstName,
        last_name=user_in.lastName,
    )
    return UserResponse(message="OK", user=UserRead.from_model(user))


@router.post(
    "/tokens",
    response_model=TokenResponse,
    status_code=status.HTTP_201_CREATED,
    responses={status.HTTP_401_UNAUTHORIZED: {"model": ErrorResponse}},
)
async def login(
    credentials: LoginRequest,
    response: Response,
    accounts: AccountService = Depends(get_account_service),
    tokens: TokenService = Depends(get_token_service),
):
    """
    Exchange email and password for a token, returned in the body and set
    as the token cookie.

    Raises:
        InvalidCredentialsError: 401 for an unknown email or wrong password
    """
    user = await accounts.authenticate(credentials.email, credentials.password)
    token = tokens.issue(user.id)
    set_token_cookie(response, token)
    logger.info(f"Issued token for user {user.id}")
    return TokenResponse(message="OK", token=token)
