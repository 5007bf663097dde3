"""
Domain errors raised by the services and auth dependencies.

Each error knows the HTTP status and the user-visible message it maps to;
the handlers registered in ``socialfeed.main`` turn them into
``{"message": ...}`` responses.
"""
from fastapi import status


class FeedError(Exception):
    """Base class for errors that end a request with a known response."""
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class UnauthorizedError(FeedError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Unauthorized"


class InvalidCredentialsError(UnauthorizedError):
    message = "auth error"


class BadRequestError(FeedError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Bad request"


class NotFoundError(FeedError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Not found"


class UserNotFoundError(NotFoundError):
    message = "User not found"


class PostNotFoundError(NotFoundError):
    message = "Post not found"


class AlreadyLikedError(FeedError):
    # A conflict in spirit, but clients expect 400
    status_code = status.HTTP_400_BAD_REQUEST
    message = "You've already liked this post."


class EmailTakenError(FeedError):
    status_code = status.HTTP_409_CONFLICT
    message = "Email already in use"
