"""
Pydantic schemas for the application.
"""
from socialfeed.schemas import auth
from socialfeed.schemas import post

__all__ = ["auth", "post"]
