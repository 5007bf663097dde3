"""
CRUD operations for the application.
"""
from socialfeed.crud import post
from socialfeed.crud import user

__all__ = ["post", "user"]
