"""
User model for authentication and account management.
"""
from sqlalchemy import Column, String
from sqlalchemy.orm import relationship

from ..base import Base, UUIDMixin, TimestampMixin


class User(Base, UUIDMixin, TimestampMixin):
    """
    Registered account. Email is the login identifier.
    """
    __tablename__ = "users"

    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    first_name = Column(String(255))
    last_name = Column(String(255))

    # Relationships
    posts = relationship("Post", back_populates="author")
    likes = relationship("PostLike", back_populates="user", cascade="all, delete-orphan")

    @property
    def display_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)
