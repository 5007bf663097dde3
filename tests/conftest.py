import os
import time

# Settings are read at import time, so the environment has to be ready first
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("PASSWORD_BCRYPT_ROUNDS", "4")
os.environ.setdefault("CORS_ORIGINS", "http://localhost:3000")

import pytest
from httpx import ASGITransport, AsyncClient
from jose import jwt
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from socialfeed.core.config import settings
from socialfeed.crud import user as user_crud
from socialfeed.db.models import Base, Comment, Post, PostLike
from socialfeed.db.session import get_db
from socialfeed.main import app


def make_token(user_id, issued_at=None, expires_at=None, secret=None):
    """
    Sign a token by hand. By default it was issued five minutes ago and
    expires in ten, so a token re-issued by the API is visibly newer.
    """
    now = int(time.time())
    if issued_at is None:
        issued_at = now - 5 * 60
    if expires_at is None:
        expires_at = now + 10 * 60
    return jwt.encode(
        {"user_id": str(user_id), "iat": issued_at, "exp": expires_at},
        secret or settings.JWT_SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM,
    )


def decode_token(token):
    return jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])


@pytest.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'feed.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def seed(session_factory):
    """Helpers that write rows in their own committed sessions."""

    class Seeder:
        async def user(self, email="test@test.com", password="12345678", first_name="Betty", last_name="Rubble"):
            async with session_factory() as session:
                user = await user_crud.create_user(
                    session, email=email, password=password, first_name=first_name, last_name=last_name
                )
                await session.commit()
                return user

        async def post(self, message, author_id=None, liked_by=(), like_count=None, comments=()):
            async with session_factory() as session:
                post = Post(
                    message=message,
                    author_id=author_id,
                    like_count=len(liked_by) if like_count is None else like_count,
                )
                session.add(post)
                await session.flush()
                for user_id in liked_by:
                    session.add(PostLike(post_id=post.id, user_id=user_id))
                for text, author in comments:
                    session.add(Comment(
                        post_id=post.id,
                        comment=text,
                        author_id=author.get("id"),
                        author_name=author.get("name"),
                        author_first_name=author.get("firstName"),
                        author_last_name=author.get("lastName"),
                    ))
                await session.commit()
                return post

        async def load_post(self, post_id):
            async with session_factory() as session:
                return await session.get(Post, post_id)

        async def load_user(self, user_id):
            async with session_factory() as session:
                return await user_crud.get_user(session, user_id)

        async def all_posts(self):
            async with session_factory() as session:
                result = await session.execute(select(Post).order_by(Post.created_at))
                return list(result.scalars().all())

    return Seeder()


@pytest.fixture
async def user(seed):
    return await seed.user()


@pytest.fixture
def token(user):
    return make_token(user.id)


@pytest.fixture
def auth_headers(token):
    return {"Authorization": f"Bearer {token}"}
