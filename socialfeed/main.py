"""
Main module for the FastAPI application.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from socialfeed import __version__
from socialfeed.api.v1.posts import router as posts_router
from socialfeed.auth.routes import router as auth_router
from socialfeed.core.config import settings
from socialfeed.core.exceptions import FeedError
from socialfeed.db.models import Base
from socialfeed.db.session import engine
from socialfeed.user.routes import router as user_router

# Setup logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

# Lifespan event handler
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan event handler - runs on startup and shutdown.
    """
    logger.info(f"SocialFeed API {__version__} starting")
    if settings.DB_CREATE_TABLES:
        # Without Alembic, e.g. for local development
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created")

    yield

    # Shutdown
    await engine.dispose()
    logger.info("SocialFeed API shutting down")


app = FastAPI(
    title="SocialFeed API",
    description="Posts, likes, comments and token-based accounts",
    version=__version__,
    lifespan=lifespan,
)

# Configure CORS
if settings.CORS_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS if isinstance(settings.CORS_ORIGINS, list) else [settings.CORS_ORIGINS],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.exception_handler(FeedError)
async def feed_error_handler(request: Request, exc: FeedError):
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception(f"Database error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal server error"},
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"message": "Validation error", "detail": jsonable_encoder(exc.errors())},
    )


# Include routers
app.include_router(auth_router)
app.include_router(user_router)
app.include_router(posts_router)


@app.get("/")
async def root():
    """
    Root endpoint for health checks.
    """
    return {"message": "SocialFeed API is running"}

@app.get("/health")
async def health():
    """
    Health check endpoint.
    """
    return {"status": "ok"}


if __name__ == "__main__":
    """
    Run the application directly.
    """
    import uvicorn

    uvicorn.run(
        "socialfeed.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
    )
