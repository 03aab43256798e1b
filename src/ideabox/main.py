"""Main entry point for the IdeaBox web dashboard API."""

from __future__ import annotations

import asyncio
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from ideabox.api.v1 import (
    auth_router,
    health_router,
    ideas_router,
    system_router,
    users_router,
)
from ideabox.core.logging import configure_logging
from ideabox.core.settings import settings
from ideabox.services.errors import IdeaBoxError

logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="IdeaBox API",
    description="Idea submission, voting and review",
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

# Include API routers
app.include_router(auth_router, prefix="/api/v1")
app.include_router(ideas_router, prefix="/api/v1")
app.include_router(users_router, prefix="/api/v1")
app.include_router(system_router, prefix="/api/v1")
app.include_router(health_router)


@app.exception_handler(IdeaBoxError)
async def handle_domain_error(request: Request, exc: IdeaBoxError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "detail": "Invalid request data",
            "errors": jsonable_encoder(exc.errors()),
        },
    )


@app.exception_handler(SQLAlchemyError)
async def handle_storage_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error(
        "Storage failure on %s %s", request.method, request.url.path, exc_info=exc
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Storage failure"},
    )


async def _run_bot(bot) -> None:
    try:
        await bot.start(settings.discord_bot_token)
    except asyncio.CancelledError:
        raise
    except Exception:
        # The dashboard keeps serving without the bot.
        logger.exception("Discord bot stopped unexpectedly")


@app.on_event("startup")
async def on_startup() -> None:
    configure_logging()
    app.state.bot = None
    app.state.bot_task = None
    if not settings.bot_enabled:
        logger.info("DISCORD_BOT_TOKEN not set or bot disabled; serving the dashboard only")
        return

    from ideabox.bot.client import IdeaBot

    bot = IdeaBot()
    app.state.bot = bot
    app.state.bot_task = asyncio.create_task(_run_bot(bot))
    logger.info("Discord bot starting alongside the dashboard")


@app.on_event("shutdown")
async def on_shutdown() -> None:
    bot = getattr(app.state, "bot", None)
    if bot is not None and not bot.is_closed():
        await bot.close()
    task: asyncio.Task[None] | None = getattr(app.state, "bot_task", None)
    if task is not None:
        task.cancel()


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": "IdeaBox API",
        "version": settings.app_version,
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn

    configure_logging()
    uvicorn.run("ideabox.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
