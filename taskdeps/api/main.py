"""
taskdeps HTTP API.

FastAPI backend the dependencies view calls with a task snapshot.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from taskdeps import __version__
from taskdeps.core.exceptions import (
    CircularDependencyError,
    TaskDepsError,
    TaskNotFoundError,
)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    """
    Startup and shutdown events.

    Args:
        app: The FastAPI application instance.

    Yields:
        None during application runtime.
    """
    logger.info("Starting taskdeps API...")
    yield
    logger.info("Shutting down taskdeps API...")


app = FastAPI(
    title="taskdeps API",
    description="Dependency analysis for GTD task lists",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(TaskDepsError)
async def taskdeps_error_handler(_request: Request, exc: TaskDepsError) -> JSONResponse:
    """Report engine errors as 4xx responses."""
    status_code = 400
    if isinstance(exc, TaskNotFoundError):
        status_code = 404
    elif isinstance(exc, CircularDependencyError):
        status_code = 409

    logger.warning(f"Request failed: {exc}")
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


# Import and include routers
from taskdeps.api.routes import dependencies  # noqa: E402

app.include_router(dependencies.router, prefix="/api/dependencies", tags=["dependencies"])


@app.get("/health")
async def health_check() -> dict[str, str]:
    """
    Health check endpoint.

    Returns:
        Health status and version.
    """
    return {"status": "healthy", "version": __version__}
