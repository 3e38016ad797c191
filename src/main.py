"""FastAPI application entry point."""

from contextlib import asynccontextmanager
from typing import Annotated

import structlog
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator

from src.api.routes import books_router, health_router
from src.config import Settings, get_settings
from src.core.books.store import StoreLoadError, get_book_store
from src.utils.logging import setup_logging

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup and shutdown."""
    settings = get_settings()
    setup_logging(debug=settings.debug)

    # A store that cannot be loaded is fatal: no request is served.
    store = get_book_store()
    try:
        store.load()
    except StoreLoadError as e:
        logger.error("Failed to load books, aborting startup", error=str(e))
        raise

    logger.info(
        "Server is running",
        url=f"http://{settings.host}:{settings.port}",
        books=store.count(),
        persist_changes=settings.persist_changes,
    )
    yield


app = FastAPI(
    title=get_settings().app_name,
    description="In-memory CRUD service for a collection of books",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Prometheus metrics
Instrumentator().instrument(app).expose(app, endpoint="/metrics")

# Include routers
app.include_router(health_router)
app.include_router(books_router)


@app.get("/")
async def root(settings: Annotated[Settings, Depends(get_settings)]):
    """API information endpoint."""
    return {
        "service": settings.app_name,
        "version": "1.0.0",
        "docs": "/docs",
        "openapi": "/openapi.json",
        "health": "/health",
        "books": "/books",
    }


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "src.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        workers=settings.workers,
    )
