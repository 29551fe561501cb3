"""FastAPI application for the courseboard REST host.

Provides REST API endpoints wrapping the courseboard package for:
- Course CRUD and bulk deletion
- AND / OR course filtering
- Admin, moderator and ban management
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from courseboard import __version__
from web.backend.app.routers import access, courses

app = FastAPI(
    title="courseboard API",
    description=(
        "REST API for a permissioned course record store. "
        "The caller identity is taken from the X-Caller header."
    ),
    version=__version__,
)

# ---------------------------------------------------------------------------
# CORS middleware (allow all origins for development)
# ---------------------------------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------------------------------------------------------
# Include routers
# ---------------------------------------------------------------------------
app.include_router(courses.router)
app.include_router(access.router)


# ---------------------------------------------------------------------------
# Root and health-check endpoints
# ---------------------------------------------------------------------------


@app.get("/", tags=["meta"])
async def root():
    """Return basic API information."""
    return {
        "name": "courseboard API",
        "version": __version__,
        "docs": "/docs",
        "openapi": "/openapi.json",
    }


@app.get("/health", tags=["meta"])
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
