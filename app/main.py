"""FastAPI application entry point."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException, Query, Request, Response, status
from fastapi.middleware.cors import CORSMiddleware

from app.context import AppContext
from core.config import Settings
from core.errors import NotFoundError, ValidationError
from core.log import configure_logging
from schemas.job_entry import (
    ALL_FILTER,
    FILTER_OPTIONS,
    STATUSES,
    JobEntry,
    JobEntryCreate,
    JobListResponse,
    JobStatusUpdate,
)
from tracker.store import JobStore


def get_store(request: Request) -> JobStore:
    """Dependency: the store owned by the application context."""
    return request.app.state.context.store


def create_app(context: AppContext | None = None) -> FastAPI:
    """Build the API around an explicitly owned context.

    Without a context, one is booted from settings at startup and closed
    at shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        owned = context is None
        if owned:
            settings = Settings()
            configure_logging(settings.log_level)
            app.state.context = AppContext.boot(settings)
        else:
            app.state.context = context
        try:
            yield
        finally:
            if owned:
                app.state.context.close()
            else:
                app.state.context.repository.flush(5.0)

    app = FastAPI(
        title="JobTracker API",
        description="API for JobTracker - personal job application tracking",
        version="0.1.0",
        lifespan=lifespan,
    )

    # CORS middleware for dashboard
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure appropriately for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "name": "JobTracker API",
            "version": "0.1.0",
            "docs": "/docs",
        }

    @app.get("/api/statuses")
    async def list_statuses():
        """Statuses and the filter options built from them."""
        return {"statuses": list(STATUSES), "filters": list(FILTER_OPTIONS)}

    @app.get("/api/jobs", response_model=JobListResponse)
    def list_jobs(
        status_filter: str = Query(ALL_FILTER, alias="status"),
        q: str = "",
        store: JobStore = Depends(get_store),
    ) -> JobListResponse:
        jobs = store.filter_and_search(status_filter, q)
        return JobListResponse(count=len(jobs), jobs=jobs)

    @app.post("/api/jobs", response_model=JobEntry, status_code=status.HTTP_201_CREATED)
    def add_job(payload: JobEntryCreate, store: JobStore = Depends(get_store)) -> JobEntry:
        try:
            return store.add(payload.title, payload.company, payload.status)
        except ValidationError as e:
            raise HTTPException(status_code=422, detail=e.errors) from e

    @app.patch("/api/jobs/{entry_id}", response_model=JobEntry)
    def update_job_status(
        entry_id: str,
        payload: JobStatusUpdate,
        store: JobStore = Depends(get_store),
    ) -> JobEntry:
        try:
            return store.update_status(entry_id, payload.status)
        except NotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e)) from e
        except ValidationError as e:
            raise HTTPException(status_code=422, detail=e.errors) from e

    @app.delete("/api/jobs/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
    def delete_job(entry_id: str, store: JobStore = Depends(get_store)) -> Response:
        store.delete(entry_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return app


app = create_app()
