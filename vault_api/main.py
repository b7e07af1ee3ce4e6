"""FastAPI application entry point."""

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from vault_api.analytics.router import router as analytics_router
from vault_api.config import get_settings
from vault_api.dependencies import (
    VaultConflictError,
    VaultNotFoundError,
    VaultSecurityError,
    logger,
)
from vault_api.files.router import router as files_router
from vault_api.graph.router import router as graph_router
from vault_api.notes.router import router as notes_router
from vault_api.notes.tools import DailyNoteNotFoundError
from vault_api.query.router import router as query_router
from vault_api.search.router import router as search_router
from vault_api.tags.router import router as tags_router

settings = get_settings()

app = FastAPI(title="Vault API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

for router in (
    search_router,
    query_router,
    graph_router,
    tags_router,
    analytics_router,
    notes_router,
    files_router,
):
    app.include_router(router, prefix="/api")


@app.exception_handler(DailyNoteNotFoundError)
async def daily_note_not_found(request: Request, exc: DailyNoteNotFoundError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={
            "error": str(exc),
            "date": exc.date.isoformat(),
            "searched_paths": exc.searched_paths,
        },
    )


@app.exception_handler(VaultNotFoundError)
async def not_found(request: Request, exc: VaultNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"error": str(exc)})


@app.exception_handler(VaultSecurityError)
async def security_violation(request: Request, exc: VaultSecurityError) -> JSONResponse:
    logger.warning("vault_security_violation", extra={"path": request.url.path, "error": str(exc)})
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": str(exc)})


@app.exception_handler(VaultConflictError)
async def conflict(request: Request, exc: VaultConflictError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"error": str(exc)})


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {
        "status": "healthy",
        "version": "0.1.0",
        "vault_path": str(settings.vault_path),
    }


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with API info."""
    return {"name": "Vault API", "version": "0.1.0", "docs": "/docs"}


logger.info("app_startup", extra={"host": settings.host, "port": settings.port})
