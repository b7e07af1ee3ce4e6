"""FastAPI router for note endpoints.

Covers note CRUD under ``/notes``, the bulk variants under
``/bulk/notes`` and the recent/daily lookups under ``/vault/notes``.
Paths are normalized with a ``.md`` extension.
"""

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from vault_api.config import get_settings
from vault_api.dependencies import VaultClient, get_vault_client
from vault_api.notes import tools
from vault_api.notes.models import (
    BulkDeleteRequest,
    BulkDeleteResult,
    BulkUpdateRequest,
    BulkUpdateResult,
    Note,
    NoteStoreRequest,
    NoteWriteRequest,
)

router = APIRouter(tags=["notes"])


@router.get("/notes")
async def list_notes(
    search: str | None = None,
    vault: VaultClient = Depends(get_vault_client),
) -> list[Note]:
    """List notes, optionally filtered by path, body or tag."""
    return await tools.list_notes(vault, search)


@router.post("/notes", status_code=status.HTTP_201_CREATED)
async def create_note(
    request: NoteStoreRequest,
    vault: VaultClient = Depends(get_vault_client),
) -> Note:
    """Create a note; 409 when one already exists at the path."""
    return await tools.create_note(vault, request)


@router.post("/notes/upsert")
async def upsert_note(
    request: NoteStoreRequest,
    response: Response,
    vault: VaultClient = Depends(get_vault_client),
) -> Note:
    """Create or fully replace a note (201 created, 200 updated)."""
    note, created = await tools.upsert_note(vault, request)
    response.status_code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
    return note


@router.get("/notes/{path:path}")
async def get_note(path: str, vault: VaultClient = Depends(get_vault_client)) -> Note:
    return await tools.get_note(vault, path)


@router.put("/notes/{path:path}")
async def update_note(
    path: str,
    request: NoteWriteRequest,
    vault: VaultClient = Depends(get_vault_client),
) -> Note:
    """Replace the front matter and body of a note."""
    return await tools.update_note(vault, path, request)


@router.patch("/notes/{path:path}")
async def patch_note(
    path: str,
    request: NoteWriteRequest,
    vault: VaultClient = Depends(get_vault_client),
) -> Note:
    """Merge front matter into a note; the body is optional."""
    return await tools.patch_note(vault, path, request)


@router.delete("/notes/{path:path}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_note(path: str, vault: VaultClient = Depends(get_vault_client)) -> None:
    await tools.delete_note(vault, path)


@router.delete("/bulk/notes/delete")
async def bulk_delete_notes(
    request: BulkDeleteRequest,
    vault: VaultClient = Depends(get_vault_client),
) -> BulkDeleteResult:
    return await tools.bulk_delete_notes(vault, request.paths)


@router.patch("/bulk/notes/update")
async def bulk_update_notes(
    request: BulkUpdateRequest,
    vault: VaultClient = Depends(get_vault_client),
) -> BulkUpdateResult:
    return await tools.bulk_update_notes(vault, request.items)


@router.get("/vault/notes/recent")
async def get_recent_notes(
    limit: int = Query(default=5, ge=1, le=100),
    vault: VaultClient = Depends(get_vault_client),
) -> list[Note]:
    """Most recently modified notes, newest first."""
    return await tools.get_recent_notes(vault, limit)


@router.get("/vault/notes/daily")
async def get_daily_note(
    date: str = Query(default="today", description="today, yesterday, tomorrow or YYYY-MM-DD"),
    vault: VaultClient = Depends(get_vault_client),
) -> Note:
    """Find the daily note for a date.

    Raises:
        HTTPException: 400 if the date cannot be parsed
    """
    try:
        day = tools.parse_day(date)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid date: {date}",
        ) from None
    return await tools.get_daily_note(vault, day, get_settings().daily_note_folders_list)
