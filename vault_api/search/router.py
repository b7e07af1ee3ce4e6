"""FastAPI router for grep and vault search."""

from fastapi import APIRouter, Depends, Query

from vault_api.dependencies import VaultClient, get_vault_client
from vault_api.search.models import GrepRequest, GrepResult, SearchScope, VaultSearchResult
from vault_api.search.tools import grep_vault, search_vault

router = APIRouter(tags=["search"])


@router.post("/agent/grep")
async def grep(
    request: GrepRequest,
    vault: VaultClient = Depends(get_vault_client),
) -> GrepResult:
    """Line-by-line pattern search across vault files."""
    return await grep_vault(vault, request)


@router.get("/vault/search")
async def search(
    query: str = Query(..., min_length=1),
    scope: list[SearchScope] | None = Query(default=None),
    path_filter: str | None = None,
    limit: int = Query(default=20, ge=1, le=100),
    vault: VaultClient = Depends(get_vault_client),
) -> VaultSearchResult:
    """Search notes by filename, content and tags."""
    return await search_vault(vault, query, scope, path_filter, limit)
