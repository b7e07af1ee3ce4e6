"""FastAPI router for backlinks and related notes."""

from fastapi import APIRouter, Depends, Query

from vault_api.dependencies import VaultClient, get_vault_client
from vault_api.graph.models import BacklinksResult, RelatedNotesResult, RelationCriterion
from vault_api.graph.tools import get_backlinks, get_related_notes

router = APIRouter(tags=["graph"])


@router.get("/agent/backlinks/{note_path:path}")
async def backlinks(
    note_path: str,
    include_mentions: bool = True,
    include_tags: bool = False,
    vault: VaultClient = Depends(get_vault_client),
) -> BacklinksResult:
    """Incoming links and mentions of a note, plus its outgoing links."""
    return await get_backlinks(vault, note_path, include_mentions, include_tags)


@router.get("/vault/notes/related/{path:path}")
async def related_notes(
    path: str,
    on: list[RelationCriterion] | None = Query(default=None),
    limit: int = Query(default=10, ge=1, le=100),
    vault: VaultClient = Depends(get_vault_client),
) -> RelatedNotesResult:
    """Notes sharing tags or links with a note, best first."""
    return await get_related_notes(vault, path, on, limit)
